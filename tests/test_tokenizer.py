"""
Tests for Line Tokenizer
========================
"""

import pytest

from diff_viewer.tokenizer import tokenize


class TestTokenize:
    """Tests for tokenize()."""

    def test_empty_line(self):
        """Empty input yields no tokens."""
        assert tokenize('') == []

    def test_words_and_spaces_alternate(self):
        """Words and whitespace runs alternate."""
        assert tokenize('The quick fox') == ['The', ' ', 'quick', ' ', 'fox']

    def test_whitespace_runs_are_maximal(self):
        """Consecutive whitespace forms one token, including mixed tabs."""
        assert tokenize('a  \t b') == ['a', '  \t ', 'b']

    def test_whitespace_only_line(self):
        """A whitespace-only line is a single token."""
        assert tokenize(' \t  ') == [' \t  ']

    def test_leading_and_trailing_whitespace(self):
        """Leading and trailing whitespace are kept as their own tokens."""
        assert tokenize('  x ') == ['  ', 'x', ' ']

    def test_punctuation_is_part_of_word(self):
        """Anything that is not whitespace belongs to the word run."""
        assert tokenize('foo(bar), baz;') == ['foo(bar),', ' ', 'baz;']

    @pytest.mark.parametrize('line', [
        '',
        'x',
        'The quick fox',
        '   leading',
        'trailing\t\t',
        'a b  c',
        '\t\t',
        'unicode été  words',
    ])
    def test_lossless(self, line):
        """Joining the tokens reproduces the line."""
        assert ''.join(tokenize(line)) == line

    def test_no_empty_tokens(self):
        """Every token is non-empty."""
        assert all(tokenize(' a  bb   ccc '))
