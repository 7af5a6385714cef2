"""
Line Tokenizer
==============
Splits a line into alternating runs of word characters and whitespace.
"""

from typing import List


def tokenize(line: str) -> List[str]:
    """
    Split a line into maximal word and whitespace runs.

    Tabs and spaces are both whitespace here; they are only told apart
    at render time. Joining the result reproduces the input exactly.

    Args:
        line: Text of a single line

    Returns:
        List of tokens (empty for an empty line)
    """
    tokens = []
    current = []
    in_word = None  # None until the first character is seen

    for char in line:
        is_word_char = not char.isspace()
        if in_word is not None and is_word_char != in_word:
            tokens.append(''.join(current))
            current = []
        current.append(char)
        in_word = is_word_char

    if current:
        tokens.append(''.join(current))

    return tokens
