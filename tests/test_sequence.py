"""
Tests for Sequence Differ
=========================
"""

from diff_viewer.models import DiffBlock
from diff_viewer.sequence import diff_sequences


def _ops(blocks):
    return [(b.matched, b.old_start, b.old_count, b.new_start, b.new_count) for b in blocks]


class TestDiffSequences:
    """Tests for diff_sequences()."""

    def test_both_empty(self):
        """Two empty sequences produce no blocks."""
        assert diff_sequences([], []) == []

    def test_identical(self):
        """Identical sequences produce one matched block."""
        assert diff_sequences('abc', 'abc') == [DiffBlock(True, 0, 3, 0, 3)]

    def test_pure_insertion(self):
        """Empty old side gives a single insertion block."""
        assert _ops(diff_sequences([], ['x', 'y'])) == [(False, 0, 0, 0, 2)]

    def test_pure_deletion(self):
        """Empty new side gives a single deletion block."""
        assert _ops(diff_sequences(['x', 'y'], [])) == [(False, 0, 2, 0, 0)]

    def test_replacement_in_middle(self):
        """A changed middle element is one change block between matches."""
        assert _ops(diff_sequences('abc', 'axc')) == [
            (True, 0, 1, 0, 1),
            (False, 1, 1, 1, 1),
            (True, 2, 1, 2, 1),
        ]

    def test_deletion_preferred_on_tie(self):
        """With equal LCS length either way, the old element is deleted first."""
        assert _ops(diff_sequences('ab', 'ba')) == [
            (False, 0, 1, 0, 0),
            (True, 1, 1, 0, 1),
            (False, 2, 0, 1, 1),
        ]

    def test_change_block_spans_whole_gap(self):
        """All unmatched elements between two matches form one block."""
        assert _ops(diff_sequences('a123b', 'axyb')) == [
            (True, 0, 1, 0, 1),
            (False, 1, 3, 1, 2),
            (True, 4, 1, 3, 1),
        ]

    def test_lcs_is_maximal(self):
        """Matched elements form a longest common subsequence."""
        old, new = 'ABCBDAB', 'BDCABA'
        matched = sum(b.old_count for b in diff_sequences(old, new) if b.matched)
        assert matched == 4

    def test_blocks_cover_both_sequences(self):
        """Blocks are contiguous and cover both inputs end to end."""
        old, new = list('xaybzc'), list('abqqc')
        blocks = diff_sequences(old, new)
        i = j = 0
        for block in blocks:
            assert (block.old_start, block.new_start) == (i, j)
            i, j = block.old_end, block.new_end
        assert (i, j) == (len(old), len(new))

    def test_custom_equality(self):
        """The equality test decides which elements match."""
        blocks = diff_sequences(['A', 'b'], ['a', 'B'], equal=lambda x, y: x.lower() == y.lower())
        assert _ops(blocks) == [(True, 0, 2, 0, 2)]

    def test_deterministic(self):
        """Repeated calls give identical results."""
        old, new = 'the cat sat on the mat'.split(), 'a cat sat by the mat'.split()
        assert diff_sequences(old, new) == diff_sequences(old, new)
