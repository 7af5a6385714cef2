"""
Sequence Differ v1.0.0
======================
Longest-common-subsequence edit script over arbitrary sequences.

The same routine aligns lines of a document and tokens of a line; callers
only choose the element equality test.
"""

import operator
from typing import Callable, List, Optional, Sequence, Any

from .models import DiffBlock


def _lcs_table(old: Sequence, new: Sequence, equal: Callable[[Any, Any], bool]) -> List[List[int]]:
    """
    Build the suffix LCS table.

    table[i][j] is the LCS length of old[i:] and new[j:]. Filled row by
    row over old indices, new indices inner.
    """
    n, m = len(old), len(new)
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row = table[i]
        below = table[i + 1]
        item = old[i]
        for j in range(m - 1, -1, -1):
            if equal(item, new[j]):
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]
    return table


def diff_sequences(
    old: Sequence,
    new: Sequence,
    equal: Optional[Callable[[Any, Any], bool]] = None
) -> List[DiffBlock]:
    """
    Compute a minimal edit script between two sequences.

    Elements outside the LCS are grouped into change blocks, one per gap
    between matched runs. When both a deletion and an insertion keep the
    LCS length, the deletion is taken first, so a change block always
    lists its old-side elements before its new-side ones and the output
    is fully deterministic.

    Args:
        old: Original sequence
        new: New sequence
        equal: Element equality test (defaults to ==)

    Returns:
        Ordered list of DiffBlock covering both sequences completely
    """
    equal = equal or operator.eq
    n, m = len(old), len(new)
    table = _lcs_table(old, new, equal)

    blocks = []
    i = j = 0
    while i < n or j < m:
        if i < n and j < m and equal(old[i], new[j]):
            start_i, start_j = i, j
            while i < n and j < m and equal(old[i], new[j]):
                i += 1
                j += 1
            blocks.append(DiffBlock(True, start_i, i - start_i, start_j, j - start_j))
            continue

        start_i, start_j = i, j
        while i < n or j < m:
            if i < n and j < m and equal(old[i], new[j]):
                break
            if j >= m or (i < n and table[i + 1][j] >= table[i][j + 1]):
                i += 1
            else:
                j += 1
        blocks.append(DiffBlock(False, start_i, i - start_i, start_j, j - start_j))

    return blocks
