"""
Diff Viewer v1.0.0
==================
Line-level and word-level text diffs for side-by-side and inline display.

Features:
- LCS alignment of lines with placeholder rows
- Modified line pairs with word-level sub-pieces
- Inline view with deletions before insertions
- Escaped, whitespace-preserving HTML rendering
"""

from .models import (
    ChangeType,
    DiffViewMode,
    DiffPiece,
    DiffBlock,
    SideBySideDiffModel,
    InlineDiffModel
)
from .tokenizer import tokenize
from .sequence import diff_sequences
from .word_diff import build_word_diff, attach_word_diffs
from .differ import (
    DiffViewerBuilder,
    split_lines,
    build_diff,
    build_side_by_side,
    build_inline
)
from .renderer import (
    line_class,
    sub_piece_class,
    escape_html,
    format_text,
    render,
    render_side_by_side,
    render_inline
)

__version__ = "1.0.0"
__all__ = [
    'ChangeType',
    'DiffViewMode',
    'DiffPiece',
    'DiffBlock',
    'SideBySideDiffModel',
    'InlineDiffModel',
    'tokenize',
    'diff_sequences',
    'build_word_diff',
    'attach_word_diffs',
    'DiffViewerBuilder',
    'split_lines',
    'build_diff',
    'build_side_by_side',
    'build_inline',
    'line_class',
    'sub_piece_class',
    'escape_html',
    'format_text',
    'render',
    'render_side_by_side',
    'render_inline'
]
