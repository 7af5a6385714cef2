"""
Diff Renderer v1.0.0
====================
Maps change classifications to CSS classes and renders diff pieces as
whitespace-preserving, escaped HTML.

Text is always escaped first, then spaces and tabs are replaced with
non-breaking spaces, then highlight spans are wrapped around it.
"""

import html
from typing import Optional

from config_logging import DEFAULT_TAB_WIDTH, DiffViewerConfig, get_config

from .models import ChangeType, DiffPiece, SideBySideDiffModel, InlineDiffModel

NBSP = '\u00a0'
PLACEHOLDER_HTML = ' '

_LINE_CLASSES = {
    ChangeType.UNCHANGED: 'diff-unchanged',
    ChangeType.INSERTED: 'diff-inserted',
    ChangeType.DELETED: 'diff-deleted',
    ChangeType.MODIFIED: 'diff-modified',
}

_SUB_PIECE_CLASSES = {
    ChangeType.UNCHANGED: '',
    ChangeType.INSERTED: 'diff-char-inserted',
    ChangeType.DELETED: 'diff-char-deleted',
    ChangeType.MODIFIED: 'diff-char-modified',
}

_INLINE_MARKERS = {
    ChangeType.UNCHANGED: ' ',
    ChangeType.INSERTED: '+',
    ChangeType.DELETED: '-',
    ChangeType.MODIFIED: '~',
}


def line_class(change_type: ChangeType) -> str:
    """CSS class for a line container of the given classification."""
    return _LINE_CLASSES[change_type]


def sub_piece_class(change_type: ChangeType) -> str:
    """CSS class for an inline token highlight ('' for unchanged)."""
    return _SUB_PIECE_CLASSES[change_type]


def escape_html(text: str) -> str:
    """Escape &, <, >, \" and ' for safe HTML display."""
    return html.escape(text, quote=True) if text else ''


def format_text(text: str, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Escape text, then make spaces and tabs visible as fixed-width runs."""
    escaped = escape_html(text)
    return escaped.replace(' ', NBSP).replace('\t', NBSP * tab_width)


def render(piece: Optional[DiffPiece], tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """
    Render the content of one line piece.

    Placeholders and empty lines render as a single space so the line
    keeps its height. Sub-pieces are rendered one by one and changed
    ones get their own highlight span; the line's own class is left to
    the container.

    Args:
        piece: Line piece to render
        tab_width: Non-breaking spaces per tab

    Returns:
        HTML fragment
    """
    if piece is None or not piece.text:
        return PLACEHOLDER_HTML

    if not piece.sub_pieces:
        return format_text(piece.text, tab_width)

    parts = []
    for sub_piece in piece.sub_pieces:
        text = format_text(sub_piece.text, tab_width)
        class_name = sub_piece_class(sub_piece.change_type)
        if class_name:
            parts.append(f'<span class="{class_name}">{text}</span>')
        else:
            parts.append(text)
    return ''.join(parts)


def _container_class(piece: DiffPiece) -> str:
    if piece.is_placeholder:
        return 'diff-line diff-placeholder'
    return f'diff-line {line_class(piece.change_type)}'


def _gutter(piece: DiffPiece) -> str:
    number = '' if piece.position is None else str(piece.position)
    return f'<td class="diff-line-number">{number}</td>'


def render_side_by_side(model: SideBySideDiffModel,
                        config: Optional[DiffViewerConfig] = None) -> str:
    """
    Render a side-by-side model as an HTML table, one row per aligned pair.

    Args:
        model: Side-by-side model to render
        config: Rendering configuration (tab width, line numbers)

    Returns:
        HTML table markup
    """
    config = config or get_config()
    rows = ['<table class="diff-table diff-side-by-side">']
    for old_piece, new_piece in model.rows():
        cells = []
        for piece in (old_piece, new_piece):
            if config.show_line_numbers:
                cells.append(_gutter(piece))
            cells.append(f'<td class="{_container_class(piece)}">'
                         f'{render(piece, config.tab_width)}</td>')
        rows.append(f'<tr>{"".join(cells)}</tr>')
    rows.append('</table>')
    return '\n'.join(rows)


def render_inline(model: InlineDiffModel,
                  config: Optional[DiffViewerConfig] = None) -> str:
    """Render an inline model as an HTML table with +/- markers."""
    config = config or get_config()
    rows = ['<table class="diff-table diff-inline">']
    for piece in model.lines:
        cells = []
        if config.show_line_numbers:
            cells.append(_gutter(piece))
        marker = escape_html(_INLINE_MARKERS[piece.change_type]).replace(' ', NBSP)
        cells.append(f'<td class="diff-marker">{marker}</td>')
        cells.append(f'<td class="{_container_class(piece)}">'
                     f'{render(piece, config.tab_width)}</td>')
        rows.append(f'<tr>{"".join(cells)}</tr>')
    rows.append('</table>')
    return '\n'.join(rows)
