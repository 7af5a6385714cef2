"""
Word Diff Builder v1.0.0
========================
Token-level diff inside line pairs already classified as modified.

Tokens are maximal word or whitespace runs (see tokenizer). Token pieces
are only ever unchanged, inserted or deleted; there is no nested
modified level.
"""

from typing import List, Tuple

from .models import ChangeType, DiffPiece, SideBySideDiffModel
from .sequence import diff_sequences
from .tokenizer import tokenize


def build_word_diff(old_line: str, new_line: str) -> Tuple[List[DiffPiece], List[DiffPiece]]:
    """
    Compute token-level sub-pieces for a modified line pair.

    Args:
        old_line: Text of the line on the old side
        new_line: Text of the line on the new side

    Returns:
        Tuple of (old_sub_pieces, new_sub_pieces). Joining the text of each
        list reproduces the corresponding line.
    """
    old_tokens = tokenize(old_line)
    new_tokens = tokenize(new_line)

    if old_tokens == new_tokens:
        # Only reachable if line equality and token equality ever disagree
        old_pieces = [DiffPiece(old_line, ChangeType.UNCHANGED)] if old_line else []
        new_pieces = [DiffPiece(new_line, ChangeType.UNCHANGED)] if new_line else []
        return old_pieces, new_pieces

    old_pieces = []
    new_pieces = []

    for block in diff_sequences(old_tokens, new_tokens):
        if block.matched:
            for token in old_tokens[block.old_start:block.old_end]:
                old_pieces.append(DiffPiece(token, ChangeType.UNCHANGED))
                new_pieces.append(DiffPiece(token, ChangeType.UNCHANGED))
            continue

        for token in old_tokens[block.old_start:block.old_end]:
            old_pieces.append(DiffPiece(token, ChangeType.DELETED))
        for token in new_tokens[block.new_start:block.new_end]:
            new_pieces.append(DiffPiece(token, ChangeType.INSERTED))

    return old_pieces, new_pieces


def attach_word_diffs(model: SideBySideDiffModel) -> SideBySideDiffModel:
    """
    Return a copy of a side-by-side model with word diffs on modified rows.

    Rows that are not modified on both sides are carried over unchanged.
    The input model is not altered.
    """
    old_lines = []
    new_lines = []

    for old_piece, new_piece in model.rows():
        if (old_piece.change_type == ChangeType.MODIFIED
                and new_piece.change_type == ChangeType.MODIFIED):
            old_subs, new_subs = build_word_diff(old_piece.text, new_piece.text)
            old_piece = old_piece.with_sub_pieces(old_subs)
            new_piece = new_piece.with_sub_pieces(new_subs)
        old_lines.append(old_piece)
        new_lines.append(new_piece)

    return SideBySideDiffModel(tuple(old_lines), tuple(new_lines))
