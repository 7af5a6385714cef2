"""
Diff Viewer Models v1.0.0
=========================
Data classes for line-level and word-level diff results.

All models are frozen: builders return new instances instead of
enriching existing ones in place.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Any, Optional, Tuple, Iterator


class ChangeType(Enum):
    """Classification of a line or token in a diff."""
    UNCHANGED = "unchanged"
    INSERTED = "inserted"
    DELETED = "deleted"
    MODIFIED = "modified"


class DiffViewMode(Enum):
    """Presentation shape of a diff."""
    SIDE_BY_SIDE = "side_by_side"
    INLINE = "inline"


@dataclass(frozen=True)
class DiffPiece:
    """
    One unit of diff output: a line, a token, or a padding placeholder.

    Attributes:
        text: Exact text this piece represents ('' for placeholders)
        change_type: Classification of this piece
        position: 1-based line number in its source text, None for
                  placeholders and token-level pieces
        sub_pieces: Token-level pieces, only set on modified lines
    """
    text: str
    change_type: ChangeType
    position: Optional[int] = None
    sub_pieces: Tuple['DiffPiece', ...] = ()

    @classmethod
    def placeholder(cls) -> 'DiffPiece':
        """Create an empty piece used only to keep two columns aligned."""
        return cls(text='', change_type=ChangeType.UNCHANGED)

    @property
    def is_placeholder(self) -> bool:
        """True for padding pieces with no backing line."""
        return self.position is None and not self.text

    def with_sub_pieces(self, sub_pieces) -> 'DiffPiece':
        """Return a copy of this piece carrying the given sub-pieces."""
        return replace(self, sub_pieces=tuple(sub_pieces))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'text': self.text,
            'change_type': self.change_type.value,
            'position': self.position,
            'sub_pieces': [p.to_dict() for p in self.sub_pieces]
        }


@dataclass(frozen=True)
class DiffBlock:
    """
    A contiguous region of an edit script.

    A matched block covers equal runs on both sides (old_count == new_count).
    A change block covers the deleted run old[old_start:old_start + old_count]
    and the inserted run new[new_start:new_start + new_count]; either count
    may be zero but not both.
    """
    matched: bool
    old_start: int
    old_count: int
    new_start: int
    new_count: int

    @property
    def old_end(self) -> int:
        return self.old_start + self.old_count

    @property
    def new_end(self) -> int:
        return self.new_start + self.new_count


def _count_types(pieces) -> Dict[str, int]:
    counts = {change_type.value: 0 for change_type in ChangeType}
    for piece in pieces:
        counts[piece.change_type.value] += 1
    return counts


@dataclass(frozen=True)
class SideBySideDiffModel:
    """
    Two parallel columns of line pieces.

    Rows are aligned by index: when a line is inserted the old column
    holds a placeholder, and when a line is deleted the new column does.
    """
    old_lines: Tuple[DiffPiece, ...] = ()
    new_lines: Tuple[DiffPiece, ...] = ()

    def __post_init__(self):
        """Enforce that both columns have the same number of rows."""
        if len(self.old_lines) != len(self.new_lines):
            raise ValueError(
                f"Column length mismatch: old={len(self.old_lines)}, "
                f"new={len(self.new_lines)}"
            )

    def __len__(self) -> int:
        return len(self.old_lines)

    @property
    def mode(self) -> DiffViewMode:
        return DiffViewMode.SIDE_BY_SIDE

    @property
    def has_changes(self) -> bool:
        """Whether any row differs between the two sides."""
        return any(p.change_type != ChangeType.UNCHANGED
                   for p in self.old_lines + self.new_lines)

    def rows(self) -> Iterator[Tuple[DiffPiece, DiffPiece]]:
        """Iterate over (old, new) pairs."""
        return zip(self.old_lines, self.new_lines)

    def stats(self) -> Dict[str, int]:
        """
        Count rows by status.

        A row is modified when both sides are modified, deleted when the
        old side is a deleted line, inserted when the new side is an
        inserted line, and unchanged otherwise.
        """
        stats = {
            'total_rows': len(self),
            'unchanged': 0,
            'inserted': 0,
            'deleted': 0,
            'modified': 0
        }
        for old_piece, new_piece in self.rows():
            if old_piece.change_type == ChangeType.MODIFIED:
                stats['modified'] += 1
            elif old_piece.change_type == ChangeType.DELETED:
                stats['deleted'] += 1
            elif new_piece.change_type == ChangeType.INSERTED:
                stats['inserted'] += 1
            else:
                stats['unchanged'] += 1
        return stats

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'mode': self.mode.value,
            'old_lines': [p.to_dict() for p in self.old_lines],
            'new_lines': [p.to_dict() for p in self.new_lines],
            'stats': self.stats()
        }


@dataclass(frozen=True)
class InlineDiffModel:
    """
    A single merged sequence of line pieces.

    Deleted lines of a change region come before its inserted lines.
    """
    lines: Tuple[DiffPiece, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def mode(self) -> DiffViewMode:
        return DiffViewMode.INLINE

    @property
    def has_changes(self) -> bool:
        """Whether any line was inserted or deleted."""
        return any(p.change_type != ChangeType.UNCHANGED for p in self.lines)

    def stats(self) -> Dict[str, int]:
        """Count lines by change type."""
        stats = {'total_rows': len(self.lines)}
        stats.update(_count_types(self.lines))
        return stats

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'mode': self.mode.value,
            'lines': [p.to_dict() for p in self.lines],
            'stats': self.stats()
        }
