"""
Line Diff Builder v1.0.0
========================
Line-level alignment with word-level diff highlighting.

Lines are aligned with the LCS sequence differ. In side-by-side mode,
deleted and inserted lines of the same change region are paired by
position as modified lines, which then get a token-level diff. Inline
mode keeps every changed line as a plain deletion or insertion.
"""

import re
import threading
from typing import List, Optional, Union

from config_logging import (
    DiffViewerConfig, StructuredLogger, ValidationError, ConfigurationError,
    get_config, get_logger
)

from .models import (
    ChangeType, DiffViewMode, DiffPiece,
    SideBySideDiffModel, InlineDiffModel
)
from .sequence import diff_sequences
from .word_diff import attach_word_diffs

_LINE_BREAK = re.compile(r'\r\n|\r|\n')

DiffModel = Union[SideBySideDiffModel, InlineDiffModel]

# Shared module logger, created on first use
_logger: Optional[StructuredLogger] = None
_logger_lock = threading.Lock()


def _get_logger(config: DiffViewerConfig) -> StructuredLogger:
    global _logger
    with _logger_lock:
        if _logger is None:
            _logger = get_logger('diff_viewer.differ', config)
        return _logger


def split_lines(text: str) -> List[str]:
    """
    Split text into lines on \\r\\n, \\r or \\n.

    A trailing terminator ends the last line rather than starting a new
    empty one, so "a\\nb\\n" gives ["a", "b"] and "" gives [].
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == '':
        lines.pop()
    return lines


def _coerce_text(value, field: str) -> str:
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(
            f"{field} must be a string, got {type(value).__name__}",
            field=field
        )
    return value


def _coerce_mode(mode) -> DiffViewMode:
    if isinstance(mode, DiffViewMode):
        return mode
    try:
        return DiffViewMode(mode)
    except ValueError:
        valid = ', '.join(m.value for m in DiffViewMode)
        raise ValidationError(
            f"Unknown diff view mode: {mode!r} (expected one of: {valid})",
            field='mode'
        ) from None


class DiffViewerBuilder:
    """
    Builds side-by-side and inline diff models from two text blobs.

    Holds no per-call state, so one instance can serve concurrent calls.
    """

    def __init__(self, config: Optional[DiffViewerConfig] = None,
                 logger: Optional[StructuredLogger] = None):
        """
        Initialize the builder.

        Args:
            config: Configuration (defaults to the environment config)
            logger: Logger to use (defaults to the shared module logger)

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        self.config = config or get_config()
        is_valid, errors = self.config.validate()
        if not is_valid:
            raise ConfigurationError(errors)
        self.logger = logger or _get_logger(self.config)

    def build(self, old_text: Optional[str], new_text: Optional[str],
              mode: Union[DiffViewMode, str] = DiffViewMode.SIDE_BY_SIDE) -> DiffModel:
        """
        Build a diff model in the requested presentation mode.

        Args:
            old_text: Original text (None is treated as empty)
            new_text: New text (None is treated as empty)
            mode: DiffViewMode or its string value

        Returns:
            SideBySideDiffModel or InlineDiffModel

        Raises:
            ValidationError: If mode is unknown or a text is not a string
        """
        mode = _coerce_mode(mode)
        if mode == DiffViewMode.INLINE:
            return self.build_inline(old_text, new_text)
        return self.build_side_by_side(old_text, new_text)

    def build_side_by_side(self, old_text: Optional[str], new_text: Optional[str],
                           word_level: bool = True) -> SideBySideDiffModel:
        """
        Build two aligned columns of line pieces.

        Args:
            old_text: Original text
            new_text: New text
            word_level: Attach token-level sub-pieces to modified rows

        Returns:
            SideBySideDiffModel with equal-length columns
        """
        old_lines = split_lines(_coerce_text(old_text, 'old_text'))
        new_lines = split_lines(_coerce_text(new_text, 'new_text'))

        with self.logger.log_operation('build_side_by_side',
                                       old_line_count=len(old_lines),
                                       new_line_count=len(new_lines)):
            model = self._align_side_by_side(old_lines, new_lines)
            if word_level:
                model = attach_word_diffs(model)

        self._log_stats(model)
        return model

    def build_inline(self, old_text: Optional[str], new_text: Optional[str]) -> InlineDiffModel:
        """
        Build a single merged sequence of line pieces.

        Unchanged and inserted lines carry their new-side line number,
        deleted lines their old-side line number. No sub-pieces are
        attached in this mode.
        """
        old_lines = split_lines(_coerce_text(old_text, 'old_text'))
        new_lines = split_lines(_coerce_text(new_text, 'new_text'))

        with self.logger.log_operation('build_inline',
                                       old_line_count=len(old_lines),
                                       new_line_count=len(new_lines)):
            pieces = []
            for block in diff_sequences(old_lines, new_lines):
                if block.matched:
                    for k in range(block.new_count):
                        j = block.new_start + k
                        pieces.append(DiffPiece(new_lines[j], ChangeType.UNCHANGED, j + 1))
                    continue
                for i in range(block.old_start, block.old_end):
                    pieces.append(DiffPiece(old_lines[i], ChangeType.DELETED, i + 1))
                for j in range(block.new_start, block.new_end):
                    pieces.append(DiffPiece(new_lines[j], ChangeType.INSERTED, j + 1))
            model = InlineDiffModel(tuple(pieces))

        self._log_stats(model)
        return model

    def _align_side_by_side(self, old_lines: List[str], new_lines: List[str]) -> SideBySideDiffModel:
        """
        Align old and new lines into two columns.

        Creates rows where:
        - Unchanged lines appear in both columns
        - Deleted and inserted lines of one change region are paired by
          position as modified rows
        - Excess deletions get a placeholder in the new column
        - Excess insertions get a placeholder in the old column
        """
        old_column = []
        new_column = []

        for block in diff_sequences(old_lines, new_lines):
            if block.matched:
                for k in range(block.old_count):
                    i = block.old_start + k
                    j = block.new_start + k
                    old_column.append(DiffPiece(old_lines[i], ChangeType.UNCHANGED, i + 1))
                    new_column.append(DiffPiece(new_lines[j], ChangeType.UNCHANGED, j + 1))
                continue

            paired = min(block.old_count, block.new_count)
            for k in range(max(block.old_count, block.new_count)):
                i = block.old_start + k
                j = block.new_start + k
                if k < paired:
                    old_column.append(DiffPiece(old_lines[i], ChangeType.MODIFIED, i + 1))
                    new_column.append(DiffPiece(new_lines[j], ChangeType.MODIFIED, j + 1))
                elif k < block.old_count:
                    old_column.append(DiffPiece(old_lines[i], ChangeType.DELETED, i + 1))
                    new_column.append(DiffPiece.placeholder())
                else:
                    old_column.append(DiffPiece.placeholder())
                    new_column.append(DiffPiece(new_lines[j], ChangeType.INSERTED, j + 1))

        return SideBySideDiffModel(tuple(old_column), tuple(new_column))

    def _log_stats(self, model: DiffModel):
        stats = model.stats()
        self.logger.debug(
            f"Diff complete: {stats['total_rows']} rows "
            f"(+{stats['inserted']}, -{stats['deleted']}, ~{stats['modified']})",
            mode=model.mode.value, **stats
        )


# Convenience functions
def build_diff(old_text: Optional[str], new_text: Optional[str],
               mode: Union[DiffViewMode, str] = DiffViewMode.SIDE_BY_SIDE) -> DiffModel:
    """Build a diff model for two texts in the given mode."""
    return DiffViewerBuilder().build(old_text, new_text, mode)


def build_side_by_side(old_text: Optional[str], new_text: Optional[str],
                       word_level: bool = True) -> SideBySideDiffModel:
    """Build a side-by-side diff model for two texts."""
    return DiffViewerBuilder().build_side_by_side(old_text, new_text, word_level)


def build_inline(old_text: Optional[str], new_text: Optional[str]) -> InlineDiffModel:
    """Build an inline diff model for two texts."""
    return DiffViewerBuilder().build_inline(old_text, new_text)
