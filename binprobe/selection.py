"""
Click-driven byte range selection.
"""

from typing import Optional

from .logging_config import get_logger
from .models import SelectionRange

logger = get_logger('selection')


class Selection:
    """
    Selection state over buffer offsets.

    A plain click selects a single byte, clicking the start of the current
    selection again clears it. A shift-click (extend=True) grows or shrinks
    the current range.
    """

    def __init__(self, selection_range: Optional[SelectionRange] = None):
        self.range = selection_range

    def __bool__(self) -> bool:
        return self.range is not None

    def __repr__(self) -> str:
        return f"Selection({self.range!r})"

    @property
    def count(self) -> int:
        """Number of selected bytes (0 without a selection)."""
        return self.range.count if self.range else 0

    def click(self, offset: int, extend: bool = False) -> Optional[SelectionRange]:
        """
        Apply a click at offset and return the new range.

        Args:
            offset: Byte offset clicked, already clamped to the buffer by the host
            extend: True for shift-click

        Returns:
            The updated SelectionRange, or None when the click cleared it
        """
        if offset < 0:
            raise ValueError(f"Offset must be non-negative, got {offset}")

        self.range = self._next_range(self.range, offset, extend)
        logger.debug(f"click({offset}, extend={extend}) -> {self.range}")
        return self.range

    @staticmethod
    def _next_range(current: Optional[SelectionRange], offset: int, extend: bool) -> Optional[SelectionRange]:
        if current is None:
            return SelectionRange(offset, offset)

        start, end = current.start, current.end
        if not extend:
            if offset == start:
                return None
            return SelectionRange(offset, offset)

        if offset == start:
            return SelectionRange(offset, offset)
        if offset < start:
            return SelectionRange(offset, end)
        if offset > end or start < offset < end:
            return SelectionRange(start, offset)

        # offset == end with start < end: left as is
        return current

    def clear(self) -> None:
        self.range = None

    def set_range(self, start: int, end: int) -> SelectionRange:
        """Select [start, end] directly, e.g. from a chunk table row."""
        self.range = SelectionRange(start, end)
        return self.range

    def clamp(self, length: int) -> Optional[SelectionRange]:
        """
        Keep the range inside a buffer of the given length.

        An empty buffer clears the selection; otherwise offsets past the end
        are pulled back to length - 1.
        """
        if self.range is None:
            return None
        if length <= 0:
            self.range = None
            return None

        last = length - 1
        start = min(self.range.start, last)
        end = min(self.range.end, last)
        if (start, end) != self.range.as_tuple():
            logger.debug(f"Clamped selection {self.range.as_tuple()} to ({start}, {end})")
            self.range = SelectionRange(start, end)
        return self.range

    def slice(self, data: bytes) -> bytes:
        """Selected bytes of data (empty without a selection)."""
        if self.range is None:
            return b''
        return bytes(data[self.range.start:self.range.end + 1])
