"""
Maps a scroll viewport onto fixed-width byte rows.

Everything here is O(1) per call (iter_rows is O(visible rows)) so it can run
on every redraw.
"""

import math
from typing import Iterator

from .exceptions import ViewportError
from .models import LineRange, ViewportGeometry, MIN_BYTES_PER_LINE, MAX_BYTES_PER_LINE


def validate_grouping(bytes_per_line: int) -> int:
    """
    Check a grouping width.

    Raises:
        ViewportError: If the width is outside 1..64
    """
    if not MIN_BYTES_PER_LINE <= bytes_per_line <= MAX_BYTES_PER_LINE:
        raise ViewportError(
            f"Bytes per line must be between {MIN_BYTES_PER_LINE} and {MAX_BYTES_PER_LINE}, "
            f"got {bytes_per_line}"
        )
    return bytes_per_line


def total_lines(length: int, bytes_per_line: int) -> int:
    """Number of rows needed for a buffer of the given length."""
    validate_grouping(bytes_per_line)
    return -(-length // bytes_per_line)


def total_height(length: int, bytes_per_line: int, row_height: float) -> float:
    """Height of the virtual scroll region."""
    return total_lines(length, bytes_per_line) * row_height


def compute_visible_lines(geometry: ViewportGeometry, length: int, bytes_per_line: int) -> LineRange:
    """
    Compute the rows intersecting the visible interval.

    Args:
        geometry: Visible interval [top, bottom] and row height
        length: Buffer length in bytes
        bytes_per_line: Grouping width (1..64)

    Returns:
        LineRange with 0 <= first_line <= last_line <= total_lines
    """
    lines = total_lines(length, bytes_per_line)
    first_line = min(max(math.floor(geometry.top / geometry.row_height), 0), lines)
    last_line = min(max(math.ceil(geometry.bottom / geometry.row_height), 0), lines)
    return LineRange(first_line, last_line)


def line_offset(line: int, bytes_per_line: int) -> int:
    """Offset label of a row."""
    return line * bytes_per_line


def line_of_offset(offset: int, bytes_per_line: int) -> int:
    """Row containing the byte at offset."""
    return offset // validate_grouping(bytes_per_line)


def line_slice(data: bytes, line: int, bytes_per_line: int) -> bytes:
    """Bytes shown on one row: data[L*G : min(L*G+G, N)]."""
    start = line_offset(line, bytes_per_line)
    return data[start:min(start + bytes_per_line, len(data))]


def iter_rows(data: bytes, line_range: LineRange, bytes_per_line: int) -> Iterator[tuple[int, bytes]]:
    """Yield (offset, row bytes) for each row of line_range."""
    for line in line_range:
        yield line_offset(line, bytes_per_line), line_slice(data, line, bytes_per_line)
