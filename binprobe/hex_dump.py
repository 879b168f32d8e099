"""
Row-based hex/ASCII dump of a buffer.
"""

from typing import Optional

from .logging_config import get_logger
from .models import LineRange, SelectionRange
from .utils import ByteInspector
from .viewport import iter_rows, total_lines, validate_grouping

logger = get_logger('hex_dump')


class HexDumper:
    """Hex/ASCII dumper with optional colors and selection highlight."""

    # ANSI color codes
    GRAY = '\033[90m'
    BOLD = '\033[1m'
    REVERSE = '\033[7m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_CYAN = '\033[96m'
    RESET = '\033[0m'

    def __init__(self, width: int = 16, use_color: bool = True, display_lsb: bool = False):
        """
        Initialize HexDumper.

        Args:
            width: Number of bytes per line (1..64)
            use_color: Use ANSI colors for better readability
            display_lsb: Show every byte with its bit order reversed
        """
        self.width = validate_grouping(width)
        self.use_color = use_color
        self.display_lsb = display_lsb

    def dump(self, data: bytes, line_range: Optional[LineRange] = None,
             selection: Optional[SelectionRange] = None) -> str:
        """
        Dump the rows of line_range (all rows by default).

        Args:
            data: Buffer to dump
            line_range: Rows to render, as returned by compute_visible_lines()
            selection: Range to highlight (only visible with colors)

        Returns:
            One "OFFSET: HEX  ASCII" line per row
        """
        if line_range is None:
            line_range = LineRange(0, total_lines(len(data), self.width))

        lines = []
        for offset, row in iter_rows(data, line_range, self.width):
            values = [ByteInspector.reverse_bits(b) if self.display_lsb else b for b in row]
            hex_part = self._format_hex(values, offset, selection)
            padding = ' ' * (3 * (self.width - len(values)))
            ascii_part = self._format_ascii(values, offset, selection)
            lines.append(f'{offset:08X}: {hex_part}{padding} {ascii_part}')

        logger.debug(f"Dumped rows {line_range.first_line}..{line_range.last_line}")
        return '\n'.join(lines)

    def _get_color(self, byte_val: int) -> str:
        """Get color for a byte based on its ASCII representation."""
        if not self.use_color:
            return ''

        if ByteInspector.is_printable(byte_val):
            return (self.BOLD + self.BRIGHT_GREEN) if chr(byte_val).isalnum() else (self.BOLD + self.BRIGHT_YELLOW)
        if byte_val in ByteInspector.CONTROL_NAMES:
            return self.BOLD + self.BRIGHT_CYAN
        return ''

    def _wrap(self, text: str, byte_val: int, selected: bool) -> str:
        if not self.use_color:
            return text
        color = self._get_color(byte_val)
        if selected:
            color += self.REVERSE
        return f'{color}{text}{self.RESET}' if color else text

    def _format_hex(self, values: list[int], offset: int, selection: Optional[SelectionRange]) -> str:
        """Format hex representation, one "XX " group per byte."""
        parts = []
        for idx, value in enumerate(values):
            selected = selection is not None and selection.contains(offset + idx)
            parts.append(self._wrap(f'{value:02X}', value, selected) + ' ')
        return ''.join(parts)

    def _format_ascii(self, values: list[int], offset: int, selection: Optional[SelectionRange]) -> str:
        """Format ASCII representation, '.' for anything not printable."""
        chars = []
        for idx, value in enumerate(values):
            selected = selection is not None and selection.contains(offset + idx)
            char = chr(value) if ByteInspector.is_printable(value) else '.'
            if self.use_color and char == '.' and not selected:
                chars.append(f'{self.GRAY}.{self.RESET}')
            else:
                chars.append(self._wrap(char, value, selected))
        return ''.join(chars)


def hex_dump(data: bytes, width: int = 16, use_color: bool = True, display_lsb: bool = False) -> str:
    """
    Dump a whole buffer.

    This is a shortcut around HexDumper.dump().
    """
    dumper = HexDumper(width=width, use_color=use_color, display_lsb=display_lsb)
    return dumper.dump(data)
