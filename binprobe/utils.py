"""
Byte inspection helpers for the byte and selection panels.
"""

from typing import Optional


class ByteInspector:
    """Human readable views of a single byte or a short byte run."""

    PRINTABLE_FIRST = 0x21
    PRINTABLE_LAST = 0x7E

    # ASCII control characters (0x00-0x20 and 0x7F)
    CONTROL_NAMES = {
        0x00: ('NUL', 'Null character'), 0x01: ('SOH', 'Start of Heading'),
        0x02: ('STX', 'Start of Text'), 0x03: ('ETX', 'End of Text'),
        0x04: ('EOT', 'End of Transmission'), 0x05: ('ENQ', 'Enquiry'),
        0x06: ('ACK', 'Acknowledge'), 0x07: ('BEL', 'Bell, Alert'),
        0x08: ('BS', 'Backspace'), 0x09: ('HT', 'Horizontal Tab'),
        0x0A: ('LF', 'Line Feed'), 0x0B: ('VT', 'Vertical Tabulation'),
        0x0C: ('FF', 'Form Feed'), 0x0D: ('CR', 'Carriage Return'),
        0x0E: ('SO', 'Shift Out'), 0x0F: ('SI', 'Shift In'),
        0x10: ('DLE', 'Data Link Escape'), 0x11: ('DC1', 'Device Control One (XON)'),
        0x12: ('DC2', 'Device Control Two'), 0x13: ('DC3', 'Device Control Three (XOFF)'),
        0x14: ('DC4', 'Device Control Four'), 0x15: ('NAK', 'Negative Acknowledge'),
        0x16: ('SYN', 'Synchronous Idle'), 0x17: ('ETB', 'End of Transmission Block'),
        0x18: ('CAN', 'Cancel'), 0x19: ('EM', 'End of medium'),
        0x1A: ('SUB', 'Substitute'), 0x1B: ('ESC', 'Escape'),
        0x1C: ('FS', 'File Separator'), 0x1D: ('GS', 'Group Separator'),
        0x1E: ('RS', 'Record Separator'), 0x1F: ('US', 'Unit Separator'),
        0x20: ('SP', 'Space'), 0x7F: ('DEL', 'Delete'),
    }
    EXTENDED = 'extended ASCII'

    @classmethod
    def is_printable(cls, value: int) -> bool:
        return cls.PRINTABLE_FIRST <= value <= cls.PRINTABLE_LAST

    @classmethod
    def describe(cls, value: int) -> str:
        """
        Describe a byte as ASCII.

        Args:
            value: Byte value 0..255

        Returns:
            The character for printable ASCII, "MNEMONIC (Name)" for control
            characters, "extended ASCII" above 0x7F
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Not a byte value: {value}")
        if cls.is_printable(value):
            return chr(value)
        if value in cls.CONTROL_NAMES:
            mnemonic, name = cls.CONTROL_NAMES[value]
            return f"{mnemonic} ({name})"
        return cls.EXTENDED

    @classmethod
    def table(cls, value: int) -> list[tuple[str, str]]:
        """Rows of the per-byte table: hex, decimal, octal, binary, ASCII."""
        return [
            ('Hex', f'0x{value:02X}'),
            ('Decimal', str(value)),
            ('Octal', f'0o{value:03o}'),
            ('Binary', f'0b{value:08b}'),
            ('ASCII', cls.describe(value)),
        ]

    @staticmethod
    def reverse_bits(value: int) -> int:
        """Byte with its bit order reversed (bit 0 <-> bit 7)."""
        return int(f'{value:08b}'[::-1], 2)

    @staticmethod
    def unicode_interpretations(data: bytes) -> dict[str, Optional[str]]:
        """
        Read 4 bytes as a little and big endian code point.

        Returns:
            {'le': char or None, 'be': char or None}; None where the value is
            not a Unicode scalar value (surrogate or above U+10FFFF)
        """
        if len(data) != 4:
            raise ValueError(f"Need exactly 4 bytes, got {len(data)}")

        result = {}
        for name, order in (('le', 'little'), ('be', 'big')):
            code_point = int.from_bytes(data, order)
            if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
                result[name] = None
            else:
                result[name] = chr(code_point)
        return result


class SizeFormatter:
    """Decimal and binary size labels (kB / KiB, MB / MiB)."""

    @staticmethod
    def labels(size: int) -> list[str]:
        """
        Size labels worth showing for a byte count.

        Kilo labels appear once the size passes 1 kB, mega labels once it
        passes 1 MB; the byte count is always first.
        """
        labels = [f"{size} bytes"]
        if size / 1000 > 1.0:
            labels.append(f"{size / 1000:.3f} kB")
            labels.append(f"{size / 1024:.3f} KiB")
        if size / 1000 / 1000 > 1.0:
            labels.append(f"{size / 1000 / 1000:.3f} MB")
            labels.append(f"{size / 1024 / 1024:.3f} MiB")
        return labels


def describe_byte(value: int) -> str:
    """Shortcut for ByteInspector.describe()."""
    return ByteInspector.describe(value)


def byte_table(value: int) -> list[tuple[str, str]]:
    """Shortcut for ByteInspector.table()."""
    return ByteInspector.table(value)


def reverse_bits(value: int) -> int:
    """Shortcut for ByteInspector.reverse_bits()."""
    return ByteInspector.reverse_bits(value)


def unicode_interpretations(data: bytes) -> dict[str, Optional[str]]:
    """Shortcut for ByteInspector.unicode_interpretations()."""
    return ByteInspector.unicode_interpretations(data)


def format_size(size: int) -> str:
    """All size labels joined for a single status line."""
    return ', '.join(SizeFormatter.labels(size))
