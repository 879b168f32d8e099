# pylint:disable=no-self-use
from __future__ import annotations

import unittest

from binprobe.utils import (
    ByteInspector,
    SizeFormatter,
    byte_table,
    describe_byte,
    format_size,
    reverse_bits,
    unicode_interpretations,
)


class ByteInspectorTests(unittest.TestCase):
    """
    Test cases for single byte descriptions
    """

    def test_describe(self):
        assert describe_byte(0x41) == "A"
        assert describe_byte(0x7E) == "~"
        assert describe_byte(0x0A) == "LF (Line Feed)"
        assert describe_byte(0x00) == "NUL (Null character)"
        assert describe_byte(0x20) == "SP (Space)"
        assert describe_byte(0x7F) == "DEL (Delete)"
        assert describe_byte(0x80) == "extended ASCII"
        assert describe_byte(0xFF) == "extended ASCII"

    def test_describe_rejects_non_bytes(self):
        with self.assertRaises(ValueError):
            describe_byte(256)
        with self.assertRaises(ValueError):
            describe_byte(-1)

    def test_every_control_character_named(self):
        for value in list(range(0x21)) + [0x7F]:
            assert value in ByteInspector.CONTROL_NAMES
            assert not ByteInspector.is_printable(value)

    def test_table(self):
        assert byte_table(0x41) == [
            ("Hex", "0x41"),
            ("Decimal", "65"),
            ("Octal", "0o101"),
            ("Binary", "0b01000001"),
            ("ASCII", "A"),
        ]

    def test_reverse_bits(self):
        assert reverse_bits(0x01) == 0x80
        assert reverse_bits(0xF0) == 0x0F
        assert reverse_bits(0xA5) == 0xA5
        for value in range(256):
            assert reverse_bits(reverse_bits(value)) == value

    def test_unicode_interpretations(self):
        assert unicode_interpretations(b"A\x00\x00\x00") == {"le": "A", "be": None}
        assert unicode_interpretations(b"\x00\x01\xf6\x00") == {"le": None, "be": "\U0001F600"}
        # little endian reading is a surrogate
        assert unicode_interpretations(b"\x00\xd8\x00\x00")["le"] is None

    def test_unicode_interpretations_length(self):
        with self.assertRaises(ValueError):
            unicode_interpretations(b"abc")


class SizeFormatterTests(unittest.TestCase):
    """
    Test cases for size labels
    """

    def test_small(self):
        assert SizeFormatter.labels(1000) == ["1000 bytes"]

    def test_kilo(self):
        assert SizeFormatter.labels(2048) == ["2048 bytes", "2.048 kB", "2.000 KiB"]

    def test_mega(self):
        labels = SizeFormatter.labels(3 * 1024 * 1024)
        assert labels[-2:] == ["3.146 MB", "3.000 MiB"]
        assert format_size(3 * 1024 * 1024).startswith("3145728 bytes, ")


if __name__ == "__main__":
    unittest.main()
