# pylint:disable=no-self-use
from __future__ import annotations

import unittest
import zlib

from binprobe.checksum import CRC32_TABLE, crc32


class Crc32Tests(unittest.TestCase):
    """
    Test cases for the table-driven CRC-32
    """

    def test_check_value(self):
        assert crc32(b"123456789") == 0xCBF43926

    def test_empty(self):
        assert crc32(b"") == 0

    def test_iend_chunk(self):
        assert crc32(b"IEND") == 0xAE426082

    def test_matches_zlib(self):
        for data in (b"\x00", bytes(range(256)), b"IHDR" + bytes(13), b"binprobe" * 100):
            assert crc32(data) == zlib.crc32(data)

    def test_running_value(self):
        data = b"IDATsome payload bytes"
        assert crc32(data[4:], crc32(data[:4])) == crc32(data)

    def test_table(self):
        assert len(CRC32_TABLE) == 256
        assert CRC32_TABLE[0] == 0
        assert CRC32_TABLE[1] == 0x77073096


if __name__ == "__main__":
    unittest.main()
