"""
CRC-32 (IEEE 802.3) as used by PNG chunks.
"""

CRC32_POLYNOMIAL = 0xEDB88320
CRC32_MASK = 0xFFFFFFFF


def _build_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (c >> 1) ^ CRC32_POLYNOMIAL if c & 1 else c >> 1
        table.append(c)
    return tuple(table)


CRC32_TABLE = _build_table()


def crc32(data: bytes, value: int = 0) -> int:
    """
    Compute the reflected CRC-32 of data.

    Args:
        data: Bytes to checksum
        value: Running CRC from a previous call, to checksum data in pieces

    Returns:
        CRC as an unsigned 32-bit integer
    """
    crc = value ^ CRC32_MASK
    for byte in data:
        crc = CRC32_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ CRC32_MASK
