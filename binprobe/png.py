"""
Chunk walker for PNG-style containers.

A container is an 8-byte signature followed by chunks of the form
``length (4, big-endian) | type (4) | payload (length) | crc (4, big-endian)``
where the CRC covers the type and payload bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import List, Optional

from .checksum import crc32
from .codec import encode_hex
from .logging_config import get_logger
from .models import ChunkRecord, SelectionRange

logger = get_logger('png')

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# length + type + crc
CHUNK_OVERHEAD = 12
INVALID_TAG = 'Invalid'
UNDECODABLE_TAG = '????'


@dataclass
class PngData:
    """Parsed chunk table of a PNG-style buffer."""
    signature: str
    chunks: List[ChunkRecord] = field(default_factory=list)

    @property
    def signature_range(self) -> SelectionRange:
        return SelectionRange(0, len(PNG_SIGNATURE) - 1)

    @property
    def all_checksums_valid(self) -> bool:
        return all(chunk.checksum_valid for chunk in self.chunks)

    @classmethod
    def parse(cls, data: bytes) -> Optional[PngData]:
        """
        Walk the chunk stream of a PNG-style buffer.

        Bounds and checksum problems are recorded on the chunks rather than
        raised: a bad CRC marks the chunk invalid and the walk continues, a
        length running past the buffer ends the walk with one "Invalid"
        record spanning the remainder.

        Args:
            data: Raw buffer

        Returns:
            PngData, or None if the buffer does not start with the signature
        """
        if len(data) < len(PNG_SIGNATURE) or bytes(data[:len(PNG_SIGNATURE)]) != PNG_SIGNATURE:
            return None

        png = cls(signature=encode_hex(PNG_SIGNATURE, ' '))
        total = len(data)
        offset = len(PNG_SIGNATURE)

        while offset + CHUNK_OVERHEAD <= total:
            chunk_start = offset
            index = len(png.chunks)
            (length,) = struct.unpack_from('>I', data, offset)

            if offset + CHUNK_OVERHEAD + length > total:
                logger.warning(
                    f"Chunk {index} at offset {chunk_start} declares {length} bytes, "
                    f"only {total - chunk_start - CHUNK_OVERHEAD} available"
                )
                png.chunks.append(ChunkRecord(
                    index=index,
                    size=0,
                    type_tag=INVALID_TAG,
                    start_offset=chunk_start,
                    end_offset=total - 1,
                    checksum=None,
                    checksum_valid=False,
                ))
                break

            tag_bytes = bytes(data[offset + 4:offset + 8])
            data_start = offset + 8
            data_end = data_start + length
            payload = bytes(data[data_start:data_end])
            (stored_crc,) = struct.unpack_from('>I', data, data_end)

            computed_crc = crc32(payload, crc32(tag_bytes))
            type_tag = _decode_tag(tag_bytes)
            if computed_crc != stored_crc:
                logger.warning(
                    f"Chunk {index} ({type_tag}) CRC mismatch: "
                    f"stored {stored_crc:08X}, computed {computed_crc:08X}"
                )

            png.chunks.append(ChunkRecord(
                index=index,
                size=length,
                type_tag=type_tag,
                start_offset=chunk_start,
                end_offset=data_end + 3,
                checksum=stored_crc,
                checksum_valid=computed_crc == stored_crc,
            ))
            offset = data_end + 4

        logger.debug(f"Parsed {len(png.chunks)} chunks from {total} bytes")
        return png


def _decode_tag(tag_bytes: bytes) -> str:
    try:
        return tag_bytes.decode('ascii')
    except UnicodeDecodeError:
        return UNDECODABLE_TAG


def parse_container(data: bytes) -> Optional[List[ChunkRecord]]:
    """
    Parse a PNG-style container into its chunk records.

    Returns:
        Ordered chunk records, or None if the signature does not match
    """
    png = PngData.parse(data)
    return None if png is None else png.chunks


def build_chunk(type_tag: bytes, payload: bytes = b'') -> bytes:
    """Serialize one chunk with a correct CRC."""
    return (struct.pack('>I', len(payload)) + type_tag + payload
            + struct.pack('>I', crc32(payload, crc32(type_tag))))
