"""
Data models shared by the binprobe components.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional

from .exceptions import ViewportError

# Bytes per rendered row
MIN_BYTES_PER_LINE = 1
MAX_BYTES_PER_LINE = 64

BYTE_VALUES = 256


@dataclass(frozen=True)
class SelectionRange:
    """Inclusive pair of buffer offsets."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise ValueError(f"Selection offsets must be non-negative: ({self.start}, {self.end})")
        if self.start > self.end:
            raise ValueError(f"Selection start {self.start} is after end {self.end}")

    @property
    def count(self) -> int:
        """Number of selected bytes."""
        return self.end - self.start + 1

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end

    def as_tuple(self) -> tuple[int, int]:
        return self.start, self.end


@dataclass(frozen=True)
class ViewportGeometry:
    """Visible interval of the virtual scroll region, in points."""
    top: float
    bottom: float
    row_height: float

    def __post_init__(self):
        if not self.row_height > 0:
            raise ViewportError(f"Row height must be positive, got {self.row_height}")
        if self.bottom < self.top:
            raise ViewportError(f"Viewport bottom {self.bottom} is above top {self.top}")


@dataclass(frozen=True)
class LineRange:
    """Half-open range of rows to render: [first_line, last_line)."""
    first_line: int
    last_line: int

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.first_line, self.last_line))

    def __len__(self) -> int:
        return self.last_line - self.first_line


@dataclass(frozen=True)
class ChunkRecord:
    """
    One chunk of a PNG-style container.

    start_offset points at the first length byte and end_offset at the last
    checksum byte (inclusive), so the pair maps directly onto a SelectionRange.
    The terminal out-of-bounds record has checksum None and ends at the
    last byte of the buffer.
    """
    index: int
    size: int
    type_tag: str
    start_offset: int
    end_offset: int
    checksum: Optional[int]
    checksum_valid: bool

    OUT_OF_BOUND = "Out of bound"

    @property
    def checksum_hex(self) -> str:
        """Declared checksum as spaced uppercase pairs."""
        if self.checksum is None:
            return self.OUT_OF_BOUND
        return ' '.join(f'{b:02X}' for b in self.checksum.to_bytes(4, 'big'))

    @property
    def is_out_of_bounds(self) -> bool:
        return self.checksum is None

    def selection_range(self) -> SelectionRange:
        return SelectionRange(self.start_offset, self.end_offset)


@dataclass(frozen=True)
class HistogramTable:
    """Byte value (0..255) to occurrence count; every bucket present."""
    counts: tuple[int, ...]

    def __post_init__(self):
        if len(self.counts) != BYTE_VALUES:
            raise ValueError(f"Histogram needs {BYTE_VALUES} buckets, got {len(self.counts)}")

    def __getitem__(self, byte_value: int) -> int:
        return self.counts[byte_value]

    def __len__(self) -> int:
        return BYTE_VALUES

    def as_dict(self) -> dict[int, int]:
        return dict(enumerate(self.counts))

    @property
    def total(self) -> int:
        return sum(self.counts)

    @property
    def min_count(self) -> int:
        return min(self.counts)

    @property
    def max_count(self) -> int:
        return max(self.counts)

    def most_common(self, n: Optional[int] = None) -> list[tuple[int, int]]:
        """(byte, count) pairs sorted by frequency, ties by byte value."""
        ordered = sorted(enumerate(self.counts), key=lambda x: (-x[1], x[0]))
        return ordered if n is None else ordered[:n]

    @property
    def entropy(self) -> float:
        """Shannon entropy in bits per byte (0.0 for an empty buffer)."""
        total = self.total
        if total == 0:
            return 0.0
        result = 0.0
        for count in self.counts:
            if count:
                p = count / total
                result -= p * math.log2(p)
        return result


class FileKind(Enum):
    """Detected content kind: (display name, media type, extension)."""
    PNG = ('Portable Network Graphics', 'image/png', 'png')
    PEM_CERTIFICATE = ('PEM Certificate', 'application/x-pem-file', 'crt')
    DER_CERTIFICATE = ('DER Certificate', 'application/x-x509-ca-cert', 'der')
    XML = ('Extensible Markup Language', 'text/xml', 'xml')
    UNKNOWN = ('Arbitrary Binary Data', 'application/octet-stream', 'bin')

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def media_type(self) -> str:
        return self.value[1]

    @property
    def extension(self) -> str:
        return self.value[2]


@dataclass
class FileInfo:
    """Summary of a buffer for the file info panel."""
    kind: FileKind
    size: int

    @property
    def name(self) -> str:
        return self.kind.display_name

    @property
    def media_type(self) -> str:
        return self.kind.media_type

    @property
    def extension(self) -> str:
        return self.kind.extension


@dataclass
class CertificateRecord:
    """Summary of one X.509 certificate found in the buffer."""
    version: str
    serial: int
    signature_algorithm: str
    issuer: str
    subject: str
    not_before: datetime
    not_after: datetime
    currently_valid: bool
    public_key: bytes
    public_key_algorithm: str
    start_offset: int
    end_offset: int

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex().upper()

    def selection_range(self) -> SelectionRange:
        return SelectionRange(self.start_offset, self.end_offset)
