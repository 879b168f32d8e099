"""
Per-document state: the buffer, its selection and the caches derived from it.
"""

from pathlib import Path
from typing import Callable, Optional, TypeVar

from .codec import Encoding, decode, encode_hex
from .detection import Detection, PngDetection, detect_kind, parse_detection
from .histogram import compute_histogram
from .logging_config import get_logger
from .models import ChunkRecord, FileInfo, FileKind, HistogramTable, LineRange, SelectionRange, ViewportGeometry
from .png import parse_container
from .selection import Selection
from .viewport import compute_visible_lines, total_height, total_lines, validate_grouping

logger = get_logger('document')

T = TypeVar('T')


class Document:
    """
    A buffer being inspected.

    Every mutation of the buffer bumps ``generation``; histogram, detection
    and chunk results are computed on first use and reused until the
    generation changes, so redraws never trigger O(N) work.
    """

    def __init__(self, data: bytes = b'', name: str = 'untitled.bin', bytes_per_line: int = 32):
        """
        Initialize Document.

        Args:
            data: Initial buffer contents
            name: Display name, its extension is a hint for kind detection
            bytes_per_line: Grouping width (1..64)
        """
        self.name = name
        self.bytes_per_line = validate_grouping(bytes_per_line)
        self.selection = Selection()
        self.buffer = bytearray()
        self.generation = 0
        self._caches: dict[str, tuple[int, object]] = {}
        self.set_buffer(data)

    @classmethod
    def from_file(cls, path: str | Path, bytes_per_line: int = 32) -> 'Document':
        """Load a document from disk."""
        path = Path(path)
        return cls(path.read_bytes(), name=path.name, bytes_per_line=bytes_per_line)

    def __len__(self) -> int:
        return len(self.buffer)

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lstrip('.')

    def _bump(self) -> None:
        self.generation += 1
        self._caches.clear()

    def _cached(self, key: str, factory: Callable[[], T]) -> T:
        entry = self._caches.get(key)
        if entry is not None and entry[0] == self.generation:
            return entry[1]
        logger.debug(f"Computing {key} for generation {self.generation}")
        value = factory()
        self._caches[key] = (self.generation, value)
        return value

    def set_buffer(self, data: bytes, name: Optional[str] = None) -> None:
        """
        Replace the buffer.

        Invalidates every cache and clamps the selection to the new length
        (cleared if the buffer is empty).
        """
        self.buffer = bytearray(data)
        if name is not None:
            self.name = name
        self._bump()
        self.selection.clamp(len(self.buffer))
        logger.debug(f"Loaded {len(self.buffer)} bytes as '{self.name}' (generation {self.generation})")

    def set_bytes_per_line(self, bytes_per_line: int) -> None:
        self.bytes_per_line = validate_grouping(bytes_per_line)

    # Viewport

    @property
    def total_lines(self) -> int:
        return total_lines(len(self.buffer), self.bytes_per_line)

    def total_height(self, row_height: float) -> float:
        return total_height(len(self.buffer), self.bytes_per_line, row_height)

    def compute_visible_lines(self, geometry: ViewportGeometry) -> LineRange:
        return compute_visible_lines(geometry, len(self.buffer), self.bytes_per_line)

    # Selection

    def click(self, offset: int, extend: bool = False) -> Optional[SelectionRange]:
        """
        Apply a click; offset is clamped to the buffer first.

        Returns:
            The new selection range, or None
        """
        if not self.buffer:
            self.selection.clear()
            return None
        offset = min(max(offset, 0), len(self.buffer) - 1)
        return self.selection.click(offset, extend)

    def select(self, start: int, end: int) -> SelectionRange:
        """Select [start, end]; both ends must lie inside the buffer."""
        if end >= len(self.buffer):
            raise ValueError(f"Selection end {end} is past the buffer end ({len(self.buffer)} bytes)")
        return self.selection.set_range(start, end)

    def selected_bytes(self) -> bytes:
        return self.selection.slice(self.buffer)

    def export_selection_hex(self) -> str:
        """Selected bytes as spaced uppercase hex, as copied to the clipboard."""
        return encode_hex(self.selected_bytes(), ' ')

    def delete_selection(self) -> Optional[SelectionRange]:
        """
        Remove the selected bytes [start, end] from the buffer.

        The selection collapses onto max(start - 1, 0), or is cleared if
        nothing is left. All caches go stale.

        Returns:
            The selection after deletion
        """
        current = self.selection.range
        if current is None:
            return None

        del self.buffer[current.start:current.end + 1]
        self._bump()

        if not self.buffer:
            self.selection.clear()
        else:
            new_end = min(max(current.start - 1, 0), len(self.buffer) - 1)
            self.selection.set_range(new_end, new_end)

        logger.debug(f"Deleted {current.count} bytes at {current.start}, selection now {self.selection.range}")
        return self.selection.range

    # Import

    def import_text(self, text: str, encoding: Encoding | str, name: str = 'imported.bin') -> int:
        """
        Decode text and make the result the new buffer.

        The buffer is left untouched if decoding fails.

        Returns:
            Number of bytes imported

        Raises:
            DecodeError: If the text is malformed for the encoding
        """
        data = decode(text, encoding)
        self.set_buffer(data, name=name)
        return len(data)

    # Cached analyses

    def histogram(self) -> HistogramTable:
        return self._cached('histogram', lambda: compute_histogram(self.buffer))

    def kind(self) -> FileKind:
        return self._cached('kind', lambda: detect_kind(self.buffer, self.extension))

    def file_info(self) -> FileInfo:
        return FileInfo(kind=self.kind(), size=len(self.buffer))

    def detection(self) -> Detection:
        return self._cached('detection', lambda: parse_detection(self.buffer, self.kind()))

    def parse_container(self) -> Optional[list[ChunkRecord]]:
        """Chunk records of a PNG-style buffer, None for other content."""
        detection = self.detection()
        if isinstance(detection, PngDetection):
            return None if detection.png is None else detection.png.chunks
        return self._cached('chunks', lambda: parse_container(self.buffer))

    def select_chunk(self, index: int) -> SelectionRange:
        """Select the bytes of one chunk of the container."""
        chunks = self.parse_container()
        if chunks is None:
            raise ValueError(f"'{self.name}' is not a chunked container")
        chunk = chunks[index]
        return self.selection.set_range(chunk.start_offset, chunk.end_offset)
