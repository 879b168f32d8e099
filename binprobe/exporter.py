"""
Export of selected bytes to files.
"""

from pathlib import Path

from .codec import encode_hex
from .logging_config import get_logger

logger = get_logger('exporter')


class SelectionExporter:
    """Writes byte runs as raw files or hex text files."""

    RAW_NAME = "exported.bin"
    HEX_NAME = "exported.hex"

    def __init__(self, export_dir: str = "."):
        """
        Initialize SelectionExporter.

        Args:
            export_dir: Directory used when no explicit path is given
        """
        self.export_dir = Path(export_dir)

    def _target(self, path: str | Path | None, default_name: str) -> Path:
        target = Path(path) if path is not None else self.export_dir / default_name
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def export_raw(self, data: bytes, path: str | Path | None = None) -> Path:
        """Write bytes as-is (default exported.bin)."""
        target = self._target(path, self.RAW_NAME)
        target.write_bytes(bytes(data))
        logger.info(f"Exported {len(data)} raw bytes to {target}")
        return target

    def export_hex(self, data: bytes, path: str | Path | None = None) -> Path:
        """Write bytes as spaced uppercase hex (default exported.hex)."""
        target = self._target(path, self.HEX_NAME)
        target.write_text(encode_hex(data, ' '), encoding='ascii')
        logger.info(f"Exported {len(data)} bytes as hex to {target}")
        return target
