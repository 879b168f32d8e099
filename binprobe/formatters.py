"""
Console formatters for binprobe reports.
"""

from typing import Optional

from .detection import CertificateDetection, Detection, EmptyDetection, PngDetection, XmlDetection
from .models import CertificateRecord, ChunkRecord, FileInfo, HistogramTable
from .png import PngData
from .selection import Selection
from .utils import ByteInspector, SizeFormatter
from .xml_tree import XmlData, walk


class ReportFormatter:
    """Formatter for console output of parse results."""

    SEPARATOR_WIDTH = 68
    KEY_TRUNCATE = 20

    # Chunk table columns: (header, width)
    CHUNK_COLUMNS = (
        ('Index', 6), ('Data size', 10), ('Chunk', 8),
        ('Start', 10), ('End', 10), ('CRC', 12), ('Valid', 5),
    )

    GREEN = '\033[32m'
    RED = '\033[31m'
    RESET = '\033[0m'

    def __init__(self, use_color: bool = False):
        """
        Initialize ReportFormatter.

        Args:
            use_color: Color valid/invalid CRC cells
        """
        self.use_color = use_color

    def _colored(self, text: str, ok: bool) -> str:
        if not self.use_color:
            return text
        return f"{self.GREEN if ok else self.RED}{text}{self.RESET}"

    def format_file_info(self, info: FileInfo, name: Optional[str] = None) -> str:
        lines = []
        if name:
            lines.append(f"File: {name}")
        lines.append(f"Size: {', '.join(SizeFormatter.labels(info.size))}")
        lines.append(f"Kind: {info.name}")
        lines.append(f"Media type: {info.media_type}")
        lines.append(f"Extension: {info.extension}")
        return '\n'.join(lines)

    def format_chunks(self, chunks: list[ChunkRecord], signature: Optional[str] = None) -> str:
        """Render the chunk table of a container."""
        lines = []
        if signature:
            lines.append(f"png signature: {signature}")
        lines.append(''.join(header.ljust(width) for header, width in self.CHUNK_COLUMNS).rstrip())
        lines.append("─" * self.SEPARATOR_WIDTH)
        for chunk in chunks:
            cells = (
                str(chunk.index), str(chunk.size), chunk.type_tag,
                str(chunk.start_offset), str(chunk.end_offset), chunk.checksum_hex,
            )
            row = ''.join(cell.ljust(width) for cell, (_, width) in zip(cells, self.CHUNK_COLUMNS))
            row += self._colored('yes' if chunk.checksum_valid else 'no', chunk.checksum_valid)
            lines.append(row)
        return '\n'.join(lines)

    def format_png(self, png: Optional[PngData]) -> str:
        if png is None:
            return "Failed to parse png"
        return "PNG Chunks\n" + self.format_chunks(png.chunks, png.signature)

    def format_histogram(self, table: HistogramTable, top: int = 16) -> str:
        """Summary line plus the most frequent byte values with a bar each."""
        lines = [
            f"Bytes: {table.total}  (count min:{table.min_count} max:{table.max_count})",
            f"Entropy: {table.entropy:.4f} bits per byte",
            "─" * self.SEPARATOR_WIDTH,
        ]
        peak = table.max_count or 1
        for value, count in table.most_common(top):
            if count == 0:
                break
            bar = '#' * max(1, round(40 * count / peak))
            lines.append(f"0x{value:02X} {ByteInspector.describe(value)[:12]:<12} {count:>10}  {bar}")
        return '\n'.join(lines)

    def format_certificate(self, cert: CertificateRecord) -> str:
        validity = "certificate is currently valid" if cert.currently_valid else "certificate is currently invalid"
        key = cert.public_key_hex
        if len(key) > self.KEY_TRUNCATE:
            key = key[:self.KEY_TRUNCATE] + '...'
        rows = [
            ('Certificate version', cert.version),
            ('Certificate serial', str(cert.serial)),
            ('Certificate signature algorithm', cert.signature_algorithm),
            ('Issuer', cert.issuer),
            ('Validity (not before)', f"{cert.not_before.isoformat()} ({validity})"),
            ('Validity (not after)', f"{cert.not_after.isoformat()} ({validity})"),
            ('Subject', cert.subject),
            ('Subject public key', key),
            ('Subject public key algorithm', cert.public_key_algorithm),
            ('Bytes', f"{cert.start_offset}..{cert.end_offset}"),
        ]
        return '\n'.join(f"{name:<32} {value}" for name, value in rows)

    def format_certificates(self, certs: Optional[list[CertificateRecord]]) -> str:
        if certs is None:
            return "Failed to parse pem certificates"
        blocks = []
        if len(certs) > 1:
            blocks.append(f"Number of certificates: {len(certs)}")
        blocks.extend(self.format_certificate(cert) for cert in certs)
        return ('\n' + "─" * self.SEPARATOR_WIDTH + '\n').join(blocks)

    def format_xml(self, xml: XmlData) -> str:
        if xml.root is None:
            return f"XML error: {xml.error}"
        return '\n'.join(f"{'  ' * depth}{line}" for depth, line in walk(xml.root))

    def format_detection(self, detection: Detection) -> str:
        match detection:
            case PngDetection():
                return self.format_png(detection.png)
            case CertificateDetection():
                return self.format_certificates(detection.certificates)
            case XmlDetection():
                return self.format_xml(detection.xml)
            case EmptyDetection():
                return f"Kind: {detection.kind.display_name}\nNo data"

    def format_selection(self, selection: Selection, data: bytes) -> str:
        """Selection summary: byte table for one byte, count and Unicode reading otherwise."""
        if selection.range is None:
            return "No selection"

        start, end = selection.range.as_tuple()
        lines = [f"Selection: {start} -> {end}"]
        if start == end:
            lines.append(f"byte at index {start}")
            lines.extend(f"  {name:<8} {value}" for name, value in ByteInspector.table(data[start]))
            return '\n'.join(lines)

        lines.append(f"{selection.count} bytes selected")
        selected = selection.slice(data)
        if len(selected) == 4:
            readings = ByteInspector.unicode_interpretations(selected)
            if readings['le'] is not None:
                lines.append(f"Unicode le {readings['le']!r}")
            if readings['be'] is not None:
                lines.append(f"Unicode be {readings['be']!r}")
        return '\n'.join(lines)
