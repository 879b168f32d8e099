"""
File kind detection and per-kind parse results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .certificates import ASN1_SEQUENCE, parse_certificates, read_der_header
from .logging_config import get_logger
from .models import CertificateRecord, FileInfo, FileKind, SelectionRange
from .png import PNG_SIGNATURE, PngData
from .xml_tree import XmlData

logger = get_logger('detection')


class SignatureDetector:
    """Detector for the content kinds binprobe can parse."""

    UTF8_BOM = b'\xef\xbb\xbf'
    PEM_MARKER = b'-----BEGIN'
    XML_MARKER = b'<?xml'
    # Certificate > TBSCertificate; a certificate never fits a short-form length
    DER_LONG_LENGTHS = (0x81, 0x82, 0x83)

    EXTENSIONS = {kind.extension: kind for kind in FileKind}
    EXTENSIONS['pem'] = FileKind.PEM_CERTIFICATE
    EXTENSIONS['cer'] = FileKind.DER_CERTIFICATE

    @classmethod
    def _text_start(cls, data: bytes) -> bytes:
        """First bytes after an optional UTF-8 BOM and leading whitespace."""
        head = bytes(data[:1024])
        if head.startswith(cls.UTF8_BOM):
            head = head[len(cls.UTF8_BOM):]
        return head.lstrip()

    @staticmethod
    def is_png(data: bytes) -> bool:
        return bytes(data[:len(PNG_SIGNATURE)]) == PNG_SIGNATURE

    @classmethod
    def is_pem(cls, data: bytes) -> bool:
        return cls._text_start(data).startswith(cls.PEM_MARKER)

    @classmethod
    def is_der_certificate(cls, data: bytes) -> bool:
        """SEQUENCE with a long-form length whose first element is again a SEQUENCE."""
        if len(data) < 4 or data[0] != ASN1_SEQUENCE or data[1] not in cls.DER_LONG_LENGTHS:
            return False
        try:
            _, header_len, content_len = read_der_header(data, 0)
            inner_tag, _, _ = read_der_header(data, header_len)
        except ValueError:
            return False
        return inner_tag == ASN1_SEQUENCE and header_len + content_len <= len(data)

    @classmethod
    def is_xml(cls, data: bytes) -> bool:
        return cls._text_start(data).startswith(cls.XML_MARKER)

    @classmethod
    def detect(cls, data: bytes, extension: Optional[str] = None) -> FileKind:
        """
        Detect the kind of a buffer from its leading bytes.

        Args:
            data: Raw buffer
            extension: Optional file extension used when no signature matches

        Returns:
            Detected FileKind (UNKNOWN when nothing matches)
        """
        if cls.is_png(data):
            return FileKind.PNG
        if cls.is_pem(data):
            return FileKind.PEM_CERTIFICATE
        if cls.is_der_certificate(data):
            return FileKind.DER_CERTIFICATE
        if cls.is_xml(data):
            return FileKind.XML
        if extension:
            return cls.EXTENSIONS.get(extension.lower().lstrip('.'), FileKind.UNKNOWN)
        return FileKind.UNKNOWN


@dataclass
class PngDetection:
    """PNG chunk table (None when the chunk walk could not start)."""
    png: Optional[PngData]
    kind: FileKind = FileKind.PNG

    def ranges(self) -> list[SelectionRange]:
        if self.png is None:
            return []
        return [self.png.signature_range] + [chunk.selection_range() for chunk in self.png.chunks]


@dataclass
class CertificateDetection:
    """Certificates of a PEM or DER buffer (None when parsing failed)."""
    certificates: Optional[list[CertificateRecord]]
    kind: FileKind = FileKind.PEM_CERTIFICATE

    def ranges(self) -> list[SelectionRange]:
        return [cert.selection_range() for cert in self.certificates or []]


@dataclass
class XmlDetection:
    """XML parse result."""
    xml: XmlData
    kind: FileKind = FileKind.XML

    def ranges(self) -> list[SelectionRange]:
        return []


@dataclass
class EmptyDetection:
    """Nothing to parse for this kind."""
    kind: FileKind = FileKind.UNKNOWN

    def ranges(self) -> list[SelectionRange]:
        return []


Detection = Union[PngDetection, CertificateDetection, XmlDetection, EmptyDetection]


def detect_kind(data: bytes, extension: Optional[str] = None) -> FileKind:
    """Shortcut for SignatureDetector.detect()."""
    return SignatureDetector.detect(data, extension)


def parse_detection(data: bytes, kind: FileKind) -> Detection:
    """
    Run the parser owning the given kind.

    Args:
        data: Raw buffer
        kind: Kind returned by detect_kind()

    Returns:
        The tagged parse result for that kind
    """
    logger.debug(f"Parsing {len(data)} bytes as {kind.name}")
    match kind:
        case FileKind.PNG:
            return PngDetection(PngData.parse(data))
        case FileKind.PEM_CERTIFICATE:
            return CertificateDetection(parse_certificates(data, is_der=False), kind)
        case FileKind.DER_CERTIFICATE:
            return CertificateDetection(parse_certificates(data, is_der=True), kind)
        case FileKind.XML:
            return XmlDetection(XmlData.parse(data))
        case _:
            return EmptyDetection(kind)


def file_info(data: bytes, extension: Optional[str] = None) -> FileInfo:
    """Kind and size of a buffer."""
    return FileInfo(kind=detect_kind(data, extension), size=len(data))
