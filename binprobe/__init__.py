"""
binprobe

Inspection core of a byte-level file viewer: virtualized row mapping,
click-driven selection, text/byte codecs, PNG chunk walking with CRC-32
verification, byte histograms and file kind detection.
"""

from .checksum import crc32
from .codec import Encoding, ByteDecoder, ByteEncoder, decode, encode_hex
from .config import ViewerConfig, create_default_config
from .detection import (
    SignatureDetector, PngDetection, CertificateDetection, XmlDetection, EmptyDetection,
    detect_kind, parse_detection, file_info,
)
from .document import Document
from .exceptions import (
    BinprobeError, ConfigError, ViewportError, DecodeError,
    OddLengthError, InvalidCharError, InvalidNumberError,
)
from .exporter import SelectionExporter
from .formatters import ReportFormatter
from .hex_dump import HexDumper, hex_dump
from .histogram import compute_histogram
from .logging_config import LoggingManager, setup_logging, get_logger
from .models import (
    SelectionRange, ViewportGeometry, LineRange, ChunkRecord, HistogramTable,
    FileKind, FileInfo, CertificateRecord, MIN_BYTES_PER_LINE, MAX_BYTES_PER_LINE,
)
from .png import PNG_SIGNATURE, PngData, parse_container
from .selection import Selection
from .utils import ByteInspector, SizeFormatter, describe_byte, byte_table, format_size
from .viewport import compute_visible_lines, total_lines, total_height, line_slice, iter_rows

__all__ = [
    # Document
    'Document',
    # Codec
    'Encoding',
    'ByteDecoder',
    'ByteEncoder',
    'decode',
    'encode_hex',
    # Checksum and containers
    'crc32',
    'PNG_SIGNATURE',
    'PngData',
    'parse_container',
    # Viewport
    'compute_visible_lines',
    'total_lines',
    'total_height',
    'line_slice',
    'iter_rows',
    # Selection
    'Selection',
    # Histogram
    'compute_histogram',
    # Detection
    'SignatureDetector',
    'PngDetection',
    'CertificateDetection',
    'XmlDetection',
    'EmptyDetection',
    'detect_kind',
    'parse_detection',
    'file_info',
    # Models
    'SelectionRange',
    'ViewportGeometry',
    'LineRange',
    'ChunkRecord',
    'HistogramTable',
    'FileKind',
    'FileInfo',
    'CertificateRecord',
    'MIN_BYTES_PER_LINE',
    'MAX_BYTES_PER_LINE',
    # Configuration
    'ViewerConfig',
    'create_default_config',
    # Presentation
    'HexDumper',
    'hex_dump',
    'ReportFormatter',
    'SelectionExporter',
    # Utilities
    'ByteInspector',
    'SizeFormatter',
    'describe_byte',
    'byte_table',
    'format_size',
    # Exceptions
    'BinprobeError',
    'ConfigError',
    'ViewportError',
    'DecodeError',
    'OddLengthError',
    'InvalidCharError',
    'InvalidNumberError',
    # Logging
    'LoggingManager',
    'setup_logging',
    'get_logger',
]

__version__ = '0.1.0'
