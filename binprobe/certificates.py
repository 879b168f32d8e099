"""
X.509 certificate summaries for PEM and DER buffers.
"""

import re
from datetime import datetime, timezone
from typing import Optional

try:
    from cryptography import x509
    from cryptography.exceptions import UnsupportedAlgorithm
    from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
except ImportError:
    print("Error: cryptography package not found. Install with: pip install cryptography")
    import sys
    sys.exit(1)

from .logging_config import get_logger
from .models import CertificateRecord

logger = get_logger('certificates')

PEM_BLOCK = re.compile(
    rb'-----BEGIN CERTIFICATE-----.+?-----END CERTIFICATE-----',
    re.DOTALL
)

ASN1_SEQUENCE = 0x30
ASN1_BIT_STRING = 0x03


def read_der_header(data: bytes, offset: int) -> tuple[int, int, int]:
    """
    Read the tag and definite length of the DER element at offset.

    Args:
        data: DER encoded bytes
        offset: Offset of the tag byte

    Returns:
        (tag, header length, content length)

    Raises:
        ValueError: If the header is truncated or uses an indefinite/oversized length
    """
    if offset + 2 > len(data):
        raise ValueError(f"Truncated DER header at offset {offset}")

    tag = data[offset]
    first = data[offset + 1]
    if first < 0x80:
        return tag, 2, first

    num_octets = first & 0x7F
    if num_octets == 0 or num_octets > 4:
        raise ValueError(f"Unsupported DER length form 0x{first:02X} at offset {offset}")
    if offset + 2 + num_octets > len(data):
        raise ValueError(f"Truncated DER length at offset {offset}")

    length = int.from_bytes(data[offset + 2:offset + 2 + num_octets], 'big')
    return tag, 2 + num_octets, length


def split_der_elements(data: bytes) -> list[tuple[int, int]]:
    """
    Split a buffer into consecutive top-level DER elements.

    Returns:
        (start, end) offsets per element, end exclusive

    Raises:
        ValueError: If an element is not a SEQUENCE or runs past the buffer
    """
    spans = []
    offset = 0
    while offset < len(data):
        tag, header_len, content_len = read_der_header(data, offset)
        if tag != ASN1_SEQUENCE:
            raise ValueError(f"Expected SEQUENCE at offset {offset}, found tag 0x{tag:02X}")
        end = offset + header_len + content_len
        if end > len(data):
            raise ValueError(f"DER element at offset {offset} runs past the end of the buffer")
        spans.append((offset, end))
        offset = end
    return spans


def _subject_public_key(spki: bytes) -> bytes:
    """Key bits of a SubjectPublicKeyInfo: the BIT STRING after the algorithm."""
    _, outer_header, _ = read_der_header(spki, 0)
    _, alg_header, alg_len = read_der_header(spki, outer_header)
    key_offset = outer_header + alg_header + alg_len
    tag, key_header, key_len = read_der_header(spki, key_offset)
    if tag != ASN1_BIT_STRING:
        raise ValueError(f"Expected BIT STRING in SubjectPublicKeyInfo, found tag 0x{tag:02X}")
    # first content octet is the unused-bits count
    return spki[key_offset + key_header + 1:key_offset + key_header + key_len]


def summarize_certificate(cert: x509.Certificate, start: int, end: int,
                          now: Optional[datetime] = None) -> CertificateRecord:
    """
    Build a CertificateRecord from a loaded certificate.

    Args:
        cert: Certificate loaded by cryptography
        start: Offset of its first byte in the buffer
        end: Offset of its last byte in the buffer (inclusive)
        now: Reference time for the validity check (default: current UTC time)
    """
    now = now or datetime.now(timezone.utc)
    not_before = cert.not_valid_before_utc
    not_after = cert.not_valid_after_utc
    spki = cert.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)

    return CertificateRecord(
        version=cert.version.name,
        serial=cert.serial_number,
        signature_algorithm=cert.signature_algorithm_oid.dotted_string,
        issuer=cert.issuer.rfc4514_string(),
        subject=cert.subject.rfc4514_string(),
        not_before=not_before,
        not_after=not_after,
        currently_valid=not_before <= now <= not_after,
        public_key=_subject_public_key(spki),
        public_key_algorithm=cert.public_key_algorithm_oid.dotted_string,
        start_offset=start,
        end_offset=end,
    )


def parse_certificates(data: bytes, is_der: bool = False) -> Optional[list[CertificateRecord]]:
    """
    Parse every certificate in a PEM or DER buffer.

    Any certificate failing to load fails the whole parse.

    Args:
        data: Raw buffer
        is_der: True for concatenated DER certificates, False for PEM text

    Returns:
        Certificate records in buffer order, or None if parsing failed
    """
    data = bytes(data)
    records = []
    try:
        if is_der:
            for start, end in split_der_elements(data):
                cert = x509.load_der_x509_certificate(data[start:end])
                records.append(summarize_certificate(cert, start, end - 1))
        else:
            for match in PEM_BLOCK.finditer(data):
                cert = x509.load_pem_x509_certificate(match.group(0))
                records.append(summarize_certificate(cert, match.start(), match.end() - 1))
    except (ValueError, x509.InvalidVersion, UnsupportedAlgorithm) as e:
        logger.warning(f"Failed to parse {'DER' if is_der else 'PEM'} certificate: {e}")
        return None

    if not records:
        logger.warning("No certificate found in buffer")
        return None

    logger.debug(f"Parsed {len(records)} certificates")
    return records
