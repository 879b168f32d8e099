"""
Shared fixtures: sample containers and throwaway certificates.
"""

from __future__ import annotations

import datetime
import struct

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from binprobe.png import PNG_SIGNATURE, build_chunk

IHDR_PAYLOAD = struct.pack(">IIBBBBB", 1, 1, 8, 0, 0, 0, 0)


def sample_png() -> bytes:
    """Signature, IHDR, one IDAT and IEND, all with correct CRCs."""
    return (PNG_SIGNATURE + build_chunk(b"IHDR", IHDR_PAYLOAD)
            + build_chunk(b"IDAT", b"\x78\x9c\x63\x00\x00\x00\x01\x00\x01")
            + build_chunk(b"IEND"))


def make_certificate(common_name: str = "binprobe test", days_valid: int = 30,
                     not_before: datetime.datetime | None = None) -> x509.Certificate:
    """Self-signed EC certificate."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    not_before = not_before or datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=1)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_before + datetime.timedelta(days=days_valid))
        .sign(key, hashes.SHA256())
    )


def pem_bytes(cert: x509.Certificate) -> bytes:
    return cert.public_bytes(serialization.Encoding.PEM)


def der_bytes(cert: x509.Certificate) -> bytes:
    return cert.public_bytes(serialization.Encoding.DER)
