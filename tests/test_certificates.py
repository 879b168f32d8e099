# pylint:disable=no-self-use
from __future__ import annotations

import datetime
import unittest

from common import der_bytes, make_certificate, pem_bytes
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from binprobe.certificates import parse_certificates, read_der_header, split_der_elements, summarize_certificate


class CertificateParseTests(unittest.TestCase):
    """
    Test cases for PEM and DER certificate summaries
    """

    @classmethod
    def setUpClass(cls):
        cls.cert = make_certificate("first")
        cls.other = make_certificate("second")

    def test_single_pem(self):
        data = pem_bytes(self.cert)
        records = parse_certificates(data)
        assert len(records) == 1
        record = records[0]
        assert record.subject == "CN=first"
        assert record.issuer == "CN=first"
        assert record.serial == self.cert.serial_number
        assert record.version == "v3"
        # ecdsa-with-SHA256, id-ecPublicKey
        assert record.signature_algorithm == "1.2.840.10045.4.3.2"
        assert record.public_key_algorithm == "1.2.840.10045.2.1"
        assert record.currently_valid
        assert record.start_offset == 0
        assert record.end_offset == data.rindex(b"-----") + 4

    def test_public_key_is_subject_key_bits(self):
        record = parse_certificates(pem_bytes(self.cert))[0]
        spki = self.cert.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
        # uncompressed P-256 point
        assert len(record.public_key) == 65
        assert record.public_key[0] == 0x04
        assert spki.endswith(record.public_key)
        assert record.public_key_hex == record.public_key.hex().upper()

    def test_pem_chain_offsets(self):
        first = pem_bytes(self.cert)
        data = b"leading text\n" + first + pem_bytes(self.other)
        records = parse_certificates(data)
        assert [r.subject for r in records] == ["CN=first", "CN=second"]
        assert records[0].start_offset == len(b"leading text\n")
        assert data[records[0].start_offset:records[0].end_offset + 1].startswith(b"-----BEGIN CERTIFICATE-----")
        assert data[records[1].end_offset - 3:records[1].end_offset + 1] == b"----"

    def test_pem_without_blocks(self):
        assert parse_certificates(b"-----BEGIN NOTHING-----\n") is None
        assert parse_certificates(b"") is None

    def test_pem_corrupt_block_fails_whole_parse(self):
        broken = b"-----BEGIN CERTIFICATE-----\nAAAA\n-----END CERTIFICATE-----\n"
        assert parse_certificates(pem_bytes(self.cert) + broken) is None

    def test_der_concatenated(self):
        first = der_bytes(self.cert)
        data = first + der_bytes(self.other)
        records = parse_certificates(data, is_der=True)
        assert [r.subject for r in records] == ["CN=first", "CN=second"]
        assert records[0].start_offset == 0
        assert records[0].end_offset == len(first) - 1
        assert records[1].start_offset == len(first)
        assert records[1].end_offset == len(data) - 1

    def test_der_trailing_garbage(self):
        assert parse_certificates(der_bytes(self.cert) + b"\x00\x01", is_der=True) is None

    def test_der_truncated(self):
        assert parse_certificates(der_bytes(self.cert)[:-10], is_der=True) is None

    def test_expired(self):
        start = datetime.datetime(2001, 1, 1, tzinfo=datetime.timezone.utc)
        cert = make_certificate("old", days_valid=10, not_before=start)
        record = parse_certificates(pem_bytes(cert))[0]
        assert not record.currently_valid
        assert record.not_before == start

    def test_reference_time(self):
        record = summarize_certificate(self.cert, 0, 10)
        later = record.not_after + datetime.timedelta(seconds=1)
        assert not summarize_certificate(self.cert, 0, 10, now=later).currently_valid
        assert record.selection_range().as_tuple() == (0, 10)


class DerHeaderTests(unittest.TestCase):
    """
    Test cases for DER length headers
    """

    def test_short_form(self):
        assert read_der_header(b"\x30\x05\x00\x00\x00\x00\x00", 0) == (0x30, 2, 5)

    def test_long_form(self):
        assert read_der_header(b"\x30\x82\x01\x2c", 0) == (0x30, 4, 300)
        assert read_der_header(b"\x00\x30\x81\x80", 1) == (0x30, 3, 128)

    def test_indefinite_length(self):
        with self.assertRaises(ValueError):
            read_der_header(b"\x30\x80", 0)

    def test_truncated(self):
        with self.assertRaises(ValueError):
            read_der_header(b"\x30", 0)
        with self.assertRaises(ValueError):
            read_der_header(b"\x30\x82\x01", 0)

    def test_split(self):
        data = b"\x30\x01\xaa\x30\x00"
        assert split_der_elements(data) == [(0, 3), (3, 5)]

    def test_split_rejects_other_tags(self):
        with self.assertRaises(ValueError):
            split_der_elements(b"\x04\x01\xaa")


if __name__ == "__main__":
    unittest.main()
