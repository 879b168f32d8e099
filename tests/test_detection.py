# pylint:disable=no-self-use
from __future__ import annotations

import unittest

from common import der_bytes, make_certificate, pem_bytes, sample_png

from binprobe.detection import (
    CertificateDetection,
    EmptyDetection,
    PngDetection,
    SignatureDetector,
    XmlDetection,
    detect_kind,
    file_info,
    parse_detection,
)
from binprobe.models import FileKind
from binprobe.png import PNG_SIGNATURE
from binprobe.xml_tree import XmlData, element_label, walk

XML_DOC = b'<?xml version="1.0"?>\n<root id="r1"><item kind="a">one</item><item>two</item>tail</root>'


class DetectKindTests(unittest.TestCase):
    """
    Test cases for file kind detection
    """

    @classmethod
    def setUpClass(cls):
        cls.cert = make_certificate()

    def test_png(self):
        assert detect_kind(sample_png()) is FileKind.PNG
        assert detect_kind(PNG_SIGNATURE) is FileKind.PNG

    def test_pem(self):
        assert detect_kind(pem_bytes(self.cert)) is FileKind.PEM_CERTIFICATE
        assert detect_kind(b"\xef\xbb\xbf\n  " + pem_bytes(self.cert)) is FileKind.PEM_CERTIFICATE

    def test_der(self):
        assert detect_kind(der_bytes(self.cert)) is FileKind.DER_CERTIFICATE
        assert SignatureDetector.is_der_certificate(der_bytes(self.cert))

    def test_der_lookalikes(self):
        assert not SignatureDetector.is_der_certificate(b"\x30\x82\x01\x00\x30")
        assert not SignatureDetector.is_der_certificate(b"\x30\x05\x30\x03\x02\x01\x00")
        assert not SignatureDetector.is_der_certificate(b"0000000000")

    def test_xml(self):
        assert detect_kind(XML_DOC) is FileKind.XML
        assert detect_kind(b"\xef\xbb\xbf" + XML_DOC) is FileKind.XML

    def test_extension_hint(self):
        assert detect_kind(b"<root/>", "xml") is FileKind.XML
        assert detect_kind(b"\x00\x01", ".PNG") is FileKind.PNG
        assert detect_kind(b"\x00\x01", "pem") is FileKind.PEM_CERTIFICATE
        assert detect_kind(b"\x00\x01", "cer") is FileKind.DER_CERTIFICATE
        assert detect_kind(b"\x00\x01", "exe") is FileKind.UNKNOWN

    def test_signature_wins_over_extension(self):
        assert detect_kind(sample_png(), "xml") is FileKind.PNG

    def test_unknown(self):
        assert detect_kind(b"") is FileKind.UNKNOWN
        assert detect_kind(b"\x7fELF\x02\x01") is FileKind.UNKNOWN

    def test_file_info(self):
        info = file_info(sample_png())
        assert info.kind is FileKind.PNG
        assert info.size == len(sample_png())
        assert info.name == "Portable Network Graphics"
        assert info.media_type == "image/png"
        assert info.extension == "png"
        assert file_info(b"abc").extension == "bin"


class ParseDetectionTests(unittest.TestCase):
    """
    Test cases for the per-kind parse results
    """

    def test_png_variant(self):
        detection = parse_detection(sample_png(), FileKind.PNG)
        assert isinstance(detection, PngDetection)
        assert [c.type_tag for c in detection.png.chunks] == ["IHDR", "IDAT", "IEND"]
        ranges = detection.ranges()
        assert ranges[0].as_tuple() == (0, 7)
        assert len(ranges) == 4

    def test_png_variant_by_extension_only(self):
        detection = parse_detection(b"not a png", FileKind.PNG)
        assert isinstance(detection, PngDetection)
        assert detection.png is None
        assert detection.ranges() == []

    def test_certificate_variants(self):
        cert = make_certificate()
        pem = parse_detection(pem_bytes(cert), FileKind.PEM_CERTIFICATE)
        der = parse_detection(der_bytes(cert), FileKind.DER_CERTIFICATE)
        assert isinstance(pem, CertificateDetection)
        assert pem.kind is FileKind.PEM_CERTIFICATE
        assert der.kind is FileKind.DER_CERTIFICATE
        assert len(der.ranges()) == 1
        assert parse_detection(b"junk", FileKind.DER_CERTIFICATE).certificates is None

    def test_xml_variant(self):
        detection = parse_detection(XML_DOC, FileKind.XML)
        assert isinstance(detection, XmlDetection)
        assert detection.xml.ok
        assert detection.ranges() == []

    def test_unknown_variant(self):
        detection = parse_detection(b"\x00", FileKind.UNKNOWN)
        assert isinstance(detection, EmptyDetection)
        assert detection.kind is FileKind.UNKNOWN


class XmlTreeTests(unittest.TestCase):
    """
    Test cases for the XML boundary
    """

    def test_parse_and_walk(self):
        xml = XmlData.parse(XML_DOC)
        assert xml.ok
        assert xml.error is None
        assert element_label(xml.root) == '<root id="r1">'
        assert list(walk(xml.root)) == [
            (0, '<root id="r1">'),
            (1, '@id="r1"'),
            (1, "<item>"),
            (2, '@kind="a"'),
            (2, "one"),
            (1, "<item>"),
            (2, "two"),
            (1, "tail"),
        ]

    def test_parse_error_is_kept(self):
        xml = XmlData.parse(b"<root><open></root>")
        assert not xml.ok
        assert xml.root is None
        assert "mismatched tag" in xml.error
        assert xml.text == "<root><open></root>"


if __name__ == "__main__":
    unittest.main()
