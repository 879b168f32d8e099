"""
Conversion between raw bytes and their textual encodings.

Decoding is lenient about the way people paste bytes around:
whitespace and ``:`` ``-`` ``,`` separators are ignored, and the usual
prefixes (``0x``, ``\\x``, ``0b``, ``0o``) are accepted and dropped.
"""

import re
from enum import Enum

from .exceptions import InvalidCharError, InvalidNumberError, OddLengthError
from .logging_config import get_logger

logger = get_logger('codec')


class Encoding(str, Enum):
    """Textual encodings accepted by the importer."""
    STRING = 'string'
    HEX = 'hex'
    BINARY = 'binary'
    OCTAL = 'octal'


class ByteDecoder:
    """Lenient text to bytes decoder."""

    SEPARATORS = frozenset(' \t\n\r:-,')
    HEX_DIGITS = frozenset('0123456789abcdefABCDEF')
    OCTAL_DIGITS = frozenset('01234567')
    OCTAL_SPLIT = re.compile(r'[\s:,\-]+')
    MAX_BYTE = 0xFF

    @classmethod
    def decode(cls, text: str, encoding: Encoding | str) -> bytes:
        """
        Decode text into bytes.

        Args:
            text: User supplied text
            encoding: One of Encoding (or its string value)

        Returns:
            Decoded bytes (empty for empty input)

        Raises:
            DecodeError: OddLengthError, InvalidCharError or InvalidNumberError
        """
        encoding = Encoding(encoding)
        match encoding:
            case Encoding.STRING:
                data = cls.decode_string(text)
            case Encoding.HEX:
                data = cls.decode_hex(text)
            case Encoding.BINARY:
                data = cls.decode_binary(text)
            case Encoding.OCTAL:
                data = cls.decode_octal(text)
        logger.debug(f"Decoded {len(text)} chars of {encoding.value} into {len(data)} bytes")
        return data

    @staticmethod
    def decode_string(text: str) -> bytes:
        """Byte-for-byte passthrough of the text's UTF-8 form."""
        return text.encode('utf-8')

    @classmethod
    def decode_hex(cls, text: str) -> bytes:
        """Decode hex digits, skipping separators, 0x prefixes and \\x escapes."""
        digits = []
        i = 0
        length = len(text)
        while i < length:
            c = text[i]
            following = text[i + 1] if i + 1 < length else ''

            if c in cls.SEPARATORS:
                i += 1
            elif c == '0' and following in ('x', 'X'):
                i += 2
            elif c == '\\':
                if following not in ('x', 'X'):
                    raise InvalidCharError(c, 'hex')
                i += 2
            elif c in cls.HEX_DIGITS:
                digits.append(c)
                i += 1
            else:
                raise InvalidCharError(c, 'hex')

        if len(digits) % 2:
            raise OddLengthError(len(digits))

        return bytes(int(digits[j] + digits[j + 1], 16) for j in range(0, len(digits), 2))

    @classmethod
    def decode_binary(cls, text: str) -> bytes:
        """Decode bits, skipping separators and 0b prefixes; left-pads to whole bytes."""
        bits = []
        i = 0
        length = len(text)
        while i < length:
            c = text[i]
            if c in cls.SEPARATORS:
                i += 1
            elif c == '0':
                if i + 1 < length and text[i + 1] in ('b', 'B'):
                    i += 2
                else:
                    bits.append(c)
                    i += 1
            elif c == '1':
                bits.append(c)
                i += 1
            else:
                raise InvalidCharError(c, 'binary')

        if not bits:
            return b''

        pad = (8 - len(bits) % 8) % 8
        bitstring = '0' * pad + ''.join(bits)
        return bytes(int(bitstring[j:j + 8], 2) for j in range(0, len(bitstring), 8))

    @classmethod
    def decode_octal(cls, text: str) -> bytes:
        """Decode separator-delimited octal numbers, each 0..377."""
        result = bytearray()
        for token in cls.OCTAL_SPLIT.split(text):
            if not token:
                continue
            number = token[2:] if token.startswith(('0o', '0O')) else token
            if not number or not all(c in cls.OCTAL_DIGITS for c in number):
                raise InvalidNumberError(token)
            value = int(number, 8)
            if value > cls.MAX_BYTE:
                raise InvalidNumberError(token)
            result.append(value)
        return bytes(result)


class ByteEncoder:
    """Bytes to text for export and clipboard copy."""

    @staticmethod
    def to_hex(data: bytes, separator: str = '') -> str:
        """
        Render bytes as uppercase two-digit hex pairs.

        Args:
            data: Bytes to render
            separator: Text placed between pairs ('' for none, ' ' for export)

        Returns:
            Hex text such as "89504E47" or "89 50 4E 47"
        """
        return separator.join(f'{b:02X}' for b in data)


def decode(text: str, encoding: Encoding | str) -> bytes:
    """
    Decode text into bytes.

    This is a shortcut for ByteDecoder.decode().

    Raises:
        DecodeError: If the text is malformed for the encoding
    """
    return ByteDecoder.decode(text, encoding)


def encode_hex(data: bytes, separator: str = '') -> str:
    """
    Render bytes as uppercase hex pairs with no separators by default.

    This is a shortcut for ByteEncoder.to_hex().
    """
    return ByteEncoder.to_hex(data, separator)
