"""
Custom exceptions for the binprobe inspection core.
"""


class BinprobeError(Exception):
    """Base exception for all binprobe errors."""
    pass


class ConfigError(BinprobeError):
    """Exception raised for configuration errors."""
    pass


class ViewportError(BinprobeError, ValueError):
    """Exception raised for invalid viewport geometry or grouping width."""
    pass


class DecodeError(BinprobeError):
    """Exception raised when text cannot be decoded into bytes."""
    pass


class OddLengthError(DecodeError):
    """Hex input has an odd number of digits."""

    def __init__(self, digits: int):
        self.digits = digits
        super().__init__(f"hex string has odd number of digits ({digits})")


class InvalidCharError(DecodeError):
    """Input contains a character the selected encoding does not accept."""

    def __init__(self, char: str, encoding: str = 'hex'):
        self.char = char
        self.encoding = encoding
        super().__init__(f"invalid character in {encoding} input: {char!r}")


class InvalidNumberError(DecodeError):
    """An octal token does not parse or does not fit in a byte."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid octal number: {token}")
