"""Exceptions raised while decoding shell links."""


class FormatError(Exception):
    """Raised when data does not conform to the MS-SHLLINK format."""


class MissingFieldError(FormatError):
    """Raised when a field is truncated or would be read out of bounds."""


class InvalidSignatureError(FormatError):
    """Raised when an ID list item carries a signature we do not know."""


class UnsupportedItemError(FormatError):
    """Raised for recognised ID list items that cannot be decoded yet."""
