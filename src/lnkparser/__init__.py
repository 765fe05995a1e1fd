"""lnkparser -- decode Windows .lnk shell link headers and target ID lists."""

__version__ = "0.1.0"

from ._util import Guid, decode_guid, filetime_to_datetime, format_guid
from .exceptions import (
    FormatError,
    InvalidSignatureError,
    MissingFieldError,
    UnsupportedItemError,
)
from .idlist import TargetIDItem, TargetIDList, parse_idlist, resolve_path
from .parser import (
    HotKey,
    Icon,
    LnkFile,
    ShowCommand,
    format_lnk,
    parse_header,
    parse_lnk,
)

__all__ = [
    "parse_lnk",
    "parse_header",
    "parse_idlist",
    "resolve_path",
    "format_lnk",
    "LnkFile",
    "HotKey",
    "Icon",
    "ShowCommand",
    "TargetIDItem",
    "TargetIDList",
    "Guid",
    "decode_guid",
    "format_guid",
    "filetime_to_datetime",
    "FormatError",
    "MissingFieldError",
    "InvalidSignatureError",
    "UnsupportedItemError",
    "__version__",
]
