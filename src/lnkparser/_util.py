"""Primitive decoders: integers, GUIDs, FILETIMEs and null-terminated strings."""

import struct
from dataclasses import dataclass
from datetime import datetime, timedelta

from ._constants import FILETIME_EPOCH_OFFSET_MS, NARROW_CODEPAGE
from .exceptions import MissingFieldError

_UNIX_EPOCH = datetime(1970, 1, 1)


# ---------------------------------------------------------------------------
# Integer readers
# ---------------------------------------------------------------------------
def _unpack(fmt, data, off):
    if off < 0:
        raise MissingFieldError(f"Negative offset {off}")
    try:
        return struct.unpack_from(fmt, data, off)[0]
    except struct.error:
        size = struct.calcsize(fmt)
        raise MissingFieldError(
            f"Need {size} bytes at offset {off}, buffer holds {len(data)}"
        ) from None


def read_u16(data, off):
    return _unpack("<H", data, off)


def read_u32(data, off):
    return _unpack("<I", data, off)


def read_i32(data, off):
    return _unpack("<i", data, off)


def read_i64(data, off):
    return _unpack("<q", data, off)


# ---------------------------------------------------------------------------
# GUIDs
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Guid:
    """A GUID split into its four wire fields.

    ``data1``..``data3`` hold the little-endian integers as numbers;
    ``data4`` is the 8-byte tail in stored order.
    """

    data1: int
    data2: int
    data3: int
    data4: bytes

    def __str__(self) -> str:
        return format_guid(self)

    def to_bytes(self) -> bytes:
        """Return the 16 bytes of this GUID in wire layout."""
        return struct.pack("<IHH", self.data1, self.data2, self.data3) + self.data4


def decode_guid(data: bytes, off: int = 0) -> Guid:
    """Decode 16 bytes at *off* as a GUID in Windows mixed-endian layout.

    The layout is uint32-LE, uint16-LE, uint16-LE, then 8 raw bytes.
    """
    if off < 0 or len(data) - off < 16:
        raise MissingFieldError(f"GUID at offset {off} needs 16 bytes")
    d1, d2, d3 = struct.unpack_from("<IHH", data, off)
    return Guid(d1, d2, d3, bytes(data[off + 8 : off + 16]))


def format_guid(guid: Guid) -> str:
    """Format *guid* as a lowercase registry string with braces."""
    d4 = guid.data4[:2].hex()
    d5 = guid.data4[2:].hex()
    return f"{{{guid.data1:08x}-{guid.data2:04x}-{guid.data3:04x}-{d4}-{d5}}}"


def parse_guid_str(guid_str: str) -> bytes:
    """Parse a registry GUID string into 16 bytes in wire layout.

    Accepts with or without braces, e.g.
    ``'{20D04FE0-3AEA-1069-A2D8-08002B30309D}'``.
    """
    s = guid_str.strip("{}").replace("-", "")
    if len(s) != 32:
        raise ValueError(f"Invalid GUID string: {guid_str!r}")
    d1 = int(s[0:8], 16)
    d2 = int(s[8:12], 16)
    d3 = int(s[12:16], 16)
    rest = bytes.fromhex(s[16:32])
    return struct.pack("<IHH", d1, d2, d3) + rest


# ---------------------------------------------------------------------------
# FILETIME
# ---------------------------------------------------------------------------
def local_utc_offset() -> timedelta:
    """Return the current offset of local time from UTC."""
    return datetime.now().astimezone().utcoffset() or timedelta(0)


def filetime_to_datetime(ticks: int, utc_offset: timedelta | None = None) -> datetime:
    """Convert FILETIME *ticks* into a naive local-time datetime.

    Ticks are 100ns intervals since 1601-01-01 UTC.  They are truncated to
    milliseconds and shifted by *utc_offset* (default: the current local
    offset), so the result reads as local wall-clock time.  Subtract the
    same offset to get back to UTC.  Values outside the range of
    :class:`datetime` are clamped to ``datetime.min`` / ``datetime.max``.
    """
    if utc_offset is None:
        utc_offset = local_utc_offset()
    ms = ticks // 10000 - FILETIME_EPOCH_OFFSET_MS
    try:
        return _UNIX_EPOCH + timedelta(milliseconds=ms) + utc_offset
    except OverflowError:
        return datetime.max if ms > 0 else datetime.min


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------
def read_cstring(data: bytes, off: int) -> tuple[str, int]:
    """Read a null-terminated narrow string at *off*.

    Returns ``(text, consumed)`` where *consumed* includes the terminator.
    """
    if off < 0 or off > len(data):
        raise MissingFieldError(f"String offset {off} outside buffer")
    end = data.find(b"\x00", off)
    if end < 0:
        raise MissingFieldError(f"Unterminated string at offset {off}")
    return data[off:end].decode(NARROW_CODEPAGE), end - off + 1


def read_cunicode(data: bytes, off: int) -> tuple[str, int]:
    """Read a null-terminated UTF-16LE string at *off*.

    Returns ``(text, consumed)`` where *consumed* includes the 2-byte
    terminator.  Lone surrogates are passed through.
    """
    if off < 0 or off > len(data):
        raise MissingFieldError(f"String offset {off} outside buffer")
    pos = off
    end = len(data) - 1
    while pos < end:
        if data[pos] == 0 and data[pos + 1] == 0:
            text = data[off:pos].decode("utf-16-le", errors="surrogatepass")
            return text, pos - off + 2
        pos += 2
    raise MissingFieldError(f"Unterminated UTF-16 string at offset {off}")


def read_string(data: bytes, off: int, length: int) -> str:
    """Read exactly *length* bytes at *off* as narrow characters."""
    if off < 0 or length < 0 or off + length > len(data):
        raise MissingFieldError(f"Need {length} bytes at offset {off}")
    return data[off : off + length].decode(NARROW_CODEPAGE)


def names_for_bits(val: int, names: dict[int, str]) -> list[str]:
    """Return the names of the bits set in *val*, lowest bit first."""
    bits = []
    for bit in range(32):
        if val & (1 << bit):
            bits.append(names.get(bit, f"Bit{bit}"))
    return bits
