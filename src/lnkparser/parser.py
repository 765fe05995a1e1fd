"""Parse Windows .lnk files (MS-SHLLINK) into structured data."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from pathlib import Path

from ._constants import (
    ATTRIBUTE_NAMES,
    FLAG_NAMES,
    HEADER_SIZE,
    HOTKEY_MOD,
    LINK_CLSID,
    SW_SHOWMAXIMIZED,
    SW_SHOWMINNOACTIVE,
    SW_SHOWNORMAL,
    VK_KEYS,
)
from ._util import (
    Guid,
    decode_guid,
    filetime_to_datetime,
    names_for_bits,
    read_i32,
    read_i64,
    read_u32,
)
from .exceptions import MissingFieldError
from .idlist import TargetIDList, parse_idlist

logger = logging.getLogger(__name__)

_VALID_CLSID = decode_guid(LINK_CLSID)


class ShowCommand(IntEnum):
    """Window state used when the target is launched."""

    NORMAL = SW_SHOWNORMAL
    MAXIMIZED = SW_SHOWMAXIMIZED
    MIN_NO_ACTIVE = SW_SHOWMINNOACTIVE


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class HotKey:
    """Keyboard shortcut: a virtual-key code plus a modifier mask."""

    key: int = 0
    modifiers: int = 0

    def __str__(self) -> str:
        parts = [n for b, n in HOTKEY_MOD.items() if self.modifiers & b]
        if self.key:
            parts.append(VK_KEYS.get(self.key, f"0x{self.key:02X}"))
        return "+".join(parts)


@dataclass(slots=True)
class Icon:
    """Icon location and index.  The header only provides the index."""

    location: str = ""
    index: int = 0


@dataclass(slots=True)
class LnkFile:
    """Structured representation of a parsed .lnk file."""

    header_size: int = HEADER_SIZE
    link_clsid: Guid = _VALID_CLSID
    link_flags: int = 0
    link_flag_names: list[str] = field(default_factory=list)
    file_attributes: int = 0
    file_attribute_names: list[str] = field(default_factory=list)
    creation_time: datetime | None = None
    access_time: datetime | None = None
    write_time: datetime | None = None
    file_size: int = 0
    icon: Icon = field(default_factory=Icon)
    show_command: ShowCommand = ShowCommand.NORMAL
    hotkey: HotKey = field(default_factory=HotKey)
    target: TargetIDList | str = ""
    valid: bool = True

    @property
    def target_path(self) -> str:
        if isinstance(self.target, TargetIDList):
            return self.target.path
        return self.target


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
def parse_header(data: bytes) -> LnkFile:
    """Parse the 76-byte ShellLinkHeader and the LinkTargetIDList after it.

    The fixed layout is used whatever the declared header size says; a
    wrong size or CLSID only clears :attr:`LnkFile.valid`.
    """
    if len(data) < HEADER_SIZE:
        raise MissingFieldError(
            f"Data too short for an MS-SHLLINK header (need >= {HEADER_SIZE} bytes, got {len(data)})"
        )

    info = LnkFile()
    pos = 0

    info.header_size = read_i32(data, pos)
    pos += 4
    info.link_clsid = decode_guid(data, pos)
    pos += 16
    info.link_flags = read_u32(data, pos)
    info.link_flag_names = names_for_bits(info.link_flags, FLAG_NAMES)
    pos += 4
    info.file_attributes = read_u32(data, pos)
    info.file_attribute_names = names_for_bits(info.file_attributes, ATTRIBUTE_NAMES)
    pos += 4

    info.creation_time = filetime_to_datetime(read_i64(data, pos))
    pos += 8
    info.access_time = filetime_to_datetime(read_i64(data, pos))
    pos += 8
    info.write_time = filetime_to_datetime(read_i64(data, pos))
    pos += 8

    info.file_size = read_u32(data, pos)
    pos += 4
    info.icon = Icon(index=read_i32(data, pos))
    pos += 4

    show = read_u32(data, pos)
    pos += 4
    try:
        info.show_command = ShowCommand(show)
    except ValueError:
        logger.debug("Unknown show command %d, using SW_SHOWNORMAL", show)
        info.show_command = ShowCommand.NORMAL

    info.hotkey = HotKey(key=data[pos], modifiers=data[pos + 1])
    pos += 2
    # Reserved1 (2), Reserved2 (4), Reserved3 (4)
    pos += 10

    info.valid = info.header_size == HEADER_SIZE and info.link_clsid == _VALID_CLSID
    if not info.valid:
        logger.debug(
            "Invalid header: size=0x%X clsid=%s", info.header_size, info.link_clsid
        )

    if pos < len(data):
        info.target = parse_idlist(data, pos)

    return info


# ---------------------------------------------------------------------------
# Main parser
# ---------------------------------------------------------------------------
def parse_lnk(source: str | Path | bytes) -> LnkFile:
    """Parse a .lnk file and return a :class:`LnkFile`.

    Args:
        source: A file path (str or Path) or raw bytes of a .lnk file.
    """
    data = Path(source).read_bytes() if isinstance(source, (str, Path)) else bytes(source)
    return parse_header(data)


# ---------------------------------------------------------------------------
# Human-readable formatter
# ---------------------------------------------------------------------------
def format_lnk(info: LnkFile) -> str:
    """Return a human-readable string representation of *info*."""
    lines: list[str] = []

    lines.append("--- HEADER ---")
    lines.append(f"  HeaderSize:      0x{info.header_size:08X}")
    lines.append(f"  LinkCLSID:       {info.link_clsid}")
    lines.append(f"  Valid:           {info.valid}")
    lines.append(f"  LinkFlags:       0x{info.link_flags:08X}")
    for name in info.link_flag_names:
        lines.append(f"    - {name}")
    lines.append(f"  FileAttributes:  0x{info.file_attributes:08X}")
    for name in info.file_attribute_names:
        lines.append(f"    - {name}")
    lines.append(f"  CreationTime:    {info.creation_time}")
    lines.append(f"  AccessTime:      {info.access_time}")
    lines.append(f"  WriteTime:       {info.write_time}")
    lines.append(f"  FileSize:        {info.file_size} (0x{info.file_size:08X})")
    lines.append(f"  IconIndex:       {info.icon.index}")
    lines.append(
        f"  ShowCommand:     {int(info.show_command)} ({info.show_command.name})"
    )
    hk = info.hotkey
    lines.append(
        f"  HotKey:          {str(hk) or 'None'} (vk=0x{hk.key:02X} mod=0x{hk.modifiers:02X})"
    )

    if isinstance(info.target, TargetIDList) and info.target.items:
        lines.append("")
        lines.append("--- LINK TARGET ID LIST ---")
        for i, item in enumerate(info.target.items):
            lines.append(
                f"  Item[{i}]: @0x{item.offset:04X} size={item.size}  "
                f"type=0x{item.item_type:02X} ({item.type_name})"
            )

    lines.append("")
    lines.append("--- RESOLVED ---")
    lines.append(f"  TargetPath:      {info.target_path or '(empty)'}")

    return "\n".join(lines)
