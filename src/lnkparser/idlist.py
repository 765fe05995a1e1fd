"""Parse a LinkTargetIDList and rebuild a display path from its items."""

import logging
from dataclasses import dataclass

from ._constants import (
    ITEM_DIRECTORY,
    ITEM_DIRECTORY_UNICODE,
    ITEM_DRIVE,
    ITEM_FILE,
    ITEM_FILE_UNICODE,
    ITEM_NAME_OFFSET,
    ITEM_ROOT,
    ITEM_TYPE_NAMES,
    ITEM_USER_DIRECTORY,
    ROOT_LABELS,
    USER_DIR_NAME_OFFSET,
    USER_DIR_SIG_FOLDER,
    USER_DIR_SIG_OFFSET,
    USER_DIR_SIG_ZIP,
)
from ._util import decode_guid, format_guid, read_cstring, read_cunicode, read_string, read_u16
from .exceptions import InvalidSignatureError, MissingFieldError, UnsupportedItemError

logger = logging.getLogger(__name__)

# size field (2) + type byte (1)
_ITEM_HEADER_SIZE = 3


@dataclass(frozen=True, slots=True)
class TargetIDItem:
    """One SHITEMID entry: its type byte and the bytes that follow it."""

    item_type: int
    value: bytes
    offset: int = 0
    size: int = 0

    @property
    def type_name(self) -> str:
        return ITEM_TYPE_NAMES.get(self.item_type, f"0x{self.item_type:02X}")


@dataclass(frozen=True, slots=True)
class TargetIDList:
    """A parsed LinkTargetIDList.

    ``path`` is computed once when the list is parsed; ``items`` is a tuple
    and never changes afterwards.
    """

    size: int
    items: tuple[TargetIDItem, ...] = ()
    path: str = ""
    valid: bool = True

    def get_path(self) -> str:
        return self.path


# ---------------------------------------------------------------------------
# Path reconstruction
# ---------------------------------------------------------------------------
def _root_label(value):
    # Root items normally carry a sort-index byte before the CLSID.
    guid_off = 1 if len(value) > 16 else 0
    guid_str = format_guid(decode_guid(value, guid_off))
    label = ROOT_LABELS.get(guid_str)
    if label is None:
        logger.debug("Unknown root CLSID %s, skipped", guid_str)
        return ""
    return label


def _user_directory(value):
    signature = read_string(value, USER_DIR_SIG_OFFSET, 4)
    if signature == USER_DIR_SIG_ZIP:
        raise UnsupportedItemError("ZIP contents items are not supported")
    if signature == USER_DIR_SIG_FOLDER:
        name, _ = read_cstring(value, USER_DIR_NAME_OFFSET)
        return f"%USERPROFILE%\\{name}\\"
    raise InvalidSignatureError(f"Invalid user directory signature {signature!r}")


def item_path(item: TargetIDItem) -> str:
    """Return the path fragment contributed by a single *item*.

    Type checks run in order and the first match wins, so a plain
    Directory item (0x31) always takes the short-name branch.
    """
    value = item.value
    item_type = item.item_type

    if item_type == ITEM_ROOT:
        return _root_label(value)

    elif item_type == ITEM_DRIVE:
        return read_string(value, 0, 3)

    elif item_type == ITEM_DIRECTORY:
        # Skip file size, DOS timestamps and attributes
        name, _ = read_cstring(value, ITEM_NAME_OFFSET)
        return f"{name}\\"

    elif item_type == ITEM_USER_DIRECTORY:
        return _user_directory(value)

    elif item_type in (ITEM_FILE, ITEM_DIRECTORY, ITEM_FILE_UNICODE, ITEM_DIRECTORY_UNICODE):
        is_unicode = item_type in (ITEM_FILE_UNICODE, ITEM_DIRECTORY_UNICODE)
        is_dir = item_type in (ITEM_DIRECTORY, ITEM_DIRECTORY_UNICODE)
        name, _ = (read_cunicode if is_unicode else read_cstring)(value, ITEM_NAME_OFFSET)
        return name + "\\" if is_dir else name

    logger.debug("Skipping item of unknown type 0x%02X", item_type)
    return ""


def resolve_path(items) -> str:
    """Concatenate the path fragments of *items* in order."""
    return "".join(item_path(item) for item in items)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
def parse_idlist(data: bytes, off: int = 0) -> TargetIDList:
    """Parse a LinkTargetIDList starting at *off* in *data*.

    The list is a u16 size followed by items (u16 size including itself,
    type byte, payload) and a u16 zero terminator counted in the size.
    Every item must fit within the declared size; a truncated or
    zero-sized item raises :class:`MissingFieldError`.
    """
    size = read_u16(data, off)
    end = off + 2 + size
    if end > len(data):
        raise MissingFieldError(
            f"ID list declares {size} bytes but only {len(data) - off - 2} remain"
        )

    items = []
    pos = off + 2
    remaining = size
    while remaining > 2:
        item_size = read_u16(data, pos)
        if item_size < _ITEM_HEADER_SIZE:
            raise MissingFieldError(f"ID list item at offset {pos} has size {item_size}")
        if item_size > remaining:
            raise MissingFieldError(
                f"ID list item at offset {pos} overruns the list ({item_size} > {remaining})"
            )
        item = TargetIDItem(
            item_type=data[pos + 2],
            value=bytes(data[pos + 3 : pos + item_size]),
            offset=pos - off,
            size=item_size,
        )
        logger.debug("ID list item %s at %d, %d bytes", item.type_name, item.offset, item_size)
        items.append(item)
        remaining -= item_size
        pos += item_size

    items = tuple(items)
    return TargetIDList(size=size, items=items, path=resolve_path(items))
