"""Shared fixtures and byte builders for lnkparser tests."""

import struct

import pytest

from lnkparser._constants import LINK_CLSID

MY_COMPUTER = b"\xe0\x4f\xd0\x20\xea\x3a\x69\x10\xa2\xd8\x08\x00\x2b\x30\x30\x9d"


def make_header(
    *,
    size=0x4C,
    clsid=LINK_CLSID,
    flags=0,
    attributes=0,
    creation=0,
    access=0,
    write=0,
    file_size=0,
    icon_index=0,
    show_command=1,
    hotkey_vk=0,
    hotkey_mod=0,
):
    """Pack a 76-byte ShellLinkHeader."""
    return (
        struct.pack("<I", size)
        + clsid
        + struct.pack("<II", flags, attributes)
        + struct.pack("<qqq", creation, access, write)
        + struct.pack("<IiI", file_size, icon_index, show_command)
        + bytes([hotkey_vk, hotkey_mod])
        + b"\x00" * 10
    )


def make_item(item_type, payload):
    """Pack one SHITEMID: u16 size, type byte, payload."""
    return struct.pack("<H", len(payload) + 3) + bytes([item_type]) + payload


def make_idlist(*items):
    """Pack a LinkTargetIDList from packed items plus the terminator."""
    body = b"".join(items) + b"\x00\x00"
    return struct.pack("<H", len(body)) + body


def root_item(clsid=MY_COMPUTER, sort_index=0x50):
    return make_item(0x1F, bytes([sort_index]) + clsid)


def drive_item(drive=b"C:\\"):
    return make_item(0x2F, drive + b"\x00" * 19)


def fs_item(item_type, name, *, unicode=False):
    """A file/directory item: 11 metadata bytes then the name."""
    raw = name.encode("utf-16-le") + b"\x00\x00" if unicode else name.encode("latin-1") + b"\x00"
    return make_item(item_type, b"\x00" * 11 + raw)


def user_dir_item(signature=b"CFSF", name="Desktop"):
    payload = b"\x00" * 3 + signature + b"\x00" * 14 + name.encode("latin-1") + b"\x00"
    return make_item(0x74, payload)


@pytest.fixture
def minimal_lnk_bytes():
    """A valid header followed by an empty ID list."""
    return make_header() + make_idlist()


@pytest.fixture
def notepad_lnk_bytes():
    r"""A .lnk whose ID list resolves to C:\Windows\notepad.exe."""
    return make_header(
        flags=0x01,
        attributes=0x20,
        creation=132223104000000000,
        access=132223104000000000,
        write=132223104000000000,
        file_size=201216,
        icon_index=2,
        show_command=3,
        hotkey_vk=0x43,
        hotkey_mod=0x02,
    ) + make_idlist(
        drive_item(),
        fs_item(0x31, "Windows"),
        fs_item(0x32, "notepad.exe"),
    )
