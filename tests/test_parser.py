"""Tests for lnkparser.parser."""

from datetime import datetime, timedelta

import pytest
from conftest import drive_item, fs_item, make_header, make_idlist, user_dir_item

from lnkparser._constants import LINK_CLSID
from lnkparser.exceptions import FormatError, MissingFieldError, UnsupportedItemError
from lnkparser.idlist import TargetIDList
from lnkparser.parser import (
    HotKey,
    Icon,
    LnkFile,
    ShowCommand,
    format_lnk,
    parse_header,
    parse_lnk,
)


class TestParseBasic:
    """Parse a synthetic LNK and verify header fields are extracted."""

    def test_returns_lnk_file(self, minimal_lnk_bytes):
        assert isinstance(parse_lnk(minimal_lnk_bytes), LnkFile)

    def test_minimal_record(self, minimal_lnk_bytes):
        info = parse_lnk(minimal_lnk_bytes)
        assert info.valid
        assert info.header_size == 0x4C
        assert info.show_command is ShowCommand.NORMAL
        assert info.link_flags == 0
        assert info.link_flag_names == []
        assert info.file_size == 0
        assert info.icon == Icon(location="", index=0)
        assert info.hotkey == HotKey(0, 0)
        assert isinstance(info.target, TargetIDList)
        assert info.target.path == ""
        assert info.target_path == ""

    def test_header_fields(self, notepad_lnk_bytes):
        info = parse_lnk(notepad_lnk_bytes)
        assert info.link_flags == 0x01
        assert info.link_flag_names == ["HasLinkTargetIDList"]
        assert info.file_attributes == 0x20
        assert info.file_attribute_names == ["Archive"]
        assert info.file_size == 201216
        assert info.icon.index == 2
        assert info.icon.location == ""
        assert info.show_command is ShowCommand.MAXIMIZED

    def test_hotkey(self, notepad_lnk_bytes):
        info = parse_lnk(notepad_lnk_bytes)
        assert info.hotkey.key == 0x43
        assert info.hotkey.modifiers == 0x02
        assert str(info.hotkey) == "CTRL+C"

    def test_timestamps(self, notepad_lnk_bytes):
        info = parse_lnk(notepad_lnk_bytes)
        offset = datetime.now().astimezone().utcoffset()
        expected = datetime(2020, 1, 1) + offset
        assert info.creation_time == expected
        assert info.access_time == expected
        assert info.write_time == expected

    def test_target_path(self, notepad_lnk_bytes):
        info = parse_lnk(notepad_lnk_bytes)
        assert info.target_path == "C:\\Windows\\notepad.exe"
        assert len(info.target.items) == 3

    def test_negative_icon_index(self):
        info = parse_lnk(make_header(icon_index=-3) + make_idlist())
        assert info.icon.index == -3

    def test_path_input(self, tmp_path, notepad_lnk_bytes):
        p = tmp_path / "notepad.lnk"
        p.write_bytes(notepad_lnk_bytes)
        assert parse_lnk(p).target_path == "C:\\Windows\\notepad.exe"
        assert parse_lnk(str(p)).target_path == "C:\\Windows\\notepad.exe"

    def test_bytearray_input(self, notepad_lnk_bytes):
        info = parse_lnk(bytearray(notepad_lnk_bytes))
        assert info.target_path == "C:\\Windows\\notepad.exe"

    def test_header_only_has_string_target(self):
        info = parse_lnk(make_header())
        assert info.target == ""
        assert info.target_path == ""

    def test_user_directory_target(self):
        info = parse_lnk(make_header(flags=1) + make_idlist(user_dir_item(name="Desktop")))
        assert info.target_path == "%USERPROFILE%\\Desktop\\"


class TestShowCommand:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, ShowCommand.NORMAL),
            (3, ShowCommand.MAXIMIZED),
            (7, ShowCommand.MIN_NO_ACTIVE),
            (0, ShowCommand.NORMAL),
            (2, ShowCommand.NORMAL),
            (0xFFFFFFFF, ShowCommand.NORMAL),
        ],
    )
    def test_normalized(self, value, expected):
        info = parse_lnk(make_header(show_command=value) + make_idlist())
        assert info.show_command is expected


class TestValidity:
    def test_valid_header(self, minimal_lnk_bytes):
        assert parse_header(minimal_lnk_bytes).valid

    @pytest.mark.parametrize("index", range(20))
    def test_flipping_size_or_clsid_byte_invalidates(self, index):
        data = bytearray(make_header(file_size=1234, show_command=7) + make_idlist(drive_item()))
        data[index] ^= 0xFF
        info = parse_header(bytes(data))
        assert not info.valid
        # the fixed layout is still read
        assert info.file_size == 1234
        assert info.show_command is ShowCommand.MIN_NO_ACTIVE
        assert info.target_path == "C:\\"

    def test_wrong_header_size_recorded(self):
        info = parse_lnk(make_header(size=0x50) + make_idlist())
        assert info.header_size == 0x50
        assert not info.valid

    def test_wrong_clsid_recorded(self):
        clsid = b"\x00" * 16
        info = parse_lnk(make_header(clsid=clsid) + make_idlist())
        assert info.link_clsid.to_bytes() == clsid
        assert not info.valid

    def test_clsid_decoded(self, minimal_lnk_bytes):
        info = parse_lnk(minimal_lnk_bytes)
        assert info.link_clsid.to_bytes() == LINK_CLSID
        assert str(info.link_clsid) == "{00021401-0000-0000-c000-000000000046}"


class TestParseErrors:
    def test_too_short(self):
        with pytest.raises(MissingFieldError, match="too short"):
            parse_lnk(b"\x00" * 10)

    def test_truncated_idlist(self):
        data = make_header() + make_idlist(drive_item(), fs_item(0x32, "a.txt"))
        with pytest.raises(MissingFieldError):
            parse_lnk(data[:-5])

    def test_unsupported_item_propagates(self):
        data = make_header() + make_idlist(user_dir_item(signature=b"CF\x00\x00"))
        with pytest.raises(UnsupportedItemError):
            parse_lnk(data)

    def test_all_errors_are_format_errors(self):
        with pytest.raises(FormatError):
            parse_lnk(make_header() + b"\x01")


class TestIndependentParses:
    def test_repeated_parse_is_stable(self, notepad_lnk_bytes, minimal_lnk_bytes):
        first = parse_lnk(notepad_lnk_bytes)
        parse_lnk(minimal_lnk_bytes)
        again = parse_lnk(notepad_lnk_bytes)
        assert first == again


class TestFormatLnk:
    def test_format_returns_string(self, notepad_lnk_bytes):
        text = format_lnk(parse_lnk(notepad_lnk_bytes))
        assert "HEADER" in text
        assert "LINK TARGET ID LIST" in text
        assert "RESOLVED" in text

    def test_format_contains_target(self, notepad_lnk_bytes):
        text = format_lnk(parse_lnk(notepad_lnk_bytes))
        assert "C:\\Windows\\notepad.exe" in text
        assert "CTRL+C" in text
        assert "MAXIMIZED" in text

    def test_format_empty(self, minimal_lnk_bytes):
        text = format_lnk(parse_lnk(minimal_lnk_bytes))
        assert "(empty)" in text
        assert "LINK TARGET ID LIST" not in text


def test_utc_recovered_by_subtracting_offset(notepad_lnk_bytes):
    info = parse_lnk(notepad_lnk_bytes)
    offset = datetime.now().astimezone().utcoffset() or timedelta(0)
    assert info.creation_time - offset == datetime(2020, 1, 1)
