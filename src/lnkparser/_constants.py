"""MS-SHLLINK constants and lookup tables shared by the decoders."""

# ---------------------------------------------------------------------------
# Narrow code page
# ---------------------------------------------------------------------------
# Narrow strings inside ID list items are read one byte per character, so
# every byte maps to the code point of the same value.
NARROW_CODEPAGE = "latin-1"

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
HEADER_SIZE = 0x4C

# {00021401-0000-0000-C000-000000000046} in wire layout
LINK_CLSID = b"\x01\x14\x02\x00\x00\x00\x00\x00\xc0\x00\x00\x00\x00\x00\x00\x46"

FILETIME_EPOCH_OFFSET_MS = 11644473600000  # 1601-01-01 -> 1970-01-01

# ---------------------------------------------------------------------------
# ShowWindow commands (MS-SHLLINK 2.1.1)
# ---------------------------------------------------------------------------
SW_SHOWNORMAL = 1
SW_SHOWMAXIMIZED = 3
SW_SHOWMINNOACTIVE = 7

# ---------------------------------------------------------------------------
# LinkTargetIDList item types
# ---------------------------------------------------------------------------
ITEM_ROOT = 0x1F
ITEM_DRIVE = 0x2F
ITEM_DIRECTORY = 0x31
ITEM_FILE = 0x32
ITEM_DIRECTORY_UNICODE = 0x35
ITEM_FILE_UNICODE = 0x36
ITEM_USER_DIRECTORY = 0x74

ITEM_TYPE_NAMES = {
    ITEM_ROOT: "RootEntry",
    ITEM_DRIVE: "DriveLetter",
    ITEM_DIRECTORY: "Directory",
    ITEM_FILE: "File",
    ITEM_DIRECTORY_UNICODE: "DirectoryUnicode",
    ITEM_FILE_UNICODE: "FileUnicode",
    ITEM_USER_DIRECTORY: "UserDirectory",
}

# Offset of the short name inside a file/directory item payload
# (after: unknown byte, file size, DOS date, DOS time, attributes).
ITEM_NAME_OFFSET = 11

# UserDirectory (0x74) delegate item
USER_DIR_SIG_OFFSET = 3
USER_DIR_NAME_OFFSET = 21
USER_DIR_SIG_ZIP = "CF\0\0"
USER_DIR_SIG_FOLDER = "CFSF"

# Well-known root folders, keyed by lowercase registry string
ROOT_LABELS = {
    "{20d04fe0-3aea-1069-a2d8-08002b30309d}": "MY_COMPUTER",
}

# ---------------------------------------------------------------------------
# LinkFlags bit names
# ---------------------------------------------------------------------------
FLAG_NAMES = {
    0: "HasLinkTargetIDList",
    1: "HasLinkInfo",
    2: "HasName",
    3: "HasRelativePath",
    4: "HasWorkingDir",
    5: "HasArguments",
    6: "HasIconLocation",
    7: "IsUnicode",
    8: "ForceNoLinkInfo",
    9: "HasExpString",
    10: "RunInSeparateProcess",
    11: "Unused1",
    12: "HasDarwinID",
    13: "RunAsUser",
    14: "HasExpIcon",
    15: "NoPidlAlias",
    16: "Unused2",
    17: "RunWithShimLayer",
    18: "ForceNoLinkTrack",
    19: "EnableTargetMetadata",
    20: "DisableLinkPathTracking",
    21: "DisableKnownFolderTracking",
    22: "DisableKnownFolderAlias",
    23: "AllowLinkToLink",
    24: "UnaliasOnSave",
    25: "PreferEnvironmentPath",
    26: "KeepLocalIDListForUNCTarget",
}

# ---------------------------------------------------------------------------
# FileAttributesFlags bit names (MS-SHLLINK 2.1.2)
# ---------------------------------------------------------------------------
ATTRIBUTE_NAMES = {
    0: "ReadOnly",
    1: "Hidden",
    2: "System",
    3: "Reserved1",
    4: "Directory",
    5: "Archive",
    6: "Reserved2",
    7: "Normal",
    8: "Temporary",
    9: "SparseFile",
    10: "ReparsePoint",
    11: "Compressed",
    12: "Offline",
    13: "NotContentIndexed",
    14: "Encrypted",
}

# ---------------------------------------------------------------------------
# Hotkey modifier masks and virtual key names
# ---------------------------------------------------------------------------
HOTKEY_MOD = {0x01: "SHIFT", 0x02: "CTRL", 0x04: "ALT"}

VK_KEYS = {
    **{k: chr(k) for k in range(0x30, 0x3A)},  # 0-9
    **{k: chr(k) for k in range(0x41, 0x5B)},  # A-Z
    **{k: f"F{k - 0x6F}" for k in range(0x70, 0x88)},  # F1-F24
    0x90: "NUMLOCK",
    0x91: "SCROLL",
}
