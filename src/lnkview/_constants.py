"""MS-SHLLINK constants and lookup tables shared by the decoder and report."""

from types import MappingProxyType

# ---------------------------------------------------------------------------
# ANSI code page
# ---------------------------------------------------------------------------
# Non-Unicode StringData is stored in the creating system's default code page
# (GetACP()).  CP-1252 covers Western/English Windows and is a superset of
# ASCII; callers decoding East Asian links can pass cp932/cp936/cp949/cp950.
ANSI_CODEPAGE = "cp1252"

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
HEADER_SIZE = 0x4C
LNK_MAGIC = b"\x4c\x00\x00\x00"

LINK_CLSID = b"\x01\x14\x02\x00\x00\x00\x00\x00\xc0\x00\x00\x00\x00\x00\x00\x46"
LINK_CLSID_STR = "00021401-0000-0000-C000-000000000046"

# 100-ns ticks between 1601-01-01 and 1970-01-01
FILETIME_EPOCH_DIFF = 116444736000000000
TICKS_PER_MS = 10000

# ---------------------------------------------------------------------------
# LinkFlags bits (MS-SHLLINK 2.1.1)
# ---------------------------------------------------------------------------
HAS_ID_LIST = 0x00000001
HAS_LINK_INFO = 0x00000002
HAS_NAME = 0x00000004
HAS_RELATIVE_PATH = 0x00000008
HAS_WORKING_DIR = 0x00000010
HAS_ARGUMENTS = 0x00000020
HAS_ICON_LOCATION = 0x00000040
IS_UNICODE = 0x00000080
FORCE_NO_LINK_INFO = 0x00000100
HAS_EXP_STRING = 0x00000200
RUN_IN_SEPARATE_PROCESS = 0x00000400
RESERVED_FLAGS_MASK = 0x0000F800
RESERVED_FLAGS_SHIFT = 11

FLAG_NAMES = MappingProxyType(
    {
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
)

# StringData fields in on-disk order, with the flag that gates each one
STRING_FIELDS = (
    ("Name", HAS_NAME),
    ("RelativePath", HAS_RELATIVE_PATH),
    ("WorkingDir", HAS_WORKING_DIR),
    ("Arguments", HAS_ARGUMENTS),
    ("IconLocation", HAS_ICON_LOCATION),
)

STRING_DESCRIPTIONS = MappingProxyType(
    {
        "Name": "Link name",
        "RelativePath": "Relative path to target",
        "WorkingDir": "Working directory",
        "Arguments": "Command-line arguments",
        "IconLocation": "Icon file path",
    }
)

# ---------------------------------------------------------------------------
# FileAttributes bits
# ---------------------------------------------------------------------------
FILE_ATTRIBUTE_NAMES = MappingProxyType(
    {
        0: ("ReadOnly", "FILE_ATTRIBUTE_READONLY"),
        1: ("Hidden", "FILE_ATTRIBUTE_HIDDEN"),
        2: ("System", "FILE_ATTRIBUTE_SYSTEM"),
        3: ("VolumeLabel", "FILE_ATTRIBUTE_VOLUME_LABEL"),
        4: ("Directory", "FILE_ATTRIBUTE_DIRECTORY"),
        5: ("Archive", "FILE_ATTRIBUTE_ARCHIVE"),
        6: ("Device", "FILE_ATTRIBUTE_DEVICE"),
        7: ("Normal", "FILE_ATTRIBUTE_NORMAL"),
        8: ("Temporary", "FILE_ATTRIBUTE_TEMPORARY"),
        9: ("SparseFile", "FILE_ATTRIBUTE_SPARSE_FILE"),
        10: ("ReparsePoint", "FILE_ATTRIBUTE_REPARSE_POINT"),
        11: ("Compressed", "FILE_ATTRIBUTE_COMPRESSED"),
        12: ("Offline", "FILE_ATTRIBUTE_OFFLINE"),
        13: ("NotIndexed", "FILE_ATTRIBUTE_NOT_CONTENT_INDEXED"),
        14: ("Encrypted", "FILE_ATTRIBUTE_ENCRYPTED"),
    }
)

# ---------------------------------------------------------------------------
# ShowWindow commands
# ---------------------------------------------------------------------------
SW_SHOWNORMAL = 1
SW_SHOWMAXIMIZED = 3
SW_SHOWMINNOACTIVE = 7

SHOW_CMD = MappingProxyType(
    {
        SW_SHOWNORMAL: "SW_SHOWNORMAL",
        SW_SHOWMAXIMIZED: "SW_SHOWMAXIMIZED",
        SW_SHOWMINNOACTIVE: "SW_SHOWMINNOACTIVE",
    }
)

# ---------------------------------------------------------------------------
# Hotkey modifier masks and virtual key names
# ---------------------------------------------------------------------------
HOTKEY_MOD = MappingProxyType({0x01: "SHIFT", 0x02: "CTRL", 0x04: "ALT"})

VK_KEYS = MappingProxyType(
    {
        **{k: chr(k) for k in range(0x30, 0x3A)},  # 0-9
        **{k: chr(k) for k in range(0x41, 0x5B)},  # A-Z
        **{k: f"F{k - 0x6F}" for k in range(0x70, 0x88)},  # F1-F24
        **{k: f"NUMPAD{k - 0x60}" for k in range(0x60, 0x6A)},  # Numpad 0-9
        0x08: "BACKSPACE",
        0x09: "TAB",
        0x0D: "ENTER",
        0x1B: "ESC",
        0x20: "SPACE",
        0x21: "PAGEUP",
        0x22: "PAGEDOWN",
        0x23: "END",
        0x24: "HOME",
        0x25: "LEFT",
        0x26: "UP",
        0x27: "RIGHT",
        0x28: "DOWN",
        0x2D: "INSERT",
        0x2E: "DELETE",
        0x6A: "MULTIPLY",
        0x6B: "ADD",
        0x6D: "SUBTRACT",
        0x6E: "DECIMAL",
        0x6F: "DIVIDE",
        0x90: "NUMLOCK",
        0x91: "SCROLL",
    }
)

# ---------------------------------------------------------------------------
# LinkTargetIDList item classes (type byte & 0x70)
# ---------------------------------------------------------------------------
ITEM_CLASSES = MappingProxyType(
    {
        0x10: "Root",
        0x20: "Volume",
        0x30: "FileEntry",
        0x40: "Network",
        0x50: "CompressedFolder",
        0x60: "URI",
        0x70: "ControlPanel",
    }
)

# ---------------------------------------------------------------------------
# LinkInfo
# ---------------------------------------------------------------------------
LINK_INFO_FIXED_SIZE = 28  # size, header size, flags, four offsets
VOLUME_ID_AND_LOCAL_BASE_PATH = 0x01
COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX = 0x02

# ---------------------------------------------------------------------------
# ExtraData block signatures (MS-SHLLINK 2.5)
# ---------------------------------------------------------------------------
EXTRA_BLOCK_HEADER_SIZE = 8

ENVIRONMENT_VARIABLE_BLOCK = 0xA0000001
CONSOLE_BLOCK = 0xA0000002
TRACKER_BLOCK = 0xA0000003
CONSOLE_FE_BLOCK = 0xA0000004
SPECIAL_FOLDER_BLOCK = 0xA0000005
DARWIN_BLOCK = 0xA0000006
ICON_ENVIRONMENT_BLOCK = 0xA0000007
SHIM_BLOCK = 0xA0000008
PROPERTY_STORE_BLOCK = 0xA0000009
KNOWN_FOLDER_BLOCK = 0xA000000B
VISTA_IDLIST_BLOCK = 0xA000000C

EXTRA_SIGS = MappingProxyType(
    {
        ENVIRONMENT_VARIABLE_BLOCK: "Environment Variables Data Block",
        CONSOLE_BLOCK: "Console Data Block",
        TRACKER_BLOCK: "Tracker Data Block",
        CONSOLE_FE_BLOCK: "Console FE Data Block",
        SPECIAL_FOLDER_BLOCK: "Special Folder Data Block",
        DARWIN_BLOCK: "Darwin Data Block",
        ICON_ENVIRONMENT_BLOCK: "Icon Environment Data Block",
        SHIM_BLOCK: "Shim Data Block",
        PROPERTY_STORE_BLOCK: "Metadata Properties Block",
        KNOWN_FOLDER_BLOCK: "Known Folder Data Block",
        VISTA_IDLIST_BLOCK: "Vista And Above IDList Data Block",
    }
)

UNKNOWN_BLOCK = "Unknown block type"

# ---------------------------------------------------------------------------
# Known Folder GUIDs (Windows 10/11)
# ---------------------------------------------------------------------------
KNOWN_FOLDER_NAMES = MappingProxyType(
    {
        "B4BFCC3A-DB2C-424C-B029-7FE99A87C641": "Desktop",
        "FDD39AD0-238F-46AF-ADB4-6C85480369C7": "Documents",
        "374DE290-123F-4565-9164-39C4925E467B": "Downloads",
        "4BD8D571-6D19-48D3-BE97-422220080E43": "Music",
        "33E28130-4E1E-4676-835A-98395C3BC3BB": "Pictures",
        "18989B1D-99B5-455B-841C-AB7C74E4DDFC": "Videos",
        "3EB685DB-65F9-4CF6-A03A-E3EF65729F3D": "AppData",
        "F1B32785-6FBA-4FCF-9D55-7B8E7F157091": "LocalAppData",
        "905E63B6-C1BF-494E-B29C-65B732D3D21A": "ProgramFiles",
        "7C5A40EF-A0FB-4BFC-874A-C0F2E0B9FA8E": "ProgramFilesX86",
        "1AC14E77-02E7-4E5D-B744-2EB1AE5198B7": "System",
        "F38BF404-1D43-42F2-9305-67DE0B28FC23": "Windows",
        "B97D20BB-F46A-4C97-BA10-5E3608430854": "Startup",
        "A63293E8-664E-48DB-A079-DF759E0509F7": "Templates",
        "5E6C858F-0E22-4760-9AFE-EA3317B67173": "Profile",
        "DFDF76A2-C82A-4D63-906A-5644AC457385": "Public",
        "AE50C081-EBD2-438A-8655-8A092E34987A": "Recent",
        "62AB5D82-FDC1-4DC3-A9DD-070D1D495D97": "ProgramData",
    }
)
