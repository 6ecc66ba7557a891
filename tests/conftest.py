"""Shared fixtures for lnkview tests.

Link files are assembled byte by byte with :mod:`struct` so each test
controls exactly which sections exist and how they are laid out.
"""

import struct

import pytest

from lnkview._constants import LINK_CLSID

# FILETIME ticks for a few fixed instants
FT_UNIX_EPOCH = 116444736000000000
FT_2020_01_01 = 132223104000000000

CLSID_MY_COMPUTER = b"\xe0\x4f\xd0\x20\xea\x3a\x69\x10\xa2\xd8\x08\x00\x2b\x30\x30\x9d"


def guid_bytes(guid_str: str) -> bytes:
    """Pack a GUID string into 16 bytes in Windows mixed-endian layout."""
    s = guid_str.strip("{}").replace("-", "")
    d1 = int(s[0:8], 16)
    d2 = int(s[8:12], 16)
    d3 = int(s[12:16], 16)
    return struct.pack("<IHH", d1, d2, d3) + bytes.fromhex(s[16:32])


def header_bytes(
    flags: int = 0,
    *,
    header_size: int = 0x4C,
    clsid: bytes = LINK_CLSID,
    attributes: int = 0x20,
    creation_time: int = FT_UNIX_EPOCH,
    access_time: int = 0,
    write_time: int = FT_2020_01_01,
    file_size: int = 0,
    icon_index: int = 0,
    show_command: int = 1,
    hotkey: int = 0,
) -> bytes:
    return (
        struct.pack(
            "<I16sIIQQQIiIH",
            header_size,
            clsid,
            flags,
            attributes,
            creation_time,
            access_time,
            write_time,
            file_size,
            icon_index,
            show_command,
            hotkey,
        )
        + b"\x00" * 10
    )


def id_list_bytes(payloads: list[bytes]) -> bytes:
    """IDListSize + ItemIDs + zero terminator."""
    body = b"".join(struct.pack("<H", len(p) + 2) + p for p in payloads)
    body += b"\x00\x00"
    return struct.pack("<H", len(body)) + body


def link_info_bytes(flags: int = 0x01, tail: bytes = b"\x00" * 8) -> bytes:
    size = 28 + len(tail)
    return struct.pack("<IIIIIII", size, 0x1C, flags, 28, 28 + 4, 0, 28 + 6) + tail


def string_bytes(value: str, unicode: bool) -> bytes:
    if unicode:
        return struct.pack("<H", len(value)) + value.encode("utf-16-le")
    raw = value.encode("cp1252")
    return struct.pack("<H", len(raw)) + raw


def extra_block_bytes(signature: int, payload: bytes) -> bytes:
    return struct.pack("<II", len(payload) + 8, signature) + payload


TERMINATOR = b"\x00\x00\x00\x00"


def build_lnk(
    flags: int = 0,
    *,
    id_items: list[bytes] | None = None,
    link_info: bytes | None = None,
    strings: list[str] = (),
    blocks: list[bytes] = (),
    terminator: bool = True,
    **header_kw,
) -> bytes:
    """Assemble a .lnk from parts; sections are emitted only when given."""
    out = header_bytes(flags, **header_kw)
    if id_items is not None:
        out += id_list_bytes(id_items)
    if link_info is not None:
        out += link_info
    unicode = bool(flags & 0x80)
    for s in strings:
        out += string_bytes(s, unicode)
    for block in blocks:
        out += block
    if terminator:
        out += TERMINATOR
    return out


@pytest.fixture
def build():
    """The :func:`build_lnk` assembler."""
    return build_lnk


@pytest.fixture
def minimal_lnk_bytes():
    """Header plus an empty ExtraData chain."""
    return build_lnk()


@pytest.fixture
def full_lnk_bytes():
    """IDList, LinkInfo, Unicode Name + Arguments, and a KnownFolder block."""
    return build_lnk(
        0x01 | 0x02 | 0x04 | 0x20 | 0x80,
        id_items=[
            b"\x1f\x50" + CLSID_MY_COMPUTER,
            b"\x2fC:\\" + b"\x00" * 19,
        ],
        link_info=link_info_bytes(),
        strings=["Notepad", "--flag value"],
        blocks=[
            extra_block_bytes(
                0xA000000B,
                guid_bytes("{B4BFCC3A-DB2C-424C-B029-7FE99A87C641}")
                + struct.pack("<I", 0x14),
            )
        ],
        file_size=201216,
        icon_index=-3,
        hotkey=0x0643,
    )


@pytest.fixture
def tracker_payload():
    """An 88-byte TrackerDataBlock body."""
    return (
        struct.pack("<II", 0x58, 0)
        + b"WORKSTATION01".ljust(16, b"\x00")
        + guid_bytes("{12345678-1234-1234-1234-123456789ABC}")
        + guid_bytes("{AABBCCDD-AABB-CCDD-EEFF-001122334455}")
        + guid_bytes("{11111111-2222-3333-4444-555566667777}")
        + guid_bytes("{DEADBEEF-CAFE-BABE-F00D-ABCDEF012345}")
    )
