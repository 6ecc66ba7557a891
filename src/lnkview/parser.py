"""Decode Windows .lnk files (MS-SHLLINK) into immutable structured data.

Decoding is a single forward pass over the file:

    ShellLinkHeader -> LinkTargetIDList -> LinkInfo -> StringData -> ExtraData

The header's LinkFlags decide which of the three optional sections are
present; the ExtraData chain is always scanned.  A structural problem in an
optional section is recorded in :attr:`ShellLinkFile.errors` and decoding
moves on to the next section when the broken section's extent is known.
"""

import logging
import struct
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ._constants import (
    ANSI_CODEPAGE,
    COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX,
    DARWIN_BLOCK,
    ENVIRONMENT_VARIABLE_BLOCK,
    EXTRA_BLOCK_HEADER_SIZE,
    EXTRA_SIGS,
    FILE_ATTRIBUTE_NAMES,
    FLAG_NAMES,
    FORCE_NO_LINK_INFO,
    HAS_ARGUMENTS,
    HAS_EXP_STRING,
    HAS_ICON_LOCATION,
    HAS_ID_LIST,
    HAS_LINK_INFO,
    HAS_NAME,
    HAS_RELATIVE_PATH,
    HAS_WORKING_DIR,
    HEADER_SIZE,
    HOTKEY_MOD,
    ICON_ENVIRONMENT_BLOCK,
    IS_UNICODE,
    ITEM_CLASSES,
    KNOWN_FOLDER_BLOCK,
    KNOWN_FOLDER_NAMES,
    LINK_CLSID,
    LINK_CLSID_STR,
    LINK_INFO_FIXED_SIZE,
    LNK_MAGIC,
    RESERVED_FLAGS_MASK,
    RESERVED_FLAGS_SHIFT,
    RUN_IN_SEPARATE_PROCESS,
    SHOW_CMD,
    SPECIAL_FOLDER_BLOCK,
    STRING_FIELDS,
    SW_SHOWNORMAL,
    TRACKER_BLOCK,
    UNKNOWN_BLOCK,
    VK_KEYS,
    VOLUME_ID_AND_LOCAL_BASE_PATH,
)
from ._types import Source
from ._util import (
    decode_ansi_z,
    decode_counted_string,
    decode_utf16le_z,
    filetime_to_datetime,
    format_guid,
)
from .errors import (
    InvalidHeader,
    MalformedExtraDataBlock,
    MalformedIdList,
    MalformedLinkInfo,
    ShellLinkError,
    TruncatedInput,
)
from .reader import ByteReader

logger = logging.getLogger(__name__)

SECTION_HEADER = "ShellLinkHeader"
SECTION_ID_LIST = "LinkTargetIDList"
SECTION_LINK_INFO = "LinkInfo"
SECTION_STRING_DATA = "StringData"
SECTION_EXTRA_DATA = "ExtraDataBlocks"
_OPTIONAL_SECTIONS = (
    SECTION_ID_LIST,
    SECTION_LINK_INFO,
    SECTION_STRING_DATA,
    SECTION_EXTRA_DATA,
)

_STRING_FLAGS_MASK = (
    HAS_NAME | HAS_RELATIVE_PATH | HAS_WORKING_DIR | HAS_ARGUMENTS | HAS_ICON_LOCATION
)


def is_lnk(first_bytes: bytes) -> bool:
    """Return True iff *first_bytes* starts with the ``4C 00 00 00`` magic."""
    return bytes(first_bytes[:4]) == LNK_MAGIC


# ---------------------------------------------------------------------------
# Bitsets
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class LinkFlags:
    """The 32-bit LinkFlags bitset from the header."""

    value: int

    def _bit(self, mask: int) -> bool:
        return bool(self.value & mask)

    @property
    def has_id_list(self) -> bool:
        return self._bit(HAS_ID_LIST)

    @property
    def has_link_info(self) -> bool:
        return self._bit(HAS_LINK_INFO)

    @property
    def has_name(self) -> bool:
        return self._bit(HAS_NAME)

    @property
    def has_relative_path(self) -> bool:
        return self._bit(HAS_RELATIVE_PATH)

    @property
    def has_working_dir(self) -> bool:
        return self._bit(HAS_WORKING_DIR)

    @property
    def has_arguments(self) -> bool:
        return self._bit(HAS_ARGUMENTS)

    @property
    def has_icon_location(self) -> bool:
        return self._bit(HAS_ICON_LOCATION)

    @property
    def is_unicode(self) -> bool:
        return self._bit(IS_UNICODE)

    @property
    def force_no_link_info(self) -> bool:
        return self._bit(FORCE_NO_LINK_INFO)

    @property
    def has_exp_string(self) -> bool:
        return self._bit(HAS_EXP_STRING)

    @property
    def run_in_separate_process(self) -> bool:
        return self._bit(RUN_IN_SEPARATE_PROCESS)

    @property
    def reserved(self) -> int:
        """Bits 11-15, captured but not interpreted."""
        return (self.value & RESERVED_FLAGS_MASK) >> RESERVED_FLAGS_SHIFT

    @property
    def has_string_data(self) -> bool:
        return self._bit(_STRING_FLAGS_MASK)

    @property
    def names(self) -> list[str]:
        return [
            FLAG_NAMES.get(bit, f"Bit{bit}")
            for bit in range(32)
            if self.value & (1 << bit)
        ]


@dataclass(frozen=True, slots=True)
class FileAttributes:
    """The 32-bit FileAttributes bitset of the link target."""

    value: int

    @property
    def names(self) -> list[str]:
        return [
            name
            for bit, (name, _) in FILE_ATTRIBUTE_NAMES.items()
            if self.value & (1 << bit)
        ]

    @property
    def is_directory(self) -> bool:
        return bool(self.value & 0x10)


@dataclass(frozen=True, slots=True)
class HotKey:
    """HotKeyFlags: low byte is the virtual key, high byte the modifiers."""

    key: int
    modifiers: int

    @classmethod
    def from_value(cls, value: int) -> "HotKey":
        return cls(key=value & 0xFF, modifiers=(value >> 8) & 0xFF)

    @property
    def value(self) -> int:
        return (self.modifiers << 8) | self.key

    @property
    def text(self) -> str:
        """``CTRL+ALT+F5`` style rendering, or ``""`` when unassigned."""
        mod_parts = [n for b, n in HOTKEY_MOD.items() if self.modifiers & b]
        vk_name = VK_KEYS.get(self.key, f"0x{self.key:02X}") if self.key else ""
        if not (mod_parts or vk_name):
            return ""
        return "+".join(mod_parts + ([vk_name] if vk_name else []))


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ShellLinkHeader:
    """The fixed 76-byte ShellLinkHeader.

    Timestamps are kept as raw FILETIME ticks; use the ``*_datetime``
    helpers or :func:`lnkview._util.format_filetime` to render them.
    """

    header_size: int
    class_id: bytes
    link_flags: LinkFlags
    file_attributes: FileAttributes
    creation_time: int
    access_time: int
    write_time: int
    file_size: int
    icon_index: int
    show_command: int
    hot_key: HotKey

    @property
    def class_id_str(self) -> str:
        return format_guid(self.class_id)

    @property
    def show_command_name(self) -> str:
        """Symbolic ShowCommand; unknown values fall back to SW_SHOWNORMAL."""
        return SHOW_CMD.get(self.show_command, SHOW_CMD[SW_SHOWNORMAL])

    @property
    def show_command_is_default(self) -> bool:
        return self.show_command not in SHOW_CMD

    def creation_datetime(self) -> datetime | None:
        return filetime_to_datetime(self.creation_time)

    def access_datetime(self) -> datetime | None:
        return filetime_to_datetime(self.access_time)

    def write_datetime(self) -> datetime | None:
        return filetime_to_datetime(self.write_time)


@dataclass(frozen=True, slots=True)
class IdItem:
    """One ItemID of the LinkTargetIDList; *data* excludes the size prefix."""

    offset: int
    size: int
    data: bytes

    @property
    def type_byte(self) -> int:
        return self.data[0] if self.data else 0

    @property
    def item_class(self) -> str:
        return ITEM_CLASSES.get(self.type_byte & 0x70, "Other")


@dataclass(frozen=True, slots=True)
class LinkTargetIDList:
    """A LinkTargetIDList.

    *size* is the declared IDListSize: the bytes following the size field,
    terminator included.
    """

    offset: int
    size: int
    items: tuple[IdItem, ...]
    terminator_offset: int

    @property
    def end(self) -> int:
        return self.offset + 2 + self.size


@dataclass(frozen=True, slots=True)
class LinkInfo:
    """The LinkInfo header and its undecoded remainder.

    VolumeID, LocalBasePath, CommonNetworkRelativeLink, CommonPathSuffix
    and the optional Unicode offsets all live in *tail*; they are left
    undecoded and can be located through the offsets, which are relative
    to :attr:`offset`.
    """

    offset: int
    size: int
    header_size: int
    flags: int
    volume_id_offset: int
    local_base_path_offset: int
    network_relative_link_offset: int
    path_suffix_offset: int
    tail_offset: int
    tail: bytes

    @property
    def has_volume_id_and_local_base_path(self) -> bool:
        return bool(self.flags & VOLUME_ID_AND_LOCAL_BASE_PATH)

    @property
    def has_common_network_relative_link(self) -> bool:
        return bool(self.flags & COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX)

    @property
    def tail_range(self) -> tuple[int, int]:
        """``(absolute offset, length)`` of the undecoded tail."""
        return self.tail_offset, len(self.tail)


@dataclass(frozen=True, slots=True)
class ExtraDataBlock:
    """One signature-tagged ExtraData block; *payload* excludes the 8-byte header."""

    offset: int
    size: int
    signature: int
    payload: bytes
    details: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return EXTRA_SIGS.get(self.signature, UNKNOWN_BLOCK)

    @property
    def known(self) -> bool:
        return self.signature in EXTRA_SIGS


@dataclass(frozen=True, slots=True)
class SectionError:
    """A decode error recorded against the section where it happened."""

    section: str
    error: ShellLinkError

    @property
    def kind(self) -> str:
        return type(self.error).__name__

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(frozen=True, slots=True)
class ShellLinkFile:
    """Structured representation of a decoded .lnk file."""

    size: int
    header: ShellLinkHeader | None
    target_id_list: LinkTargetIDList | None = None
    link_info: LinkInfo | None = None
    link_info_suppressed: bool = False
    string_data: dict[str, str] = field(default_factory=dict)
    extra_data: tuple[ExtraDataBlock, ...] = ()
    extra_data_terminated: bool = False
    errors: tuple[SectionError, ...] = ()
    skipped_sections: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors and not self.skipped_sections


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
def decode_header(reader: ByteReader) -> ShellLinkHeader:
    """Read the 76-byte header at the cursor without validating it."""
    header_size = reader.read_u32()
    class_id = reader.read_bytes(16)
    link_flags = LinkFlags(reader.read_u32())
    file_attributes = FileAttributes(reader.read_u32())
    creation_time = reader.read_u64()
    access_time = reader.read_u64()
    write_time = reader.read_u64()
    file_size = reader.read_u32()
    icon_index = reader.read_i32()
    show_command = reader.read_u32()
    hot_key = HotKey.from_value(reader.read_u16())
    reader.skip(10)  # Reserved1 (2), Reserved2 (4), Reserved3 (4)

    return ShellLinkHeader(
        header_size=header_size,
        class_id=class_id,
        link_flags=link_flags,
        file_attributes=file_attributes,
        creation_time=creation_time,
        access_time=access_time,
        write_time=write_time,
        file_size=file_size,
        icon_index=icon_index,
        show_command=show_command,
        hot_key=hot_key,
    )


def validate_header(header: ShellLinkHeader) -> list[InvalidHeader]:
    """Return the header's consistency problems (empty when valid)."""
    problems = []
    if header.header_size != HEADER_SIZE:
        problems.append(
            InvalidHeader(
                f"Invalid header size 0x{header.header_size:08X} (expected 0x4C)", 0
            )
        )
    if header.class_id != LINK_CLSID:
        problems.append(
            InvalidHeader(
                f"Invalid LinkCLSID {header.class_id_str} (expected {LINK_CLSID_STR})",
                4,
            )
        )
    return problems


# ---------------------------------------------------------------------------
# LinkTargetIDList
# ---------------------------------------------------------------------------
def decode_id_list(reader: ByteReader) -> LinkTargetIDList:
    """Read a LinkTargetIDList at the cursor.

    Items are read until they account for ``IDListSize - 2`` bytes or a
    zero-size item appears, whichever comes first; a zero-size item is the
    terminator.  Otherwise the 2-byte terminator is read after the last
    item and must be zero.  The cursor ends at the declared list end.
    """
    start = reader.cursor
    size = reader.read_u16()
    end = start + 2 + size
    if size < 2:
        raise MalformedIdList(
            f"IDListSize {size} cannot hold the 2-byte terminator",
            start,
            resume_at=end,
        )

    limit = size - 2
    consumed = 0
    items: list[IdItem] = []
    terminator_offset = None
    while consumed < limit:
        item_off = reader.cursor
        item_size = reader.read_u16()
        if item_size == 0:
            terminator_offset = item_off
            break
        if item_size < 2:
            raise MalformedIdList(
                f"ItemID at 0x{item_off:X} has size {item_size}, "
                "smaller than its own size field",
                item_off,
                resume_at=end,
            )
        if consumed + item_size > limit:
            raise MalformedIdList(
                f"ItemID at 0x{item_off:X} (size {item_size}) overruns "
                f"IDListSize {size}",
                item_off,
                resume_at=end,
            )
        items.append(IdItem(item_off, item_size, reader.read_bytes(item_size - 2)))
        consumed += item_size

    if terminator_offset is None:
        terminator_offset = reader.cursor
        terminator = reader.read_u16()
        if terminator != 0:
            raise MalformedIdList(
                f"IDList terminator at 0x{terminator_offset:X} is "
                f"0x{terminator:04X}, expected 0x0000",
                terminator_offset,
                resume_at=end,
            )

    if reader.cursor != end:
        logger.debug(
            "IDList terminated at 0x%X before declared end 0x%X",
            terminator_offset,
            end,
        )
        reader.set_cursor(end)

    return LinkTargetIDList(
        offset=start,
        size=size,
        items=tuple(items),
        terminator_offset=terminator_offset,
    )


# ---------------------------------------------------------------------------
# LinkInfo
# ---------------------------------------------------------------------------
def decode_link_info(reader: ByteReader) -> LinkInfo:
    """Read a LinkInfo structure at the cursor.

    Only the size, header size, flags and the four offsets are decoded;
    everything after them up to LinkInfoSize is kept as the opaque tail.
    """
    start = reader.cursor
    size = reader.read_u32()
    header_size = reader.read_u32()
    flags = reader.read_u32()
    volume_id_offset = reader.read_u32()
    local_base_path_offset = reader.read_u32()
    network_relative_link_offset = reader.read_u32()
    path_suffix_offset = reader.read_u32()

    tail_len = size - (reader.cursor - start)
    if tail_len < 0:
        raise MalformedLinkInfo(
            f"LinkInfoSize {size} is smaller than the "
            f"{LINK_INFO_FIXED_SIZE}-byte LinkInfo header",
            start,
            resume_at=start + size if size >= 4 else None,
        )
    tail_offset = reader.cursor
    tail = reader.read_bytes(tail_len)

    return LinkInfo(
        offset=start,
        size=size,
        header_size=header_size,
        flags=flags,
        volume_id_offset=volume_id_offset,
        local_base_path_offset=local_base_path_offset,
        network_relative_link_offset=network_relative_link_offset,
        path_suffix_offset=path_suffix_offset,
        tail_offset=tail_offset,
        tail=tail,
    )


def skip_link_info(reader: ByteReader) -> int:
    """Step over a LinkInfo structure using its declared size; return it."""
    start = reader.cursor
    size = reader.read_u32()
    if size < 4:
        raise MalformedLinkInfo(
            f"LinkInfoSize {size} cannot hold its own size field", start
        )
    reader.skip(size - 4)
    return size


# ---------------------------------------------------------------------------
# StringData
# ---------------------------------------------------------------------------
def iter_string_data(
    reader: ByteReader, flags: LinkFlags, codepage: str = ANSI_CODEPAGE
):
    """Yield ``(name, value)`` for each StringData field whose flag is set."""
    is_unicode = flags.is_unicode
    for name, mask in STRING_FIELDS:
        if not flags.value & mask:
            continue
        count = reader.read_u16()
        raw = reader.read_bytes(count * 2 if is_unicode else count)
        yield name, decode_counted_string(raw, is_unicode, codepage)


def decode_string_data(
    reader: ByteReader, flags: LinkFlags, codepage: str = ANSI_CODEPAGE
) -> dict[str, str]:
    """Read all flagged StringData fields; absent fields are absent keys."""
    return dict(iter_string_data(reader, flags, codepage))


# ---------------------------------------------------------------------------
# ExtraData
# ---------------------------------------------------------------------------
def _guid(payload: bytes, off: int) -> str:
    return "{" + format_guid(payload, off) + "}"


def _block_details(signature: int, payload: bytes, codepage: str) -> dict[str, str]:
    """Decode the fixed-layout fields of well-understood blocks."""
    details: dict[str, str] = {}

    if signature in (ENVIRONMENT_VARIABLE_BLOCK, ICON_ENVIRONMENT_BLOCK):
        if len(payload) >= 260:
            details["TargetAnsi"] = decode_ansi_z(payload[:260], codepage)
        if len(payload) >= 780:
            details["TargetUnicode"] = decode_utf16le_z(payload[260:780])

    elif signature == DARWIN_BLOCK:
        if len(payload) >= 260:
            details["DarwinDataAnsi"] = decode_ansi_z(payload[:260], codepage)
        if len(payload) >= 780:
            details["DarwinDataUnicode"] = decode_utf16le_z(payload[260:780])

    elif signature == TRACKER_BLOCK and len(payload) >= 88:
        length, version = struct.unpack_from("<II", payload, 0)
        details["Length"] = str(length)
        details["Version"] = str(version)
        details["MachineID"] = decode_ansi_z(payload[8:24], "ascii")
        details["DroidVolumeID"] = _guid(payload, 24)
        details["DroidFileID"] = _guid(payload, 40)
        details["BirthDroidVolumeID"] = _guid(payload, 56)
        details["BirthDroidFileID"] = _guid(payload, 72)

    elif signature == KNOWN_FOLDER_BLOCK and len(payload) >= 20:
        guid_str = format_guid(payload, 0)
        details["KnownFolderID"] = "{" + guid_str + "}"
        details["KnownFolderName"] = KNOWN_FOLDER_NAMES.get(guid_str, "Unknown")
        details["IDListOffset"] = str(struct.unpack_from("<I", payload, 16)[0])

    elif signature == SPECIAL_FOLDER_BLOCK and len(payload) >= 8:
        folder_id, id_offset = struct.unpack_from("<II", payload, 0)
        details["SpecialFolderID"] = str(folder_id)
        details["IDListOffset"] = str(id_offset)

    return details


def decode_extra_block(
    reader: ByteReader, codepage: str = ANSI_CODEPAGE
) -> ExtraDataBlock | None:
    """Read one ExtraData block at the cursor; ``None`` for the terminator."""
    start = reader.cursor
    size = reader.read_u32()
    if size == 0:
        return None
    if size < EXTRA_BLOCK_HEADER_SIZE:
        raise MalformedExtraDataBlock(
            f"ExtraData block at 0x{start:X} has size {size}, "
            f"smaller than its {EXTRA_BLOCK_HEADER_SIZE}-byte header",
            start,
        )
    signature = reader.read_u32()
    payload = reader.read_bytes(size - EXTRA_BLOCK_HEADER_SIZE)
    return ExtraDataBlock(
        offset=start,
        size=size,
        signature=signature,
        payload=payload,
        details=_block_details(signature, payload, codepage),
    )


def decode_extra_data(
    reader: ByteReader, codepage: str = ANSI_CODEPAGE
) -> list[ExtraDataBlock]:
    """Read blocks until a zero-size terminator or the end of the buffer."""
    blocks = []
    while not reader.at_end:
        block = decode_extra_block(reader, codepage)
        if block is None:
            break
        blocks.append(block)
    return blocks


# ---------------------------------------------------------------------------
# Whole file
# ---------------------------------------------------------------------------
class _LinkDecoder:
    """Runs the section decoders in order and collects partial results."""

    def __init__(self, data: bytes, best_effort: bool, codepage: str) -> None:
        self.reader = ByteReader(data)
        self.best_effort = best_effort
        self.codepage = codepage

        self.header: ShellLinkHeader | None = None
        self.id_list: LinkTargetIDList | None = None
        self.link_info: LinkInfo | None = None
        self.link_info_suppressed = False
        self.strings: dict[str, str] = {}
        self.blocks: list[ExtraDataBlock] = []
        self.terminated = False
        self.errors: list[SectionError] = []
        self.skipped: list[str] = []
        self.halted = False

    def _record(self, section: str, exc: ShellLinkError) -> None:
        logger.warning("%s: %s: %s", section, type(exc).__name__, exc)
        self.errors.append(SectionError(section, exc))

    def _run(self, section: str, func) -> None:
        """Run one section decoder, converting its errors into records."""
        if self.halted:
            self.skipped.append(section)
            return
        logger.debug("decoding %s at 0x%X", section, self.reader.cursor)
        try:
            func()
        except TruncatedInput as exc:
            self._record(section, exc)
            self.halted = True
        except ShellLinkError as exc:
            self._record(section, exc)
            resume_at = exc.resume_at
            if resume_at is not None and resume_at <= len(self.reader):
                self.reader.set_cursor(resume_at)
            else:
                self.halted = True

    def _decode_header(self) -> None:
        try:
            header = decode_header(self.reader)
        except TruncatedInput as exc:
            if not self.best_effort:
                raise
            self._record(SECTION_HEADER, exc)
            self.halted = True
            return

        problems = validate_header(header)
        if problems and not self.best_effort:
            raise problems[0]
        for problem in problems:
            self._record(SECTION_HEADER, problem)
        self.header = header

    def _decode_id_list(self) -> None:
        self.id_list = decode_id_list(self.reader)

    def _decode_link_info(self) -> None:
        self.link_info = decode_link_info(self.reader)

    def _skip_link_info(self) -> None:
        size = skip_link_info(self.reader)
        self.link_info_suppressed = True
        logger.debug("LinkInfo (%d bytes) suppressed by ForceNoLinkInfo", size)

    def _decode_string_data(self) -> None:
        flags = self.header.link_flags
        for name, value in iter_string_data(self.reader, flags, self.codepage):
            self.strings[name] = value

    def _decode_extra_data(self) -> None:
        while not self.reader.at_end:
            block = decode_extra_block(self.reader, self.codepage)
            if block is None:
                self.terminated = True
                return
            self.blocks.append(block)

    def decode(self) -> ShellLinkFile:
        self._decode_header()

        if self.header is None:
            self.skipped.extend(_OPTIONAL_SECTIONS)
        else:
            flags = self.header.link_flags
            if flags.has_id_list:
                self._run(SECTION_ID_LIST, self._decode_id_list)
            if flags.has_link_info:
                if flags.force_no_link_info:
                    self._run(SECTION_LINK_INFO, self._skip_link_info)
                else:
                    self._run(SECTION_LINK_INFO, self._decode_link_info)
            if flags.has_string_data:
                self._run(SECTION_STRING_DATA, self._decode_string_data)
            self._run(SECTION_EXTRA_DATA, self._decode_extra_data)

        return ShellLinkFile(
            size=len(self.reader),
            header=self.header,
            target_id_list=self.id_list,
            link_info=self.link_info,
            link_info_suppressed=self.link_info_suppressed,
            string_data=self.strings,
            extra_data=tuple(self.blocks),
            extra_data_terminated=self.terminated,
            errors=tuple(self.errors),
            skipped_sections=tuple(self.skipped),
        )


def parse_lnk(
    source: Source,
    *,
    best_effort: bool = False,
    codepage: str = ANSI_CODEPAGE,
) -> ShellLinkFile:
    """Decode a .lnk file and return a :class:`ShellLinkFile`.

    Args:
        source: A file path (str or Path) or the raw bytes of a .lnk file.
        best_effort: Record header problems (bad size, wrong CLSID,
            truncation) instead of raising, and keep decoding.
        codepage: Code page for non-Unicode strings.

    Raises:
        TruncatedInput: The header itself is cut short (strict mode only).
        InvalidHeader: Header size or CLSID is wrong (strict mode only).
    """
    if isinstance(source, (str, Path)):
        data = Path(source).read_bytes()
    else:
        data = bytes(source)
    logger.debug("decoding %d bytes", len(data))
    return _LinkDecoder(data, best_effort, codepage).decode()
