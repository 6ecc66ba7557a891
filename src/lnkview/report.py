"""Turn a decoded :class:`ShellLinkFile` into a tree of labelled rows.

A report is a :class:`Section` whose children are :class:`Field` leaves
(label, value, description) or nested sections.  Labels and row order are
stable; how the tree is displayed is up to the caller.
"""

from dataclasses import dataclass

from ._constants import FILE_ATTRIBUTE_NAMES, STRING_DESCRIPTIONS
from ._types import RowValue
from ._util import format_filetime
from .parser import (
    SECTION_EXTRA_DATA,
    SECTION_HEADER,
    SECTION_ID_LIST,
    SECTION_LINK_INFO,
    SECTION_STRING_DATA,
    ExtraDataBlock,
    LinkFlags,
    ShellLinkFile,
    ShellLinkHeader,
)


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Field:
    """One decoded value."""

    label: str
    value: RowValue
    description: str = ""


@dataclass(frozen=True, slots=True)
class Section:
    """A named group of rows.  *expanded* is only a display hint."""

    title: str
    children: tuple["Field | Section", ...] = ()
    expanded: bool = True

    def find(self, label: str) -> "Field | Section | None":
        """Return the first direct child with *label* (or title)."""
        for child in self.children:
            name = child.title if isinstance(child, Section) else child.label
            if name == label:
                return child
        return None

    def __getitem__(self, label: str) -> "Field | Section":
        child = self.find(label)
        if child is None:
            raise KeyError(label)
        return child


Node = Field | Section


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _hex(value: int, width: int) -> str:
    return f"0x{value:0{width * 2}X}"


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
# (label, LinkFlags attribute, description) for the bits with meaning here
_FLAG_ROWS = (
    ("HasLinkTargetIDList", "has_id_list", "LinkTargetIDList structure present"),
    ("HasLinkInfo", "has_link_info", "LinkInfo structure present"),
    ("HasName", "has_name", "StringData Name present"),
    ("HasRelativePath", "has_relative_path", "StringData RelativePath present"),
    ("HasWorkingDir", "has_working_dir", "StringData WorkingDir present"),
    ("HasArguments", "has_arguments", "StringData Arguments present"),
    ("HasIconLocation", "has_icon_location", "StringData IconLocation present"),
)

_FLAG_ROWS_AFTER_UNICODE = (
    ("ForceNoLinkInfo", "force_no_link_info", "Ignore LinkInfo"),
    ("HasExpString", "has_exp_string", "ExpandString present"),
    ("RunInSeparateProcess", "run_in_separate_process", "Run in separate VM"),
)


def _link_flags_section(flags: LinkFlags) -> Section:
    rows: list[Node] = [
        Field(
            "LinkFlags",
            _hex(flags.value, 4),
            "Bit flags indicating optional structures",
        )
    ]
    rows.extend(
        Field(label, _yes_no(getattr(flags, attr)), desc)
        for label, attr, desc in _FLAG_ROWS
    )
    rows.append(
        Field(
            "IsUnicode",
            "Yes (UTF-16LE)" if flags.is_unicode else "No (ANSI)",
            "String encoding",
        )
    )
    rows.extend(
        Field(label, _yes_no(getattr(flags, attr)), desc)
        for label, attr, desc in _FLAG_ROWS_AFTER_UNICODE
    )
    rows.append(Field("Reserved", flags.reserved, "Bits 11-15"))
    rows.append(Field("SetFlags", ", ".join(flags.names) or "(none)", "Set bits"))
    return Section("LinkFlags", tuple(rows), expanded=False)


def _file_attributes_section(value: int) -> Section:
    rows = [Field("FileAttributes", _hex(value, 4), "Target file attributes")]
    for bit, (name, constant) in FILE_ATTRIBUTE_NAMES.items():
        rows.append(Field(name, _yes_no(bool(value & (1 << bit))), constant))
    return Section("FileAttributes", tuple(rows), expanded=False)


def _hot_key_section(header: ShellLinkHeader) -> Section:
    hot_key = header.hot_key
    return Section(
        "HotKey",
        (
            Field(
                "HotKey",
                _hex(hot_key.value, 2),
                "Keyboard shortcut to launch application",
            ),
            Field("LowByte", _hex(hot_key.key, 1), "Virtual key code or ASCII code"),
            Field(
                "HighByte",
                _hex(hot_key.modifiers, 1),
                "Modifier keys (Shift, Ctrl, Alt)",
            ),
            Field("Keys", hot_key.text or "(none)", "Rendered key combination"),
        ),
        expanded=False,
    )


def _header_rows(header: ShellLinkHeader) -> list[Node]:
    show_value = header.show_command_name
    if header.show_command_is_default:
        show_value += " (default)"

    return [
        Field(
            "HeaderSize",
            _hex(header.header_size, 4),
            "Must be 0x0000004C (76 bytes)",
        ),
        Field(
            "LinkCLSID",
            header.class_id_str,
            "Class identifier - must be 00021401-0000-0000-C000-000000000046",
        ),
        _link_flags_section(header.link_flags),
        _file_attributes_section(header.file_attributes.value),
        Field(
            "CreationTime", format_filetime(header.creation_time), "UTC creation time"
        ),
        Field("AccessTime", format_filetime(header.access_time), "UTC access time"),
        Field(
            "WriteTime",
            format_filetime(header.write_time),
            "UTC write/modification time",
        ),
        Field(
            "FileSize",
            f"{header.file_size} bytes",
            "Size of target file (lower 32 bits)",
        ),
        Field("IconIndex", header.icon_index, "Icon index in icon location"),
        Field(
            "ShowCommand",
            show_value,
            f"Window display state ({header.show_command})",
        ),
        _hot_key_section(header),
    ]


# ---------------------------------------------------------------------------
# Optional sections
# ---------------------------------------------------------------------------
def _id_list_rows(lnk: ShellLinkFile) -> list[Node]:
    id_list = lnk.target_id_list
    if id_list is None:
        return []
    rows: list[Node] = [
        Field("IDListSize", f"{id_list.size} bytes", "Size of IDList structure")
    ]
    for i, item in enumerate(id_list.items):
        rows.append(
            Section(
                f"ItemID {i}",
                (
                    Field(f"ItemID {i}", f"{item.size} bytes", f"Item ID #{i}"),
                    Field("Offset", _hex(item.offset, 4), "Absolute file offset"),
                    Field(
                        "Type",
                        f"0x{item.type_byte:02X} ({item.item_class})",
                        "Shell item type byte",
                    ),
                    Field("Data", item.data.hex().upper(), "Item payload"),
                ),
                expanded=False,
            )
        )
    rows.append(Field("TerminalID", "0x0000 (End of list)", ""))
    return rows


def _link_info_rows(lnk: ShellLinkFile) -> list[Node]:
    if lnk.link_info_suppressed:
        return [
            Field(
                "Suppressed",
                "ForceNoLinkInfo",
                "LinkInfo present but ignored; its bytes were skipped",
            )
        ]
    info = lnk.link_info
    if info is None:
        return []
    tail_off, tail_len = info.tail_range
    flags = Section(
        "LinkInfoFlags",
        (
            Field(
                "LinkInfoFlags",
                _hex(info.flags, 4),
                "Volume and path information flags",
            ),
            Field(
                "VolumeIDAndLocalBasePath",
                _yes_no(info.has_volume_id_and_local_base_path),
            ),
            Field(
                "CommonNetworkRelativeLinkAndPathSuffix",
                _yes_no(info.has_common_network_relative_link),
            ),
        ),
        expanded=False,
    )
    return [
        Field("LinkInfoSize", f"{info.size} bytes", "Size of LinkInfo structure"),
        Field(
            "LinkInfoHeaderSize", f"{info.header_size} bytes", "Size of LinkInfoHeader"
        ),
        flags,
        Field(
            "VolumeIDOffset",
            info.volume_id_offset,
            "Offset to VolumeID from LinkInfo start",
        ),
        Field(
            "LocalBasePathOffset",
            info.local_base_path_offset,
            "Offset to LocalBasePath",
        ),
        Field(
            "CommonNetworkRelativeLinkOffset",
            info.network_relative_link_offset,
            "Offset to CommonNetworkRelativeLink",
        ),
        Field(
            "CommonPathSuffixOffset",
            info.path_suffix_offset,
            "Offset to CommonPathSuffix",
        ),
        Field(
            "UndecodedData",
            f"{tail_len} bytes at {_hex(tail_off, 4)}",
            "VolumeID, paths and network link are not decoded",
        ),
    ]


def _string_rows(lnk: ShellLinkFile) -> list[Node]:
    return [
        Field(name, value, STRING_DESCRIPTIONS[name])
        for name, value in lnk.string_data.items()
    ]


def _block_section(index: int, block: ExtraDataBlock) -> Section:
    rows: list[Node] = [
        Field(
            f"Block #{index}",
            f"Size: {block.size} bytes, Signature: {_hex(block.signature, 4)}",
            block.name,
        )
    ]
    rows.extend(Field(key, value) for key, value in block.details.items())
    return Section(f"Block #{index}", tuple(rows), expanded=False)


def _extra_data_rows(lnk: ShellLinkFile) -> list[Node]:
    rows: list[Node] = [
        _block_section(i, block) for i, block in enumerate(lnk.extra_data)
    ]
    if lnk.extra_data_terminated:
        rows.append(Field("Terminal Block", "0x00000000", "End of ExtraData blocks"))
    elif not any(err.section == SECTION_EXTRA_DATA for err in lnk.errors):
        rows.append(Field("Terminal Block", "(missing)", "Chain ended at end of file"))
    return rows


_STRUCTURE_DESCRIPTIONS = {
    SECTION_HEADER: "76-byte header containing file identification and metadata",
    SECTION_ID_LIST: "Optional item identifier list",
    SECTION_LINK_INFO: "Optional linked file information",
    SECTION_STRING_DATA: "Optional string data structures",
    SECTION_EXTRA_DATA: "Optional extra data blocks",
}


def _section(lnk: ShellLinkFile, name: str, rows: list[Node]) -> Section:
    children: list[Node] = [Field("Structure", name, _STRUCTURE_DESCRIPTIONS[name])]
    children.extend(rows)
    for err in lnk.errors:
        if err.section == name:
            children.append(Field("ERROR", err.kind, err.message))
    return Section(name, tuple(children))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def build_report(lnk: ShellLinkFile) -> Section:
    """Build the report tree for *lnk*.

    Sections appear in file order.  Every recorded error becomes an
    ``ERROR`` row inside the section it belongs to, and sections that were
    never reached become ``NOT DECODED`` rows.
    """
    sections: list[Node] = []
    failed = {err.section for err in lnk.errors}

    header = lnk.header
    if header is not None:
        sections.append(_section(lnk, SECTION_HEADER, _header_rows(header)))
    elif SECTION_HEADER in failed:
        sections.append(_section(lnk, SECTION_HEADER, []))

    if header is not None:
        flags = header.link_flags
        if flags.has_id_list and (lnk.target_id_list or SECTION_ID_LIST in failed):
            sections.append(_section(lnk, SECTION_ID_LIST, _id_list_rows(lnk)))
        if flags.has_link_info and (
            lnk.link_info or lnk.link_info_suppressed or SECTION_LINK_INFO in failed
        ):
            sections.append(_section(lnk, SECTION_LINK_INFO, _link_info_rows(lnk)))
        if lnk.string_data or SECTION_STRING_DATA in failed:
            sections.append(_section(lnk, SECTION_STRING_DATA, _string_rows(lnk)))
        if SECTION_EXTRA_DATA not in lnk.skipped_sections:
            sections.append(_section(lnk, SECTION_EXTRA_DATA, _extra_data_rows(lnk)))

    for name in lnk.skipped_sections:
        sections.append(
            Field("NOT DECODED", name, "Not reached after an earlier error")
        )

    return Section("ShellLinkFile", tuple(sections))


def report_to_dict(node: Node) -> dict:
    """Convert a report tree into JSON-friendly nested dicts."""
    if isinstance(node, Field):
        return {
            "label": node.label,
            "value": node.value,
            "description": node.description,
        }
    return {
        "title": node.title,
        "expanded": node.expanded,
        "children": [report_to_dict(child) for child in node.children],
    }


def format_report(root: Section, descriptions: bool = False) -> str:
    """Return a human-readable, indented rendering of *root*."""
    lines: list[str] = []

    def emit(node: Node, depth: int) -> None:
        indent = "  " * depth
        if isinstance(node, Section):
            lines.append(f"{indent}[{node.title}]")
            for child in node.children:
                emit(child, depth + 1)
            return
        line = f"{indent}{node.label}: {node.value}"
        if descriptions and node.description:
            line += f"  ({node.description})"
        lines.append(line)

    for i, child in enumerate(root.children):
        if isinstance(child, Section):
            if i:
                lines.append("")
            lines.append(f"--- {child.title} ---")
            for grandchild in child.children:
                if isinstance(grandchild, Field) and grandchild.label == "Structure":
                    continue
                emit(grandchild, 1)
        else:
            emit(child, 0)

    return "\n".join(lines)
