"""lnkview -- decode Windows .lnk files (MS-SHLLINK) into field reports."""

__version__ = "0.1.0"

from .errors import (
    InvalidHeader,
    InvalidTimestamp,
    MalformedExtraDataBlock,
    MalformedIdList,
    MalformedLinkInfo,
    ShellLinkError,
    TruncatedInput,
)
from .parser import (
    ExtraDataBlock,
    FileAttributes,
    HotKey,
    IdItem,
    LinkFlags,
    LinkInfo,
    LinkTargetIDList,
    SectionError,
    ShellLinkFile,
    ShellLinkHeader,
    is_lnk,
    parse_lnk,
)
from .reader import ByteReader
from .report import Field, Section, build_report, format_report, report_to_dict

__all__ = [
    "parse_lnk",
    "is_lnk",
    "build_report",
    "format_report",
    "report_to_dict",
    "ByteReader",
    "ShellLinkFile",
    "ShellLinkHeader",
    "LinkFlags",
    "FileAttributes",
    "HotKey",
    "LinkTargetIDList",
    "IdItem",
    "LinkInfo",
    "ExtraDataBlock",
    "SectionError",
    "Field",
    "Section",
    "ShellLinkError",
    "TruncatedInput",
    "InvalidHeader",
    "MalformedIdList",
    "MalformedLinkInfo",
    "MalformedExtraDataBlock",
    "InvalidTimestamp",
    "__version__",
]
