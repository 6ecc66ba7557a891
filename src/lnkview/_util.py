"""Internal helpers for GUID, FILETIME and string decoding."""

import struct
from datetime import UTC, datetime, timedelta

from ._constants import ANSI_CODEPAGE, FILETIME_EPOCH_DIFF, TICKS_PER_MS
from .errors import InvalidTimestamp

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

NOT_SET = "not set"
INVALID_DATE = "invalid date"


def format_guid(data: bytes, off: int = 0) -> str:
    """Format 16 bytes at *off* as an uppercase GUID string (no braces).

    Windows GUIDs are stored in mixed-endian layout:
    uint32-LE, uint16-LE, uint16-LE, 8 raw bytes.
    """
    if len(data) - off < 16:
        return "?"
    d1, d2, d3 = struct.unpack_from("<IHH", data, off)
    d4 = data[off + 8 : off + 10].hex().upper()
    d5 = data[off + 10 : off + 16].hex().upper()
    return f"{d1:08X}-{d2:04X}-{d3:04X}-{d4}-{d5}"


def filetime_to_unix_ms(ticks: int) -> int:
    """Convert FILETIME *ticks* to milliseconds since 1970-01-01 UTC.

    Raises :class:`InvalidTimestamp` for values before the Unix epoch.
    """
    ms = (ticks - FILETIME_EPOCH_DIFF) // TICKS_PER_MS
    if ms < 0:
        raise InvalidTimestamp(f"FILETIME 0x{ticks:016X} predates 1970-01-01")
    return ms


def filetime_to_datetime(ticks: int) -> datetime | None:
    """Return an aware UTC datetime for *ticks*, or ``None`` when unset (0)."""
    if ticks == 0:
        return None
    ms = filetime_to_unix_ms(ticks)
    try:
        return _UNIX_EPOCH + timedelta(milliseconds=ms)
    except OverflowError:
        raise InvalidTimestamp(
            f"FILETIME 0x{ticks:016X} is beyond the representable date range"
        ) from None


def format_filetime(ticks: int) -> str:
    """Render *ticks* as ISO 8601 with millisecond precision and a ``Z``."""
    try:
        dt = filetime_to_datetime(ticks)
    except InvalidTimestamp:
        return INVALID_DATE
    if dt is None:
        return NOT_SET
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1000:03d}Z"


def decode_counted_string(
    raw: bytes, is_unicode: bool, codepage: str = ANSI_CODEPAGE
) -> str:
    """Decode a StringData payload; undecodable units become U+FFFD."""
    if is_unicode:
        return raw.decode("utf-16-le", errors="replace")
    return raw.decode(codepage, errors="replace")


def decode_ansi_z(raw: bytes, codepage: str = ANSI_CODEPAGE) -> str:
    """Decode a NUL-terminated single-byte string from a fixed-size field."""
    return raw.split(b"\x00", 1)[0].decode(codepage, errors="replace")


def find_utf16le_null(data: bytes, start: int = 0) -> int:
    """Find the first UTF-16LE null terminator (two zero bytes at even offset).

    Returns the byte offset of the null terminator relative to *start*,
    or ``len(data) - start`` if not found.
    """
    pos = start
    end = len(data) - 1
    while pos < end:
        if data[pos] == 0 and data[pos + 1] == 0:
            return pos - start
        pos += 2
    return len(data) - start


def decode_utf16le_z(raw: bytes) -> str:
    """Decode a NUL-terminated UTF-16LE string from a fixed-size field."""
    null_pos = find_utf16le_null(raw)
    return raw[:null_pos].decode("utf-16-le", errors="replace")
