"""Cursor-based little-endian reader over an immutable byte buffer."""

import struct

from .errors import TruncatedInput

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")


class ByteReader:
    """Sequential reader with explicit repositioning.

    Every read is bounds-checked against the buffer length; a read that
    would run past the end raises :class:`TruncatedInput` and leaves the
    cursor where it was.  Nothing is ever zero-padded.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = bytes(data)
        self._pos = 0
        self.set_cursor(offset)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def cursor(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def set_cursor(self, offset: int) -> None:
        """Move the cursor to absolute *offset* (the buffer end is allowed)."""
        if offset < 0 or offset > len(self._data):
            raise TruncatedInput(
                f"Cannot seek to offset {offset} (buffer is {len(self._data)} bytes)",
                offset,
            )
        self._pos = offset

    def _require(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"negative read length {n}")
        if n > self.remaining:
            raise TruncatedInput(
                f"Need {n} bytes at offset {self._pos}, only {self.remaining} left",
                self._pos,
            )

    def bytes_at(self, offset: int, n: int) -> bytes:
        """Return *n* bytes at absolute *offset* without moving the cursor."""
        if n < 0:
            raise ValueError(f"negative read length {n}")
        if offset < 0 or offset + n > len(self._data):
            raise TruncatedInput(
                f"Range [{offset}, {offset + n}) lies outside the "
                f"{len(self._data)}-byte buffer",
                offset,
            )
        return self._data[offset : offset + n]

    def read_bytes(self, n: int) -> bytes:
        self._require(n)
        out = self._data[self._pos : self._pos + n]
        self._pos += n
        return out

    def skip(self, n: int) -> None:
        self._require(n)
        self._pos += n

    def _unpack(self, fmt: struct.Struct) -> int:
        self._require(fmt.size)
        val = fmt.unpack_from(self._data, self._pos)[0]
        self._pos += fmt.size
        return val

    def read_u8(self) -> int:
        self._require(1)
        val = self._data[self._pos]
        self._pos += 1
        return val

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_u64(self) -> int:
        return self._unpack(_U64)
