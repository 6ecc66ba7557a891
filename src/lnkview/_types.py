"""Shared type aliases for lnkview modules."""

from pathlib import Path

Source = str | Path | bytes | bytearray | memoryview
RowValue = str | int | None
