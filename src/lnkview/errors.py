"""Exceptions raised while decoding a Shell Link."""


class ShellLinkError(Exception):
    """Raised when data does not conform to the MS-SHLLINK format.

    *offset* is the absolute byte offset of the read or structure that
    failed, when known.  *resume_at* is where the next section starts when
    the failing structure declared its own extent.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        *,
        resume_at: int | None = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.resume_at = resume_at


class TruncatedInput(ShellLinkError):
    """Raised when a fixed or declared-size read runs past the buffer end."""


class InvalidHeader(ShellLinkError):
    """Raised when the header size or class ID is wrong."""


class MalformedIdList(ShellLinkError):
    """Raised when the LinkTargetIDList is internally inconsistent."""


class MalformedLinkInfo(ShellLinkError):
    """Raised when LinkInfo declares a size smaller than its fixed fields."""


class MalformedExtraDataBlock(ShellLinkError):
    """Raised when an ExtraData block is too small to hold its own header."""


class InvalidTimestamp(ShellLinkError):
    """Raised when a FILETIME does not map to a representable UTC date."""
