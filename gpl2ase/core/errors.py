# ==============================================================================
# ERRORS MODULE
# ==============================================================================
# Exception and warning types shared by the palette parser and the archive
# encoder. Library code raises these; only the CLI decides how to present
# them and which exit code to use.
#
# Hierarchy:
#   PaletteError
#     ├── FormatError        Bad .gpl text or malformed .ase archive
#     ├── PaletteFullError   Palette.append() on a full palette
#     └── ArchiveWriteError  Output archive could not be written (also OSError)
#
#   CapacityWarning          Non-fatal: parser stopped at the color limit
# ==============================================================================

from typing import Optional


class PaletteError(Exception):
    """Base class for all palette conversion errors."""


class FormatError(PaletteError):
    """
    Raised when input does not follow the expected file format.

    Attributes:
        path (str):        File being read (empty when parsing raw text)
        line_number (int): 1-based line number, or None for binary input
        line (str):        Offending line without its terminator
        token (str):       Offending token or value, if one can be named
    """

    def __init__(self, message: str, path: str = "",
                 line_number: Optional[int] = None,
                 line: Optional[str] = None,
                 token: Optional[str] = None):
        self.message = message
        self.path = path
        self.line_number = line_number
        self.line = line
        self.token = token
        super().__init__(str(self))

    def __str__(self):
        location = self.path or "<input>"
        if self.line_number is not None:
            location = f"{location}:{self.line_number}"
        text = f"{location}: {self.message}"
        if self.line is not None:
            text += f" (line: {self.line!r})"
        return text


class PaletteFullError(PaletteError):
    """Raised when a color is appended to a palette that is at capacity."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Palette is full ({capacity} colors)")


class ArchiveWriteError(PaletteError, OSError):
    """Raised when an .ase archive cannot be written to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write archive {path}: {reason}")

    def __str__(self):
        return f"Cannot write archive {self.path}: {self.reason}"


class CapacityWarning(UserWarning):
    """
    Signaled when a palette file has more colors than the configured limit.

    The parser keeps the first ``capacity`` colors and drops the rest.
    """

    def __init__(self, path: str, capacity: int, line_number: int):
        self.path = path
        self.capacity = capacity
        self.line_number = line_number
        super().__init__(
            f"{path or '<input>'}: max palette colors is {capacity}, "
            f"ignoring colors from line {line_number} onward"
        )
