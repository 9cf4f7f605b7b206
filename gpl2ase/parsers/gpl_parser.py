# ==============================================================================
# GPL (GIMP PALETTE) FILE PARSER
# ==============================================================================
# This module reads GIMP .gpl palette files.
#
# GPL FILE FORMAT:
# ----------------
# GPL files are plain text, one entry per line:
#
#   GIMP Palette                  <- required header (first 12 characters)
#   Name: Forest                  <- optional palette name
#   Columns: 4                    <- optional column hint for palette views
#   # anything                    <- comment
#   184 194 185  Lichen           <- color: red green blue [name]
#    56  43  38	Bark              <- spaces and tabs both separate fields
#
# Lines are classified by their first character: '#' is a comment, 'N' and
# 'C' are directives, an empty line is skipped and everything else must be
# a color line. Only the first three fields of a color line are read; the
# trailing color name is ignored.
#
# ERRORS:
# -------
# Any malformed content raises FormatError with the line number, so the
# user can fix the file. No partial palette is ever returned on error.
# Running past the color limit is NOT an error: the first `capacity` colors
# are kept and a CapacityWarning is attached to the palette.
#
# USAGE EXAMPLE:
# --------------
#   palette = load_palette("forest.gpl")
#   print(f"Loaded {len(palette)} colors")
#
#   # Or with an explicit limit
#   parser = GPLParser(capacity=256)
#   palette = parser.load("huge.gpl")
#   if palette.truncated:
#       print("Some colors were dropped")
#
# REFERENCES:
# -----------
#   - https://developer.gimp.org/core/standards/gpl/ (GIMP palette format)
# ==============================================================================

import re
from typing import Iterable, List, Optional

from ..core.errors import CapacityWarning, FormatError
from ..core.palette import CHANNEL_MAX, CHANNEL_MIN, DEFAULT_CAPACITY, Color, Palette


# ==============================================================================
# CONSTANTS
# ==============================================================================

GPL_SIGNATURE = "GIMP Palette"

COMMENT_PREFIX = "#"
NAME_PREFIX = "N"
COLUMNS_PREFIX = "C"

# Fields on a color line are separated by runs of spaces and/or tabs
FIELD_SEPARATOR = re.compile(r"[ \t]+")

# Optional sign followed by ASCII digits (what C's atoi would accept cleanly)
INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")


def split_lines(text: str) -> List[str]:
    """
    Split text into lines on '\\n', '\\r\\n' and '\\r' only.

    str.splitlines() also breaks on form feeds, '\\x85' and other Unicode
    separators, which may legitimately appear inside a color name.
    """
    if not text:
        return []
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _printable(value: str) -> str:
    """Turn surrogate-escaped bytes back into text that can be printed."""
    return value.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')


# ==============================================================================
# GPL PARSER CLASS
# ==============================================================================

class GPLParser:
    """
    Parser for GIMP .gpl palette files.

    Attributes:
        capacity (int): Maximum number of colors to keep (None = no limit)

    Usage:
        parser = GPLParser(capacity=2048)

        # From a file
        palette = parser.load("forest.gpl")

        # From text already in memory
        palette = parser.load_from_text("GIMP Palette\\n0 0 0\\n")
    """

    def __init__(self, capacity: Optional[int] = DEFAULT_CAPACITY):
        if capacity is not None and capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity

    # ==========================================================================
    # PUBLIC METHODS
    # ==========================================================================

    def load(self, file_path: str) -> Palette:
        """
        Load a palette from a .gpl file.

        Args:
            file_path: Path to the .gpl file

        Returns:
            Palette with the colors in file order

        Raises:
            FormatError: The file is not a valid GIMP palette
            OSError:     The file cannot be opened or read
        """
        # utf-8-sig drops a leading BOM so the header check still matches.
        # Color names may be in any 8-bit encoding; undecodable bytes are
        # kept as surrogates and only matter if they land in a number.
        with open(file_path, 'r', encoding='utf-8-sig',
                  errors='surrogateescape', newline=None) as f:
            text = f.read()

        return self.load_from_text(text, str(file_path))

    def load_from_text(self, text: str, source: str = "") -> Palette:
        """
        Parse palette text that is already in memory.

        Args:
            text:   Full contents of a .gpl file
            source: Name used in error messages (usually the file path)

        Returns:
            Parsed Palette
        """
        return self.parse_lines(split_lines(text), source)

    def parse_lines(self, lines: Iterable[str], source: str = "") -> Palette:
        """
        Parse a sequence of lines (without or with line terminators).

        This is the core of the parser: the header check, line
        classification, color parsing and capacity policy all happen here.
        """
        palette = Palette(capacity=self.capacity, source=source)
        line_iter = iter(lines)

        header = next(line_iter, None)
        if header is None:
            raise FormatError("File is empty, expected 'GIMP Palette' header",
                              path=source, line_number=1)
        header = header.rstrip("\r\n")
        if header[:len(GPL_SIGNATURE)] != GPL_SIGNATURE:
            raise FormatError("Not a GIMP palette file (missing 'GIMP Palette' header)",
                              path=source, line_number=1, line=header)

        for line_number, raw_line in enumerate(line_iter, start=2):
            line = raw_line.rstrip("\r\n")

            # Blank lines carry no data
            if not line.strip(" \t"):
                continue

            first = line[0]
            if first == COMMENT_PREFIX:
                continue
            if first == NAME_PREFIX:
                self._read_name(line, palette)
                continue
            if first == COLUMNS_PREFIX:
                self._read_columns(line, palette)
                continue

            if palette.is_full:
                warning = CapacityWarning(source, palette.capacity, line_number)
                print(f"[WARN] {warning}")
                palette.warnings.append(warning)
                palette.truncated = True
                break

            palette.append(self._parse_color_line(line, line_number, source))

        return palette

    # ==========================================================================
    # LINE PARSING
    # ==========================================================================

    @staticmethod
    def _parse_color_line(line: str, line_number: int, source: str) -> Color:
        """
        Parse 'R G B [name]' into a Color.

        Raises:
            FormatError: Missing fields, non-numeric field or value out of range
        """
        fields = FIELD_SEPARATOR.split(line.strip(" \t"))
        if len(fields) < 3:
            raise FormatError(
                f"Color line needs 3 values (red green blue), found {len(fields)}",
                path=source, line_number=line_number, line=line,
            )

        channels: List[int] = []
        for channel_name, token in zip(("red", "green", "blue"), fields[:3]):
            if not INTEGER_TOKEN.fullmatch(token):
                raise FormatError(
                    f"Invalid {channel_name} value {token!r} (expected an integer)",
                    path=source, line_number=line_number, line=line, token=token,
                )
            value = int(token)
            if not CHANNEL_MIN <= value <= CHANNEL_MAX:
                raise FormatError(
                    f"{channel_name.capitalize()} value {value} is out of range "
                    f"(all values must be between {CHANNEL_MIN} and {CHANNEL_MAX})",
                    path=source, line_number=line_number, line=line, token=token,
                )
            channels.append(value)

        return Color(*channels)

    @staticmethod
    def _read_name(line: str, palette: Palette):
        # "Name: Forest" -> "Forest"; other N-lines are skipped silently
        key, sep, value = line.partition(":")
        if sep and key.strip() == "Name":
            palette.name = _printable(value.strip())

    @staticmethod
    def _read_columns(line: str, palette: Palette):
        key, sep, value = line.partition(":")
        if sep and key.strip() == "Columns":
            value = value.strip()
            if value.isdigit():
                palette.columns = int(value)


# ==============================================================================
# CONVENIENCE FUNCTION
# ==============================================================================

def load_palette(file_path: str, capacity: Optional[int] = DEFAULT_CAPACITY) -> Palette:
    """
    Load a .gpl file into a Palette.

    Args:
        file_path: Path to the .gpl file
        capacity:  Maximum number of colors to keep (None = no limit)

    Returns:
        Parsed Palette

    Raises:
        FormatError: Invalid palette content
        OSError:     File cannot be read
    """
    return GPLParser(capacity=capacity).load(file_path)


# ==============================================================================
# STANDALONE USAGE
# ==============================================================================
if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m gpl2ase.parsers.gpl_parser <file.gpl>")
        sys.exit(1)

    try:
        loaded = load_palette(sys.argv[1])
    except (FormatError, OSError) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    print(f"Loaded palette: {sys.argv[1]}")
    print(f"Name:   {loaded.name or '(none)'}")
    print(f"Colors: {len(loaded)}")
    for i, color in enumerate(loaded.colors[:10]):
        print(f"  {i:3d}: R={color.red:3d} G={color.green:3d} B={color.blue:3d}  #{color.hex_name}")
