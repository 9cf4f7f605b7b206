# ==============================================================================
# PALETTE DATA MODEL
# ==============================================================================
# In-memory palette shared by the .gpl parser and the .ase encoder.
#
# A Palette is an ordered list of RGB colors with an optional upper bound on
# how many colors it may hold. The parser fills it once, in source line order,
# and the encoder only reads it.
#
# USAGE EXAMPLE:
# --------------
#   palette = Palette(capacity=2048)
#   palette.append(Color(184, 194, 185))
#   palette.append(Color(56, 43, 38))
#
#   for color in palette:
#       print(color.hex_name)        # "b8c2b9", "382b26"
# ==============================================================================

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .errors import CapacityWarning, PaletteFullError


# ==============================================================================
# CONSTANTS
# ==============================================================================

# Color limit of the classic converter; used when no capacity is configured
DEFAULT_CAPACITY = 2048

CHANNEL_MIN = 0
CHANNEL_MAX = 255


# ==============================================================================
# COLOR
# ==============================================================================

@dataclass(frozen=True)
class Color:
    """
    A single 8-bit RGB color.

    Attributes:
        red:   Red channel (0-255)
        green: Green channel (0-255)
        blue:  Blue channel (0-255)
    """
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for channel, value in (("red", self.red), ("green", self.green), ("blue", self.blue)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{channel} must be an int, got {type(value).__name__}")
            if not CHANNEL_MIN <= value <= CHANNEL_MAX:
                raise ValueError(
                    f"{channel} value {value} out of range "
                    f"({CHANNEL_MIN}-{CHANNEL_MAX})"
                )

    @property
    def rgb(self) -> Tuple[int, int, int]:
        """Channels as an (r, g, b) tuple."""
        return (self.red, self.green, self.blue)

    @property
    def hex_name(self) -> str:
        """Lowercase, zero-padded hex code without '#', e.g. 'b8c2b9'."""
        return f"{self.red:02x}{self.green:02x}{self.blue:02x}"

    def to_unit_floats(self) -> Tuple[float, float, float]:
        """Map each channel to the 0.0-1.0 range (value / 255)."""
        return (self.red / 255.0, self.green / 255.0, self.blue / 255.0)


# ==============================================================================
# PALETTE
# ==============================================================================

@dataclass
class Palette:
    """
    Ordered, optionally bounded list of colors.

    Attributes:
        capacity:  Maximum number of colors, or None for no limit
        name:      Value of the 'Name:' directive, if the source had one
        columns:   Value of the 'Columns:' directive, if the source had one
        source:    Path the palette was loaded from
        truncated: True when the parser dropped colors past the capacity
        warnings:  Non-fatal warnings raised while building the palette
    """
    capacity: Optional[int] = DEFAULT_CAPACITY
    name: str = ""
    columns: Optional[int] = None
    source: str = ""
    truncated: bool = False
    warnings: List[CapacityWarning] = field(default_factory=list)
    _colors: List[Color] = field(default_factory=list, repr=False)

    def __post_init__(self):
        if self.capacity is not None and self.capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {self.capacity}")

    # --------------------------------------------------------------------------
    # Building
    # --------------------------------------------------------------------------

    def append(self, color: Color):
        """
        Add a color at the end of the palette.

        Raises:
            PaletteFullError: If the palette already holds `capacity` colors
        """
        if self.is_full:
            raise PaletteFullError(self.capacity)
        self._colors.append(color)

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self._colors) >= self.capacity

    # --------------------------------------------------------------------------
    # Read-only access
    # --------------------------------------------------------------------------

    @property
    def colors(self) -> Tuple[Color, ...]:
        return tuple(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self._colors)

    def __getitem__(self, index: int) -> Color:
        return self._colors[index]

    @classmethod
    def from_rgb(cls, triples, capacity: Optional[int] = None) -> 'Palette':
        """
        Build a palette from (r, g, b) tuples.

        Example:
            palette = Palette.from_rgb([(0, 0, 0), (255, 255, 255)])
        """
        palette = cls(capacity=capacity)
        for r, g, b in triples:
            palette.append(Color(r, g, b))
        return palette
