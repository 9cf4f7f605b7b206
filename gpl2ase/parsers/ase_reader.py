# ==============================================================================
# ASE ARCHIVE READER
# ==============================================================================
# Decodes the RGB swatches of an .ase archive so written files can be
# checked: the CLI 'inspect' command lists them and the test suite uses them
# to confirm what the writer produced.
#
# Only color blocks in the "RGB " model are decoded. Group start/end blocks
# are walked over. Any other color model is reported as a FormatError.
#
# USAGE EXAMPLE:
# --------------
#   for swatch in read_archive("forest.ase"):
#       print(swatch.name, swatch.to_rgb())
# ==============================================================================

import struct
from dataclasses import dataclass
from typing import List, Tuple

from ..core.errors import FormatError
from .ase_writer import (
    ASE_SIGNATURE, ASE_VERSION, COLOR_MODEL_RGB, COLOR_START,
    GROUP_END, GROUP_START, HEADER_SIZE,
)


COLOR_TYPE_NAMES = {0: "Global", 1: "Spot", 2: "Normal"}


@dataclass
class Swatch:
    """
    One decoded color block.

    Attributes:
        name:       Swatch name (hex code for archives written by gpl2ase)
        model:      Color model tag without padding, e.g. "RGB"
        values:     Channel values as stored (0.0-1.0)
        color_type: 0 = Global, 1 = Spot, 2 = Normal
    """
    name: str
    model: str
    values: Tuple[float, ...]
    color_type: int = 0

    @property
    def color_type_name(self) -> str:
        return COLOR_TYPE_NAMES.get(self.color_type, f"Unknown({self.color_type})")

    def to_rgb(self) -> Tuple[int, int, int]:
        """Map the unit floats back to 0-255 integers."""
        r, g, b = (int(round(v * 255.0)) for v in self.values)
        return (r, g, b)


def _fail(message: str, source: str, offset: int) -> FormatError:
    return FormatError(f"{message} at offset {offset}", path=source)


def decode_archive(data: bytes, source: str = "") -> List[Swatch]:
    """
    Decode the swatches stored in .ase bytes.

    Args:
        data:   Complete archive contents
        source: Name used in error messages

    Returns:
        Swatches in file order

    Raises:
        FormatError: Bad signature or version, truncated or malformed block
    """
    if len(data) < HEADER_SIZE:
        raise _fail(f"Archive too small ({len(data)} bytes)", source, 0)

    signature, major, minor, block_count = struct.unpack('>4sHHi', data[:HEADER_SIZE])
    if signature != ASE_SIGNATURE:
        raise _fail(f"Bad signature {signature!r}", source, 0)
    if (major, minor) != ASE_VERSION:
        raise _fail(f"Unsupported version {major}.{minor}", source, 4)

    swatches: List[Swatch] = []
    offset = HEADER_SIZE

    for _ in range(block_count):
        if offset + 6 > len(data):
            raise _fail("Truncated block header", source, offset)
        block_type, length = struct.unpack('>Hi', data[offset:offset + 6])
        offset += 6

        if length < 0 or offset + length > len(data):
            raise _fail(f"Block length {length} runs past end of file", source, offset - 4)
        block = data[offset:offset + length]

        if block_type == COLOR_START:
            swatches.append(_decode_color_block(block, source, offset))
        elif block_type not in (GROUP_START, GROUP_END):
            raise _fail(f"Unknown block type 0x{block_type:04X}", source, offset - 6)

        offset += length

    return swatches


def _decode_color_block(block: bytes, source: str, offset: int) -> Swatch:
    if len(block) < 2:
        raise _fail("Color block too short", source, offset)

    name_chars = struct.unpack('>H', block[:2])[0]
    name_end = 2 + name_chars * 2
    if name_end + 4 > len(block):
        raise _fail("Swatch name runs past end of block", source, offset)
    try:
        name = block[2:name_end].decode('utf-16-be').rstrip('\x00')
    except UnicodeDecodeError as e:
        raise _fail(f"Invalid swatch name ({e.reason})", source, offset + 2) from e

    model = block[name_end:name_end + 4]
    if model != COLOR_MODEL_RGB:
        raise _fail(f"Unsupported color model {model!r}", source, offset + name_end)

    values_end = name_end + 4 + 12
    if values_end + 2 > len(block):
        raise _fail("RGB values run past end of block", source, offset)
    values = struct.unpack('>3f', block[name_end + 4:values_end])
    color_type = struct.unpack('>h', block[values_end:values_end + 2])[0]

    return Swatch(name=name, model=model.decode('ascii').strip(),
                  values=tuple(values), color_type=color_type)


def read_archive(file_path: str) -> List[Swatch]:
    """
    Read and decode an .ase file.

    Raises:
        FormatError: The file is not a valid RGB swatch archive
        OSError:     The file cannot be read
    """
    with open(file_path, 'rb') as f:
        data = f.read()
    return decode_archive(data, str(file_path))
