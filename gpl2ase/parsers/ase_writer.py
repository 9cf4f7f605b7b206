# ==============================================================================
# ASE (ADOBE SWATCH EXCHANGE) WRITER
# ==============================================================================
# This module serializes a Palette into an Adobe .ase swatch archive.
#
# ASE FILE FORMAT (RGB swatches only):
# ------------------------------------
# Everything is big endian, whatever the host byte order is.
#
#   HEADER (12 bytes)
#     41 53 45 46          "ASEF" signature
#     00 01 00 00          version 1.0 (2 x uint16)
#     00 00 00 02          number of color blocks (int32)
#
#   COLOR BLOCK (6 + 34 bytes, repeated)
#     00 01                color start marker
#     00 00 00 22          block length (34)
#     00 07                name length in characters, incl. terminator
#     00 62 00 38 ...      name "b8c2b9", each character as 2 bytes
#     00 00                name terminator
#     52 47 42 20          color model "RGB "
#     3F 38 B8 B9 ...      red, green, blue as IEEE-754 float32 (0.0-1.0)
#     00 00                color type (0 = Global, 1 = Spot, 2 = Normal)
#
# The swatch name is just the hex code of the color, so it carries no data
# of its own, but it must be written exactly like this for the output to
# match archives from other tools byte for byte.
#
# USAGE EXAMPLE:
# --------------
#   writer = AseWriter()
#   writer.save(palette, "forest.ase")
#
#   # Or just get the bytes
#   data = encode_archive(palette)
#
# REFERENCES:
# -----------
#   - http://www.selapa.net/swatches/colors/fileformats.php#adobe_ase
# ==============================================================================

import math
import os
import stat
import struct
import tempfile
from typing import Tuple

from ..core.errors import ArchiveWriteError
from ..core.palette import Color, Palette


# ==============================================================================
# CONSTANTS
# ==============================================================================

ASE_SIGNATURE = b"ASEF"
ASE_VERSION: Tuple[int, int] = (1, 0)

# Block type markers
COLOR_START = 0x0001
GROUP_START = 0xC001
GROUP_END = 0xC002

# Name (2+12+2) + model (4) + three floats (12) + color type (2)
RGB_BLOCK_LENGTH = 34

# Six hex digits plus the terminator
HEX_NAME_LENGTH = 7

COLOR_MODEL_RGB = b"RGB "

COLOR_TYPE_GLOBAL = 0
COLOR_TYPE_SPOT = 1
COLOR_TYPE_NORMAL = 2

STRING_TERMINATOR = b"\x00\x00"

HEADER_SIZE = 12


# ==============================================================================
# BIG ENDIAN INTEGER HELPERS
# ==============================================================================
# struct with an explicit '>' never looks at the host byte order.

def pack_uint16_be(value: int) -> bytes:
    """Serialize an unsigned 16-bit integer, most significant byte first."""
    return struct.pack('>H', value)


def pack_int16_be(value: int) -> bytes:
    return struct.pack('>h', value)


def pack_int32_be(value: int) -> bytes:
    """Serialize a signed 32-bit integer, most significant byte first."""
    return struct.pack('>i', value)


# ==============================================================================
# IEEE-754 PACKING
# ==============================================================================

def pack_ieee754(value: float, bits: int = 32, expbits: int = 8) -> int:
    """
    Pack a float into an IEEE-754 bit pattern of the given width.

    Works for any layout (16/32/64 bit) from its exponent width, so the
    result never depends on how the host stores floats. The significand is
    rounded to nearest, ties to even, the same as a hardware conversion.

    Args:
        value:   Number to pack
        bits:    Total width of the format
        expbits: Width of the exponent field

    Returns:
        The bit pattern as a non-negative int

    Example:
        >>> hex(pack_ieee754(1.0))
        '0x3f800000'
    """
    significand_bits = bits - expbits - 1
    bias = (1 << (expbits - 1)) - 1
    max_biased = (1 << expbits) - 1
    sign_shift = bits - 1

    if math.isnan(value):
        # Quiet NaN
        return (max_biased << significand_bits) | (1 << (significand_bits - 1))

    sign = 1 if math.copysign(1.0, value) < 0 else 0
    magnitude = abs(value)

    if magnitude == 0.0:
        return sign << sign_shift

    if math.isinf(magnitude):
        return (sign << sign_shift) | (max_biased << significand_bits)

    # magnitude = mantissa * 2**exponent with 0.5 <= mantissa < 1,
    # i.e. 1.f * 2**(exponent - 1) in normalized form
    mantissa, exponent = math.frexp(magnitude)
    biased = exponent - 1 + bias

    if biased <= 0:
        # Subnormal: fixed exponent, no implicit leading bit. A rounding
        # carry into bit `significand_bits` lands in the exponent field,
        # which is exactly the smallest normal number.
        significand = round(math.ldexp(magnitude, bias - 1 + significand_bits))
        return (sign << sign_shift) | significand

    significand = round(math.ldexp(mantissa, significand_bits + 1))
    if significand == 1 << (significand_bits + 1):
        significand >>= 1
        biased += 1

    if biased >= max_biased:
        return (sign << sign_shift) | (max_biased << significand_bits)

    fraction = significand - (1 << significand_bits)
    return (sign << sign_shift) | (biased << significand_bits) | fraction


def pack_float32_be(value: float) -> bytes:
    """Pack a float as 4 bytes of big endian IEEE-754 single precision."""
    return struct.pack('>I', pack_ieee754(value, 32, 8))


# ==============================================================================
# STRING ENCODING
# ==============================================================================

def widen_string(text: str) -> bytes:
    """
    Store each character as a 2-byte big endian code unit.

    Only code points 0x00-0xFF are allowed: the high byte is always 00 and
    the low byte is the character code, e.g. "b8" -> 00 62 00 38.

    Raises:
        ValueError: If a character is outside 0x00-0xFF
    """
    out = bytearray()
    for ch in text:
        code = ord(ch)
        if code > 0xFF:
            raise ValueError(f"Character {ch!r} cannot be stored in a swatch name")
        out.append(0x00)
        out.append(code)
    return bytes(out)


def encode_name(text: str) -> bytes:
    """Length prefix (characters + terminator), widened text and terminator."""
    return pack_uint16_be(len(text) + 1) + widen_string(text) + STRING_TERMINATOR


# ==============================================================================
# BLOCK ENCODING
# ==============================================================================

def encode_header(color_count: int) -> bytes:
    """12-byte file header: signature, version and number of blocks."""
    major, minor = ASE_VERSION
    return (ASE_SIGNATURE
            + pack_uint16_be(major)
            + pack_uint16_be(minor)
            + pack_int32_be(color_count))


def encode_color_block(color: Color) -> bytes:
    """
    Encode a single RGB color block, including its start marker and length.

    Args:
        color: Color to encode

    Returns:
        40 bytes (6 bytes of block header + 34 bytes of body)
    """
    body = bytearray()
    # The name is the hex code of the color itself, e.g. "b8c2b9"
    body.extend(encode_name(color.hex_name))
    body.extend(COLOR_MODEL_RGB)
    for channel in color.to_unit_floats():
        body.extend(pack_float32_be(channel))
    body.extend(pack_int16_be(COLOR_TYPE_GLOBAL))

    return pack_uint16_be(COLOR_START) + pack_int32_be(len(body)) + bytes(body)


def encode_archive(palette: Palette) -> bytes:
    """
    Serialize a whole palette into .ase bytes.

    Colors are written in palette order.
    """
    out = bytearray(encode_header(len(palette)))
    for color in palette:
        out.extend(encode_color_block(color))
    return bytes(out)


# ==============================================================================
# ASE WRITER CLASS
# ==============================================================================

class AseWriter:
    """
    Writes palettes to Adobe .ase swatch files.

    Usage:
        writer = AseWriter()
        writer.save(palette, "colors.ase")
    """

    def save_to_bytes(self, palette: Palette) -> bytes:
        return encode_archive(palette)

    def save(self, palette: Palette, file_path: str):
        """
        Write a palette to an .ase file.

        The archive is written to a temporary file next to the destination
        and moved into place only once it is complete, so a failed or
        interrupted write never leaves a partial archive behind and never
        damages an existing one.

        Args:
            palette:   Palette to write
            file_path: Destination path

        Raises:
            ArchiveWriteError: The file cannot be created or written
        """
        data = self.save_to_bytes(palette)
        file_path = str(file_path)
        directory = os.path.dirname(os.path.abspath(file_path))

        try:
            temp = tempfile.NamedTemporaryFile(
                mode='wb', dir=directory, delete=False,
                prefix='.' + os.path.basename(file_path) + '.', suffix='.tmp',
            )
        except OSError as e:
            raise ArchiveWriteError(file_path, e.strerror or str(e)) from e

        try:
            with temp:
                temp.write(data)
            os.chmod(temp.name, _target_mode(file_path))
            os.replace(temp.name, file_path)
        except OSError as e:
            raise ArchiveWriteError(file_path, e.strerror or str(e)) from e
        finally:
            if os.path.exists(temp.name):
                os.remove(temp.name)


def _target_mode(file_path: str) -> int:
    """Permissions for the new archive: keep the old file's, else honor umask."""
    try:
        return stat.S_IMODE(os.stat(file_path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_archive(file_path: str, palette: Palette):
    """
    Write `palette` to `file_path` in .ase format.

    Raises:
        ArchiveWriteError: The file cannot be created or written
    """
    AseWriter().save(palette, file_path)
