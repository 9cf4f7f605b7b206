# ==============================================================================
# PALETTE PREVIEW
# ==============================================================================
# Renders a palette as a grid of color cells with Pillow, so a converted
# palette can be checked at a glance without opening Photoshop.
#
# Layout:
#   - Cells are square, `cell_size` pixels wide
#   - Column count comes from the argument, then the palette's 'Columns:'
#     directive, then DEFAULT_COLUMNS
#   - Unused cells in the last row are drawn as a gray checkerboard
#
# USAGE EXAMPLE:
# --------------
#   img = render_preview(palette, cell_size=24)
#   img.save("forest.png")
# ==============================================================================

import math
from typing import Optional

from PIL import Image, ImageDraw

from ..core.palette import Palette


DEFAULT_COLUMNS = 16
DEFAULT_CELL_SIZE = 16

# Checkerboard used for empty cells
CHECKER_LIGHT = (192, 192, 192)
CHECKER_DARK = (128, 128, 128)
CHECKER_SQUARE = 4


def _grid_columns(palette: Palette, columns: Optional[int]) -> int:
    if columns:
        return columns
    if palette.columns:
        return palette.columns
    return DEFAULT_COLUMNS


def _draw_checker(draw: ImageDraw.ImageDraw, x1: int, y1: int, size: int):
    for y in range(y1, y1 + size, CHECKER_SQUARE):
        for x in range(x1, x1 + size, CHECKER_SQUARE):
            checker = ((x - x1) // CHECKER_SQUARE + (y - y1) // CHECKER_SQUARE) % 2
            fill = CHECKER_LIGHT if checker else CHECKER_DARK
            draw.rectangle(
                [x, y, min(x + CHECKER_SQUARE, x1 + size) - 1,
                 min(y + CHECKER_SQUARE, y1 + size) - 1],
                fill=fill,
            )


def render_preview(palette: Palette, cell_size: int = DEFAULT_CELL_SIZE,
                   columns: Optional[int] = None) -> Image.Image:
    """
    Create a visual representation of the palette.

    Args:
        palette:   Palette to draw
        cell_size: Size of each color cell in pixels
        columns:   Cells per row (None = palette hint or 16)

    Returns:
        RGB PIL.Image; an empty palette gives a single checkerboard cell
    """
    if cell_size < 1:
        raise ValueError(f"cell_size must be >= 1, got {cell_size}")
    if columns is not None and columns < 1:
        raise ValueError(f"columns must be >= 1, got {columns}")

    count = len(palette)
    if count:
        cols = min(_grid_columns(palette, columns), count)
        rows = math.ceil(count / cols)
    else:
        cols = rows = 1

    img = Image.new('RGB', (cols * cell_size, rows * cell_size), CHECKER_DARK)
    draw = ImageDraw.Draw(img)

    for index in range(rows * cols):
        x1 = (index % cols) * cell_size
        y1 = (index // cols) * cell_size
        if index < count:
            draw.rectangle([x1, y1, x1 + cell_size - 1, y1 + cell_size - 1],
                           fill=palette[index].rgb)
        else:
            _draw_checker(draw, x1, y1, cell_size)

    return img


def save_preview(palette: Palette, file_path: str,
                 cell_size: int = DEFAULT_CELL_SIZE,
                 columns: Optional[int] = None) -> str:
    """
    Render the palette and save it as a PNG file.

    Returns:
        The path that was written
    """
    img = render_preview(palette, cell_size=cell_size, columns=columns)
    img.save(str(file_path), format='PNG')
    return str(file_path)
