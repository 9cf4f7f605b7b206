# ==============================================================================
# GPL2ASE - SOURCE PACKAGE
# ==============================================================================
# GIMP .gpl palette -> Adobe .ase swatch archive converter.
#
# Subpackages:
#   - core: Palette model, errors, configuration, paths, hashing, history
#   - parsers: .gpl reader, .ase writer/reader, PNG preview
#
# Entry points:
#   - main.py: launcher (--version, --check, --paths, then CLI)
#   - gpl2ase/cli.py: Command-line interface
# ==============================================================================

__version__ = "1.1.0"
__author__ = "Johan Forsblom"
__description__ = "GIMP GPL -> Adobe ASE palette converter"

# Convenience imports
from .core import (
    Color, Palette, PaletteError, FormatError, PaletteFullError,
    ArchiveWriteError, CapacityWarning, Config, get_config,
)
from .parsers import load_palette, save_archive, encode_archive, read_archive
from .converter import PaletteConverter, ConversionResult, ensure_ase_extension

__all__ = [
    '__version__',
    '__author__',
    '__description__',

    # Data model
    'Color',
    'Palette',

    # Errors
    'PaletteError',
    'FormatError',
    'PaletteFullError',
    'ArchiveWriteError',
    'CapacityWarning',

    # Configuration
    'Config',
    'get_config',

    # Format handlers
    'load_palette',
    'save_archive',
    'encode_archive',
    'read_archive',

    # Pipeline
    'PaletteConverter',
    'ConversionResult',
    'ensure_ase_extension',
]
