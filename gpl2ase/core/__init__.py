# ==============================================================================
# CORE MODULE INIT
# ==============================================================================
# Core building blocks for GPL2ASE.
#
# This package contains:
#   - Palette: In-memory color list shared by parser and writer
#   - Errors: FormatError, ArchiveWriteError, CapacityWarning, ...
#   - Config: Converter settings (JSON)
#   - Paths: Per-platform user data locations
#   - Hasher: MD5 fingerprints of palettes and archives
#   - Database: SQLite conversion history with SQLAlchemy ORM
#
# Usage:
#   from gpl2ase.core import Palette, Color, FormatError
#   from gpl2ase.core.config import get_config
# ==============================================================================

from .palette import Color, Palette, DEFAULT_CAPACITY
from .errors import (
    PaletteError, FormatError, PaletteFullError, ArchiveWriteError, CapacityWarning,
)
from .config import Config, get_config
from .paths import Paths
from .hasher import FileHasher
from .database import Database, Conversion

__all__ = [
    # Data model
    'Color',
    'Palette',
    'DEFAULT_CAPACITY',

    # Errors
    'PaletteError',
    'FormatError',
    'PaletteFullError',
    'ArchiveWriteError',
    'CapacityWarning',

    # Configuration
    'Config',
    'get_config',

    # Paths
    'Paths',

    # Hashing
    'FileHasher',

    # History
    'Database',
    'Conversion',
]
