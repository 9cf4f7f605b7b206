# ==============================================================================
# PARSERS MODULE
# ==============================================================================
# File format handlers.
#
# Supported formats:
#   - GPL: GIMP palette text files (read)
#   - ASE: Adobe Swatch Exchange archives (write, plus read for checking)
#
# Additional utilities:
#   - Preview: PNG swatch sheet of a palette (Pillow)
# ==============================================================================

from .gpl_parser import GPLParser, load_palette
from .ase_writer import AseWriter, encode_archive, save_archive, pack_ieee754
from .ase_reader import Swatch, decode_archive, read_archive
from .preview import render_preview, save_preview

__all__ = [
    # GPL Parser
    'GPLParser', 'load_palette',

    # ASE Writer
    'AseWriter', 'encode_archive', 'save_archive', 'pack_ieee754',

    # ASE Reader
    'Swatch', 'decode_archive', 'read_archive',

    # Preview
    'render_preview', 'save_preview',
]
