# ==============================================================================
# GPL2ASE - CONVERSION PIPELINE
# ==============================================================================
# Runs one .gpl -> .ase conversion from start to finish:
#
#   1. Work out the output path (add '.ase' when missing)
#   2. Refuse to replace an existing archive unless overwriting is enabled
#   3. Parse the palette (with the configured color limit)
#   4. Write the archive
#   5. Optionally write a PNG preview next to it
#   6. Optionally record the conversion in the history database
#
# Parse and write errors propagate to the caller untouched. Failures in the
# optional steps (preview, history) only print a warning: the archive is
# already written at that point.
#
# Usage:
#   converter = PaletteConverter()
#   result = converter.convert("forest.gpl", "forest")   # -> forest.ase
#   print(f"{result.color_count} colors written to {result.output_path}")
# ==============================================================================

import os
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .core.config import Config, get_config
from .core.database import Database
from .core.errors import ArchiveWriteError, CapacityWarning
from .core.hasher import FileHasher
from .parsers.ase_writer import save_archive
from .parsers.gpl_parser import load_palette
from .parsers.preview import save_preview


ASE_EXTENSIONS = ('.ase', '.ASE')


# ==============================================================================
# OUTPUT NAMING
# ==============================================================================

def ensure_ase_extension(file_path: str) -> str:
    """
    Add '.ase' to a file name unless it already ends in '.ase' or '.ASE'.

    Example:
        >>> ensure_ase_extension("forest")
        'forest.ase'
        >>> ensure_ase_extension("FOREST.ASE")
        'FOREST.ASE'
    """
    file_path = str(file_path)
    if file_path.endswith(ASE_EXTENSIONS):
        return file_path
    return file_path + '.ase'


def default_output_path(input_path: str) -> str:
    """'palettes/forest.gpl' -> 'palettes/forest.ase'"""
    return os.path.splitext(str(input_path))[0] + '.ase'


# ==============================================================================
# RESULT
# ==============================================================================

@dataclass
class ConversionResult:
    """
    Outcome of a successful conversion.

    Attributes:
        source_path:  The .gpl file that was read
        output_path:  The .ase file that was written
        palette_name: 'Name:' directive of the source, if any
        color_count:  Number of colors in the archive
        truncated:    True when colors past the limit were dropped
        warnings:     Non-fatal warnings from parsing
        source_md5:   MD5 of the source file
        output_md5:   MD5 of the written archive
        preview_path: PNG preview path, if one was written
    """
    source_path: str
    output_path: str
    palette_name: str = ""
    color_count: int = 0
    truncated: bool = False
    warnings: List[CapacityWarning] = field(default_factory=list)
    source_md5: Optional[str] = None
    output_md5: Optional[str] = None
    preview_path: Optional[str] = None


# ==============================================================================
# CONVERTER
# ==============================================================================

class PaletteConverter:
    """
    Converts GIMP palettes to Adobe swatch archives.

    Attributes:
        config:   Settings (capacity, overwrite, preview, history)
        hasher:   Used to fingerprint source and output files
    """

    def __init__(self, config: Optional[Config] = None,
                 database: Optional[Database] = None):
        self.config = config if config is not None else get_config()
        self.hasher = FileHasher()
        self._database = database

    @property
    def database(self) -> Database:
        """History database, opened on first use."""
        if self._database is None:
            self._database = Database(self.config.database_path)
        return self._database

    def close(self):
        """Close the history database if it was opened."""
        if self._database is not None:
            self._database.close()

    def _debug(self, message: str):
        if self.config.debug_mode:
            print(f"[DEBUG] {message}")

    def convert(self, input_path: str, output_path: Optional[str] = None,
                overwrite: Optional[bool] = None) -> ConversionResult:
        """
        Convert one palette file.

        Args:
            input_path:  .gpl file to read
            output_path: Archive to write ('.ase' is appended if missing).
                         Defaults to the input path with an '.ase' suffix.
            overwrite:   Override the overwrite_existing setting

        Returns:
            ConversionResult describing what was written

        Raises:
            FormatError:       The palette file is invalid
            OSError:           The palette file cannot be read
            ArchiveWriteError: The archive cannot be written or would
                               replace a file it must not replace
        """
        input_path = str(input_path)
        if output_path:
            output_path = ensure_ase_extension(output_path)
        else:
            output_path = default_output_path(input_path)

        if overwrite is None:
            overwrite = self.config.overwrite_existing

        if os.path.abspath(output_path) == os.path.abspath(input_path):
            raise ArchiveWriteError(output_path, "output would replace the input palette")
        if os.path.exists(output_path) and not overwrite:
            raise ArchiveWriteError(output_path, "file already exists")

        capacity = self.config.capacity_limit
        self._debug(f"Reading {input_path} (limit: {capacity or 'none'})")
        palette = load_palette(input_path, capacity=capacity)

        self._debug(f"Writing {len(palette)} colors to {output_path}")
        save_archive(output_path, palette)

        result = ConversionResult(
            source_path=os.path.abspath(input_path),
            output_path=os.path.abspath(output_path),
            palette_name=palette.name,
            color_count=len(palette),
            truncated=palette.truncated,
            warnings=list(palette.warnings),
            source_md5=self.hasher.hash_file_md5(input_path),
            output_md5=self.hasher.hash_file_md5(output_path),
        )

        if self.config.generate_preview:
            preview_path = os.path.splitext(output_path)[0] + '.png'
            try:
                result.preview_path = os.path.abspath(
                    save_preview(palette, preview_path,
                                 cell_size=self.config.preview_cell_size)
                )
            except OSError as e:
                print(f"[WARN] Could not write preview {preview_path}: {e}")

        if self.config.record_history:
            self._record(result)

        return result

    def _record(self, result: ConversionResult):
        try:
            self.database.record_conversion(
                source_path=result.source_path,
                output_path=result.output_path,
                color_count=result.color_count,
                truncated=result.truncated,
                palette_name=result.palette_name,
                source_md5=result.source_md5,
                output_md5=result.output_md5,
                preview_path=result.preview_path,
            )
        except (SQLAlchemyError, OSError) as e:
            print(f"[WARN] Could not record conversion history: {e}")
