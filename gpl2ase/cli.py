# ==============================================================================
# GPL2ASE - COMMAND LINE INTERFACE
# ==============================================================================
# Commands:
#   - convert: Convert a GIMP .gpl palette to an Adobe .ase archive
#   - inspect: List the swatches stored in an .ase archive
#   - history: Show recent conversions
#   - stats:   Show conversion statistics
#
# Usage:
#   gpl2ase convert forest.gpl                 # -> forest.ase
#   gpl2ase convert forest.gpl out/forest      # -> out/forest.ase
#   gpl2ase convert huge.gpl --capacity 0      # no color limit
#   gpl2ase inspect forest.ase
#   gpl2ase history --limit 5
#
# Exit codes:
#   0  success
#   1  invalid palette, unreadable input or unwritable output
#   2  bad command line (argparse)
# ==============================================================================

import os
import sys
import argparse
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .converter import PaletteConverter
from .core.config import Config, get_config
from .core.database import Database
from .core.errors import FormatError
from .parsers.ase_reader import read_archive


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


# ==============================================================================
# COLOR HELPERS FOR TERMINAL OUTPUT
# ==============================================================================
class Colors:
    """ANSI color codes for terminal output."""
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-supporting terminals)."""
        cls.BLUE = ''
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


def print_header(text: str):
    """Print a header."""
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}  {text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}\n")


def print_success(text: str):
    """Print a success message."""
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")


def print_error(text: str):
    """Print an error message."""
    print(f"{Colors.RED}✗ {text}{Colors.END}", file=sys.stderr)


def print_info(text: str):
    """Print an info message."""
    print(f"{Colors.BLUE}ℹ {text}{Colors.END}")


def print_warning(text: str):
    """Print a warning message."""
    print(f"{Colors.YELLOW}⚠ {text}{Colors.END}")


def _enable_windows_ansi():
    try:
        import ctypes
        kernel32 = ctypes.windll.kernel32
        kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
    except (AttributeError, OSError):
        Colors.disable()


# ==============================================================================
# CONFIG
# ==============================================================================
def load_config(args) -> Config:
    """Config from --config if given, otherwise the user's global config."""
    if getattr(args, 'config', None):
        config = Config(args.config)
        config.load()
        return config
    return get_config()


# ==============================================================================
# CONVERT COMMAND
# ==============================================================================
def cmd_convert(args) -> int:
    """Convert a .gpl palette to an .ase archive."""
    # Command-line overrides apply to this run only
    config = load_config(args).copy()

    try:
        if args.capacity is not None:
            config.palette_capacity = args.capacity
        if args.preview:
            config.generate_preview = True
        if args.no_history:
            config.record_history = False
        if args.debug:
            config.debug_mode = True
    except (TypeError, ValueError) as e:
        print_error(str(e))
        return EXIT_USAGE

    print_header(f"GPL2ASE v{__version__} - GIMP GPL -> Adobe ASE")

    converter = PaletteConverter(config=config)
    try:
        result = converter.convert(args.input, args.output, overwrite=args.overwrite)
    except FormatError as e:
        print_error(f"Invalid palette: {e}")
        return EXIT_FAILURE
    except OSError as e:
        print_error(str(e))
        return EXIT_FAILURE
    finally:
        converter.close()

    print_info(f"Converted GIMP gpl palette '{args.input}' to Adobe ase palette")
    if result.palette_name:
        print_info(f"Palette name: {result.palette_name}")
    for warning in result.warnings:
        print_warning(str(warning))
    print_success(f"{result.color_count} colors saved as '{result.output_path}'")
    if result.preview_path:
        print_success(f"Preview saved as '{result.preview_path}'")
    return EXIT_OK


# ==============================================================================
# INSPECT COMMAND
# ==============================================================================
def cmd_inspect(args) -> int:
    """List the swatches of an .ase archive."""
    try:
        swatches = read_archive(args.archive)
    except FormatError as e:
        print_error(f"Invalid archive: {e}")
        return EXIT_FAILURE
    except OSError as e:
        print_error(f"Cannot read {args.archive}: {e}")
        return EXIT_FAILURE

    print_header(f"Swatches in {os.path.basename(args.archive)}")

    print(f"{'#':<6} {'Name':<12} {'R':>4} {'G':>4} {'B':>4}  {'Type':<8}")
    print("-" * 44)

    shown = swatches if args.limit <= 0 else swatches[:args.limit]
    for index, swatch in enumerate(shown):
        r, g, b = swatch.to_rgb()
        print(f"{index:<6} {swatch.name:<12} {r:>4} {g:>4} {b:>4}  {swatch.color_type_name:<8}")

    if len(shown) < len(swatches):
        print(f"... and {len(swatches) - len(shown)} more")
    print(f"\nTotal: {len(swatches)} swatches")
    return EXIT_OK


# ==============================================================================
# HISTORY COMMANDS
# ==============================================================================
def _query_history(args, query):
    db = Database(load_config(args).database_path)
    try:
        return query(db)
    finally:
        db.close()


def cmd_history(args) -> int:
    """Show recent conversions."""
    print_header("Recent Conversions")

    try:
        conversions = _query_history(args, lambda db: db.get_recent_conversions(args.limit))
    except (SQLAlchemyError, OSError) as e:
        print_error(f"Cannot read history: {e}")
        return EXIT_FAILURE

    if not conversions:
        print_warning("No conversions recorded")
        return EXIT_OK

    print(f"{'ID':<5} {'When (UTC)':<20} {'Colors':>6}  {'Output'}")
    print("-" * 70)
    for conversion in conversions:
        when = conversion.created_at.strftime('%Y-%m-%d %H:%M:%S') if conversion.created_at else ''
        flag = '*' if conversion.truncated else ' '
        print(f"{conversion.id:<5} {when:<20} {conversion.color_count:>6}{flag} {conversion.output_path}")

    if any(c.truncated for c in conversions):
        print("\n* palette was truncated at the color limit")
    return EXIT_OK


def cmd_stats(args) -> int:
    """Show overall statistics."""
    print_header("GPL2ASE Statistics")

    try:
        stats = _query_history(args, lambda db: db.get_stats())
    except (SQLAlchemyError, OSError) as e:
        print_error(f"Cannot read history: {e}")
        return EXIT_FAILURE

    print(f"Conversions:          {stats['conversions']}")
    print(f"Distinct palettes:    {stats['sources']}")
    print(f"Colors written:       {stats['colors']}")
    print(f"Truncated palettes:   {stats['truncated']}")
    return EXIT_OK


# ==============================================================================
# MAIN ARGUMENT PARSER
# ==============================================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gpl2ase',
        description="GPL2ASE - GIMP .gpl to Adobe .ase palette converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s convert forest.gpl              Write forest.ase
  %(prog)s convert forest.gpl out/forest   Write out/forest.ase
  %(prog)s inspect forest.ase              List swatches in an archive
  %(prog)s history                         Show recent conversions
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='Use this config file instead of the default')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # -------------------------------------------------------------------------
    # CONVERT command
    # -------------------------------------------------------------------------
    convert_parser = subparsers.add_parser('convert', help='Convert a .gpl palette to .ase')
    convert_parser.add_argument('input', help='GIMP palette (.gpl) to read')
    convert_parser.add_argument('output', nargs='?',
                                help="Archive to write ('.ase' is added if missing)")
    convert_parser.add_argument('--capacity', type=int,
                                help='Maximum number of colors (0 = no limit)')
    overwrite = convert_parser.add_mutually_exclusive_group()
    overwrite.add_argument('--overwrite', dest='overwrite', action='store_true', default=None,
                           help='Replace an existing archive')
    overwrite.add_argument('--no-overwrite', dest='overwrite', action='store_false',
                           help='Fail if the archive already exists')
    convert_parser.add_argument('--preview', action='store_true',
                                help='Also write a PNG swatch preview')
    convert_parser.add_argument('--no-history', action='store_true',
                                help='Do not record this conversion')
    convert_parser.add_argument('--debug', action='store_true', help='Print debug messages')
    convert_parser.set_defaults(func=cmd_convert)

    # -------------------------------------------------------------------------
    # INSPECT command
    # -------------------------------------------------------------------------
    inspect_parser = subparsers.add_parser('inspect', help='List swatches in an .ase archive')
    inspect_parser.add_argument('archive', help='Archive (.ase) to read')
    inspect_parser.add_argument('--limit', type=int, default=0,
                                help='Max swatches to show (0 = all)')
    inspect_parser.set_defaults(func=cmd_inspect)

    # -------------------------------------------------------------------------
    # HISTORY / STATS commands
    # -------------------------------------------------------------------------
    history_parser = subparsers.add_parser('history', help='Show recent conversions')
    history_parser.add_argument('--limit', type=int, default=20, help='Max rows to show')
    history_parser.set_defaults(func=cmd_history)

    stats_parser = subparsers.add_parser('stats', help='Show conversion statistics')
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color or not sys.stdout.isatty():
        Colors.disable()
    elif sys.platform == 'win32':
        _enable_windows_ansi()

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
