# ==============================================================================
# GPL2ASE - MAIN ENTRY POINT
# ==============================================================================
# Launcher for running the converter from a source checkout.
#
# Usage:
#   python main.py convert in.gpl out.ase   # Any CLI command
#   python main.py --version                # Show version
#   python main.py --check                  # Check dependencies
#   python main.py --paths                  # Show data paths
#
# Once installed, the same CLI is available as the `gpl2ase` command.
# ==============================================================================

import sys
from typing import List, Optional


# ==============================================================================
# DEPENDENCY CHECKS
# ==============================================================================

# import name -> package name on PyPI
REQUIRED_PACKAGES = {
    'sqlalchemy': 'SQLAlchemy',
    'PIL': 'Pillow',
}


def check_dependencies():
    """
    Check if required dependencies are installed.

    Returns:
        Tuple of (all_ok, missing_packages)
    """
    missing = []

    for module_name, package_name in REQUIRED_PACKAGES.items():
        try:
            __import__(module_name)
        except ImportError:
            missing.append(package_name)

    return (len(missing) == 0, missing)


# ==============================================================================
# ARGUMENT PARSING
# ==============================================================================

def parse_args(argv: List[str]):
    """Pick out launcher-only flags; everything else goes to the CLI."""
    return {
        'version': '--version' in argv or '-v' in argv,
        'check': '--check' in argv,
        'paths': '--paths' in argv,
    }


# ==============================================================================
# MAIN FUNCTION
# ==============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for GPL2ASE.

    Handles the launcher flags, then hands over to the CLI.
    """
    argv = sys.argv[1:] if argv is None else argv
    args = parse_args(argv)

    if args['check']:
        print("Checking dependencies...")
        print(f"  Python: {sys.version.split()[0]}")

        all_ok, missing = check_dependencies()
        if all_ok:
            print("[OK] All dependencies installed")
        else:
            print(f"[MISSING] {', '.join(missing)}")
            print(f"Install with: pip install {' '.join(missing)}")
        return 0 if all_ok else 1

    all_ok, missing = check_dependencies()
    if not all_ok:
        print(f"[ERROR] Missing required packages: {', '.join(missing)}")
        return 1

    import gpl2ase
    from gpl2ase.core.paths import Paths

    if args['version']:
        print(f"GPL2ASE v{gpl2ase.__version__}")
        print(gpl2ase.__description__)
        return 0

    if args['paths']:
        print("GPL2ASE Paths:")
        print(f"  App Path:       {Paths.get_app_dir()}")
        print(f"  User Data:      {Paths.get_user_data_dir()}")
        print(f"  Config:         {Paths.get_config_path()}")
        print(f"  History:        {Paths.get_database_path()}")
        return 0

    from gpl2ase.cli import main as cli_main
    return cli_main(argv)


# ==============================================================================
# SCRIPT ENTRY POINT
# ==============================================================================
if __name__ == "__main__":
    sys.exit(main())
