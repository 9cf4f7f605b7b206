# ==============================================================================
# GPL2ASE - PATH UTILITIES
# ==============================================================================
# Centralized path handling for user data (config and conversion history).
#
# User data is stored in:
#   - Windows: %APPDATA%/GPL2ASE/
#   - Linux:   $XDG_CONFIG_HOME/GPL2ASE/ (default ~/.config/GPL2ASE/)
#   - macOS:   ~/Library/Application Support/GPL2ASE/
#
# Usage:
#   from gpl2ase.core.paths import Paths
#   config_path = Paths.get_config_path()
#   db_path = Paths.get_database_path()
# ==============================================================================

import os
import sys
from typing import Optional


class Paths:
    """
    Centralized path management for GPL2ASE.

    Computed directories are cached on the class, so the data directory
    is only created once per process.
    """

    # Application name for folder creation
    APP_NAME = "GPL2ASE"

    # Cache for computed paths
    _app_dir: Optional[str] = None
    _user_data_dir: Optional[str] = None

    @classmethod
    def get_app_dir(cls) -> str:
        """
        Get the project root directory.

        This file is in gpl2ase/core/, so the root is 3 levels up.
        """
        if cls._app_dir is None:
            cls._app_dir = os.path.dirname(
                os.path.dirname(
                    os.path.dirname(os.path.abspath(__file__))
                )
            )
        return cls._app_dir

    @classmethod
    def get_user_data_dir(cls) -> str:
        """
        Get the user data directory, creating it if needed.

        Returns:
            Absolute path to the user data directory
        """
        if cls._user_data_dir is None:
            if sys.platform == 'win32':
                base = os.environ.get('APPDATA', os.path.expanduser('~'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)
            elif sys.platform == 'darwin':
                cls._user_data_dir = os.path.join(
                    os.path.expanduser('~'),
                    'Library', 'Application Support', cls.APP_NAME
                )
            else:
                base = os.environ.get('XDG_CONFIG_HOME',
                                      os.path.join(os.path.expanduser('~'), '.config'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)

            os.makedirs(cls._user_data_dir, exist_ok=True)

        return cls._user_data_dir

    @classmethod
    def get_config_path(cls) -> str:
        """Absolute path to config.json."""
        return os.path.join(cls.get_user_data_dir(), 'config.json')

    @classmethod
    def get_database_path(cls) -> str:
        """Absolute path to the conversion history database."""
        return os.path.join(cls.get_user_data_dir(), 'history.db')
