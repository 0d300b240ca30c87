"""
Utils module - Logging, paths, and settings.

Contents:
- message.py: Log class for library logging
- paths.py: Platform-specific path utilities
- settings.py: JSON settings with environment overrides
"""
from tweenprops.utils.message import Log
from tweenprops.utils.paths import (
    get_user_data_dir,
    get_user_config_dir,
    get_logs_dir,
    get_settings_path,
)
from tweenprops.utils.settings import Settings, app_settings, DEFAULT_SETTINGS

__all__ = [
    'Log',
    'get_user_data_dir',
    'get_user_config_dir',
    'get_logs_dir',
    'get_settings_path',
    'Settings',
    'app_settings',
    'DEFAULT_SETTINGS',
]
