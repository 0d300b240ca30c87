"""
Path management for tweenprops

Resolves platform-specific user directories following standard conventions:
- macOS: ~/Library/Application Support/TweenProps/
- Linux: ~/.local/share/tweenprops/ (data), ~/.config/tweenprops/ (config)
- Windows: %APPDATA%/TweenProps/

Nothing here touches the disk unless ensure=True is passed.
"""
import os
import sys
from pathlib import Path


# Application name
APP_NAME = "TweenProps"


def get_user_data_dir(ensure: bool = False) -> Path:
    """
    Get platform-specific user data directory.

    Returns:
        Path to user data directory where logs and user files are stored.
    """
    system = sys.platform

    if system == "darwin":  # macOS
        user_data_dir = Path.home() / "Library" / "Application Support" / APP_NAME
    elif system == "win32":  # Windows
        user_data_dir = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming")) / APP_NAME
    else:  # Linux and other Unix-like
        user_data_dir = Path.home() / ".local" / "share" / APP_NAME.lower()

    if ensure:
        user_data_dir.mkdir(parents=True, exist_ok=True)
    return user_data_dir


def get_user_config_dir(ensure: bool = False) -> Path:
    """
    Get platform-specific user config directory.

    Returns:
        Path to user config directory (same as user_data_dir on macOS/Windows,
        ~/.config/tweenprops/ on Linux)
    """
    if sys.platform in ("darwin", "win32"):
        return get_user_data_dir(ensure=ensure)

    config_dir = Path.home() / ".config" / APP_NAME.lower()
    if ensure:
        config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_logs_dir(ensure: bool = True) -> Path:
    """
    Get directory for application logs.

    Returns:
        Path to logs directory (stored in user data directory).
    """
    logs_dir = get_user_data_dir() / "logs"
    if ensure:
        logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def get_settings_path() -> Path:
    """
    Get path to settings file.

    The TWEENPROPS_SETTINGS environment variable takes precedence over
    settings.json in the user config directory.
    """
    override = os.getenv("TWEENPROPS_SETTINGS")
    if override:
        return Path(override).expanduser()
    return get_user_config_dir() / "settings.json"
