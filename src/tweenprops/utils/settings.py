"""
Settings management for tweenprops

Holds the handful of runtime knobs the library reads: logging setup and
event dispatch limits. Values come from DEFAULT_SETTINGS, overlaid by a JSON
settings file if one exists, overlaid by environment variables.

The library only reads settings. Nothing here writes the file.
"""

import json
import os
from tweenprops.utils.message import Log
from tweenprops.utils.paths import get_settings_path

# Default settings
DEFAULT_SETTINGS = {
    # Logging settings; records propagate to the host's logging config
    # unless a handler is turned on here
    "log_level": "INFO",
    "console_logging": False,
    "file_logging": False,

    # Event settings
    "max_listeners": 0,  # Per event name; 0 disables the leak warning
    "log_events": False,  # Debug-log every emitted event
}

# Environment variable -> settings key
ENV_OVERRIDES = {
    "TWEENPROPS_LOG_LEVEL": "log_level",
}


class Settings:
    """Library settings manager"""

    def __init__(self, path=None):
        self.path = str(path) if path else str(get_settings_path())
        self.settings = DEFAULT_SETTINGS.copy()
        self.load_settings()

    def load_settings(self):
        """Load settings from file, then apply environment overrides"""
        self.settings = DEFAULT_SETTINGS.copy()
        if os.path.exists(self.path):
            try:
                with open(self.path, 'r', encoding='utf-8') as file:
                    saved_settings = json.load(file)
            except (OSError, ValueError) as e:
                Log.error(f"Failed to load settings from {self.path}: {e}")
            else:
                if isinstance(saved_settings, dict):
                    self.settings.update(saved_settings)
                    Log.info(f"Settings loaded from {self.path}")
                else:
                    Log.warning(f"Ignoring settings file {self.path}: expected a JSON object")

        for env_name, key in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                self.settings[key] = value

        self._check_max_listeners()

    def _check_max_listeners(self):
        value = self.settings.get("max_listeners")
        try:
            if isinstance(value, bool):
                raise ValueError(value)
            count = int(value)
            if count < 0:
                raise ValueError(value)
        except (TypeError, ValueError):
            Log.warning(
                f"Invalid max_listeners {value!r} in {self.path}; "
                f"using {DEFAULT_SETTINGS['max_listeners']}"
            )
            count = DEFAULT_SETTINGS["max_listeners"]
        self.settings["max_listeners"] = count

    def get(self, key, default=None):
        """Get a setting value"""
        return self.settings.get(key, default)

    def apply_logging(self):
        """Push the logging settings into Log"""
        Log.configure(
            level=self.get("log_level", "INFO"),
            console_logging=bool(self.get("console_logging", False)),
            file_logging=bool(self.get("file_logging", False)),
        )

# Global settings instance
app_settings = Settings()
