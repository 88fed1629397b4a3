import os
from pathlib import Path

from adfconvert.constants import CONFIG_FILE_FILE_NAME, LOG_FILE_FILE_NAME


def _xdg_directory(variable: str, fallback: str) -> Path:
    if base := os.getenv(variable):
        return Path(base) / 'adfconvert'
    return Path.home() / fallback / 'adfconvert'


def get_config_file() -> Path:
    """Returns the path of the default configuration file.

    The file lives in `$XDG_CONFIG_HOME/adfconvert/` (`~/.config/adfconvert/` when the variable is not set). The file
    is not required to exist.
    """

    return _xdg_directory('XDG_CONFIG_HOME', '.config') / CONFIG_FILE_FILE_NAME


def get_log_file() -> Path:
    """Returns the path of the default log file, creating its parent directory if needed."""

    directory = _xdg_directory('XDG_STATE_HOME', '.local/state')
    directory.mkdir(parents=True, exist_ok=True)
    return directory / LOG_FILE_FILE_NAME
