"""paths.py - one place for all snip paths.

every file that needs the store root or the config file imports from here.
no more hardcoded Path.home() scattered across the codebase.
"""

import os
from pathlib import Path


APP_NAME = "zsh-snip"
LOCAL_MARKER = ".zsh-snip"


def data_home() -> Path:
    """$XDG_DATA_HOME, or ~/.local/share."""
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".local" / "share"


def config_home() -> Path:
    """$XDG_CONFIG_HOME, or ~/.config."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def default_store_dir() -> Path:
    """the global (user) snippet store."""
    return data_home() / APP_NAME


def config_file() -> Path:
    """global config json."""
    return config_home() / APP_NAME / "config.json"
