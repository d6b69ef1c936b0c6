"""snip: save, search and run shell command snippets from the zsh line editor."""

from snip.config import Config, load_config
from snip.store import Entry, Scope, Stores
from snip.core import Snippet

__version__ = "0.1.0"

__all__ = [
    "Config", "load_config",
    "Entry", "Scope", "Stores",
    "Snippet",
]
