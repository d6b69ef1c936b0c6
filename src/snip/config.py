"""config.py - configuration management.

layered config: defaults -> global ($XDG_CONFIG_HOME/zsh-snip/config.json)
-> environment (ZSH_SNIP_*). the result is one Config passed into every
operation. nothing reads os.environ after load_config().

in the world: the settings panel. the shell exports, we listen.
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path

from snip import paths


# ============================================================
# DEFAULTS
# ============================================================

DEFAULTS = {
    "store_dir": "",          # empty means paths.default_store_dir()
    "local_marker": paths.LOCAL_MARKER,
    "editor": "vim",
    "clipboard": "",          # empty means auto-detect
    "abbr": False,
    "fzf": "fzf",
    "shell": "zsh",
    "preview": "",            # empty means bat if installed, else cat
}

_ENV_MAP = {
    "ZSH_SNIP_DIR": "store_dir",
    "ZSH_SNIP_LOCAL_PATH": "local_marker",
    "ZSH_SNIP_EDITOR": "editor",
    "ZSH_SNIP_CLIPBOARD": "clipboard",
    "ZSH_SNIP_ABBR": "abbr",
    "ZSH_SNIP_FZF": "fzf",
    "ZSH_SNIP_SHELL": "shell",
    "ZSH_SNIP_PREVIEW": "preview",
}

_BOOL_KEYS = ("abbr",)


@dataclass
class Config:
    """merged configuration from all layers."""
    store_dir: str = ""
    local_marker: str = paths.LOCAL_MARKER
    editor: str = "vim"
    clipboard: str = ""
    abbr: bool = False
    fzf: str = "fzf"
    shell: str = "zsh"
    preview: str = ""
    source: str = ""  # which layer provided the final values
    extra: dict = field(default_factory=dict)

    @property
    def store_root(self) -> Path:
        if self.store_dir:
            return Path(self.store_dir).expanduser()
        return paths.default_store_dir()

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)
                if f.name not in ("source", "extra")}


# ============================================================
# CONFIG LOADING
# ============================================================

def load_global(path: Path | None = None) -> dict:
    """load global config json. missing or corrupt file means {}."""
    config_path = path or paths.config_file()
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def load_config(environ: dict | None = None, path: Path | None = None) -> Config:
    """load merged config: defaults -> global -> env."""
    env = os.environ if environ is None else environ
    merged = dict(DEFAULTS)

    # $EDITOR only replaces the built-in default
    if env.get("EDITOR"):
        merged["editor"] = env["EDITOR"]

    # layer 1: global
    saved = load_global(path)
    global_config = {k: v for k, v in saved.items() if k in DEFAULTS}
    merged.update(global_config)

    # layer 2: environment overrides
    env_overrides = _env_overrides(env)
    merged.update(env_overrides)
    merged["abbr"] = _truthy(merged["abbr"])

    source = "defaults"
    if env_overrides:
        source = "env"
    elif global_config:
        source = "global"

    extra = {k: v for k, v in saved.items() if k not in DEFAULTS}
    return Config(**merged, source=source, extra=extra)


def _env_overrides(env) -> dict:
    """extract config overrides from environment variables."""
    overrides = {}
    for env_key, config_key in _ENV_MAP.items():
        value = env.get(env_key)
        if value is None:
            continue
        if config_key in _BOOL_KEYS:
            overrides[config_key] = _truthy(value)
        elif config_key in ("editor", "fzf", "shell") and not value:
            # empty string means "not set" for commands
            continue
        else:
            overrides[config_key] = value
    return overrides


def _truthy(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")
