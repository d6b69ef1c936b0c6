"""Shared test fixtures."""

import os
from unittest.mock import patch

import pytest

from snip import log
from snip.config import Config
from snip.core import header
from snip.store import Stores


@pytest.fixture(autouse=True)
def clean_env(tmp_path):
    """no ZSH_SNIP_* or EDITOR leaks in from the developer's shell."""
    env = {k: v for k, v in os.environ.items()
           if not k.startswith("ZSH_SNIP_") and k != "EDITOR"}
    env["XDG_CONFIG_HOME"] = str(tmp_path / "xdg-config")
    env["XDG_DATA_HOME"] = str(tmp_path / "xdg-data")
    with patch.dict(os.environ, env, clear=True):
        yield
    log.set_level("warn")


@pytest.fixture
def user_root(tmp_path):
    root = tmp_path / "snippets"
    root.mkdir()
    return root


@pytest.fixture
def project(tmp_path):
    """a project dir with a local store and a nested working dir."""
    proj = tmp_path / "project"
    (proj / ".zsh-snip").mkdir(parents=True)
    (proj / "src" / "deep").mkdir(parents=True)
    return proj


@pytest.fixture
def config(user_root):
    return Config(store_dir=str(user_root), editor="true", fzf="fzf")


@pytest.fixture
def stores(user_root):
    return Stores(user_root)


@pytest.fixture
def make_snippet():
    """write a snippet file, optional fields included."""
    return _make_snippet


def _make_snippet(root, name, body, description="", args="", abbr=""):
    path = root / name
    header.write(path, name, description, body)
    if args or abbr:
        snippet = header.parse(path)
        snippet.args = args
        snippet.abbr = abbr
        header._write_snippet(path, snippet)
    return path
