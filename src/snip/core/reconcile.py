"""reconcile.py - follow a rename made in the editor.

the header says what the snippet is called, the path says where it lives.
after the user edits "# name:" the two disagree until we move the file.
if the new name is taken we refuse and leave everything where it was.
"""

import shutil
from enum import Enum
from pathlib import Path, PurePosixPath

from snip.core import header
from snip.log import debug


class Outcome(str, Enum):
    UNCHANGED = "unchanged"
    RENAMED = "renamed"
    CONFLICT = "conflict"
    INVALID = "invalid"


def valid_name(name: str) -> bool:
    """relative, no empty/'..'/dot-leading segments."""
    if not name or name.startswith("/"):
        return False
    for part in PurePosixPath(name).parts:
        if part in ("", "..") or part.startswith("."):
            return False
    return "//" not in name and not name.endswith("/")


def _file_in_the_way(root: Path, new_path: Path) -> bool:
    """a snippet file where the new name needs a directory."""
    for parent in new_path.relative_to(root).parents:
        candidate = root / parent
        if parent != Path(".") and candidate.exists() and not candidate.is_dir():
            return True
    return False


def reconcile(filepath, expected_name: str, store_root) -> tuple[Path, Outcome]:
    """move filepath to match its header name. returns (final_path, outcome)."""
    path = Path(filepath)
    new_name = header.read_field(path, "name").strip()

    if not new_name or new_name == expected_name:
        return path, Outcome.UNCHANGED

    if not valid_name(new_name):
        debug("reconcile", f"rejected name {new_name!r}")
        return path, Outcome.INVALID

    root = Path(store_root)
    new_path = root / new_name
    if new_path.exists() or _file_in_the_way(root, new_path):
        debug("reconcile", f"{new_name} exists, keeping {expected_name}")
        return path, Outcome.CONFLICT

    new_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(path), str(new_path))
    debug("reconcile", f"renamed {expected_name} -> {new_name}")
    return new_path, Outcome.RENAMED
