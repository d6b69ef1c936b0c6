"""suffix.py - collision-free numeric suffixes.

git-1, git-2, git-5 on disk: the next git is git-6. never fill gaps,
never trust a count. non-numeric suffixes (git-foo) don't exist as far
as numbering is concerned.
"""

import re
from pathlib import Path

_NUMBERED = re.compile(r"^(?P<base>.+)-(?P<num>[0-9]+)$")


def _split(name: str) -> tuple[str, str]:
    """'git/status-1' -> ('git', 'status-1'). no slash -> ('', name)."""
    if "/" in name:
        prefix, leaf = name.rsplit("/", 1)
        return prefix, leaf
    return "", name


def next_suffix(store_root: Path, base_name: str) -> int:
    """max(existing numeric suffix) + 1, or 1 when there are none."""
    prefix, base = _split(base_name)
    directory = Path(store_root) / prefix if prefix else Path(store_root)
    if not directory.is_dir():
        return 1

    head = f"{base}-"
    highest = 0
    for entry in directory.iterdir():
        if not entry.name.startswith(head):
            continue
        tail = entry.name[len(head):]
        if tail.isascii() and tail.isdigit():
            highest = max(highest, int(tail))
    return highest + 1


def duplicate_name(store_root: Path, existing_name: str) -> str:
    """name for a copy of existing_name, in the same directory.

    docker-1 -> docker-2 (or higher if taken), node-shell -> node-shell-1.
    """
    prefix, leaf = _split(existing_name)
    m = _NUMBERED.match(leaf)
    base = m.group("base") if m else leaf
    scoped = f"{prefix}/{base}" if prefix else base
    return f"{scoped}-{next_suffix(store_root, scoped)}"


def free_name(store_root: Path, name: str) -> str:
    """name itself if nothing is there yet, else name-N."""
    if not (Path(store_root) / name).exists():
        return name
    return f"{name}-{next_suffix(store_root, name)}"
