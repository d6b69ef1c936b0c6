"""store.py - where snippets live.

two roots: the user store (global) and, when the current directory sits
inside a project that has one, the local store found by walking up from
cwd. same name in both? local wins unless a scope is forced.

no cache. every call goes back to disk.
"""

import fnmatch
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from snip.config import Config
from snip.errors import SnippetNotFound, UsageError
from snip.log import debug


class Scope(str, Enum):
    ANY = "any"
    USER = "user"
    LOCAL = "local"


# listing marks, shown in front of names in the fuzzy finder
SCOPE_MARKS = {Scope.USER: "~", Scope.LOCAL: "@"}


@dataclass
class Entry:
    """one snippet file in one store."""
    name: str
    path: Path
    scope: Scope
    root: Path

    @property
    def mark(self) -> str:
        return SCOPE_MARKS[self.scope]


# ============================================================
# DISCOVERY
# ============================================================

def find_local_root(start_dir, marker_name: str) -> Path | None:
    """nearest ancestor (inclusive, up to /) holding a marker_name dir."""
    if not marker_name:
        return None
    current = Path(start_dir).resolve()
    while True:
        candidate = current / marker_name
        if candidate.is_dir():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def list_snippets(store_root) -> list[str]:
    """relative paths of every visible regular file, sorted."""
    root = Path(store_root)
    if not root.is_dir():
        return []

    names = []
    for dirpath, dirnames, filenames in os.walk(root):
        # hidden dirs are pruned, never entered
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for filename in filenames:
            if filename.startswith("."):
                continue
            full = Path(dirpath) / filename
            if not full.is_file():
                continue
            names.append(full.relative_to(root).as_posix())
    return sorted(names)


# ============================================================
# STORES
# ============================================================

class Stores:
    """the user root plus the optional local root for one invocation."""

    def __init__(self, user_root: Path, local_root: Path | None = None):
        self.user_root = Path(user_root)
        self.local_root = Path(local_root) if local_root else None

    @classmethod
    def from_config(cls, config: Config, cwd=None) -> "Stores":
        start = cwd if cwd is not None else os.getcwd()
        local = find_local_root(start, config.local_marker)
        user = config.store_root
        # a local root that is the user store itself is not a second store
        if local is not None and local.resolve() == user.resolve():
            local = None
        debug("store", f"user={user} local={local}")
        return cls(user, local)

    def roots(self, scope: Scope = Scope.ANY) -> list[tuple[Scope, Path]]:
        """roots to read, local first."""
        if scope == Scope.USER:
            return [(Scope.USER, self.user_root)]
        if scope == Scope.LOCAL:
            if self.local_root is None:
                raise UsageError("No local snippet directory")
            return [(Scope.LOCAL, self.local_root)]
        found = []
        if self.local_root is not None:
            found.append((Scope.LOCAL, self.local_root))
        found.append((Scope.USER, self.user_root))
        return found

    def root_for_write(self, scope: Scope = Scope.ANY) -> Path:
        """where new snippets go. ANY means the user store."""
        if scope == Scope.LOCAL:
            return self.roots(Scope.LOCAL)[0][1]
        return self.user_root

    def entries(self, scope: Scope = Scope.ANY, pattern: str = "") -> list[Entry]:
        """visible snippets in scope, local first. under ANY, local shadows user."""
        seen = set()
        result = []
        for kind, root in self.roots(scope):
            for name in list_snippets(root):
                if pattern and not fnmatch.fnmatchcase(name, pattern):
                    continue
                if scope == Scope.ANY and name in seen:
                    continue
                seen.add(name)
                result.append(Entry(name=name, path=root / name, scope=kind, root=root))
        return result

    def resolve(self, name: str, scope: Scope = Scope.ANY) -> Entry:
        """find a snippet by name. raises SnippetNotFound."""
        name = name.strip().strip("/")
        if name and not any(p.startswith(".") for p in name.split("/")):
            for kind, root in self.roots(scope):
                path = root / name
                if path.is_file():
                    return Entry(name=name, path=path, scope=kind, root=root)
        label = "" if scope == Scope.ANY else scope.value
        raise SnippetNotFound(name, label)

    def delete(self, entry: Entry):
        """remove the file, then any directories it leaves empty."""
        entry.path.unlink()
        parent = entry.path.parent
        root = entry.root.resolve()
        while parent.resolve() != root and root in parent.resolve().parents:
            try:
                parent.rmdir()
            except OSError:
                break
            parent = parent.parent
