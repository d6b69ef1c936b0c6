"""tests for store discovery, listing and resolution."""

import pytest

from snip.config import Config
from snip.errors import SnippetNotFound, UsageError
from snip.store import Entry, Scope, Stores, find_local_root, list_snippets


class TestFindLocalRoot:

    def test_found_from_nested_dir(self, project):
        root = find_local_root(project / "src" / "deep", ".zsh-snip")
        assert root == (project / ".zsh-snip").resolve()

    def test_found_in_start_dir(self, project):
        assert find_local_root(project, ".zsh-snip") == (project / ".zsh-snip").resolve()

    def test_nearest_wins(self, project):
        inner = project / "src" / ".zsh-snip"
        inner.mkdir()
        assert find_local_root(project / "src" / "deep", ".zsh-snip") == inner.resolve()

    def test_none_when_absent(self, tmp_path):
        assert find_local_root(tmp_path, ".no-such-marker-anywhere") is None

    def test_empty_marker_disables(self, project):
        assert find_local_root(project, "") is None

    def test_file_is_not_a_store(self, tmp_path):
        (tmp_path / ".zsh-snip-file").write_text("")
        assert find_local_root(tmp_path, ".zsh-snip-file") is None


class TestListSnippets:

    def test_recursive_sorted(self, user_root, make_snippet):
        make_snippet(user_root, "zz", "ls")
        make_snippet(user_root, "git/status", "git status")
        make_snippet(user_root, "aa", "ls")
        assert list_snippets(user_root) == ["aa", "git/status", "zz"]

    def test_hidden_excluded(self, user_root, make_snippet):
        make_snippet(user_root, "visible", "ls")
        make_snippet(user_root, ".hidden", "ls")
        make_snippet(user_root, ".git/config", "ls")
        make_snippet(user_root, "dir/.swp", "ls")
        assert list_snippets(user_root) == ["visible"]

    def test_missing_root(self, tmp_path):
        assert list_snippets(tmp_path / "nope") == []

    def test_empty_dirs_ignored(self, user_root):
        (user_root / "empty" / "nested").mkdir(parents=True)
        assert list_snippets(user_root) == []


class TestStores:

    def test_from_config_finds_local(self, user_root, project):
        config = Config(store_dir=str(user_root))
        stores = Stores.from_config(config, cwd=project / "src" / "deep")
        assert stores.user_root == user_root
        assert stores.local_root == (project / ".zsh-snip").resolve()

    def test_from_config_no_local(self, user_root, tmp_path):
        config = Config(store_dir=str(user_root), local_marker="")
        stores = Stores.from_config(config, cwd=tmp_path)
        assert stores.local_root is None

    def test_local_equal_to_user_ignored(self, project):
        config = Config(store_dir=str(project / ".zsh-snip"))
        stores = Stores.from_config(config, cwd=project)
        assert stores.local_root is None

    def test_roots_local_first(self, user_root, project):
        stores = Stores(user_root, project / ".zsh-snip")
        assert [s for s, _ in stores.roots()] == [Scope.LOCAL, Scope.USER]

    def test_roots_local_missing(self, user_root):
        with pytest.raises(UsageError, match="No local snippet directory"):
            Stores(user_root).roots(Scope.LOCAL)

    def test_root_for_write(self, user_root, project):
        local = project / ".zsh-snip"
        stores = Stores(user_root, local)
        assert stores.root_for_write() == user_root
        assert stores.root_for_write(Scope.USER) == user_root
        assert stores.root_for_write(Scope.LOCAL) == local


class TestEntries:

    def test_local_shadows_user(self, user_root, project, make_snippet):
        local = project / ".zsh-snip"
        make_snippet(user_root, "build", "make")
        make_snippet(user_root, "deploy", "ship")
        make_snippet(local, "build", "npm run build")
        stores = Stores(user_root, local)

        entries = stores.entries()
        assert [(e.name, e.scope) for e in entries] == [
            ("build", Scope.LOCAL), ("deploy", Scope.USER),
        ]
        assert [e.mark for e in entries] == ["@", "~"]

    def test_forced_scope_shows_shadowed(self, user_root, project, make_snippet):
        local = project / ".zsh-snip"
        make_snippet(user_root, "build", "make")
        make_snippet(local, "build", "npm run build")
        stores = Stores(user_root, local)
        assert [e.scope for e in stores.entries(Scope.USER)] == [Scope.USER]
        assert [e.scope for e in stores.entries(Scope.LOCAL)] == [Scope.LOCAL]

    def test_glob_filter(self, user_root, make_snippet):
        make_snippet(user_root, "git/status", "git status")
        make_snippet(user_root, "git/log", "git log")
        make_snippet(user_root, "docker-1", "docker ps")
        names = [e.name for e in Stores(user_root).entries(pattern="git/*")]
        assert names == ["git/log", "git/status"]


class TestResolve:

    def test_prefers_local(self, user_root, project, make_snippet):
        local = project / ".zsh-snip"
        make_snippet(user_root, "build", "make")
        make_snippet(local, "build", "npm run build")
        entry = Stores(user_root, local).resolve("build")
        assert entry.scope == Scope.LOCAL
        assert entry.path == local / "build"

    def test_forced_user(self, user_root, project, make_snippet):
        local = project / ".zsh-snip"
        make_snippet(user_root, "build", "make")
        make_snippet(local, "build", "npm run build")
        entry = Stores(user_root, local).resolve("build", Scope.USER)
        assert entry.scope == Scope.USER

    def test_not_found(self, user_root):
        with pytest.raises(SnippetNotFound) as exc:
            Stores(user_root).resolve("nope", Scope.USER)
        assert "in user store" in str(exc.value)

    def test_hidden_not_resolvable(self, user_root, make_snippet):
        make_snippet(user_root, ".secret", "ls")
        with pytest.raises(SnippetNotFound):
            Stores(user_root).resolve(".secret")

    def test_directory_not_resolvable(self, user_root, make_snippet):
        make_snippet(user_root, "git/status", "git status")
        with pytest.raises(SnippetNotFound):
            Stores(user_root).resolve("git")


class TestDelete:

    def test_removes_file_and_empty_dirs(self, user_root, make_snippet):
        path = make_snippet(user_root, "git/sub/status", "git status")
        stores = Stores(user_root)
        stores.delete(Entry("git/sub/status", path, Scope.USER, user_root))
        assert not path.exists()
        assert not (user_root / "git").exists()
        assert user_root.is_dir()

    def test_keeps_non_empty_dirs(self, user_root, make_snippet):
        path = make_snippet(user_root, "git/status", "git status")
        make_snippet(user_root, "git/log", "git log")
        Stores(user_root).delete(Entry("git/status", path, Scope.USER, user_root))
        assert (user_root / "git" / "log").exists()
