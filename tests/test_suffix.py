"""tests for collision-free numeric suffixes."""

from snip.core.suffix import duplicate_name, free_name, next_suffix


def touch(root, *names):
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x\n")


class TestNextSuffix:

    def test_empty_store(self, tmp_path):
        assert next_suffix(tmp_path, "git") == 1

    def test_missing_store(self, tmp_path):
        assert next_suffix(tmp_path / "nope", "git") == 1

    def test_gaps_are_not_filled(self, tmp_path):
        touch(tmp_path, "git-1", "git-2", "git-5", "git-foo")
        assert next_suffix(tmp_path, "git") == 6

    def test_other_bases_ignored(self, tmp_path):
        touch(tmp_path, "gitk-9", "git-lfs-3", "docker-4")
        assert next_suffix(tmp_path, "git") == 1

    def test_prefixed_base_looks_in_subdir(self, tmp_path):
        touch(tmp_path, "git/status-1", "git/status-3", "status-8")
        assert next_suffix(tmp_path, "git/status") == 4

    def test_directories_count(self, tmp_path):
        (tmp_path / "docker-2").mkdir()
        assert next_suffix(tmp_path, "docker") == 3


class TestDuplicateName:

    def test_numbered(self, tmp_path):
        touch(tmp_path, "docker-1")
        assert duplicate_name(tmp_path, "docker-1") == "docker-2"

    def test_numbered_skips_taken(self, tmp_path):
        touch(tmp_path, "docker-1", "docker-2")
        assert duplicate_name(tmp_path, "docker-1") == "docker-3"

    def test_unnumbered(self, tmp_path):
        touch(tmp_path, "node-shell")
        assert duplicate_name(tmp_path, "node-shell") == "node-shell-1"

    def test_unnumbered_with_copy_present(self, tmp_path):
        touch(tmp_path, "node-shell", "node-shell-1")
        assert duplicate_name(tmp_path, "node-shell") == "node-shell-2"

    def test_subdirectory_preserved(self, tmp_path):
        touch(tmp_path, "git/status-1")
        assert duplicate_name(tmp_path, "git/status-1") == "git/status-2"


class TestFreeName:

    def test_unused_name_kept(self, tmp_path):
        assert free_name(tmp_path, "deploy") == "deploy"

    def test_taken_name_numbered(self, tmp_path):
        touch(tmp_path, "deploy", "deploy-1")
        assert free_name(tmp_path, "deploy") == "deploy-2"
