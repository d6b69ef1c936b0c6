"""tests for trailing-comment metadata."""

from snip.core.comments import (
    extract_trailing_comment, extract_trailing_name, strip_trailing_comment,
)

HEREDOC = "cat <<EOF\n#!/bin/bash\necho hi # greet: say hi\nEOF"


class TestExtractTrailingComment:

    def test_name_and_description(self):
        line = "git add # add: adding files to git"
        assert extract_trailing_comment(line) == "adding files to git"

    def test_description_only(self):
        assert extract_trailing_comment("git status # check repo state") == "check repo state"

    def test_no_space_after_hash(self):
        assert extract_trailing_comment("ls #list") == "list"

    def test_no_comment(self):
        assert extract_trailing_comment("git status") == ""

    def test_hash_first_char(self):
        assert extract_trailing_comment("# just a comment") == ""

    def test_escaped_hash(self):
        assert extract_trailing_comment(r"echo \#tag") == ""

    def test_multiline_is_empty(self):
        assert extract_trailing_comment(HEREDOC) == ""

    def test_empty_after_colon(self):
        assert extract_trailing_comment("ls # name:") == ""

    def test_quoted_hash_wins(self):
        # the scan does not understand quotes
        assert extract_trailing_comment('echo "a # b" # c') == 'b" # c'


class TestExtractTrailingName:

    def test_name(self):
        assert extract_trailing_name("git add # add: adding files to git") == "add"

    def test_no_colon(self):
        assert extract_trailing_name("git add # just a description") == ""

    def test_no_comment(self):
        assert extract_trailing_name("git status") == ""

    def test_name_with_dashes(self):
        assert extract_trailing_name("docker run # my-snippet: run container") == "my-snippet"

    def test_name_trimmed(self):
        assert extract_trailing_name("ls #  spaced :desc") == "spaced"

    def test_multiline_is_empty(self):
        assert extract_trailing_name(HEREDOC) == ""


class TestStripTrailingComment:

    def test_strips_comment_and_spaces(self):
        assert strip_trailing_comment("git status   # check repo state") == "git status"

    def test_last_hash(self):
        assert strip_trailing_comment('echo "a # b" # c') == 'echo "a # b"'

    def test_escaped_hash_kept(self):
        assert strip_trailing_comment(r"echo \#tag") == r"echo \#tag"

    def test_no_comment(self):
        assert strip_trailing_comment("ls -la") == "ls -la"
