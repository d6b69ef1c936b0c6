"""comments.py - read metadata out of a trailing shell comment.

    git add . # add: stage everything
                ^^^  ^^^^^^^^^^^^^^^
                name description

only single lines. a heredoc full of "#!/bin/bash" is a script, not
metadata, so anything with a newline yields nothing.

known limitation, kept on purpose: the scan doesn't understand quotes.
in `echo "a # b" # c` the first unescaped # wins, so the comment is
`b" # c`. strip_trailing_comment() cuts at the last # instead, which
keeps the command itself intact.
"""

import re

_COMMENT = re.compile(r"[^\\]#\s*(.+)$")


def _raw_comment(line: str) -> str:
    """text after the first # that has a non-backslash char before it."""
    if "\n" in line:
        return ""
    m = _COMMENT.search(line)
    return m.group(1) if m else ""


def extract_trailing_comment(line: str) -> str:
    """the description part. 'name: desc' -> 'desc', 'desc' -> 'desc'."""
    comment = _raw_comment(line)
    if ":" in comment:
        after = comment.split(":", 1)[1]
        return after[1:] if after.startswith(" ") else after
    return comment


def extract_trailing_name(line: str) -> str:
    """the name part of '# name: desc'. empty without a colon."""
    comment = _raw_comment(line)
    if ":" not in comment:
        return ""
    return comment.split(":", 1)[0].strip()


def strip_trailing_comment(line: str) -> str:
    """drop everything from the last unescaped # on, then trailing spaces."""
    for i in range(len(line) - 1, 0, -1):
        if line[i] == "#" and line[i - 1] != "\\":
            return line[:i].rstrip()
    return line
