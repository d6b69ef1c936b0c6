"""naming.py - turn command text into snippet names.

slugify() makes any text safe for the filesystem while keeping "/" so a
name can point into a subdirectory. extract_primary_command() finds the
word a human would call "the command" in a typed line.

in the world: the label maker. what you typed becomes what it's called.
"""

import re

FALLBACK = "snippet"

_UNSAFE = re.compile(r"[^A-Za-z0-9_/-]")


def slugify(text: str) -> str:
    """replace unsafe chars with '-', strip dashes at both ends.

    repeated dashes are kept. empty result stays empty; the caller picks
    a fallback.
    """
    return _UNSAFE.sub("-", text).strip("-")


def extract_primary_command(text: str) -> str:
    """first word that isn't an assignment, sudo, or a subshell paren.

    "sudo FOO=bar git push" -> "git", "(cd /tmp; make)" -> "cd".
    """
    rest = text.lstrip()
    while rest:
        word = rest.split(None, 1)[0]
        if "=" in word or word == "sudo":
            rest = rest[len(word):].lstrip()
            continue
        if word.startswith("("):
            rest = rest[1:].lstrip()
            continue
        return word
    return FALLBACK


def default_basis(command: str) -> str:
    """filename basis for a saved command line.

    basename of the primary command, slugified. "/usr/bin/git log" -> "git".
    """
    word = extract_primary_command(command).rsplit("/", 1)[-1]
    return slugify(word).strip("/-") or FALLBACK
