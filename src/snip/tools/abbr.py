"""abbr.py - abbreviations for zsh-abbr, rendered as shell lines.

zsh-abbr is a shell function, not a program, so a child process can't
register anything. instead we print the lines and the shell evals them:

    eval "$(snip abbr load)"

a snippet opts in with "# abbr: gst gs"; each key expands to the body.
"""

import shlex
from dataclasses import dataclass

from snip.core import header
from snip.store import Entry

TOOL = "abbr"


@dataclass
class Registration:
    key: str
    expansion: str
    name: str


def registrations(entries: list[Entry]) -> list[Registration]:
    """one per abbr key. the first snippet to claim a key keeps it."""
    claimed = {}
    for entry in entries:
        snippet = header.parse(entry.path)
        for key in snippet.abbr_keys:
            if key in claimed:
                continue
            claimed[key] = Registration(key=key, expansion=snippet.body, name=entry.name)
    return sorted(claimed.values(), key=lambda r: r.key)


def add_line(reg: Registration) -> str:
    return f"{TOOL} add --session --quiet --force {shlex.quote(reg.key + '=' + reg.expansion)}"


def erase_line(key: str) -> str:
    return f"{TOOL} erase --session --quiet {shlex.quote(key)} 2>/dev/null"


def render_load(regs: list[Registration], forget: list[str] | None = None) -> str:
    """erase lines for forgotten keys, then add lines. one per line."""
    keep = {r.key for r in regs}
    lines = [erase_line(k) for k in (forget or []) if k not in keep]
    lines += [add_line(r) for r in regs]
    return "".join(line + "\n" for line in lines)
