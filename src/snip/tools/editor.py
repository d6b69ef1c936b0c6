"""editor.py - open a file in the user's editor, cursor where it matters.

after a save the cursor should land on the name value (line 1, column 9,
right after "# name: "), so renaming is one keystroke away. every editor
spells that differently; the table below knows the ones we've met.
"""

import shlex
from enum import Enum
from pathlib import Path

from snip.tools import proc
from snip.log import debug

NAME_LINE = 1
NAME_COLUMN = 9


class EditorKind(Enum):
    VIM = "vim"
    NANO = "nano"
    VSCODE = "vscode"
    OTHER = "other"


_BINARIES = {
    "vim": EditorKind.VIM,
    "nvim": EditorKind.VIM,
    "vi": EditorKind.VIM,
    "nano": EditorKind.NANO,
    "code": EditorKind.VSCODE,
    "code-insiders": EditorKind.VSCODE,
}

# {path}, {line}, {col}
_TEMPLATES = {
    EditorKind.VIM: ["+call cursor({line},{col})", "{path}"],
    EditorKind.NANO: ["+{line},{col}", "{path}"],
    EditorKind.VSCODE: ["--wait", "-g", "{path}:{line}:{col}"],
    EditorKind.OTHER: ["{path}"],
}


def detect(editor: str) -> EditorKind:
    """which strategy fits this editor command."""
    try:
        binary = shlex.split(editor)[0]
    except (ValueError, IndexError):
        return EditorKind.OTHER
    return _BINARIES.get(Path(binary).name, EditorKind.OTHER)


def command(editor: str, filepath, line: int | None = None, col: int | None = None) -> list[str]:
    """argv to open filepath, positioned if line/col are given."""
    base = shlex.split(editor) if editor else ["vi"]
    path = str(filepath)
    if line is None:
        return base + [path]

    kind = detect(editor)
    args = [part.format(path=path, line=line, col=col or 1) for part in _TEMPLATES[kind]]
    if kind == EditorKind.VSCODE and "--wait" in base:
        args.remove("--wait")
    return base + args


def edit(editor: str, filepath, line: int | None = None, col: int | None = None) -> int:
    """open the editor and wait for it to exit."""
    argv = command(editor, filepath, line, col)
    debug("editor", " ".join(argv))
    return proc.run_interactive(argv)


def edit_at_name(editor: str, filepath) -> int:
    """open with the cursor on the name value."""
    return edit(editor, filepath, NAME_LINE, NAME_COLUMN)
