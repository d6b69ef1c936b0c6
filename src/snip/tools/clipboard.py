"""clipboard.py - copy text to whatever clipboard this machine has.

ZSH_SNIP_CLIPBOARD picks the command explicitly ("xclip -selection
clipboard"), or turns the feature off ("none", "off", "0", "false").
left empty, we look around: macOS, Wayland, X11, WSL.
"""

import os

from snip.tools import proc

DISABLED = ("none", "off", "0", "false", "no")

# (env var that must be set or "", argv)
_CANDIDATES = [
    ("", ["pbcopy"]),
    ("WAYLAND_DISPLAY", ["wl-copy"]),
    ("DISPLAY", ["xclip", "-selection", "clipboard"]),
    ("DISPLAY", ["xsel", "--clipboard", "--input"]),
    ("", ["clip.exe"]),
]


def detect(setting: str = "", environ: dict | None = None) -> list[str] | None:
    """argv of the clipboard command, or None if disabled or nothing found."""
    env = os.environ if environ is None else environ
    setting = (setting or "").strip()
    if setting.lower() in DISABLED:
        return None
    if setting:
        return proc.parse_command(setting)

    for needs, argv in _CANDIDATES:
        if needs and not env.get(needs):
            continue
        if proc.which(argv[0]):
            return list(argv)
    return None


def copy(text: str, argv: list[str]) -> bool:
    """feed text to the clipboard command. true on success."""
    return proc.run(argv, input=text).ok
