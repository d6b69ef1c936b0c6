"""proc.py - subprocess execution for the external collaborators.

fzf, the editor, the clipboard and snippet bodies all run through here.
two flavors: run() captures output, run_interactive() hands the child the
controlling terminal and waits.

in the world: the hands. snip doesn't edit or search by itself, it asks
the tools that do and waits for them to put things down.
"""

import os
import shlex
import shutil
import subprocess
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass

TTY = "/dev/tty"


@dataclass
class RunResult:
    """result of a subprocess run."""

    command: str | list
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """true if returncode is 0."""
        return self.returncode == 0


def parse_command(cmd: str) -> list[str]:
    """split a command string into args list."""
    return shlex.split(cmd)


def which(name: str) -> str | None:
    """find executable on PATH. accepts 'code --wait' style strings."""
    if not name:
        return None
    try:
        first = shlex.split(name)[0]
    except (ValueError, IndexError):
        return None
    return shutil.which(first)


def run(
    cmd: str | list,
    input: str | None = None,
    cwd: str | None = None,
    env: dict | None = None,
    stderr_to_tty: bool = False,
) -> RunResult:
    """run a command, capture stdout (and stderr unless it goes to the tty)."""
    args = shlex.split(cmd) if isinstance(cmd, str) else list(cmd)
    merged_env = {**os.environ, **env} if env else None
    start = time.monotonic()

    try:
        with _tty_or_pipe(stderr_to_tty) as err:
            proc = subprocess.run(
                args,
                input=input,
                stdout=subprocess.PIPE,
                stderr=err,
                text=True,
                cwd=cwd,
                env=merged_env,
            )
    except FileNotFoundError:
        elapsed = (time.monotonic() - start) * 1000
        return RunResult(
            command=cmd,
            returncode=127,
            stderr=f"command not found: {args[0] if args else cmd}",
            elapsed_ms=round(elapsed, 2),
        )

    elapsed = (time.monotonic() - start) * 1000
    return RunResult(
        command=cmd,
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        elapsed_ms=round(elapsed, 2),
    )


def run_interactive(
    cmd: str | list,
    cwd: str | None = None,
    env: dict | None = None,
) -> int:
    """run attached to the controlling terminal, block until it exits.

    stdout of snip itself is usually captured by the shell widget, so the
    child talks to /dev/tty directly when there is one.
    """
    args = shlex.split(cmd) if isinstance(cmd, str) else list(cmd)
    merged_env = {**os.environ, **env} if env else None
    try:
        with _tty_streams() as (stdin, stdout):
            proc = subprocess.run(
                args, stdin=stdin, stdout=stdout, cwd=cwd, env=merged_env,
            )
    except FileNotFoundError:
        return 127
    return proc.returncode


def run_passthrough(
    cmd: str | list,
    cwd: str | None = None,
    env: dict | None = None,
) -> int:
    """run with snip's own stdin/stdout/stderr, return the exit status."""
    args = shlex.split(cmd) if isinstance(cmd, str) else list(cmd)
    merged_env = {**os.environ, **env} if env else None
    try:
        return subprocess.run(args, cwd=cwd, env=merged_env).returncode
    except FileNotFoundError:
        return 127


# ============================================================
# TERMINAL
# ============================================================

def write_tty(text: str):
    """write to the terminal, or stderr when there is none."""
    try:
        with open(TTY, "w") as tty:
            tty.write(text)
    except OSError:
        sys.stderr.write(text)


@contextmanager
def _tty_streams():
    """(stdin, stdout) bound to /dev/tty, or inherited when there is none."""
    try:
        tty_in = open(TTY, "r")
    except OSError:
        yield None, None
        return
    try:
        tty_out = open(TTY, "w")
    except OSError:
        tty_in.close()
        yield None, None
        return
    try:
        yield tty_in, tty_out
    finally:
        tty_in.close()
        tty_out.close()


@contextmanager
def _tty_or_pipe(use_tty: bool):
    if not use_tty:
        yield subprocess.PIPE
        return
    try:
        tty = open(TTY, "w")
    except OSError:
        yield None
        return
    try:
        yield tty
    finally:
        tty.close()


def read_tty_line(prompt: str) -> str | None:
    """print prompt and read one line from the terminal. None on EOF/no tty."""
    try:
        with open(TTY, "r") as tty_in, open(TTY, "w") as tty_out:
            tty_out.write(prompt)
            tty_out.flush()
            line = tty_in.readline()
    except OSError:
        return None
    if not line:
        return None
    return line.rstrip("\n")
