"""widgets.py - the interactive flows behind the key bindings.

the shell hands us its line buffer and cursor, we hand back a new buffer,
a cursor, and one line to show. in between we may run the editor, fzf,
a confirmation prompt. every step blocks; nothing runs in the background.

save:    buffer -> name -> write -> editor -> reconcile
search:  list -> fzf -> action -> (edit/delete/duplicate -> fzf again)
                               -> (use/insert/wrap/copy/run -> done)

in the world: the desk. you bring a line, it gets a card. you ask for a
card, you get the line back.
"""

import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from snip.config import Config, load_config
from snip.core import header
from snip.core.comments import (
    extract_trailing_comment, extract_trailing_name, strip_trailing_comment,
)
from snip.core.naming import default_basis, slugify
from snip.core.reconcile import Outcome, reconcile, valid_name
from snip.core.suffix import duplicate_name, free_name, next_suffix
from snip.errors import (
    ArgumentsRequired, MissingTool, NameConflict, SnipError, UsageError,
)
from snip.log import debug, info, span
from snip.store import Entry, Scope, Stores
from snip.tools import clipboard, editor, fzf, proc

PROGRAM = "snip"


# ============================================================
# LINE BUFFER
# ============================================================

@dataclass
class LineBuffer:
    """the shell's edit buffer. cursor is an index into text."""
    text: str = ""
    cursor: int = 0

    def __post_init__(self):
        self.cursor = max(0, min(self.cursor, len(self.text)))

    def insert(self, snippet: str):
        """insert at cursor, cursor moves past the insertion."""
        self.text = self.text[:self.cursor] + snippet + self.text[self.cursor:]
        self.cursor += len(snippet)

    def replace(self, snippet: str):
        """replace everything, cursor at the end."""
        self.text = snippet
        self.cursor = len(snippet)


class WidgetAction(str, Enum):
    """what the shell should do with the buffer we return."""
    NONE = "none"          # leave the buffer alone
    REPLACE = "replace"    # take text and cursor
    ACCEPT = "accept"      # take text and run it
    EDIT = "edit"          # take text and open edit-command-line


@dataclass
class WidgetResult:
    ok: bool
    buffer: LineBuffer
    action: WidgetAction = WidgetAction.NONE
    message: str = ""
    warned: set = field(default_factory=set)

    def encode(self) -> str:
        """NUL separated: action, cursor, warned, message, buffer."""
        return "\0".join([
            self.action.value,
            str(self.buffer.cursor),
            ",".join(sorted(self.warned)),
            self.message.replace("\0", ""),
            self.buffer.text,
        ])


# ============================================================
# SESSION
# ============================================================

@dataclass
class WarningState:
    """optional tools we already complained about this shell session."""
    warned: set = field(default_factory=set)

    @classmethod
    def decode(cls, text: str) -> "WarningState":
        return cls({t for t in (text or "").split(",") if t})

    def first_time(self, tool: str) -> bool:
        """true once per tool, then false."""
        if tool in self.warned:
            return False
        self.warned.add(tool)
        return True


class TerminalUI:
    """prompts and notices on the controlling terminal."""

    def notice(self, text: str):
        proc.write_tty(text + "\n")

    def prompt(self, text: str) -> str | None:
        return proc.read_tty_line(text)

    def confirm(self, text: str) -> bool:
        answer = self.prompt(f"{text} [y/N] ")
        return bool(answer) and answer.strip().lower() in ("y", "yes")


@dataclass
class Session:
    """everything one widget invocation needs. no hidden globals."""
    config: Config
    stores: Stores
    ui: TerminalUI = field(default_factory=TerminalUI)
    warnings: WarningState = field(default_factory=WarningState)

    @classmethod
    def create(cls, config: Config | None = None, cwd=None, ui=None,
               warned: str = "") -> "Session":
        config = config or load_config()
        return cls(
            config=config,
            stores=Stores.from_config(config, cwd=cwd),
            ui=ui or TerminalUI(),
            warnings=WarningState.decode(warned),
        )

    def result(self, ok: bool, buffer: LineBuffer, message: str = "",
               action: WidgetAction = WidgetAction.NONE) -> WidgetResult:
        return WidgetResult(ok=ok, buffer=buffer, action=action, message=message,
                            warned=set(self.warnings.warned))


# ============================================================
# RENAME MESSAGES
# ============================================================

def _after_edit(path: Path, name: str, root: Path) -> tuple[Path, str]:
    """reconcile and describe what happened. raises on conflict."""
    final, outcome = reconcile(path, name, root)
    if outcome == Outcome.CONFLICT:
        raise NameConflict(header.read_field(path, "name").strip(), name)
    if outcome == Outcome.INVALID:
        wanted = header.read_field(path, "name").strip()
        raise UsageError(f"invalid name '{wanted}', keeping as '{name}'")
    return final, "" if outcome == Outcome.UNCHANGED else f"Renamed to: {final}"


# ============================================================
# SAVE
# ============================================================

def pick_name(root: Path, command: str, comment_name: str = "") -> str:
    """comment name if usable (numbered on collision), else <command>-<n>."""
    wanted = slugify(comment_name).strip("/") if comment_name else ""
    if wanted and valid_name(wanted):
        return free_name(root, wanted)
    basis = default_basis(command)
    return f"{basis}-{next_suffix(root, basis)}"


def save(session: Session, buffer: LineBuffer, scope: Scope = Scope.ANY) -> WidgetResult:
    """save the buffer as a new snippet, open it in the editor, follow renames."""
    text = buffer.text
    if not text.strip():
        return session.result(False, buffer, "zsh-snip: Nothing to save")

    try:
        root = session.stores.root_for_write(scope)
    except SnipError as e:
        return session.result(False, buffer, f"zsh-snip: {e}")

    comment_name = extract_trailing_name(text)
    description = extract_trailing_comment(text)
    body = text
    if comment_name or description:
        body = strip_trailing_comment(text)

    name = pick_name(root, body, comment_name)
    path = root / name

    with span("save", subsystem="widget", snippet=name, scope=scope.value):
        header.write(path, name, description, body)
        editor.edit_at_name(session.config.editor, path)
        try:
            final, _ = _after_edit(path, name, root)
        except SnipError as e:
            return session.result(False, buffer, f"Error: {e}")

    info("widget", f"saved {final}")
    return session.result(True, buffer, f"Saved: {final}")


# ============================================================
# SEARCH
# ============================================================

class Action(Enum):
    """what the key that ended fzf means."""
    REPLACE = ""
    INSERT = "ctrl-i"
    EDIT_INLINE = "alt-e"
    WRAP = "alt-x"
    YANK = "ctrl-y"
    EXEC = "ctrl-x"
    EDIT = "ctrl-e"
    DELETE = "ctrl-d"
    DUPLICATE = "alt-d"

    @property
    def terminal(self) -> bool:
        """terminal actions end the search; the rest go back to fzf."""
        return self not in (Action.EDIT, Action.DELETE, Action.DUPLICATE)

    @classmethod
    def from_key(cls, key: str) -> "Action":
        try:
            return cls(key)
        except ValueError:
            return cls.REPLACE


EXPECT_KEYS = [a.value for a in Action if a.value]

SEARCH_HEADER = (
    "enter: use | ctrl-i: insert | ctrl-e: edit | ctrl-d: delete | "
    "alt-d: duplicate | alt-e: edit inline | alt-x: function | "
    "ctrl-y: copy | ctrl-x: run"
)


def wrap_anon_func(body: str, name: str = "", description: str = "") -> str:
    """() { # name: description\\n<body>\\n} -- trailing space for args."""
    if body.endswith("\n"):
        body = body[:-1]
    if name and description:
        comment = f" # {name}: {description}"
    elif name or description:
        comment = f" # {name or description}"
    else:
        comment = ""
    return f"() {{{comment}\n{body}\n}} "


def _preview(session: Session) -> str:
    if session.config.preview:
        return session.config.preview
    if not proc.which("bat") and session.warnings.first_time("bat"):
        session.ui.notice("zsh-snip: bat not found, previews use cat")
    return fzf.preview_command()


def _chosen(entries: list[Entry], choice: fzf.Choice) -> Entry | None:
    for entry in entries:
        if choice.path is not None and entry.path == choice.path:
            return entry
    for entry in entries:
        if entry.name == choice.name and entry.mark == choice.mark:
            return entry
    return None


def search(session: Session, buffer: LineBuffer, scope: Scope = Scope.ANY,
           query: str = "") -> WidgetResult:
    """fzf loop. non-terminal actions come back here with the same query."""
    try:
        if not proc.which(session.config.fzf):
            raise MissingTool("fzf")
        entries = session.stores.entries(scope)
        if not entries:
            return session.result(False, buffer, "zsh-snip: No snippets found")
        preview = _preview(session)

        while entries:
            choice = fzf.select(session.config.fzf, entries, EXPECT_KEYS,
                                query=query, header_text=SEARCH_HEADER,
                                preview=preview)
            if choice.cancelled:
                return session.result(True, buffer)
            query = choice.query

            entry = _chosen(entries, choice)
            if entry is None:
                return session.result(False, buffer, f"zsh-snip: snippet not found: {choice.name}")

            action = Action.from_key(choice.key)
            debug("widget", f"{action.name} {entry.name}")
            if action.terminal:
                return finish(session, buffer, action, entry)

            try:
                note = step(session, action, entry)
            except SnipError as e:
                note = f"Error: {e}"
            if note:
                session.ui.notice(note)
            entries = session.stores.entries(scope)

        return session.result(True, buffer, "zsh-snip: No snippets left")
    except SnipError as e:
        return session.result(False, buffer, f"zsh-snip: {e}")


def finish(session: Session, buffer: LineBuffer, action: Action, entry: Entry) -> WidgetResult:
    """apply a terminal action and build the result for the shell."""
    snippet = header.parse(entry.path)

    if action == Action.REPLACE:
        buffer.replace(snippet.body)
        return session.result(True, buffer, action=WidgetAction.REPLACE)

    if action == Action.INSERT:
        buffer.insert(snippet.body)
        return session.result(True, buffer, action=WidgetAction.REPLACE)

    if action == Action.EDIT_INLINE:
        buffer.replace(snippet.body)
        return session.result(True, buffer, action=WidgetAction.EDIT)

    if action == Action.WRAP:
        buffer.replace(wrap_anon_func(snippet.body, entry.name, snippet.description))
        return session.result(True, buffer, action=WidgetAction.REPLACE)

    if action == Action.YANK:
        argv = clipboard.detect(session.config.clipboard)
        if argv is None:
            return session.result(False, buffer, "zsh-snip: No clipboard command found")
        if not clipboard.copy(snippet.body, argv):
            return session.result(False, buffer, f"zsh-snip: {argv[0]} failed")
        return session.result(True, buffer, f"Copied: {entry.name}")

    # Action.EXEC
    args: list[str] = []
    if snippet.needs_args:
        answer = session.ui.prompt(f"{entry.name} args ({snippet.args}): ")
        if answer is None:
            return session.result(True, buffer)
        try:
            args = parse_args(answer, entry.name, snippet.args)
        except SnipError as e:
            return session.result(False, buffer, f"zsh-snip: {e}")
    buffer.replace(exec_line(entry, args))
    return session.result(True, buffer, action=WidgetAction.ACCEPT)


def parse_args(answer: str, name: str, hint: str) -> list[str]:
    """split what the user typed at the args prompt.

    an empty answer is zero arguments, and a snippet with an args hint
    needs at least one.
    """
    try:
        args = shlex.split(answer)
    except ValueError as e:
        raise UsageError(f"bad arguments: {e}") from e
    if not args:
        raise ArgumentsRequired(name, hint)
    return args


def exec_line(entry: Entry, args: list[str]) -> str:
    flag = "--local" if entry.scope == Scope.LOCAL else "--user"
    return shlex.join([PROGRAM, "exec", flag, entry.name, *args])


# ============================================================
# NON-TERMINAL STEPS
# ============================================================

def step(session: Session, action: Action, entry: Entry) -> str:
    """edit, delete or duplicate. returns a notice ('' for none)."""
    if action == Action.EDIT:
        return edit(session, entry)
    if action == Action.DELETE:
        return delete(session, entry)
    if action == Action.DUPLICATE:
        return duplicate(session, entry)
    raise ValueError(f"not a search step: {action}")


def edit(session: Session, entry: Entry) -> str:
    """open the snippet file, then follow a rename."""
    with span("edit", subsystem="widget", snippet=entry.name):
        editor.edit(session.config.editor, entry.path)
        _, note = _after_edit(entry.path, entry.name, entry.root)
    return note


def delete(session: Session, entry: Entry) -> str:
    """ask first. no undo."""
    if not session.ui.confirm(f"Delete {entry.name}?"):
        return ""
    session.stores.delete(entry)
    info("widget", f"deleted {entry.path}")
    return f"Deleted: {entry.name}"


def duplicate(session: Session, entry: Entry) -> str:
    """copy under the next free name in the same store, then edit it."""
    new_name = duplicate_name(entry.root, entry.name)
    dst = entry.root / new_name
    if dst.exists():
        raise NameConflict(new_name, entry.name)
    with span("duplicate", subsystem="widget", snippet=entry.name, new=new_name):
        header.copy(entry.path, dst, new_name)
        editor.edit_at_name(session.config.editor, dst)
        final, _ = _after_edit(dst, new_name, entry.root)
    return f"Duplicated: {final}"
