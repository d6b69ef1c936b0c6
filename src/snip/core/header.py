"""header.py - the snippet file format.

    # name: git/status
    # description: check repo state
    # args: <path>            (optional)
    # abbr: gst gs            (optional)
    # created: 2024-01-01T00:00:00+00:00
    # ---
    git status

everything before the sentinel is header, parsed line by line. everything
after it is body, verbatim. the scanner has two states and flips exactly
once, so a body line that looks like "# name: x" is never a field.

in the world: the index card. title on top, recipe below the line.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

MARKER = "#"
SENTINEL = f"{MARKER} ---"
ELLIPSIS = "..."


@dataclass
class Snippet:
    """a parsed snippet file."""
    name: str = ""
    description: str = ""
    args: str = ""
    abbr: str = ""
    created: str = ""
    body: str = ""
    path: Path | None = None

    @property
    def abbr_keys(self) -> list[str]:
        return self.abbr.split()

    @property
    def needs_args(self) -> bool:
        return bool(self.args.strip())

    def header_lines(self) -> list[str]:
        lines = [
            _field_line("name", self.name),
            _field_line("description", self.description),
        ]
        if self.args:
            lines.append(_field_line("args", self.args))
        if self.abbr:
            lines.append(_field_line("abbr", self.abbr))
        lines.append(_field_line("created", self.created))
        lines.append(SENTINEL)
        return lines


# ============================================================
# SCANNER
# ============================================================

def _field_line(field: str, value: str) -> str:
    return f"{MARKER} {field}: {value}"


def _match_field(line: str) -> tuple[str, str] | None:
    """'# name: x' -> ('name', 'x'). '# description:' -> ('description', '')."""
    prefix = f"{MARKER} "
    if not line.startswith(prefix):
        return None
    rest = line[len(prefix):]
    key, sep, value = rest.partition(":")
    if not sep or not key or " " in key:
        return None
    if value.startswith(" "):
        value = value[1:]
    elif value:
        # "# name:x" is not a field line
        return None
    return key, value


def _iter_lines(filepath):
    """lines without their newline. only '\\n' splits."""
    with open(filepath, "r", encoding="utf-8", newline="\n") as f:
        for raw in f:
            yield raw[:-1] if raw.endswith("\n") else raw


def _scan_header(lines) -> dict[str, str]:
    """header mode only: stop at the sentinel, first match per field wins."""
    found = {}
    for line in lines:
        if line == SENTINEL:
            break
        m = _match_field(line)
        if m and m[0] not in found:
            found[m[0]] = m[1]
    return found


def parse_text(text: str, path: Path | None = None) -> Snippet:
    """combined pass over file contents: header fields and body at once."""
    fields: dict[str, str] = {}
    body_lines: list[str] | None = None

    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line == SENTINEL:
            body_lines = lines[i + 1:]
            break
        m = _match_field(line)
        if m and m[0] not in fields:
            fields[m[0]] = m[1]

    body = ""
    if body_lines is not None:
        body = "\n".join(body_lines)
        if body.endswith("\n"):
            body = body[:-1]

    return Snippet(
        name=fields.get("name", ""),
        description=fields.get("description", ""),
        args=fields.get("args", ""),
        abbr=fields.get("abbr", ""),
        created=fields.get("created", ""),
        body=body,
        path=path,
    )


# ============================================================
# READ
# ============================================================

def parse(filepath) -> Snippet:
    """read the whole snippet in one go."""
    path = Path(filepath)
    with open(path, "r", encoding="utf-8", newline="\n") as f:
        return parse_text(f.read(), path=path)


def read_field(filepath, field: str) -> str:
    """value of a header field, '' if absent. never looks past the sentinel."""
    lines = _iter_lines(filepath)
    try:
        return _scan_header(lines).get(field, "")
    finally:
        lines.close()


def read_body(filepath) -> str:
    """everything after the sentinel, one trailing newline dropped."""
    return parse(filepath).body


def read_body_preview(filepath, max_len: int = 50) -> str:
    """first body line, cut at max_len with '...' appended."""
    first = ""
    in_body = False
    lines = _iter_lines(filepath)
    try:
        for line in lines:
            if in_body:
                first = line
                break
            if line == SENTINEL:
                in_body = True
    finally:
        lines.close()
    return truncate(first, max_len)


def truncate(text: str, max_len: int) -> str:
    if len(text) > max_len:
        return text[:max_len] + ELLIPSIS
    return text


# ============================================================
# WRITE
# ============================================================

def timestamp() -> str:
    """local time, ISO-8601 with offset, second precision."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


def render(snippet: Snippet) -> str:
    text = "\n".join(snippet.header_lines()) + "\n"
    body = snippet.body
    if body:
        text += body if body.endswith("\n") else body + "\n"
    return text


def _write_snippet(filepath, snippet: Snippet) -> Path:
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(render(snippet))
    return path


def write(filepath, name: str, description: str, body: str) -> Path:
    """create a snippet file. created is always now."""
    snippet = Snippet(
        name=name,
        description=description,
        created=timestamp(),
        body=body,
    )
    return _write_snippet(filepath, snippet)


def copy(src, dst, name: str) -> Path:
    """duplicate src at dst under a new name and a fresh created stamp.

    description, args, abbr and body are carried over.
    """
    original = parse(src)
    original.name = name
    original.created = timestamp()
    return _write_snippet(dst, original)
