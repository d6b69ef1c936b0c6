"""fzf.py - the fuzzy finder, as a function call.

we hand fzf one line per snippet:

    ~ docker-run          <tab>Run a container               <tab>docker run -it...<tab>/full/path

the first three fields are shown, the fourth is for us and the preview.
fzf answers with three lines: the final query, the key that ended the
search (empty for enter), and the chosen line.
"""

from dataclasses import dataclass
from pathlib import Path

from snip.core import header
from snip.store import Entry
from snip.tools import proc
from snip.log import debug

NAME_WIDTH = 20
DESC_WIDTH = 30
PREVIEW_LEN = 50
SHOWN_FIELDS = "1..3"


@dataclass
class Choice:
    """what fzf gave back."""
    query: str = ""
    key: str = ""
    mark: str = ""
    name: str = ""
    path: Path | None = None

    @property
    def cancelled(self) -> bool:
        return not self.name


def listing_line(entry: Entry) -> str:
    """one fzf input line for a snippet. one file read per snippet."""
    snippet = header.parse(entry.path)
    desc = snippet.description.replace("\t", " ")
    if len(desc) > DESC_WIDTH:
        desc = desc[:DESC_WIDTH - 1] + "…"
    first = snippet.body.split("\n", 1)[0].replace("\t", " ")
    preview = header.truncate(first, PREVIEW_LEN)
    return (f"{entry.mark} {entry.name:<{NAME_WIDTH}}\t{desc:<{DESC_WIDTH}}"
            f"\t{preview}\t{entry.path}")


def listing(entries: list[Entry]) -> str:
    return "".join(listing_line(e) + "\n" for e in entries)


def preview_command(setting: str = "") -> str:
    """what fzf runs to show the highlighted snippet. {4} is the path field."""
    if setting:
        return setting
    if proc.which("bat"):
        return "bat --style=plain --color=always --language=bash {4}"
    return "cat {4}"


def command(fzf: str, keys: list[str], query: str = "", header_text: str = "",
            preview: str = "") -> list[str]:
    argv = proc.parse_command(fzf) + [
        "--delimiter=\t",
        "--tabstop=1",
        f"--with-nth={SHOWN_FIELDS}",
        "--print-query",
        f"--query={query}",
        f"--expect={','.join(keys)}",
        "--prompt=Snippet> ",
    ]
    if header_text:
        argv.append(f"--header={header_text}")
    if preview:
        argv += [f"--preview={preview}", "--preview-window=bottom:50%"]
    return argv


def parse_output(stdout: str) -> Choice:
    """query, key, selection -> Choice. missing lines mean cancelled."""
    lines = stdout.split("\n")
    query = lines[0] if lines else ""
    key = lines[1].strip() if len(lines) > 1 else ""
    selected = lines[2] if len(lines) > 2 else ""
    if not selected.strip():
        return Choice(query=query, key=key)

    fields = selected.split("\t")
    shown = fields[0]
    mark, _, name = shown.partition(" ")
    path = Path(fields[3]) if len(fields) > 3 and fields[3] else None
    return Choice(query=query, key=key, mark=mark, name=name.strip(), path=path)


def select(fzf: str, entries: list[Entry], keys: list[str], query: str = "",
           header_text: str = "", preview: str = "") -> Choice:
    """run fzf over entries and return the choice."""
    argv = command(fzf, keys, query=query, header_text=header_text, preview=preview)
    debug("fzf", f"{len(entries)} entries, query={query!r}")
    result = proc.run(argv, input=listing(entries), stderr_to_tty=True)
    # 1: no match, 130: interrupted. both still print the query line.
    if result.returncode not in (0, 1, 130):
        debug("fzf", f"exit {result.returncode}: {result.stderr.strip()}")
        return Choice(query=query)
    return parse_output(result.stdout)
