"""snip CLI: unified entry point.

Usage:
    snip list [PATTERN]                 # list snippets (glob filter)
    snip list --names-only              # just the names
    snip path NAME                      # where the file lives
    snip expand NAME                    # print the command
    snip exec NAME [ARGS...]            # run it, args become $1, $2, ...
    snip yank NAME                      # copy the command to the clipboard
    snip abbr list                      # snippets with abbreviation keys
    snip abbr load                      # zsh-abbr lines, for eval
    snip widget save|save-local|search  # called by the zsh key bindings
    snip init zsh                       # print the zsh glue
    snip config                         # show merged configuration

Every subcommand takes --user or --local to pick a store. Without either,
local snippets shadow user snippets of the same name.
"""

import argparse
import sys

from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.markup import escape

from snip import log
from snip.config import load_config, Config
from snip.core import header
from snip.errors import ArgumentsRequired, SnipError
from snip.log import debug
from snip.store import Scope, Stores
from snip.tools import abbr, clipboard, proc


class _Parser(argparse.ArgumentParser):
    """usage errors exit 1, like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


# ============================================================
# HELPERS
# ============================================================

def _scope(args) -> Scope:
    if getattr(args, "user", False):
        return Scope.USER
    if getattr(args, "local", False):
        return Scope.LOCAL
    return Scope.ANY


def _context() -> tuple[Config, Stores]:
    config = load_config()
    return config, Stores.from_config(config)


def _fail(message: str) -> int:
    print(f"snip: {message}", file=sys.stderr)
    return 1


# ============================================================
# COMMANDS
# ============================================================

def cmd_list(args) -> int:
    """print snippets, local first. --no-color output is tab separated."""
    _, stores = _context()
    entries = stores.entries(_scope(args), args.pattern or "")

    console = Console(highlight=False, soft_wrap=True)
    for entry in entries:
        label = str(entry.path) if args.full_path else entry.name
        desc = "" if args.names_only else header.read_field(entry.path, "description")
        if args.no_color:
            print(label if args.names_only else f"{entry.mark} {label}\t{desc}")
        elif args.names_only:
            console.print(f"[bold cyan]{escape(label)}[/bold cyan]")
        else:
            console.print(
                f"[dim]{entry.mark}[/dim] [bold cyan]{escape(label)}[/bold cyan]"
                f"  [dim]{escape(desc)}[/dim]"
            )
    return 0


def cmd_path(args) -> int:
    _, stores = _context()
    print(stores.resolve(args.name, _scope(args)).path)
    return 0


def cmd_expand(args) -> int:
    _, stores = _context()
    entry = stores.resolve(args.name, _scope(args))
    sys.stdout.write(header.read_body(entry.path) + "\n")
    return 0


def cmd_exec(args) -> int:
    """run the body in the configured shell. $0 is the snippet name."""
    config, stores = _context()
    entry = stores.resolve(args.name, _scope(args))
    snippet = header.parse(entry.path)
    if snippet.needs_args and not args.args:
        raise ArgumentsRequired(entry.name, snippet.args)

    shell = config.shell if proc.which(config.shell) else "sh"
    argv = proc.parse_command(shell) + ["-c", snippet.body, entry.name, *args.args]
    debug("cli", f"exec {entry.name} with {len(args.args)} args")
    with log.span("exec", subsystem="cli", snippet=entry.name):
        return proc.run_passthrough(argv)


def cmd_yank(args) -> int:
    config, stores = _context()
    entry = stores.resolve(args.name, _scope(args))
    argv = clipboard.detect(config.clipboard)
    if argv is None:
        return _fail("no clipboard command found (set ZSH_SNIP_CLIPBOARD)")
    if not clipboard.copy(header.read_body(entry.path), argv):
        return _fail(f"{argv[0]} failed")
    print(f"Copied: {entry.name}", file=sys.stderr)
    return 0


def _abbr_entries(args):
    _, stores = _context()
    scope = _scope(args)
    if scope == Scope.LOCAL and stores.local_root is None:
        return []
    return stores.entries(scope)


def cmd_abbr_list(args) -> int:
    for reg in abbr.registrations(_abbr_entries(args)):
        if args.keys_only:
            print(reg.key)
        else:
            preview = header.truncate(reg.expansion.split("\n", 1)[0], 50)
            print(f"{reg.key}\t{reg.name}\t{preview}")
    return 0


def cmd_abbr_load(args) -> int:
    regs = abbr.registrations(_abbr_entries(args))
    sys.stdout.write(abbr.render_load(regs, forget=args.forget))
    return 0


def cmd_widget(args) -> int:
    """one key binding's worth of work. prints the encoded result."""
    from snip import widgets

    session = widgets.Session.create(warned=args.warned)
    buffer = widgets.LineBuffer(text=args.buffer, cursor=args.cursor)
    scope = _scope(args)

    if args.widget == "save":
        result = widgets.save(session, buffer, scope)
    elif args.widget == "save-local":
        result = widgets.save(session, buffer, Scope.LOCAL)
    else:
        result = widgets.search(session, buffer, scope, query=args.query)

    sys.stdout.write(result.encode())
    return 0 if result.ok else 1


def cmd_init(args) -> int:
    from snip.shell import init_script
    sys.stdout.write(init_script(args.shell))
    return 0


def cmd_config(args) -> int:
    config = load_config()
    for key, value in config.to_dict().items():
        print(f"{key} = {value!r}")
    print(f"store_root = {str(config.store_root)!r}")
    print(f"source = {config.source}")
    return 0


# ============================================================
# PARSER
# ============================================================

def _scope_parent() -> argparse.ArgumentParser:
    parent = _Parser(add_help=False)
    group = parent.add_mutually_exclusive_group()
    group.add_argument("--user", action="store_true", help="Only the user store")
    group.add_argument("--local", action="store_true", help="Only the local (project) store")
    return parent


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="snip",
        description="Save, search and run shell command snippets.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging to stderr")
    parser.add_argument("--trace", action="store_true", help="Export spans to stderr")
    subparsers = parser.add_subparsers(dest="command")
    scoped = [_scope_parent()]

    p = subparsers.add_parser("list", parents=scoped, help="List snippets")
    p.add_argument("pattern", nargs="?", default="", help="Glob filter on names")
    p.add_argument("--names-only", action="store_true", help="Print names only")
    p.add_argument("--full-path", action="store_true", help="Print file paths instead of names")
    p.add_argument("--no-color", action="store_true", help="Plain output")
    p.set_defaults(func=cmd_list)

    p = subparsers.add_parser("path", parents=scoped, help="Print a snippet's file path")
    p.add_argument("name")
    p.set_defaults(func=cmd_path)

    p = subparsers.add_parser("expand", parents=scoped, help="Print a snippet's command")
    p.add_argument("name")
    p.set_defaults(func=cmd_expand)

    p = subparsers.add_parser("exec", parents=scoped, help="Run a snippet with arguments")
    p.add_argument("name")
    p.add_argument("args", nargs=argparse.REMAINDER, help="Positional arguments ($1, $2, ...)")
    p.set_defaults(func=cmd_exec)

    p = subparsers.add_parser("yank", parents=scoped, help="Copy a snippet's command")
    p.add_argument("name")
    p.set_defaults(func=cmd_yank)

    ab = subparsers.add_parser("abbr", help="zsh-abbr integration")
    ab_sub = ab.add_subparsers(dest="abbr_command")

    p = ab_sub.add_parser("list", parents=scoped, help="Snippets with abbreviation keys")
    p.add_argument("--keys-only", action="store_true")
    p.set_defaults(func=cmd_abbr_list)

    p = ab_sub.add_parser("load", parents=scoped, help="Print abbr registration lines")
    p.add_argument("--forget", nargs="*", default=[], metavar="KEY",
                   help="Keys to erase first (previously loaded)")
    p.set_defaults(func=cmd_abbr_load)

    p = subparsers.add_parser("widget", parents=scoped, help="Shell widget entry point")
    p.add_argument("widget", choices=["save", "save-local", "search"])
    p.add_argument("--buffer", default="")
    p.add_argument("--cursor", type=int, default=0)
    p.add_argument("--warned", default="", help="Tools already warned about")
    p.add_argument("--query", default="", help="Initial fzf query")
    p.set_defaults(func=cmd_widget)

    p = subparsers.add_parser("init", help="Print shell integration")
    p.add_argument("shell", choices=["zsh"])
    p.set_defaults(func=cmd_init)

    p = subparsers.add_parser("config", help="Show merged configuration")
    p.set_defaults(func=cmd_config)

    return parser


def main(argv=None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        log.set_level("debug")
    if args.trace:
        log.enable_console_export()

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    # abbr group needs its own check
    if args.command == "abbr" and not getattr(args, "abbr_command", None):
        return _fail("abbr needs a subcommand: list, load")

    try:
        return args.func(args)
    except SnipError as e:
        _fail(str(e))
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
