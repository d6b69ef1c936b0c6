"""errors.py - what can go wrong, by kind.

core functions raise these. widgets and cli handlers catch them at the
operation boundary and turn them into one visible line plus exit 1.
filesystem errors (OSError) are not wrapped; they propagate.
"""


class SnipError(Exception):
    """Base for every error snip reports to the user."""

    exit_code = 1


class UsageError(SnipError):
    """Bad input: empty buffer, missing argument, no local store."""


class SnippetNotFound(SnipError):
    """No snippet with that name under the requested scope."""

    def __init__(self, name: str, scope: str = ""):
        self.name = name
        self.scope = scope
        where = f" in {scope} store" if scope else ""
        super().__init__(f"snippet not found{where}: {name}")


class NameConflict(SnipError):
    """Destination name already exists; the original is kept."""

    def __init__(self, name: str, kept: str):
        self.name = name
        self.kept = kept
        super().__init__(f"'{name}' already exists, keeping as '{kept}'")


class MissingTool(SnipError):
    """A required external command is not installed."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"{tool} not found")


class ArgumentsRequired(SnipError):
    """The snippet declares an args hint but none were given."""

    def __init__(self, name: str, hint: str):
        self.name = name
        self.hint = hint
        super().__init__(f"{name} requires arguments: {hint}")
