"""core: naming, suffixes, the file format, trailing comments, renames."""

from snip.core.naming import slugify, extract_primary_command, default_basis
from snip.core.suffix import next_suffix, duplicate_name, free_name
from snip.core.header import (
    Snippet, parse, read_field, read_body, read_body_preview, write, copy,
)
from snip.core.comments import (
    extract_trailing_comment, extract_trailing_name, strip_trailing_comment,
)
from snip.core.reconcile import Outcome, reconcile

__all__ = [
    "slugify", "extract_primary_command", "default_basis",
    "next_suffix", "duplicate_name", "free_name",
    "Snippet", "parse", "read_field", "read_body", "read_body_preview",
    "write", "copy",
    "extract_trailing_comment", "extract_trailing_name", "strip_trailing_comment",
    "Outcome", "reconcile",
]
