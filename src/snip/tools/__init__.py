"""tools: the external programs snip drives (fzf, editor, clipboard, abbr)."""
