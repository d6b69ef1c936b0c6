"""shell.py - the zsh side of snip.

printed by `snip init zsh`, loaded with:

    eval "$(snip init zsh)"

the widgets pass BUFFER/CURSOR to `snip widget ...` and apply the answer.
the answer is NUL separated: action, cursor, warned tools, message, buffer.
a trailing 'x' guards the buffer's trailing newlines from $(...).
"""

ZSH = r"""
# snip: shell snippet manager
autoload -Uz edit-command-line
zle -N edit-command-line

typeset -g _snip_warned=""
typeset -ga _snip_abbr_local

_snip_apply() {
  local -a parts
  parts=("${(@0)1}")
  local action="${parts[1]}" cursor="${parts[2]}" message="${parts[4]}"
  local text="${(pj:\0:)parts[5,-1]}"
  _snip_warned="${parts[3]}"
  case "$action" in
    replace|accept|edit)
      BUFFER="$text"
      CURSOR="$cursor"
      ;;
  esac
  zle reset-prompt
  case "$action" in
    accept) zle accept-line ;;
    edit) zle edit-command-line ;;
  esac
  [[ -n "$message" ]] && zle -M "$message"
  return 0
}

_snip_widget() {
  local out
  out="$(command snip widget "$1" --buffer="$BUFFER" --cursor="$CURSOR" --warned="$_snip_warned"; print -n x)"
  _snip_apply "${out%x}"
}

_snip_save() { _snip_widget save }
_snip_save_local() { _snip_widget save-local }
_snip_search() { _snip_widget search }

zle -N _snip_save
zle -N _snip_save_local
zle -N _snip_search

bindkey '^X^S' _snip_save
bindkey '^X^L' _snip_save_local
bindkey '^X^X' _snip_search

_snip_abbr_reload_local() {
  eval "$(command snip abbr load --local --forget ${_snip_abbr_local[@]} 2>/dev/null)"
  _snip_abbr_local=(${(f)"$(command snip abbr list --local --keys-only 2>/dev/null)"})
}

if [[ "${ZSH_SNIP_ABBR:-0}" == (1|true|yes|on) ]]; then
  if (( $+functions[abbr] )); then
    eval "$(command snip abbr load --user 2>/dev/null)"
    _snip_abbr_reload_local
    autoload -Uz add-zsh-hook
    add-zsh-hook chpwd _snip_abbr_reload_local
  elif [[ ",$_snip_warned," != *,abbr,* ]]; then
    print -u2 "zsh-snip: ZSH_SNIP_ABBR is set but zsh-abbr is not loaded"
    _snip_warned="${_snip_warned:+$_snip_warned,}abbr"
  fi
fi
"""


def init_script(shell: str) -> str:
    """glue for the given shell. only zsh for now."""
    if shell != "zsh":
        raise ValueError(f"unsupported shell: {shell}")
    return ZSH.lstrip("\n")
