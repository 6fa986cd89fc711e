#!/usr/bin/env python3
"""
Tab completion for mdsaad
Shell completion scripts and the word list used by the interactive shell
"""

from typing import Iterable, List

COMMANDS = ["show", "config", "completion", "shell"]

SHOW_KEYWORDS = ["list", "categories", "search", "random", "popular", "stats",
                 "colors", "animations", "help", "refresh"]

SHOW_OPTIONS = ["--animated", "--animation", "--color", "--color-scheme", "--width",
                "--speed", "--direction", "--category", "--query", "--limit", "--help"]

CONFIG_ACTIONS = ["show", "get", "set", "reset", "path"]

GLOBAL_OPTIONS = ["--help", "--version", "--verbose", "--config-dir"]

SUPPORTED_SHELLS = ("bash", "zsh", "fish")


def shell_words(art_names: Iterable[str], categories: Iterable[str],
                animations: Iterable[str], schemes: Iterable[str]) -> List[str]:
    """Every word the interactive shell should offer, deduplicated."""
    words = COMMANDS + SHOW_KEYWORDS + SHOW_OPTIONS + ["exit", "quit"]
    words += list(art_names) + list(categories) + list(animations) + list(schemes)
    return list(dict.fromkeys(words))


def generate_bash(art_names: Iterable[str], categories: Iterable[str],
                  animations: Iterable[str], schemes: Iterable[str]) -> str:
    show_words = " ".join(SHOW_KEYWORDS + sorted(set(art_names)))
    return f"""#!/bin/bash
# mdsaad tab completion for bash
# Install: mdsaad completion bash > /etc/bash_completion.d/mdsaad

_mdsaad_completion() {{
    local cur prev
    COMPREPLY=()
    cur="${{COMP_WORDS[COMP_CWORD]}}"
    prev="${{COMP_WORDS[COMP_CWORD-1]}}"

    case "$prev" in
        --category)
            COMPREPLY=( $(compgen -W "{' '.join(categories)}" -- "$cur") )
            return 0
            ;;
        --animation)
            COMPREPLY=( $(compgen -W "{' '.join(animations)}" -- "$cur") )
            return 0
            ;;
        --color-scheme)
            COMPREPLY=( $(compgen -W "{' '.join(schemes)}" -- "$cur") )
            return 0
            ;;
        --direction)
            COMPREPLY=( $(compgen -W "left right top bottom" -- "$cur") )
            return 0
            ;;
    esac

    if [[ $COMP_CWORD -eq 1 ]]; then
        COMPREPLY=( $(compgen -W "{' '.join(COMMANDS + GLOBAL_OPTIONS)}" -- "$cur") )
        return 0
    fi

    case "${{COMP_WORDS[1]}}" in
        show)
            if [[ "$cur" == -* ]]; then
                COMPREPLY=( $(compgen -W "{' '.join(SHOW_OPTIONS)}" -- "$cur") )
            else
                COMPREPLY=( $(compgen -W "{show_words}" -- "$cur") )
            fi
            ;;
        config)
            COMPREPLY=( $(compgen -W "{' '.join(CONFIG_ACTIONS)}" -- "$cur") )
            ;;
        completion)
            COMPREPLY=( $(compgen -W "{' '.join(SUPPORTED_SHELLS)}" -- "$cur") )
            ;;
    esac
}}

complete -F _mdsaad_completion mdsaad
"""


def generate_zsh(art_names: Iterable[str], categories: Iterable[str],
                 animations: Iterable[str], schemes: Iterable[str]) -> str:
    show_words = " ".join(SHOW_KEYWORDS + sorted(set(art_names)))
    return f"""#compdef mdsaad
# mdsaad tab completion for zsh

_mdsaad() {{
    local -a commands
    commands=({' '.join(COMMANDS)})

    if (( CURRENT == 2 )); then
        _describe 'command' commands
        return
    fi

    case "$words[2]" in
        show)
            _arguments \\
                '(-a --animated)'{{-a,--animated}}'[Enable animations]' \\
                '--animation[Animation type]:animation:({' '.join(animations)})' \\
                '(-c --color)'{{-c,--color}}'[Text color]:color:' \\
                '--color-scheme[Color scheme]:scheme:({' '.join(schemes)})' \\
                '(-w --width)'{{-w,--width}}'[Maximum display width]:width:' \\
                '--speed[Animation speed in milliseconds]:speed:' \\
                '--direction[Slide direction]:direction:(left right top bottom)' \\
                '--category[Filter by category]:category:({' '.join(categories)})' \\
                '--query[Search query]:query:' \\
                '--limit[Limit results]:limit:' \\
                '1:art:({show_words})'
            ;;
        config)
            _values 'action' {' '.join(CONFIG_ACTIONS)}
            ;;
        completion)
            _values 'shell' {' '.join(SUPPORTED_SHELLS)}
            ;;
    esac
}}

compdef _mdsaad mdsaad
"""


def generate_fish(art_names: Iterable[str], categories: Iterable[str],
                  animations: Iterable[str], schemes: Iterable[str]) -> str:
    lines = ["# mdsaad tab completion for fish",
             "complete -c mdsaad -f"]
    for command in COMMANDS:
        lines.append(f"complete -c mdsaad -n '__fish_use_subcommand' -a {command}")
    show_cond = "-n '__fish_seen_subcommand_from show'"
    show_words = " ".join(SHOW_KEYWORDS + sorted(set(art_names)))
    lines.append(f"complete -c mdsaad {show_cond} -a '{show_words}'")
    lines.append(f"complete -c mdsaad {show_cond} -s a -l animated -d 'Enable animations'")
    lines.append(f"complete -c mdsaad {show_cond} -l animation -x -a '{' '.join(animations)}'")
    lines.append(f"complete -c mdsaad {show_cond} -l color-scheme -x -a '{' '.join(schemes)}'")
    lines.append(f"complete -c mdsaad {show_cond} -l category -x -a '{' '.join(categories)}'")
    lines.append(f"complete -c mdsaad {show_cond} -l direction -x -a 'left right top bottom'")
    for option in ("color", "width", "speed", "query", "limit"):
        lines.append(f"complete -c mdsaad {show_cond} -l {option} -x")
    lines.append(f"complete -c mdsaad -n '__fish_seen_subcommand_from config' -a '{' '.join(CONFIG_ACTIONS)}'")
    lines.append(f"complete -c mdsaad -n '__fish_seen_subcommand_from completion' -a '{' '.join(SUPPORTED_SHELLS)}'")
    return "\n".join(lines) + "\n"


GENERATORS = {
    "bash": generate_bash,
    "zsh": generate_zsh,
    "fish": generate_fish,
}


def generate_completion(shell: str, art_names: Iterable[str], categories: Iterable[str],
                        animations: Iterable[str], schemes: Iterable[str]) -> str:
    """Completion script for ``shell``; raises ValueError for other shells."""
    generator = GENERATORS.get(shell)
    if generator is None:
        raise ValueError(f"Unsupported shell: {shell} (choose from {', '.join(SUPPORTED_SHELLS)})")
    return generator(list(art_names), list(categories), list(animations), list(schemes))
