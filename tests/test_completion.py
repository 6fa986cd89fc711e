import pytest

from completion import (COMMANDS, SHOW_KEYWORDS, generate_completion, shell_words,
                        SUPPORTED_SHELLS)

ARGS = (["batman", "cat"], ["superheroes", "animals"], ["typewriter", "wave"], ["default", "fire"])


def test_bash_script():
    script = generate_completion("bash", *ARGS)
    assert script.startswith("#!/bin/bash")
    assert "complete -F _mdsaad_completion mdsaad" in script
    assert 'compgen -W "superheroes animals"' in script
    assert 'compgen -W "typewriter wave"' in script
    assert "list categories search random popular stats colors animations help refresh batman cat" in script
    assert '"${COMP_WORDS[COMP_CWORD]}"' in script


def test_zsh_script():
    script = generate_completion("zsh", *ARGS)
    assert script.startswith("#compdef mdsaad")
    assert "--color-scheme[Color scheme]:scheme:(default fire)" in script
    assert "'(-a --animated)'{-a,--animated}'[Enable animations]'" in script
    assert "compdef _mdsaad mdsaad" in script


def test_fish_script():
    script = generate_completion("fish", *ARGS)
    lines = script.splitlines()
    assert lines[0] == "# mdsaad tab completion for fish"
    for command in COMMANDS:
        assert f"complete -c mdsaad -n '__fish_use_subcommand' -a {command}" in lines
    assert any("-l category -x -a 'superheroes animals'" in line for line in lines)


def test_unsupported_shell():
    with pytest.raises(ValueError):
        generate_completion("powershell", *ARGS)
    assert SUPPORTED_SHELLS == ("bash", "zsh", "fish")


def test_art_names_are_deduplicated_and_sorted():
    script = generate_completion("bash", ["owl", "cat", "owl"], [], [], [])
    assert "help refresh cat owl\"" in script


def test_shell_words():
    words = shell_words(["list", "batman"], ["logos"], ["wave"], ["fire"])
    assert words.count("list") == 1
    for word in SHOW_KEYWORDS + ["batman", "logos", "wave", "fire", "exit", "--animated"]:
        assert word in words
