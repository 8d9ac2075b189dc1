"""Tests for alias and environment extraction."""

from shellprofiler.analyzer.config_parser import (
    parse_assignment,
    parse_config_content,
    strip_quotes,
)


def test_alias_quotes_are_stripped():
    aliases, _ = parse_config_content("alias ll='ls -la'\n")

    assert aliases == {"ll": "ls -la"}


def test_export_parsed_into_environment():
    _, environment = parse_config_content('export PATH="$HOME/bin:$PATH"\nexport EDITOR=nvim\n')

    assert environment == {"PATH": "$HOME/bin:$PATH", "EDITOR": "nvim"}


def test_last_definition_wins():
    aliases, _ = parse_config_content("alias g=git\nalias g='git status'\n")

    assert aliases == {"g": "git status"}


def test_malformed_lines_are_dropped():
    content = "\n".join(
        [
            "alias",
            "alias broken",
            "alias =value",
            "export JUST_A_NAME",
            "# alias commented='out'",
            "aliasx=nope",
            "alias ok=fine",
        ]
    )

    aliases, environment = parse_config_content(content)

    assert aliases == {"ok": "fine"}
    assert environment == {}


def test_embedded_quotes_are_not_unescaped():
    aliases, _ = parse_config_content("alias hi='echo \"hello\"'\n")

    assert aliases == {"hi": 'echo "hello"'}


def test_fish_exported_variables():
    _, environment = parse_config_content("set -gx EDITOR nvim\nset -g fish_greeting ''\n")

    assert environment == {"EDITOR": "nvim"}


def test_strip_quotes_only_when_bounding():
    assert strip_quotes("'a b'") == "a b"
    assert strip_quotes("'mismatched\"") == "'mismatched\""
    assert strip_quotes("'") == "'"


def test_parse_assignment_rejects_spaced_names():
    assert parse_assignment("my name=value") is None
    assert parse_assignment(" name = 'value' ") == ("name", "value")


def test_keyword_followed_by_any_whitespace():
    aliases, environment = parse_config_content("alias\tll='ls -la'\nexport   EDITOR=vim\n")

    assert aliases == {"ll": "ls -la"}
    assert environment == {"EDITOR": "vim"}
