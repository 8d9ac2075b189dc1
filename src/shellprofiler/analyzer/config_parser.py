"""Line-oriented extraction of aliases and environment variables.

This is deliberately not a shell parser: only single-line ``alias`` and
``export`` declarations (plus fish's ``set -x``) are recognized. Quotes that
bound a whole value are removed; embedded quotes are left untouched.
"""

from typing import Optional

ALIAS_KEYWORD = "alias"
EXPORT_KEYWORD = "export"
FISH_EXPORT_FLAGS = {"-x", "-gx", "-xg", "-Ux", "-xU", "--export"}

QUOTES = ("'", '"')


def strip_quotes(value: str) -> str:
    """Remove one pair of matching quotes wrapping the whole value."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1]
    return value


def parse_assignment(body: str) -> Optional[tuple[str, str]]:
    """Split ``name=value``; returns None when malformed."""
    name, sep, value = body.partition("=")
    name = name.strip()
    if not sep or not name or any(ch.isspace() for ch in name):
        return None
    return name, strip_quotes(value.strip())


def _parse_fish_set(tokens: list[str]) -> Optional[tuple[str, str]]:
    # set -gx NAME value...
    flags = [token for token in tokens[1:] if token.startswith("-")]
    rest = [token for token in tokens[1:] if not token.startswith("-")]
    if not FISH_EXPORT_FLAGS.intersection(flags) or not rest:
        return None
    return rest[0], strip_quotes(" ".join(rest[1:]))


def parse_config_content(content: str) -> tuple[dict[str, str], dict[str, str]]:
    """Extract aliases and environment assignments from config text.

    Args:
        content: Raw configuration file text

    Returns:
        Tuple of (aliases, environment); later lines overwrite earlier ones
    """
    aliases: dict[str, str] = {}
    environment: dict[str, str] = {}

    for raw_line in content.splitlines():
        line = raw_line.strip()
        parts = line.split(None, 1)
        if not parts:
            continue
        keyword = parts[0]
        body = parts[1] if len(parts) > 1 else ""

        if keyword == ALIAS_KEYWORD:
            parsed = parse_assignment(body)
            if parsed:
                aliases[parsed[0]] = parsed[1]
        elif keyword == EXPORT_KEYWORD:
            parsed = parse_assignment(body)
            if parsed:
                environment[parsed[0]] = parsed[1]
        elif keyword == "set":
            parsed = _parse_fish_set(line.split())
            if parsed:
                environment[parsed[0]] = parsed[1]

    return aliases, environment
