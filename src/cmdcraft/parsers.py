"""Parse Action-style string inputs into Python values.

GitHub Action inputs are always strings. Lists may arrive as a JSON array,
an escaped JSON array, one item per line, or comma-separated; maps arrive as
a JSON object. These helpers turn them into the lists, dicts and booleans the
builders expect.
"""

import json
import re
from collections.abc import Callable

from loguru import logger

__all__ = [
    "MAX_INPUT_SIZE",
    "parse_boolean",
    "parse_comma_separated",
    "parse_formatted_string",
    "parse_json_object",
    "stringify_value",
]

MAX_INPUT_SIZE = 10000

_TRUE_VALUES = frozenset({"true", "1", "yes", "y"})
_JSON_ARRAY = re.compile(r"^\s*\[.*\]\s*$", re.DOTALL)
_EDGE_QUOTES = re.compile(r"^[\"'`]|[\"'`]$")


def _remove_quotes(text: str) -> str:
    return _EDGE_QUOTES.sub("", text)


def parse_comma_separated(text: str | None) -> list[str]:
    """Split on commas, trim each item and drop blanks.

    Examples:
        >>> parse_comma_separated("a,,b,")
        ['a', 'b']
        >>> parse_comma_separated("   ")
        []
    """
    if not text or not text.strip():
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_json_object(text: str | None) -> dict[str, str]:
    """Parse a JSON object into a string-to-string dict.

    Blank input yields an empty dict. Malformed JSON, or JSON that is not an
    object, is logged as a warning and also yields an empty dict.

    Args:
        text: The raw input string.

    Returns:
        The parsed mapping with every value converted by
        :func:`stringify_value`. Null values are dropped.
    """
    if not text or not text.strip():
        return {}
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        logger.warning(f"Failed to parse JSON: {text}")
        return {}
    if not isinstance(parsed, dict):
        logger.warning(f"Expected a JSON object, got {type(parsed).__name__}: {text}")
        return {}
    return {str(key): stringify_value(value) for key, value in parsed.items() if value is not None}


def stringify_value(value: object) -> str:
    """Render an input value the way Terraform expects it on the command line.

    Examples:
        >>> stringify_value(True)
        'true'
        >>> stringify_value([1, 2])
        '[1, 2]'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _parse_json_array(text: str) -> list[str]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return []
    if not isinstance(parsed, list):
        return []
    return [_remove_quotes(str(item)) for item in parsed]


def _parse_escaped_json(text: str) -> list[str]:
    try:
        inner = text.strip('"')
        unescaped = json.loads(f'"{inner}"')
    except json.JSONDecodeError:
        return []
    if not (unescaped.startswith("[") and unescaped.endswith("]")):
        return []
    return _parse_json_array(unescaped)


def _parse_lines(text: str) -> list[str]:
    lines = (line.strip() for line in text.split("\n"))
    # skip bare JSON bracket lines; indexed addresses such as a[0] are items
    return [_remove_quotes(line) for line in lines if line.strip("[],")]


def _parse_commas(text: str) -> list[str]:
    return [_remove_quotes(item) for item in parse_comma_separated(text)]


# (can_parse, parse) pairs, tried in order; the comma parser always applies
_STRATEGIES: tuple[tuple[Callable[[str], bool], Callable[[str], list[str]]], ...] = (
    (lambda text: bool(_JSON_ARRAY.match(text)), _parse_json_array),
    (lambda text: '\\"' in text, _parse_escaped_json),
    (lambda text: "\n" in text, _parse_lines),
    (lambda text: True, _parse_commas),
)


def parse_formatted_string(value: str | list | tuple | None) -> list[str]:
    """Parse a list input given in any of the formats an Action may receive.

    Lists and tuples pass through with their items converted to ``str``.
    Strings are tried as a JSON array, an escaped JSON array, newline
    separated values and finally comma-separated values; the first strategy
    that yields items wins.

    Args:
        value: The raw input.

    Returns:
        The parsed items, or an empty list when nothing could be parsed.

    Examples:
        >>> parse_formatted_string('["a", "b"]')
        ['a', 'b']
        >>> parse_formatted_string("a\\nb")
        ['a', 'b']
        >>> parse_formatted_string("a, b")
        ['a', 'b']
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    if not isinstance(value, str):
        return []

    text = value.strip().strip("`")[:MAX_INPUT_SIZE]
    if not text:
        return []

    for can_parse, parse in _STRATEGIES:
        if can_parse(text):
            items = parse(text)
            if items:
                return items
    return []


def parse_boolean(value: str | int | bool | None) -> bool:
    """Interpret an Action boolean input.

    ``true``, ``1``, ``yes`` and ``y`` (any case) are true; everything else,
    including None and the empty string, is false.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return value.strip().lower() in _TRUE_VALUES
