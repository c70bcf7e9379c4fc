"""Render argv token lists as display strings.

The formatter never changes the tokens themselves; it only decides how they
are quoted and laid out:

- single line, tokens joined by spaces
- multi-line, one flag (plus its value) per line with ``\\`` continuations
- the raw token list
"""

import re
from typing import Protocol

from cmdcraft.metadata import UNKEYED, MetadataStore
from cmdcraft.models import ImageToolsProvider

__all__ = [
    "CommandFormatter",
    "CommandSource",
    "escape_arg",
    "flat_metadata_line",
]

_NEEDS_QUOTING = re.compile(r"[\s\"'\\$`]")

CONTINUATION = " \\"
INDENT = "  "


class CommandSource(Protocol):
    """Anything that can produce a full argv array."""

    def build_command(self) -> list[str]: ...


def escape_arg(arg: str) -> str:
    r"""Quote ``arg`` for display in a shell-like command line.

    Tokens containing whitespace, quotes, a backslash, ``$`` or a backtick
    are wrapped in double quotes with embedded double quotes escaped.

    Examples:
        >>> escape_arg("plan")
        'plan'
        >>> escape_arg("hello world")
        '"hello world"'
        >>> escape_arg('say "hi"')
        '"say \\"hi\\""'
    """
    if _NEEDS_QUOTING.search(arg):
        escaped = arg.replace('"', '\\"')
        return f'"{escaped}"'
    return arg


class CommandFormatter:
    """Formats the argv produced by a :class:`CommandSource`."""

    def __init__(self, source: CommandSource):
        self.source = source

    def to_string(self) -> str:
        """Return the command as one line of space-separated, escaped tokens."""
        return " ".join(escape_arg(arg) for arg in self.source.build_command())

    def to_string_multi_line_command(self) -> str:
        """Return the command laid out over several continued lines.

        The executor sits alone on the first line. A flag shares its line with
        the following token unless that token is itself a flag. Every line
        but the last ends with a backslash continuation.

        Returns:
            The multi-line string, or an empty string for an empty command.
        """
        command = self.source.build_command()
        if not command:
            return ""

        lines = [escape_arg(command[0])]
        i = 1
        while i < len(command):
            arg = command[i]
            has_value = i + 1 < len(command) and not command[i + 1].startswith("-")
            if arg.startswith("-") and has_value:
                lines.append(f"{INDENT}{escape_arg(arg)} {escape_arg(command[i + 1])}")
                i += 2
            else:
                lines.append(f"{INDENT}{escape_arg(arg)}")
                i += 1

        return f"{CONTINUATION}\n".join(lines)

    def to_string_list(self) -> list[str]:
        """Return the raw argv tokens."""
        return list(self.source.build_command())


def flat_metadata_line(provider: ImageToolsProvider, store: MetadataStore) -> str:
    """Render an image-tools command in the flat string-list layout.

    Keyed values collapse to ``key=v1,v2``; unkeyed values stay bare.

    Examples:
        >>> store = MetadataStore().add("--tag", "a").add("--tag", "b").add(value="src")
        >>> flat_metadata_line(ImageToolsProvider(command="create"), store)
        'docker buildx imagetools create --tag=a,b src'
    """
    parts = [provider.executor, *provider.sub_commands, provider.command]
    for key, values in store.entries():
        if key == UNKEYED:
            parts.extend(values)
        else:
            parts.append(f"{key}={','.join(values)}")
    return " ".join(parts)
