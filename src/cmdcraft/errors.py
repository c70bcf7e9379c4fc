"""Exceptions raised while composing command lines.

All errors are raised synchronously at the point where the problem is
detected. Builders validate the command at ``build()`` time, so a builder
may hold an invalid command while it is being configured.
"""

__all__ = [
    "CommandError",
    "EmptyCommand",
    "InvalidArgument",
    "InvalidCommand",
]


class CommandError(ValueError):
    """Base class for configuration errors detected by cmdcraft."""


class InvalidArgument(CommandError):
    """A key or value passed to a store or builder cannot be used."""


class InvalidCommand(CommandError):
    """A command is not part of the command family being built."""

    def __init__(self, family: str, command: str | None, valid: tuple[str, ...] | list[str] = ()):
        """Build the message from the offending command and the valid choices.

        Args:
            family: Human readable name of the tool family (e.g. "Terraform").
            command: The rejected command, or None when no command was set.
            valid: The commands the family accepts.
        """
        self.family = family
        self.command = command
        self.valid = tuple(valid)
        if command is None or not str(command).strip():
            msg = f"{family} command is required. Use with_command() or a factory method."
        else:
            msg = f"Invalid {family} command: {command}."
        if self.valid:
            msg += f" Valid commands are: {', '.join(self.valid)}"
        super().__init__(msg)


class EmptyCommand(RuntimeError):
    """The assembled command has nothing to execute."""
