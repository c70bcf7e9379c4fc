"""Static command tables for the supported tool families.

The tables say which commands a family accepts and which flags each command
understands. They hold data only; the assemblers decide what to emit by
asking :func:`supports`.
"""

from enum import Enum

__all__ = [
    "CAPABILITY_TABLE",
    "IMAGETOOLS_COMMANDS",
    "TERRAFORM_COMMANDS",
    "TERRAGRUNT_COMMANDS",
    "TERRAGRUNT_NATIVE_COMMANDS",
    "Capability",
    "Family",
    "commands_for",
    "is_terraform_command",
    "is_valid_command",
    "supports",
]

TERRAFORM_COMMANDS: tuple[str, ...] = (
    "init",
    "validate",
    "fmt",
    "plan",
    "apply",
    "destroy",
    "output",
    "show",
    "state",
    "import",
    "refresh",
    "taint",
    "untaint",
    "workspace",
)

TERRAGRUNT_NATIVE_COMMANDS: tuple[str, ...] = (
    "run-all",
    "graph-dependencies",
    "hclfmt",
    "aws-provider-patch",
    "render-json",
    "output-module-groups",
    "validate-inputs",
)

TERRAGRUNT_COMMANDS: tuple[str, ...] = TERRAFORM_COMMANDS + TERRAGRUNT_NATIVE_COMMANDS

IMAGETOOLS_COMMANDS: tuple[str, ...] = ("create", "inspect", "prune")


class Family(str, Enum):
    """Tool families with their own command enumeration."""

    TERRAFORM = "terraform"
    TERRAGRUNT = "terragrunt"
    IMAGETOOLS = "imagetools"


class Capability(str, Enum):
    """Flags whose validity depends on the command."""

    AUTO_APPROVE = "auto-approve"
    TARGET = "target"
    VARIABLES = "variables"
    REFRESH = "refresh"
    PLAN_FILE = "plan-file"


CAPABILITY_TABLE: dict[Capability, frozenset[str]] = {
    Capability.AUTO_APPROVE: frozenset({"apply", "destroy"}),
    Capability.TARGET: frozenset({"plan", "apply", "destroy", "refresh", "taint", "untaint"}),
    Capability.VARIABLES: frozenset({"plan", "apply", "destroy", "refresh", "import"}),
    Capability.REFRESH: frozenset({"plan", "apply", "destroy"}),
    # positional plan file, no flag
    Capability.PLAN_FILE: frozenset({"apply", "show"}),
}

_FAMILY_COMMANDS: dict[Family, tuple[str, ...]] = {
    Family.TERRAFORM: TERRAFORM_COMMANDS,
    Family.TERRAGRUNT: TERRAGRUNT_COMMANDS,
    Family.IMAGETOOLS: IMAGETOOLS_COMMANDS,
}


def supports(capability: Capability | str, command: str | None) -> bool:
    """Return True if ``command`` accepts the flag described by ``capability``.

    Args:
        capability: A :class:`Capability` member or its string value.
        command: The command name (e.g. "plan").

    Returns:
        True when the command is listed for the capability.

    Raises:
        ValueError: If ``capability`` is not a known capability name.

    Examples:
        >>> supports(Capability.TARGET, "plan")
        True
        >>> supports("target", "fmt")
        False
    """
    if command is None:
        return False
    return command in CAPABILITY_TABLE[Capability(capability)]


def commands_for(family: Family | str) -> tuple[str, ...]:
    """Return the command enumeration for ``family``."""
    return _FAMILY_COMMANDS[Family(family)]


def is_valid_command(family: Family | str, command: str | None) -> bool:
    """Return True if ``command`` belongs to the enumeration of ``family``."""
    return command is not None and command in commands_for(family)


def is_terraform_command(command: str | None) -> bool:
    """Return True if ``command`` is a plain Terraform command."""
    return command is not None and command in TERRAFORM_COMMANDS
