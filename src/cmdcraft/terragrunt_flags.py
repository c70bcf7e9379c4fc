"""Terragrunt v0.x / v1.x flag and command names.

Terragrunt 1.0 (the CLI redesign) dropped the ``--terragrunt-`` prefix from
every flag, moved the run-queue flags under ``--queue-*`` and renamed several
commands. The tables below let the assembler emit either syntax from one
configuration.
"""

from dataclasses import dataclass

from cmdcraft.errors import InvalidArgument, InvalidCommand

__all__ = [
    "REMOVED_V1_COMMANDS",
    "TERRAGRUNT_COMMAND_MAP",
    "TERRAGRUNT_FLAG_MAP",
    "FlagMapping",
    "command_tokens",
    "select_flag",
]


@dataclass(frozen=True)
class FlagMapping:
    """Flag spelling in Terragrunt v0.x and v1.x."""

    v0: str
    v1: str


TERRAGRUNT_FLAG_MAP: dict[str, FlagMapping] = {
    "config": FlagMapping("--terragrunt-config", "--config"),
    "working_dir": FlagMapping("--terragrunt-working-dir", "--working-dir"),
    "no_auto_init": FlagMapping("--terragrunt-no-auto-init", "--no-auto-init"),
    "no_auto_retry": FlagMapping("--terragrunt-no-auto-retry", "--no-auto-retry"),
    "non_interactive": FlagMapping("--terragrunt-non-interactive", "--non-interactive"),
    "parallelism": FlagMapping("--terragrunt-parallelism", "--parallelism"),
    "include_dir": FlagMapping("--terragrunt-include-dir", "--queue-include-dir"),
    "exclude_dir": FlagMapping("--terragrunt-exclude-dir", "--queue-exclude-dir"),
    "ignore_dependency_errors": FlagMapping("--terragrunt-ignore-dependency-errors", "--queue-ignore-errors"),
    "ignore_external_deps": FlagMapping("--terragrunt-ignore-external-dependencies", "--queue-exclude-external"),
    "include_external_deps": FlagMapping("--terragrunt-include-external-dependencies", "--queue-include-external"),
    "source": FlagMapping("--terragrunt-source", "--source"),
    "source_map": FlagMapping("--terragrunt-source-map", "--source-map"),
    "download_dir": FlagMapping("--terragrunt-download-dir", "--download-dir"),
    "iam_role": FlagMapping("--terragrunt-iam-role", "--iam-role"),
    "iam_role_session_name": FlagMapping("--terragrunt-iam-role-session-name", "--iam-role-session-name"),
    "strict_include": FlagMapping("--terragrunt-strict-include", "--queue-strict-include"),
}

TERRAGRUNT_COMMAND_MAP: dict[str, tuple[str, ...]] = {
    "run-all": ("run", "--all"),
    "graph-dependencies": ("dag", "graph"),
    "hclfmt": ("hcl", "fmt"),
    "render-json": ("render", "--json", "-w"),
    "output-module-groups": ("find", "--dag", "--json"),
    "validate-inputs": ("validate", "inputs"),
}

REMOVED_V1_COMMANDS: tuple[str, ...] = ("aws-provider-patch",)


def select_flag(flag_key: str, major_version: int) -> str:
    """Return the flag spelling for the given Terragrunt major version.

    Args:
        flag_key: Key into :data:`TERRAGRUNT_FLAG_MAP` (e.g. "config").
        major_version: 0 for the legacy CLI, 1 or higher for the redesign.

    Returns:
        The flag string to emit.

    Raises:
        InvalidArgument: If the key is unknown.

    Examples:
        >>> select_flag("config", 0)
        '--terragrunt-config'
        >>> select_flag("include_dir", 1)
        '--queue-include-dir'
    """
    mapping = TERRAGRUNT_FLAG_MAP.get(flag_key)
    if mapping is None:
        raise InvalidArgument(f"Unknown Terragrunt flag key: {flag_key}")  # noqa: TRY003
    return mapping.v1 if major_version >= 1 else mapping.v0


def command_tokens(command: str, major_version: int) -> list[str]:
    """Return the tokens that spell ``command`` for the given major version.

    Raises:
        InvalidCommand: If the command was removed in the requested version.
    """
    if major_version < 1:
        return [command]
    if command in REMOVED_V1_COMMANDS:
        raise InvalidCommand(
            "Terragrunt",
            f"{command} (removed in Terragrunt v1.x and has no equivalent)",
        )
    return list(TERRAGRUNT_COMMAND_MAP.get(command, (command,)))
