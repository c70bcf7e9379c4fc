"""Translate provider configuration into argv token lists.

Each assembler exposes two operations:

- ``to_command_args()`` returns the flag/value tokens only.
- ``build_command()`` prefixes them with the executor, any sub-commands and
  the command itself.

Terraform and Terragrunt emission is command-aware: flags a command does not
accept (per :mod:`cmdcraft.capabilities`) are dropped rather than rejected.
"""

from loguru import logger

from cmdcraft.capabilities import Capability, is_terraform_command, supports
from cmdcraft.metadata import UNKEYED, MetadataStore
from cmdcraft.models import IacProvider, ImageToolsProvider, TerragruntProvider
from cmdcraft.terragrunt_flags import command_tokens, select_flag

__all__ = [
    "ImageToolsAssembler",
    "TerraformAssembler",
    "TerragruntAssembler",
    "is_present",
]


def is_present(value: object) -> bool:
    """Return True if an optional scalar should produce a flag.

    None, blank strings and zero are treated as absent.

    Examples:
        >>> is_present("  ")
        False
        >>> is_present(0)
        False
        >>> is_present("30s")
        True
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return bool(value)


class ImageToolsAssembler:
    """Builds ``docker buildx imagetools`` argv from a metadata store."""

    def __init__(self, provider: ImageToolsProvider, store: MetadataStore):
        self.provider = provider
        self.store = store

    def to_command_args(self) -> list[str]:
        """Walk the store in insertion order and emit tokens.

        Unkeyed values are emitted bare; keyed values expand to one
        ``key value`` pair per value.
        """
        args: list[str] = []
        for key, values in self.store.entries():
            if key == UNKEYED:
                args.extend(values)
            else:
                for value in values:
                    args.extend((key, value))
        return args

    def build_command(self) -> list[str]:
        """Return ``[executor, *sub_commands, command, *args]``."""
        return [
            self.provider.executor,
            *self.provider.sub_commands,
            self.provider.command,
            *self.to_command_args(),
        ]


class TerraformAssembler:
    """Builds Terraform-shaped argv from an :class:`IacProvider`."""

    def __init__(self, provider: IacProvider):
        self.provider = provider

    def to_command_args(self) -> list[str]:
        """Return the Terraform arguments for the provider's command."""
        args: list[str] = []
        self._add_terraform_args(args, self.provider.command)
        return args

    def build_command(self) -> list[str]:
        """Return ``[executor, command, *args]``."""
        return [self.provider.executor, self.provider.command, *self.to_command_args()]

    def _add_terraform_args(self, args: list[str], command: str) -> None:
        self._add_init_args(args, command)
        self._add_variable_args(args, command)
        self._add_target_args(args, command)
        self._add_plan_args(args, command)
        self._add_apply_args(args, command)
        self._add_common_args(args, command)
        self._add_plan_file(args, command)

    def _add_init_args(self, args: list[str], command: str) -> None:
        if command != "init":
            return
        for key, value in self.provider.backend_config.items():
            args.extend(("-backend-config", f"{key}={value}"))
        if self.provider.reconfigure:
            args.append("-reconfigure")
        if self.provider.migrate_state:
            args.append("-migrate-state")

    def _add_variable_args(self, args: list[str], command: str) -> None:
        if not supports(Capability.VARIABLES, command):
            if self.provider.variables or self.provider.var_files:
                logger.debug(f"Dropping -var/-var-file: not accepted by '{command}'")
            return
        for key, value in self.provider.variables.items():
            args.extend(("-var", f"{key}={value}"))
        for var_file in self.provider.var_files:
            if is_present(var_file):
                args.extend(("-var-file", var_file))

    def _add_target_args(self, args: list[str], command: str) -> None:
        if not supports(Capability.TARGET, command):
            if self.provider.targets:
                logger.debug(f"Dropping -target: not accepted by '{command}'")
            return
        for target in self.provider.targets:
            if is_present(target):
                args.extend(("-target", target))

    def _add_plan_args(self, args: list[str], command: str) -> None:
        if command == "plan" and is_present(self.provider.out_file):
            args.extend(("-out", self.provider.out_file))

    def _add_apply_args(self, args: list[str], command: str) -> None:
        if not supports(Capability.AUTO_APPROVE, command) or not self.provider.auto_approve:
            return
        # plan file takes precedence over -auto-approve
        if command == "apply" and is_present(self.provider.plan_file):
            logger.debug("Plan file given: omitting -auto-approve")
            return
        args.append("-auto-approve")

    def _add_common_args(self, args: list[str], command: str) -> None:
        provider = self.provider
        if provider.no_color:
            args.append("-no-color")
        if provider.compact_warnings:
            args.append("-compact-warnings")
        if is_present(provider.parallelism):
            args.extend(("-parallelism", str(provider.parallelism)))
        if is_present(provider.lock_timeout):
            args.extend(("-lock-timeout", provider.lock_timeout))
        if provider.refresh is not None and supports(Capability.REFRESH, command):
            args.append(f"-refresh={'true' if provider.refresh else 'false'}")

    def _add_plan_file(self, args: list[str], command: str) -> None:
        # positional, so it must follow every flag
        if supports(Capability.PLAN_FILE, command) and is_present(self.provider.plan_file):
            args.append(self.provider.plan_file)


class TerragruntAssembler(TerraformAssembler):
    """Builds Terragrunt argv: Terraform arguments, then Terragrunt flags."""

    provider: TerragruntProvider

    def __init__(self, provider: TerragruntProvider):
        super().__init__(provider)

    def to_command_args(self) -> list[str]:
        """Return the Terraform arguments followed by the Terragrunt flags."""
        args: list[str] = []
        command = self.provider.command
        # terragrunt-native commands take no terraform arguments
        if is_terraform_command(command):
            self._add_terraform_args(args, command)
        self._add_terragrunt_args(args)
        return args

    def build_command(self) -> list[str]:
        """Return the full argv, honoring run-all and the major version.

        Raises:
            InvalidCommand: If the command was removed in the selected
                Terragrunt major version.
        """
        provider = self.provider
        command = provider.command
        version = provider.terragrunt_major_version
        prefix: list[str] = [provider.executor]
        if provider.run_all and is_terraform_command(command):
            prefix.extend(command_tokens("run-all", version))
            prefix.append(command)
        else:
            prefix.extend(command_tokens(command, version))
        return [*prefix, *self.to_command_args()]

    def _flag(self, key: str) -> str:
        return select_flag(key, self.provider.terragrunt_major_version)

    def _add_terragrunt_args(self, args: list[str]) -> None:
        provider = self.provider

        if is_present(provider.terragrunt_config):
            args.extend((self._flag("config"), provider.terragrunt_config))
        if is_present(provider.terragrunt_working_dir):
            args.extend((self._flag("working_dir"), provider.terragrunt_working_dir))

        if provider.non_interactive:
            args.append(self._flag("non_interactive"))
        if provider.no_auto_init:
            args.append(self._flag("no_auto_init"))
        if provider.no_auto_retry:
            args.append(self._flag("no_auto_retry"))

        if is_present(provider.terragrunt_parallelism):
            if provider.run_all or provider.command == "run-all":
                args.extend((self._flag("parallelism"), str(provider.terragrunt_parallelism)))
            else:
                logger.debug("Dropping terragrunt parallelism: only used with run-all")

        for directory in provider.include_dirs:
            if is_present(directory):
                args.extend((self._flag("include_dir"), directory))
        for directory in provider.exclude_dirs:
            if is_present(directory):
                args.extend((self._flag("exclude_dir"), directory))

        if provider.ignore_dependency_errors:
            args.append(self._flag("ignore_dependency_errors"))
        if provider.ignore_external_dependencies:
            args.append(self._flag("ignore_external_deps"))
        if provider.include_external_dependencies:
            args.append(self._flag("include_external_deps"))

        if is_present(provider.terragrunt_source):
            args.extend((self._flag("source"), provider.terragrunt_source))
        for original, replacement in provider.source_map.items():
            args.extend((self._flag("source_map"), f"{original}={replacement}"))

        if is_present(provider.download_dir):
            args.extend((self._flag("download_dir"), provider.download_dir))

        if is_present(provider.iam_role):
            args.extend((self._flag("iam_role"), provider.iam_role))
            if is_present(provider.iam_role_session_name):
                args.extend((self._flag("iam_role_session_name"), provider.iam_role_session_name))

        if provider.strict_include:
            args.append(self._flag("strict_include"))
