"""Shared fluent builder for Terraform-shaped tools.

Every ``with_*`` method records one piece of configuration and returns the
builder, so calls can be chained. ``build()`` validates the command and
freezes the collected state into a service; ``reset()`` returns the same
builder to its initial state.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Self

from loguru import logger

from cmdcraft.capabilities import Family, commands_for, is_valid_command
from cmdcraft.errors import InvalidArgument, InvalidCommand

__all__ = ["IacBuilder", "require_text", "require_value"]


def require_value(value: Any, field_name: str) -> Any:
    """Return ``value`` unless it is None.

    Raises:
        InvalidArgument: If ``value`` is None.
    """
    if value is None:
        raise InvalidArgument(f"{field_name} cannot be None")  # noqa: TRY003
    return value


def require_text(value: Any, field_name: str) -> str:
    """Return ``value`` unless it is None or not a string.

    Raises:
        InvalidArgument: If ``value`` is None or not a ``str``.
    """
    require_value(value, field_name)
    if not isinstance(value, str):
        msg = f"{field_name} must be a string, got {type(value).__name__}"
        raise InvalidArgument(msg)
    return value


def _add_unique(items: list[str], value: str) -> None:
    if value.strip() and value not in items:
        items.append(value)


class IacBuilder:
    """Base builder holding the configuration common to Terraform and Terragrunt."""

    family: Family = Family.TERRAFORM
    family_label = "Terraform"

    def __init__(self) -> None:
        self._command: str | None = None
        self._working_directory = "."
        self._environment: dict[str, str] = {}
        self._variables: dict[str, str] = {}
        self._var_files: list[str] = []
        self._backend_config: dict[str, str] = {}
        self._targets: list[str] = []
        self._auto_approve = False
        self._dry_run = False
        self._no_color = False
        self._compact_warnings = False
        self._refresh: bool | None = None
        self._reconfigure = False
        self._migrate_state = False
        self._plan_file: str | None = None
        self._out_file: str | None = None
        self._parallelism: int | None = None
        self._lock_timeout: str | None = None

    @classmethod
    def create(cls, command: str | None = None) -> Self:
        """Return a new builder, optionally with its command already set."""
        builder = cls()
        if command:
            builder.with_command(command)
        return builder

    # Core configuration

    def with_command(self, command: str) -> Self:
        """Set the command. Membership is checked by :meth:`build`."""
        self._command = require_text(command, "command").strip()
        return self

    def with_working_directory(self, directory: str) -> Self:
        self._working_directory = require_value(directory, "working directory")
        return self

    # Environment and variables

    def with_environment_variable(self, key: str, value: str) -> Self:
        require_value(key, "environment variable key")
        self._environment[key] = str(require_value(value, f"environment variable {key}"))
        return self

    def with_environment_variables(self, variables: Mapping[str, str]) -> Self:
        for key, value in variables.items():
            self.with_environment_variable(key, value)
        return self

    def with_variable(self, key: str, value: str) -> Self:
        require_value(key, "variable key")
        self._variables[key] = str(require_value(value, f"variable {key}"))
        return self

    def with_variables(self, variables: Mapping[str, str]) -> Self:
        for key, value in variables.items():
            self.with_variable(key, value)
        return self

    def with_var_file(self, file_path: str) -> Self:
        _add_unique(self._var_files, require_value(file_path, "var file path"))
        return self

    def with_var_files(self, file_paths: Iterable[str]) -> Self:
        for file_path in file_paths:
            self.with_var_file(file_path)
        return self

    def with_backend_config(self, key: str, value: str) -> Self:
        require_value(key, "backend config key")
        self._backend_config[key] = str(require_value(value, f"backend config {key}"))
        return self

    def with_backend_configs(self, config: Mapping[str, str]) -> Self:
        for key, value in config.items():
            self.with_backend_config(key, value)
        return self

    def with_target(self, target: str) -> Self:
        """Add a resource address. Blank and duplicate addresses are ignored."""
        _add_unique(self._targets, require_value(target, "target"))
        return self

    def with_targets(self, targets: Iterable[str]) -> Self:
        for target in targets:
            self.with_target(target)
        return self

    # Flags

    def with_auto_approve(self) -> Self:
        self._auto_approve = True
        return self

    def with_dry_run(self) -> Self:
        self._dry_run = True
        return self

    def with_no_color(self) -> Self:
        self._no_color = True
        return self

    def with_compact_warnings(self) -> Self:
        self._compact_warnings = True
        return self

    def with_refresh(self) -> Self:
        self._refresh = True
        return self

    def without_refresh(self) -> Self:
        self._refresh = False
        return self

    def with_reconfigure(self) -> Self:
        self._reconfigure = True
        return self

    def with_migrate_state(self) -> Self:
        self._migrate_state = True
        return self

    # Optional values

    def with_plan_file(self, file_path: str) -> Self:
        self._plan_file = require_value(file_path, "plan file path")
        return self

    def with_out_file(self, file_path: str) -> Self:
        self._out_file = require_value(file_path, "output file path")
        return self

    def with_parallelism(self, level: int) -> Self:
        """Set ``-parallelism``. Zero is accepted and means "not set".

        Raises:
            InvalidArgument: If ``level`` is None, not an integer or negative.
        """
        self._parallelism = _non_negative(level, "Parallelism level")
        return self

    def with_lock_timeout(self, timeout: str) -> Self:
        self._lock_timeout = require_value(timeout, "lock timeout")
        return self

    # Lifecycle

    def reset(self) -> Self:
        """Clear all configuration, keeping this builder instance."""
        IacBuilder.__init__(self)
        self._reset_specific()
        return self

    def build(self):
        """Validate the command and freeze the configuration into a service.

        Raises:
            InvalidCommand: If the command is unset or not valid for the family.
        """
        self._validate_command()
        service = self._create_service(self._shared_state())
        logger.debug(f"Built {self.family_label} service: {service.to_string()}")
        return service

    # Hooks for subclasses

    def _reset_specific(self) -> None:
        pass

    def _create_service(self, shared: dict[str, Any]):
        raise NotImplementedError

    def _validate_command(self) -> None:
        if not is_valid_command(self.family, self._command):
            raise InvalidCommand(self.family_label, self._command, commands_for(self.family))

    def _shared_state(self) -> dict[str, Any]:
        return {
            "command": self._command,
            "working_directory": self._working_directory,
            "environment": dict(self._environment),
            "variables": dict(self._variables),
            "var_files": tuple(self._var_files),
            "backend_config": dict(self._backend_config),
            "targets": tuple(self._targets),
            "auto_approve": self._auto_approve,
            "dry_run": self._dry_run,
            "no_color": self._no_color,
            "compact_warnings": self._compact_warnings,
            "refresh": self._refresh,
            "reconfigure": self._reconfigure,
            "migrate_state": self._migrate_state,
            "plan_file": self._plan_file,
            "out_file": self._out_file,
            "parallelism": self._parallelism,
            "lock_timeout": self._lock_timeout,
        }


def _non_negative(level: int, label: str) -> int:
    require_value(level, label)
    if isinstance(level, bool) or not isinstance(level, int):
        msg = f"{label} must be an integer, got {type(level).__name__}"
        raise InvalidArgument(msg)
    if level < 0:
        raise InvalidArgument(f"{label} cannot be negative, got {level}")  # noqa: TRY003
    return level
