"""YAML configuration files for the command-line interface.

A config file carries the same keys as the GitHub Action inputs, e.g.::

    command: plan
    working-directory: infra/prod
    variables:
      region: eu-west-1
    targets: module.vpc, module.dns
    plan-file: prod.tfplan
    refresh: "false"

Values may be written as native YAML (lists, mappings, booleans, integers)
or as the strings an Action would receive (JSON objects, comma or newline
separated lists, ``"true"``/``"false"``). Keys that are absent leave the
builder at its defaults.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from loguru import logger

from cmdcraft.builders import ImageToolsBuilder, TerraformBuilder, TerragruntBuilder
from cmdcraft.parsers import parse_boolean, parse_formatted_string, parse_json_object, stringify_value

__all__ = [
    "ImageToolsConfig",
    "TerraformConfig",
    "TerragruntConfig",
    "load_mapping",
]


def load_mapping(file_path: Path, label: str) -> dict[str, Any]:
    """Read a YAML document that must be a mapping.

    Args:
        file_path: Path to the YAML file.
        label: Name used in error messages (e.g. "Terraform config").

    Returns:
        The parsed mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the file is empty.
        TypeError: If the document is not a mapping.
    """
    with open(file_path) as f:
        config = yaml.safe_load(f)

    if not config:
        raise ValueError(f"{label} file is empty")  # noqa: TRY003

    if not isinstance(config, dict):
        msg = f"{label} file must contain a mapping, got {type(config).__name__}"
        raise TypeError(msg)

    return config


def _to_list(value: Any) -> list[str]:
    return parse_formatted_string(value)


def _to_map(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        # null values mean "unset", as in JSON input
        return {str(k): stringify_value(v) for k, v in value.items() if v is not None}
    return parse_json_object(str(value))


def _to_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_int(value: Any, key: str) -> int | None:
    """Parse an integer input. Non-numeric strings are ignored with a warning."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {key}: {value!r}")
        return None


def _to_tristate(value: Any) -> bool | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_boolean(value)


@dataclass
class TerraformConfig:
    """Terraform inputs loaded from a YAML file or a mapping.

    Attributes mirror the Action inputs. ``plan_file`` is routed by
    :meth:`to_builder`: it becomes ``-out`` for ``plan`` and the positional
    plan file for ``apply`` and ``show``.
    """

    command: str | None = None
    working_directory: str = "."
    variables: dict[str, str] = field(default_factory=dict)
    var_files: list[str] = field(default_factory=list)
    backend_config: dict[str, str] = field(default_factory=dict)
    targets: list[str] = field(default_factory=list)
    plan_file: str | None = None
    parallelism: int | None = None
    lock_timeout: str | None = None
    refresh: bool | None = None
    auto_approve: bool = False
    no_color: bool = False
    compact_warnings: bool = False
    reconfigure: bool = False
    migrate_state: bool = False
    dry_run: bool = False

    label = "Terraform config"

    @classmethod
    def from_yaml(cls, file_path: Path):
        """Load the configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the YAML is malformed.
            ValueError: If the file is empty.
            TypeError: If the document is not a mapping.
        """
        return cls.from_mapping(load_mapping(file_path, cls.label))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]):
        """Build the configuration from hyphenated Action-style keys."""
        return cls(**cls._parse(data))

    @classmethod
    def _parse(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "command": _to_str(data.get("command")),
            "working_directory": _to_str(data.get("working-directory")) or ".",
            "variables": _to_map(data.get("variables")),
            "var_files": _to_list(data.get("var-files")),
            "backend_config": _to_map(data.get("backend-config")),
            "targets": _to_list(data.get("targets")),
            "plan_file": _to_str(data.get("plan-file")),
            "parallelism": _to_int(data.get("parallelism"), "parallelism"),
            "lock_timeout": _to_str(data.get("lock-timeout")),
            "refresh": _to_tristate(data.get("refresh")),
            "auto_approve": parse_boolean(data.get("auto-approve")),
            "no_color": parse_boolean(data.get("no-color")),
            "compact_warnings": parse_boolean(data.get("compact-warnings")),
            "reconfigure": parse_boolean(data.get("reconfigure")),
            "migrate_state": parse_boolean(data.get("migrate-state")),
            "dry_run": parse_boolean(data.get("dry-run")),
        }

    def merged(self, overrides: Mapping[str, Any]):
        """Return a copy where every non-None override replaces the stored value.

        Args:
            overrides: Field names (snake_case) mapped to new values.
        """
        known = {f.name for f in fields(self)}
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name, value in overrides.items():
            if name in known and value is not None:
                values[name] = value
        return type(self)(**values)

    def new_builder(self) -> TerraformBuilder:
        return TerraformBuilder.create(self.command)

    def to_builder(self) -> TerraformBuilder:
        """Return a builder configured from this file. Nothing is validated until ``build()``."""
        builder = self.new_builder()
        builder.with_working_directory(self.working_directory)
        builder.with_variables(self.variables)
        builder.with_var_files(self.var_files)
        builder.with_backend_configs(self.backend_config)
        builder.with_targets(self.targets)

        if self.auto_approve:
            builder.with_auto_approve()
        if self.plan_file:
            if self.command == "plan":
                builder.with_out_file(self.plan_file)
            elif self.command in ("apply", "show"):
                builder.with_plan_file(self.plan_file)
        if self.no_color:
            builder.with_no_color()
        if self.compact_warnings:
            builder.with_compact_warnings()
        if self.parallelism is not None:
            builder.with_parallelism(self.parallelism)
        if self.lock_timeout:
            builder.with_lock_timeout(self.lock_timeout)
        if self.refresh is True:
            builder.with_refresh()
        elif self.refresh is False:
            builder.without_refresh()
        if self.reconfigure:
            builder.with_reconfigure()
        if self.migrate_state:
            builder.with_migrate_state()
        if self.dry_run:
            builder.with_dry_run()
        return builder


@dataclass
class TerragruntConfig(TerraformConfig):
    """Terragrunt inputs: the Terraform inputs plus Terragrunt's global flags."""

    run_all: bool = False
    terragrunt_config: str | None = None
    terragrunt_working_dir: str | None = None
    non_interactive: bool = False
    no_auto_init: bool = False
    no_auto_retry: bool = False
    terragrunt_parallelism: int | None = None
    include_dirs: list[str] = field(default_factory=list)
    exclude_dirs: list[str] = field(default_factory=list)
    ignore_dependency_errors: bool = False
    ignore_external_dependencies: bool = False
    include_external_dependencies: bool = False
    terragrunt_source: str | None = None
    source_map: dict[str, str] = field(default_factory=dict)
    download_dir: str | None = None
    iam_role: str | None = None
    iam_role_session_name: str | None = None
    strict_include: bool = False
    terragrunt_version: int = 0

    label = "Terragrunt config"

    @classmethod
    def _parse(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        parsed = super()._parse(data)
        parsed.update(
            {
                "run_all": parse_boolean(data.get("run-all")),
                "terragrunt_config": _to_str(data.get("terragrunt-config")),
                "terragrunt_working_dir": _to_str(data.get("terragrunt-working-dir")),
                "non_interactive": parse_boolean(data.get("non-interactive")),
                "no_auto_init": parse_boolean(data.get("no-auto-init")),
                "no_auto_retry": parse_boolean(data.get("no-auto-retry")),
                "terragrunt_parallelism": _to_int(data.get("terragrunt-parallelism"), "terragrunt-parallelism"),
                "include_dirs": _to_list(data.get("include-dirs")),
                "exclude_dirs": _to_list(data.get("exclude-dirs")),
                "ignore_dependency_errors": parse_boolean(data.get("ignore-dependency-errors")),
                "ignore_external_dependencies": parse_boolean(data.get("ignore-external-dependencies")),
                "include_external_dependencies": parse_boolean(data.get("include-external-dependencies")),
                "terragrunt_source": _to_str(data.get("terragrunt-source")),
                "source_map": _to_map(data.get("source-map")),
                "download_dir": _to_str(data.get("download-dir")),
                "iam_role": _to_str(data.get("iam-role")),
                "iam_role_session_name": _to_str(data.get("iam-role-session-name")),
                "strict_include": parse_boolean(data.get("strict-include")),
                "terragrunt_version": _to_int(data.get("terragrunt-version"), "terragrunt-version") or 0,
            }
        )
        return parsed

    def new_builder(self) -> TerragruntBuilder:
        return TerragruntBuilder.create(self.command)

    def to_builder(self) -> TerragruntBuilder:
        builder = super().to_builder()
        if self.run_all:
            builder.with_run_all()
        if self.terragrunt_config:
            builder.with_terragrunt_config(self.terragrunt_config)
        if self.terragrunt_working_dir:
            builder.with_terragrunt_working_dir(self.terragrunt_working_dir)
        if self.non_interactive:
            builder.with_non_interactive()
        if self.no_auto_init:
            builder.with_no_auto_init()
        if self.no_auto_retry:
            builder.with_no_auto_retry()
        if self.terragrunt_parallelism is not None:
            builder.with_terragrunt_parallelism(self.terragrunt_parallelism)
        builder.with_include_dirs(self.include_dirs)
        builder.with_exclude_dirs(self.exclude_dirs)
        if self.ignore_dependency_errors:
            builder.with_ignore_dependency_errors()
        if self.ignore_external_dependencies:
            builder.with_ignore_external_dependencies()
        if self.include_external_dependencies:
            builder.with_include_external_dependencies()
        if self.terragrunt_source:
            builder.with_terragrunt_source(self.terragrunt_source)
        builder.with_source_maps(self.source_map)
        if self.download_dir:
            builder.with_download_dir(self.download_dir)
        if self.iam_role:
            if self.iam_role_session_name:
                builder.with_iam_role_and_session(self.iam_role, self.iam_role_session_name)
            else:
                builder.with_iam_role(self.iam_role)
        if self.strict_include:
            builder.with_strict_include()
        builder.with_terragrunt_major_version(self.terragrunt_version)
        return builder


@dataclass
class ImageToolsConfig:
    """Inputs for ``docker buildx imagetools``.

    Attributes:
        command: One of create, inspect or prune.
        tags: Values for ``--tag``.
        sources: Source image references, rendered as positional tokens.
        annotations: Values for ``--annotation key=value``.
        platforms: Values for ``--platform``.
        file: Value for ``--file``.
        string_list: Render multi-line output as one flat line.
        dry_run: Render the command without handing it to an executor.
    """

    command: str | None = None
    tags: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    platforms: list[str] = field(default_factory=list)
    file: str | None = None
    string_list: bool = False
    dry_run: bool = False

    @classmethod
    def from_yaml(cls, file_path: Path) -> "ImageToolsConfig":
        """Load the configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the YAML is malformed.
            ValueError: If the file is empty.
            TypeError: If the document is not a mapping.
        """
        return cls.from_mapping(load_mapping(file_path, "Image tools config"))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ImageToolsConfig":
        return cls(
            command=_to_str(data.get("command")),
            tags=_to_list(data.get("tags")),
            sources=_to_list(data.get("sources")),
            annotations=_to_map(data.get("annotations")),
            platforms=_to_list(data.get("platforms")),
            file=_to_str(data.get("file")),
            string_list=parse_boolean(data.get("string-list")),
            dry_run=parse_boolean(data.get("dry-run")),
        )

    def merged(self, overrides: Mapping[str, Any]) -> "ImageToolsConfig":
        """Return a copy where every non-None override replaces the stored value."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name, value in overrides.items():
            if name in values and value is not None:
                values[name] = value
        return ImageToolsConfig(**values)

    def to_builder(self) -> ImageToolsBuilder:
        """Return a builder with tags, platforms, annotations, file and sources in that order."""
        builder = ImageToolsBuilder.create(self.command)
        builder.with_tags(self.tags)
        builder.with_platforms(self.platforms)
        builder.with_annotations(self.annotations)
        if self.file:
            builder.with_file(self.file)
        builder.with_sources(self.sources)
        if self.string_list:
            builder.with_string_list_output()
        return builder
