"""cmdcraft command-line interface (CLI).

This module defines the Typer application entry points exposed by cmdcraft.
Each command collects Action-style inputs from options and an optional YAML
file, builds the command with the fluent builders and prints the Action
outputs (``command``, ``command-args``, ``command-string``) in the
``key=value`` format of ``$GITHUB_OUTPUT``. Nothing is executed: in dry-run
mode the execution outputs are reported as empty, otherwise the request an
executor would receive is printed.
"""

import json
from pathlib import Path

import typer
import yaml  # type: ignore[import-untyped]
from loguru import logger

from cmdcraft import __version__
from cmdcraft.config import ImageToolsConfig, TerraformConfig, TerragruntConfig
from cmdcraft.errors import CommandError, EmptyCommand
from cmdcraft.parsers import parse_formatted_string, parse_json_object

app = typer.Typer(help="cmdcraft: command builders for Terraform, Terragrunt and docker imagetools")

OUTPUT_DELIMITER = "CMDCRAFT_EOF"


def version_callback(value: bool):
    """Print the version and exit when ``--version`` is given."""
    if value:
        typer.echo(f"cmdcraft version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
):
    """Compose command lines for infrastructure and container tooling."""


def _flag(value: bool) -> bool | None:
    # unset flags must not override values from --config
    return True if value else None


def _list(value: str | None) -> list[str] | None:
    return parse_formatted_string(value) if value is not None else None


def _map(value: str | None) -> dict[str, str] | None:
    return parse_json_object(value) if value is not None else None


def _refresh(value: str | None) -> bool | None:
    if value is None or not value.strip():
        return None
    return value.strip().lower() == "true"


def _emit(key: str, value: str) -> None:
    if "\n" in value:
        typer.echo(f"{key}<<{OUTPUT_DELIMITER}\n{value}\n{OUTPUT_DELIMITER}")
    else:
        typer.echo(f"{key}={value}")


def _render(service, dry_run: bool, multi_line: bool) -> None:
    """Print the Action outputs for a built service."""
    args = service.build_command()
    command_string = service.to_string_multi_line_command() if multi_line else service.to_string()

    _emit("command", service.command)
    _emit("command-args", json.dumps(args, separators=(",", ":")))
    _emit("command-string", command_string)

    if dry_run:
        logger.info("Dry run mode - skipping execution")
        _emit("exit-code", "0")
        _emit("stdout", "")
        _emit("stderr", "")
    else:
        request = service.exec_request()
        _emit("executor", request.executor)
        _emit("args", json.dumps(list(request.args), separators=(",", ":")))
        _emit("cwd", request.cwd)

    logger.success(f"Command: {service.to_string()}")


def _run(label: str, build) -> None:
    """Build and render, converting configuration errors into exit code 1."""
    try:
        build()
    except (CommandError, EmptyCommand, FileNotFoundError, TypeError, ValueError, yaml.YAMLError) as e:
        logger.error(f"{label} failed: {e}")
        raise typer.Exit(code=1) from e


@app.command()
def terraform(
    command: str | None = typer.Argument(None, help="Terraform command (init, plan, apply, ...)"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML file with Action inputs"),
    working_directory: str | None = typer.Option(None, "--working-directory", "-d", help="Working directory"),
    variables: str | None = typer.Option(None, "--variables", help="Variables as a JSON object"),
    var_files: str | None = typer.Option(None, "--var-files", help="Comma separated var files"),
    backend_config: str | None = typer.Option(None, "--backend-config", help="Backend config as a JSON object"),
    targets: str | None = typer.Option(None, "--targets", help="Comma separated resource addresses"),
    plan_file: str | None = typer.Option(None, "--plan-file", help="Plan file (-out for plan)"),
    parallelism: int | None = typer.Option(None, "--parallelism", help="Concurrent operations"),
    lock_timeout: str | None = typer.Option(None, "--lock-timeout", help="State lock timeout, e.g. 30s"),
    refresh: str | None = typer.Option(None, "--refresh", help="'true' or 'false'"),
    auto_approve: bool = typer.Option(False, "--auto-approve", help="Skip interactive approval"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    compact_warnings: bool = typer.Option(False, "--compact-warnings", help="Compact warnings"),
    reconfigure: bool = typer.Option(False, "--reconfigure", help="Reconfigure the backend on init"),
    migrate_state: bool = typer.Option(False, "--migrate-state", help="Migrate state on init"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not hand the command to an executor"),
    multi_line: bool = typer.Option(False, "--multi-line", help="Render command-string over several lines"),
):
    """Build a terraform command.

    Options override the values loaded from ``--config``.
    """

    def build() -> None:
        base = TerraformConfig.from_yaml(config) if config else TerraformConfig()
        settings = base.merged(
            {
                "command": command,
                "working_directory": working_directory,
                "variables": _map(variables),
                "var_files": _list(var_files),
                "backend_config": _map(backend_config),
                "targets": _list(targets),
                "plan_file": plan_file,
                "parallelism": parallelism,
                "lock_timeout": lock_timeout,
                "refresh": _refresh(refresh),
                "auto_approve": _flag(auto_approve),
                "no_color": _flag(no_color),
                "compact_warnings": _flag(compact_warnings),
                "reconfigure": _flag(reconfigure),
                "migrate_state": _flag(migrate_state),
                "dry_run": _flag(dry_run),
            }
        )
        _render(settings.to_builder().build(), settings.dry_run, multi_line)

    _run("Terraform", build)


@app.command()
def terragrunt(
    command: str | None = typer.Argument(None, help="Terragrunt command (plan, hclfmt, ...)"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML file with Action inputs"),
    working_directory: str | None = typer.Option(None, "--working-directory", "-d", help="Working directory"),
    variables: str | None = typer.Option(None, "--variables", help="Variables as a JSON object"),
    var_files: str | None = typer.Option(None, "--var-files", help="Comma separated var files"),
    backend_config: str | None = typer.Option(None, "--backend-config", help="Backend config as a JSON object"),
    targets: str | None = typer.Option(None, "--targets", help="Comma separated resource addresses"),
    plan_file: str | None = typer.Option(None, "--plan-file", help="Plan file (-out for plan)"),
    parallelism: int | None = typer.Option(None, "--parallelism", help="Concurrent operations"),
    lock_timeout: str | None = typer.Option(None, "--lock-timeout", help="State lock timeout, e.g. 30s"),
    refresh: str | None = typer.Option(None, "--refresh", help="'true' or 'false'"),
    auto_approve: bool = typer.Option(False, "--auto-approve", help="Skip interactive approval"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    compact_warnings: bool = typer.Option(False, "--compact-warnings", help="Compact warnings"),
    reconfigure: bool = typer.Option(False, "--reconfigure", help="Reconfigure the backend on init"),
    migrate_state: bool = typer.Option(False, "--migrate-state", help="Migrate state on init"),
    run_all: bool = typer.Option(False, "--run-all", help="Run against every module"),
    terragrunt_config: str | None = typer.Option(None, "--terragrunt-config", help="Path to terragrunt.hcl"),
    terragrunt_working_dir: str | None = typer.Option(None, "--terragrunt-working-dir", help="Terragrunt working dir"),
    non_interactive: bool = typer.Option(False, "--non-interactive", help="Never prompt"),
    no_auto_init: bool = typer.Option(False, "--no-auto-init", help="Disable automatic init"),
    no_auto_retry: bool = typer.Option(False, "--no-auto-retry", help="Disable automatic retries"),
    terragrunt_parallelism: int | None = typer.Option(
        None, "--terragrunt-parallelism", help="Concurrent modules under run-all"
    ),
    include_dirs: str | None = typer.Option(None, "--include-dirs", help="Comma separated include globs"),
    exclude_dirs: str | None = typer.Option(None, "--exclude-dirs", help="Comma separated exclude globs"),
    ignore_dependency_errors: bool = typer.Option(False, "--ignore-dependency-errors"),
    ignore_external_dependencies: bool = typer.Option(False, "--ignore-external-dependencies"),
    include_external_dependencies: bool = typer.Option(False, "--include-external-dependencies"),
    terragrunt_source: str | None = typer.Option(None, "--terragrunt-source", help="Module source override"),
    source_map: str | None = typer.Option(None, "--source-map", help="Source map as a JSON object"),
    download_dir: str | None = typer.Option(None, "--download-dir", help="Module download directory"),
    iam_role: str | None = typer.Option(None, "--iam-role", help="IAM role ARN to assume"),
    iam_role_session_name: str | None = typer.Option(None, "--iam-role-session-name", help="IAM session name"),
    strict_include: bool = typer.Option(False, "--strict-include", help="Only include listed directories"),
    terragrunt_version: int | None = typer.Option(
        None, "--terragrunt-version", help="Terragrunt major version (0 or 1) selecting the flag syntax"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not hand the command to an executor"),
    multi_line: bool = typer.Option(False, "--multi-line", help="Render command-string over several lines"),
):
    """Build a terragrunt command.

    Options override the values loaded from ``--config``.
    """

    def build() -> None:
        base = TerragruntConfig.from_yaml(config) if config else TerragruntConfig()
        settings = base.merged(
            {
                "command": command,
                "working_directory": working_directory,
                "variables": _map(variables),
                "var_files": _list(var_files),
                "backend_config": _map(backend_config),
                "targets": _list(targets),
                "plan_file": plan_file,
                "parallelism": parallelism,
                "lock_timeout": lock_timeout,
                "refresh": _refresh(refresh),
                "auto_approve": _flag(auto_approve),
                "no_color": _flag(no_color),
                "compact_warnings": _flag(compact_warnings),
                "reconfigure": _flag(reconfigure),
                "migrate_state": _flag(migrate_state),
                "run_all": _flag(run_all),
                "terragrunt_config": terragrunt_config,
                "terragrunt_working_dir": terragrunt_working_dir,
                "non_interactive": _flag(non_interactive),
                "no_auto_init": _flag(no_auto_init),
                "no_auto_retry": _flag(no_auto_retry),
                "terragrunt_parallelism": terragrunt_parallelism,
                "include_dirs": _list(include_dirs),
                "exclude_dirs": _list(exclude_dirs),
                "ignore_dependency_errors": _flag(ignore_dependency_errors),
                "ignore_external_dependencies": _flag(ignore_external_dependencies),
                "include_external_dependencies": _flag(include_external_dependencies),
                "terragrunt_source": terragrunt_source,
                "source_map": _map(source_map),
                "download_dir": download_dir,
                "iam_role": iam_role,
                "iam_role_session_name": iam_role_session_name,
                "strict_include": _flag(strict_include),
                "terragrunt_version": terragrunt_version,
                "dry_run": _flag(dry_run),
            }
        )
        _render(settings.to_builder().build(), settings.dry_run, multi_line)

    _run("Terragrunt", build)


@app.command()
def imagetools(
    command: str | None = typer.Argument(None, help="imagetools command (create, inspect, prune)"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML file with Action inputs"),
    tags: str | None = typer.Option(None, "--tags", help="Tags, comma or newline separated or a JSON array"),
    sources: str | None = typer.Option(None, "--sources", help="Source images"),
    annotations: str | None = typer.Option(None, "--annotations", help="Annotations as a JSON object"),
    platforms: str | None = typer.Option(None, "--platforms", help="Platforms, e.g. linux/amd64,linux/arm64"),
    file: str | None = typer.Option(None, "--file", help="Read source descriptors from a file"),
    string_list: bool = typer.Option(False, "--string-list", help="Flat --flag=v1,v2 multi-line rendering"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not hand the command to an executor"),
    multi_line: bool = typer.Option(False, "--multi-line", help="Render command-string over several lines"),
):
    """Build a docker buildx imagetools command.

    Options override the values loaded from ``--config``.
    """

    def build() -> None:
        base = ImageToolsConfig.from_yaml(config) if config else ImageToolsConfig()
        settings = base.merged(
            {
                "command": command,
                "tags": _list(tags),
                "sources": _list(sources),
                "annotations": _map(annotations),
                "platforms": _list(platforms),
                "file": file,
                "string_list": _flag(string_list),
                "dry_run": _flag(dry_run),
            }
        )
        _render(settings.to_builder().build(), settings.dry_run, multi_line)

    _run("Image tools", build)
