"""Read-only provider snapshots.

A provider is the frozen configuration for one command invocation. Builders
produce providers on ``build()``; assemblers and formatters only read them.
Mappings are exposed as read-only proxies and sequences as tuples, so a built
provider cannot be changed in place.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType

__all__ = [
    "IacProvider",
    "ImageToolsProvider",
    "TerraformProvider",
    "TerragruntProvider",
]


def _freeze_mapping(value: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(value or {}))


def _freeze_sequence(value) -> tuple[str, ...]:
    return tuple(value or ())


@dataclass(frozen=True)
class IacProvider:
    """Configuration shared by Terraform and Terragrunt invocations.

    Attributes:
        command: The command to run (e.g. "plan").
        executor: The binary to invoke.
        working_directory: Directory the process runs in. Never part of argv.
        environment: Extra environment variables for the process.
        variables: Terraform input variables (``-var``).
        var_files: Variable files (``-var-file``), in order.
        backend_config: Backend settings for ``init`` (``-backend-config``).
        targets: Resource addresses (``-target``), in order.
        auto_approve: Skip interactive approval on apply/destroy.
        dry_run: Render the command without running it.
        no_color: Disable colored output.
        compact_warnings: Compact warning output.
        refresh: Tri-state refresh control. None leaves Terraform's default.
        reconfigure: Reconfigure the backend on ``init``.
        migrate_state: Migrate state on ``init``.
        plan_file: Saved plan passed positionally to ``apply``/``show``.
        out_file: Where ``plan`` writes the saved plan (``-out``).
        parallelism: Concurrent operation limit. 0 or None is omitted.
        lock_timeout: State lock timeout, e.g. "30s".
    """

    command: str
    executor: str = "terraform"
    working_directory: str = "."
    environment: Mapping[str, str] = field(default_factory=dict)
    variables: Mapping[str, str] = field(default_factory=dict)
    var_files: tuple[str, ...] = ()
    backend_config: Mapping[str, str] = field(default_factory=dict)
    targets: tuple[str, ...] = ()
    auto_approve: bool = False
    dry_run: bool = False
    no_color: bool = False
    compact_warnings: bool = False
    refresh: bool | None = None
    reconfigure: bool = False
    migrate_state: bool = False
    plan_file: str | None = None
    out_file: str | None = None
    parallelism: int | None = None
    lock_timeout: str | None = None

    def __post_init__(self) -> None:
        # freeze containers
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Mapping):
                object.__setattr__(self, f.name, _freeze_mapping(value))
            elif isinstance(value, list):
                object.__setattr__(self, f.name, _freeze_sequence(value))


@dataclass(frozen=True)
class TerraformProvider(IacProvider):
    """Configuration for a ``terraform`` invocation."""

    executor: str = "terraform"


@dataclass(frozen=True)
class TerragruntProvider(IacProvider):
    """Configuration for a ``terragrunt`` invocation.

    Adds the Terragrunt global flags on top of the Terraform-shaped
    configuration. ``terragrunt_major_version`` selects between the v0.x
    ``--terragrunt-*`` flags and the v1.x spelling.
    """

    executor: str = "terragrunt"
    run_all: bool = False
    terragrunt_config: str | None = None
    terragrunt_working_dir: str | None = None
    no_auto_init: bool = False
    no_auto_retry: bool = False
    non_interactive: bool = False
    terragrunt_parallelism: int | None = None
    include_dirs: tuple[str, ...] = ()
    exclude_dirs: tuple[str, ...] = ()
    ignore_dependency_errors: bool = False
    ignore_external_dependencies: bool = False
    include_external_dependencies: bool = False
    terragrunt_source: str | None = None
    source_map: Mapping[str, str] = field(default_factory=dict)
    download_dir: str | None = None
    iam_role: str | None = None
    iam_role_session_name: str | None = None
    strict_include: bool = False
    terragrunt_major_version: int = 0


@dataclass(frozen=True)
class ImageToolsProvider:
    """Fixed parts of a ``docker buildx imagetools`` invocation."""

    command: str
    executor: str = "docker"
    sub_commands: tuple[str, ...] = ("buildx", "imagetools")
    use_string_list: bool = False
