"""Fluent builder for ``terragrunt`` commands.

Extends the Terraform-shaped builder with Terragrunt's global flags. The flag
spelling (``--terragrunt-*`` in v0.x, the redesigned names in v1.x) is chosen
at assembly time from :meth:`TerragruntBuilder.with_terragrunt_major_version`.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Self

from cmdcraft.builders.base import IacBuilder, _add_unique, _non_negative, require_value
from cmdcraft.capabilities import Family
from cmdcraft.models import TerragruntProvider
from cmdcraft.services import TerragruntService
from cmdcraft.terragrunt_flags import command_tokens

__all__ = ["TerragruntBuilder"]


class TerragruntBuilder(IacBuilder):
    """Collects Terragrunt configuration and builds a :class:`TerragruntService`.

    Examples:
        >>> service = TerragruntBuilder.for_run_all_plan().with_non_interactive().build()
        >>> service.build_command()
        ['terragrunt', 'run-all', 'plan', '--terragrunt-non-interactive']
    """

    family = Family.TERRAGRUNT
    family_label = "Terragrunt"

    def __init__(self) -> None:
        super().__init__()
        self._reset_specific()

    # Factory methods

    @classmethod
    def for_init(cls) -> Self:
        return cls.create("init")

    @classmethod
    def for_validate(cls) -> Self:
        return cls.create("validate")

    @classmethod
    def for_fmt(cls) -> Self:
        return cls.create("fmt")

    @classmethod
    def for_hclfmt(cls) -> Self:
        return cls.create("hclfmt")

    @classmethod
    def for_plan(cls) -> Self:
        return cls.create("plan")

    @classmethod
    def for_apply(cls) -> Self:
        return cls.create("apply")

    @classmethod
    def for_destroy(cls) -> Self:
        return cls.create("destroy")

    @classmethod
    def for_output(cls) -> Self:
        return cls.create("output")

    @classmethod
    def for_show(cls) -> Self:
        return cls.create("show")

    @classmethod
    def for_run_all_plan(cls) -> Self:
        return cls.create("plan").with_run_all()

    @classmethod
    def for_run_all_apply(cls) -> Self:
        return cls.create("apply").with_run_all()

    @classmethod
    def for_run_all_destroy(cls) -> Self:
        return cls.create("destroy").with_run_all()

    @classmethod
    def for_graph_dependencies(cls) -> Self:
        return cls.create("graph-dependencies")

    @classmethod
    def for_validate_inputs(cls) -> Self:
        return cls.create("validate-inputs")

    # Terragrunt configuration

    def with_run_all(self) -> Self:
        """Run the command against every module below the working directory."""
        self._run_all = True
        return self

    def with_terragrunt_config(self, config_path: str) -> Self:
        self._terragrunt_config = require_value(config_path, "terragrunt config path")
        return self

    def with_terragrunt_working_dir(self, directory: str) -> Self:
        self._terragrunt_working_dir = require_value(directory, "terragrunt working directory")
        return self

    def with_no_auto_init(self) -> Self:
        self._no_auto_init = True
        return self

    def with_no_auto_retry(self) -> Self:
        self._no_auto_retry = True
        return self

    def with_non_interactive(self) -> Self:
        self._non_interactive = True
        return self

    def with_terragrunt_parallelism(self, level: int) -> Self:
        """Limit concurrent modules under run-all. Ignored without run-all.

        Raises:
            InvalidArgument: If ``level`` is None, not an integer or negative.
        """
        self._terragrunt_parallelism = _non_negative(level, "Terragrunt parallelism level")
        return self

    def with_include_dir(self, directory: str) -> Self:
        _add_unique(self._include_dirs, require_value(directory, "include directory"))
        return self

    def with_include_dirs(self, directories: Iterable[str]) -> Self:
        for directory in directories:
            self.with_include_dir(directory)
        return self

    def with_exclude_dir(self, directory: str) -> Self:
        _add_unique(self._exclude_dirs, require_value(directory, "exclude directory"))
        return self

    def with_exclude_dirs(self, directories: Iterable[str]) -> Self:
        for directory in directories:
            self.with_exclude_dir(directory)
        return self

    def with_ignore_dependency_errors(self) -> Self:
        self._ignore_dependency_errors = True
        return self

    def with_ignore_external_dependencies(self) -> Self:
        self._ignore_external_dependencies = True
        return self

    def with_include_external_dependencies(self) -> Self:
        self._include_external_dependencies = True
        return self

    def with_terragrunt_source(self, source: str) -> Self:
        self._terragrunt_source = require_value(source, "terragrunt source")
        return self

    def with_source_map(self, original: str, replacement: str) -> Self:
        """Map a module source URL to a local path (``original=replacement``)."""
        require_value(original, "source map key")
        self._source_map[original] = require_value(replacement, f"source map {original}")
        return self

    def with_source_maps(self, mappings: Mapping[str, str]) -> Self:
        for original, replacement in mappings.items():
            self.with_source_map(original, replacement)
        return self

    def with_download_dir(self, directory: str) -> Self:
        self._download_dir = require_value(directory, "download directory")
        return self

    def with_iam_role(self, role_arn: str) -> Self:
        self._iam_role = require_value(role_arn, "IAM role")
        return self

    def with_iam_role_and_session(self, role_arn: str, session_name: str) -> Self:
        self.with_iam_role(role_arn)
        self._iam_role_session_name = require_value(session_name, "IAM role session name")
        return self

    def with_strict_include(self) -> Self:
        self._strict_include = True
        return self

    def with_terragrunt_major_version(self, major_version: int) -> Self:
        """Select the flag syntax: 0 for ``--terragrunt-*``, 1 for the v1 CLI.

        Raises:
            InvalidArgument: If ``major_version`` is None, not an integer or negative.
        """
        self._terragrunt_major_version = _non_negative(major_version, "Terragrunt major version")
        return self

    # Lifecycle

    def build(self) -> TerragruntService:
        """Validate and freeze into a :class:`TerragruntService`.

        Raises:
            InvalidCommand: If the command is unset, not a Terragrunt command,
                or was removed in the selected major version.
        """
        return super().build()

    def _reset_specific(self) -> None:
        self._run_all = False
        self._terragrunt_config: str | None = None
        self._terragrunt_working_dir: str | None = None
        self._no_auto_init = False
        self._no_auto_retry = False
        self._non_interactive = False
        self._terragrunt_parallelism: int | None = None
        self._include_dirs: list[str] = []
        self._exclude_dirs: list[str] = []
        self._ignore_dependency_errors = False
        self._ignore_external_dependencies = False
        self._include_external_dependencies = False
        self._terragrunt_source: str | None = None
        self._source_map: dict[str, str] = {}
        self._download_dir: str | None = None
        self._iam_role: str | None = None
        self._iam_role_session_name: str | None = None
        self._strict_include = False
        self._terragrunt_major_version = 0

    def _validate_command(self) -> None:
        super()._validate_command()
        command_tokens(self._command, self._terragrunt_major_version)

    def _create_service(self, shared: dict[str, Any]) -> TerragruntService:
        provider = TerragruntProvider(
            **shared,
            run_all=self._run_all,
            terragrunt_config=self._terragrunt_config,
            terragrunt_working_dir=self._terragrunt_working_dir,
            no_auto_init=self._no_auto_init,
            no_auto_retry=self._no_auto_retry,
            non_interactive=self._non_interactive,
            terragrunt_parallelism=self._terragrunt_parallelism,
            include_dirs=tuple(self._include_dirs),
            exclude_dirs=tuple(self._exclude_dirs),
            ignore_dependency_errors=self._ignore_dependency_errors,
            ignore_external_dependencies=self._ignore_external_dependencies,
            include_external_dependencies=self._include_external_dependencies,
            terragrunt_source=self._terragrunt_source,
            source_map=dict(self._source_map),
            download_dir=self._download_dir,
            iam_role=self._iam_role,
            iam_role_session_name=self._iam_role_session_name,
            strict_include=self._strict_include,
            terragrunt_major_version=self._terragrunt_major_version,
        )
        return TerragruntService(provider)
