"""Ready-made services for the common command shapes.

Each factory method is a thin wrapper around the matching builder chain. The
Terragrunt factories run non-interactively for every command that can prompt
(init, plan, apply, destroy).
"""

from collections.abc import Iterable, Mapping

from cmdcraft.builders import ImageToolsBuilder, TerraformBuilder, TerragruntBuilder
from cmdcraft.services import ImageToolsService, TerraformService, TerragruntService

__all__ = ["ImageToolsFactory", "TerraformFactory", "TerragruntFactory"]


def _with_variables(builder, variables: Mapping[str, str] | None):
    if variables:
        builder.with_variables(variables)
    return builder


class TerraformFactory:
    """Shortcuts for frequently used Terraform commands."""

    @staticmethod
    def builder(command: str | None = None) -> TerraformBuilder:
        """Return an empty builder, or one with ``command`` already set."""
        return TerraformBuilder.create(command)

    @staticmethod
    def init(working_dir: str, backend_config: Mapping[str, str] | None = None) -> TerraformService:
        builder = TerraformBuilder.for_init().with_working_directory(working_dir)
        if backend_config:
            builder.with_backend_configs(backend_config)
        return builder.build()

    @staticmethod
    def init_with_reconfigure(working_dir: str) -> TerraformService:
        return TerraformBuilder.for_init().with_working_directory(working_dir).with_reconfigure().build()

    @staticmethod
    def init_with_migrate_state(working_dir: str) -> TerraformService:
        return TerraformBuilder.for_init().with_working_directory(working_dir).with_migrate_state().build()

    @staticmethod
    def validate(working_dir: str) -> TerraformService:
        return TerraformBuilder.for_validate().with_working_directory(working_dir).build()

    @staticmethod
    def fmt(working_dir: str) -> TerraformService:
        return TerraformBuilder.for_fmt().with_working_directory(working_dir).build()

    @staticmethod
    def plan(working_dir: str, variables: Mapping[str, str] | None = None) -> TerraformService:
        builder = TerraformBuilder.for_plan().with_working_directory(working_dir)
        return _with_variables(builder, variables).build()

    @staticmethod
    def plan_with_output(
        working_dir: str, out_file: str, variables: Mapping[str, str] | None = None
    ) -> TerraformService:
        """Plan and save the result to ``out_file`` (``-out``)."""
        builder = TerraformBuilder.for_plan().with_working_directory(working_dir).with_out_file(out_file)
        return _with_variables(builder, variables).build()

    @staticmethod
    def plan_with_targets(
        working_dir: str, targets: Iterable[str], variables: Mapping[str, str] | None = None
    ) -> TerraformService:
        builder = TerraformBuilder.for_plan().with_working_directory(working_dir).with_targets(targets)
        return _with_variables(builder, variables).build()

    @staticmethod
    def apply(working_dir: str, variables: Mapping[str, str] | None = None) -> TerraformService:
        builder = TerraformBuilder.for_apply().with_working_directory(working_dir)
        return _with_variables(builder, variables).build()

    @staticmethod
    def apply_with_auto_approve(working_dir: str, variables: Mapping[str, str] | None = None) -> TerraformService:
        builder = TerraformBuilder.for_apply().with_working_directory(working_dir).with_auto_approve()
        return _with_variables(builder, variables).build()

    @staticmethod
    def apply_plan(working_dir: str, plan_file: str) -> TerraformService:
        """Apply a saved plan. The plan file replaces ``-auto-approve``."""
        return (
            TerraformBuilder.for_apply()
            .with_working_directory(working_dir)
            .with_plan_file(plan_file)
            .with_auto_approve()
            .build()
        )

    @staticmethod
    def apply_with_targets(
        working_dir: str, targets: Iterable[str], variables: Mapping[str, str] | None = None
    ) -> TerraformService:
        builder = (
            TerraformBuilder.for_apply().with_working_directory(working_dir).with_targets(targets).with_auto_approve()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def destroy(working_dir: str, variables: Mapping[str, str] | None = None) -> TerraformService:
        builder = TerraformBuilder.for_destroy().with_working_directory(working_dir)
        return _with_variables(builder, variables).build()

    @staticmethod
    def destroy_with_auto_approve(working_dir: str, variables: Mapping[str, str] | None = None) -> TerraformService:
        builder = TerraformBuilder.for_destroy().with_working_directory(working_dir).with_auto_approve()
        return _with_variables(builder, variables).build()

    @staticmethod
    def destroy_with_targets(
        working_dir: str, targets: Iterable[str], variables: Mapping[str, str] | None = None
    ) -> TerraformService:
        builder = (
            TerraformBuilder.for_destroy()
            .with_working_directory(working_dir)
            .with_targets(targets)
            .with_auto_approve()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def output(working_dir: str) -> TerraformService:
        return TerraformBuilder.for_output().with_working_directory(working_dir).build()

    @staticmethod
    def show(working_dir: str, plan_file: str | None = None) -> TerraformService:
        builder = TerraformBuilder.for_show().with_working_directory(working_dir)
        if plan_file:
            builder.with_plan_file(plan_file)
        return builder.build()


class TerragruntFactory:
    """Shortcuts for frequently used Terragrunt commands."""

    @staticmethod
    def builder(command: str | None = None) -> TerragruntBuilder:
        """Return an empty builder, or one with ``command`` already set."""
        return TerragruntBuilder.create(command)

    @staticmethod
    def init(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_init().with_working_directory(working_dir).with_non_interactive().build()

    @staticmethod
    def run_all_init(working_dir: str) -> TerragruntService:
        return (
            TerragruntBuilder.for_init()
            .with_working_directory(working_dir)
            .with_run_all()
            .with_non_interactive()
            .build()
        )

    @staticmethod
    def validate(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_validate().with_working_directory(working_dir).build()

    @staticmethod
    def run_all_validate(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_validate().with_working_directory(working_dir).with_run_all().build()

    @staticmethod
    def fmt(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_fmt().with_working_directory(working_dir).build()

    @staticmethod
    def hcl_fmt(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_hclfmt().with_working_directory(working_dir).build()

    @staticmethod
    def plan(working_dir: str, variables: Mapping[str, str] | None = None) -> TerragruntService:
        builder = TerragruntBuilder.for_plan().with_working_directory(working_dir).with_non_interactive()
        return _with_variables(builder, variables).build()

    @staticmethod
    def run_all_plan(working_dir: str, variables: Mapping[str, str] | None = None) -> TerragruntService:
        builder = TerragruntBuilder.for_run_all_plan().with_working_directory(working_dir).with_non_interactive()
        return _with_variables(builder, variables).build()

    @staticmethod
    def plan_with_output(
        working_dir: str, out_file: str, variables: Mapping[str, str] | None = None
    ) -> TerragruntService:
        builder = (
            TerragruntBuilder.for_plan()
            .with_working_directory(working_dir)
            .with_out_file(out_file)
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def plan_with_targets(
        working_dir: str, targets: Iterable[str], variables: Mapping[str, str] | None = None
    ) -> TerragruntService:
        builder = (
            TerragruntBuilder.for_plan()
            .with_working_directory(working_dir)
            .with_targets(targets)
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def apply(working_dir: str, variables: Mapping[str, str] | None = None) -> TerragruntService:
        """Apply with ``-auto-approve``."""
        builder = (
            TerragruntBuilder.for_apply()
            .with_working_directory(working_dir)
            .with_auto_approve()
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def run_all_apply(working_dir: str, variables: Mapping[str, str] | None = None) -> TerragruntService:
        builder = (
            TerragruntBuilder.for_run_all_apply()
            .with_working_directory(working_dir)
            .with_auto_approve()
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def apply_plan(working_dir: str, plan_file: str) -> TerragruntService:
        return (
            TerragruntBuilder.for_apply()
            .with_working_directory(working_dir)
            .with_plan_file(plan_file)
            .with_auto_approve()
            .with_non_interactive()
            .build()
        )

    @staticmethod
    def apply_with_targets(
        working_dir: str, targets: Iterable[str], variables: Mapping[str, str] | None = None
    ) -> TerragruntService:
        builder = (
            TerragruntBuilder.for_apply()
            .with_working_directory(working_dir)
            .with_targets(targets)
            .with_auto_approve()
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def destroy(working_dir: str, variables: Mapping[str, str] | None = None) -> TerragruntService:
        """Destroy with ``-auto-approve``."""
        builder = (
            TerragruntBuilder.for_destroy()
            .with_working_directory(working_dir)
            .with_auto_approve()
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def run_all_destroy(working_dir: str, variables: Mapping[str, str] | None = None) -> TerragruntService:
        builder = (
            TerragruntBuilder.for_run_all_destroy()
            .with_working_directory(working_dir)
            .with_auto_approve()
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def destroy_with_targets(
        working_dir: str, targets: Iterable[str], variables: Mapping[str, str] | None = None
    ) -> TerragruntService:
        builder = (
            TerragruntBuilder.for_destroy()
            .with_working_directory(working_dir)
            .with_targets(targets)
            .with_auto_approve()
            .with_non_interactive()
        )
        return _with_variables(builder, variables).build()

    @staticmethod
    def output(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_output().with_working_directory(working_dir).build()

    @staticmethod
    def graph_dependencies(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_graph_dependencies().with_working_directory(working_dir).build()

    @staticmethod
    def validate_inputs(working_dir: str) -> TerragruntService:
        return TerragruntBuilder.for_validate_inputs().with_working_directory(working_dir).build()


class ImageToolsFactory:
    """Shortcuts for ``docker buildx imagetools``."""

    @staticmethod
    def builder(command: str | None = None) -> ImageToolsBuilder:
        return ImageToolsBuilder.create(command)

    @staticmethod
    def create_manifest(tag: str, sources: Iterable[str]) -> ImageToolsService:
        """Create a multi-platform manifest ``tag`` from ``sources``."""
        return ImageToolsBuilder.for_create().with_tag(tag).with_sources(sources).build()

    @staticmethod
    def inspect_image(image: str) -> ImageToolsService:
        return ImageToolsBuilder.for_inspect().with_source(image).build()

    @staticmethod
    def prune_cache() -> ImageToolsService:
        return ImageToolsBuilder.for_prune().build()
