"""Fluent builder for ``terraform`` commands."""

from typing import Any, Self

from cmdcraft.builders.base import IacBuilder
from cmdcraft.capabilities import Family
from cmdcraft.models import TerraformProvider
from cmdcraft.services import TerraformService

__all__ = ["TerraformBuilder"]


class TerraformBuilder(IacBuilder):
    """Collects Terraform configuration and builds a :class:`TerraformService`.

    Examples:
        >>> service = TerraformBuilder.for_plan().with_target("module.vpc").build()
        >>> service.build_command()
        ['terraform', 'plan', '-target', 'module.vpc']
    """

    family = Family.TERRAFORM
    family_label = "Terraform"

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

    def build(self) -> TerraformService:
        """Validate and freeze into a :class:`TerraformService`.

        Raises:
            InvalidCommand: If the command is unset or not a Terraform command.
        """
        return super().build()

    def _create_service(self, shared: dict[str, Any]) -> TerraformService:
        return TerraformService(TerraformProvider(**shared))
