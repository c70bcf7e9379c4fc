"""Fluent builders for every supported tool family."""

from cmdcraft.builders.base import IacBuilder
from cmdcraft.builders.imagetools import ImageToolsBuilder
from cmdcraft.builders.terraform import TerraformBuilder
from cmdcraft.builders.terragrunt import TerragruntBuilder

__all__ = ["IacBuilder", "ImageToolsBuilder", "TerraformBuilder", "TerragruntBuilder"]
