"""cmdcraft - Compose command lines for infrastructure and container tooling.

cmdcraft turns structured configuration into the argv array of a Terraform,
Terragrunt or ``docker buildx imagetools`` command, together with
human-readable single-line and multi-line renderings of that command. It is
the argument layer of a GitHub Action: reading inputs, running the process
and writing outputs happen around it.

Key Features
------------
- **Fluent builders**: Chain ``with_*`` calls and finish with ``build()``,
  which validates the command and freezes the configuration.

- **Command-aware arguments**: Flags a command does not accept (``-target``
  on ``fmt``, ``-auto-approve`` on ``plan``) are dropped, never emitted.

- **Terragrunt v0 and v1**: Emit either the ``--terragrunt-*`` flags or the
  names of the redesigned CLI from the same configuration.

- **Display formats**: Escaped single-line strings, backslash-continued
  multi-line strings and raw token lists.

Quick Start
-----------
Build a plan command:

    >>> from cmdcraft import TerraformBuilder
    >>> service = TerraformBuilder.for_plan().with_variable("env", "prod").build()
    >>> service.to_string()
    'terraform plan -var env=prod'

Or from the command line:

    $ cmdcraft terraform plan --variables '{"env": "prod"}' --dry-run

Main Modules
------------
builders : package
    Fluent builders for Terraform, Terragrunt and image tools.

services : module
    Built services exposing argv, strings and the executor request.

factories : module
    Ready-made services for common command shapes.

cli : module
    Typer-based command-line interface and entry points.
"""

from importlib.metadata import PackageNotFoundError, version

from cmdcraft.builders import ImageToolsBuilder, TerraformBuilder, TerragruntBuilder
from cmdcraft.errors import CommandError, EmptyCommand, InvalidArgument, InvalidCommand
from cmdcraft.factories import ImageToolsFactory, TerraformFactory, TerragruntFactory
from cmdcraft.services import ExecRequest

try:
    __version__ = version("cmdcraft")
except PackageNotFoundError:
    # Package is not installed, use a fallback version
    __version__ = "0.0.0+dev"

__all__ = [
    "CommandError",
    "EmptyCommand",
    "ExecRequest",
    "ImageToolsBuilder",
    "ImageToolsFactory",
    "InvalidArgument",
    "InvalidCommand",
    "TerraformBuilder",
    "TerraformFactory",
    "TerragruntBuilder",
    "TerragruntFactory",
]
