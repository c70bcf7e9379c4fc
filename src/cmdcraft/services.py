"""Built services: a frozen provider plus its assembler and formatter.

A service is what a builder's ``build()`` returns. It answers every question
the surrounding Action needs: the argv array, the display strings and the
request to hand to a process executor.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from cmdcraft.assemblers import ImageToolsAssembler, TerraformAssembler, TerragruntAssembler
from cmdcraft.errors import EmptyCommand
from cmdcraft.formatters import CommandFormatter, flat_metadata_line
from cmdcraft.metadata import UNKEYED, MetadataStore
from cmdcraft.models import IacProvider, ImageToolsProvider

__all__ = [
    "ExecRequest",
    "IacService",
    "ImageToolsService",
    "TerraformService",
    "TerragruntService",
]


@dataclass(frozen=True)
class ExecRequest:
    """What a process executor needs to run an assembled command.

    Attributes:
        executor: Binary to run.
        args: Every argv token after the executor.
        cwd: Working directory for the process.
        env: Extra environment variables.
    """

    executor: str
    args: tuple[str, ...]
    cwd: str = "."
    env: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_command(
        cls,
        command: list[str],
        cwd: str = ".",
        env: Mapping[str, str] | None = None,
    ) -> "ExecRequest":
        """Split an argv array into executor and arguments.

        Raises:
            EmptyCommand: If the argv array is empty or has a blank executor.
        """
        if not command or not command[0].strip():
            raise EmptyCommand("Assembled command is empty; nothing to execute")  # noqa: TRY003
        executor, *args = command
        return cls(executor=executor, args=tuple(args), cwd=cwd, env=dict(env or {}))


class IacService:
    """Shared behavior of Terraform and Terragrunt services."""

    assembler_class: type[TerraformAssembler] = TerraformAssembler

    def __init__(self, provider: IacProvider):
        self._provider = provider
        self._assembler = self.assembler_class(provider)
        self._formatter = CommandFormatter(self._assembler)

    @property
    def provider(self) -> IacProvider:
        """The frozen configuration of this service."""
        return self._provider

    @property
    def command(self) -> str:
        return self._provider.command

    @property
    def executor(self) -> str:
        return self._provider.executor

    @property
    def working_directory(self) -> str:
        return self._provider.working_directory

    @property
    def environment(self) -> Mapping[str, str]:
        return self._provider.environment

    @property
    def dry_run(self) -> bool:
        return self._provider.dry_run

    def to_command_args(self) -> list[str]:
        """Return the argument tokens only."""
        return self._assembler.to_command_args()

    def build_command(self) -> list[str]:
        """Return the full argv array."""
        return self._assembler.build_command()

    def to_string(self) -> str:
        """Return the command as a single escaped line."""
        return self._formatter.to_string()

    def to_string_multi_line_command(self) -> str:
        """Return the command laid out with backslash continuations."""
        return self._formatter.to_string_multi_line_command()

    def to_string_list(self) -> list[str]:
        """Return the argv tokens for string-list display."""
        return self._formatter.to_string_list()

    def exec_request(self) -> ExecRequest:
        """Return the request for an external process executor.

        Raises:
            EmptyCommand: If the assembled argv is empty.
        """
        return ExecRequest.from_command(
            self.build_command(),
            cwd=self._provider.working_directory,
            env=self._provider.environment,
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()!r})"


class TerraformService(IacService):
    """A built ``terraform`` command."""

    assembler_class = TerraformAssembler


class TerragruntService(IacService):
    """A built ``terragrunt`` command."""

    assembler_class = TerragruntAssembler

    @property
    def run_all(self) -> bool:
        return self._provider.run_all


class ImageToolsService:
    """A ``docker buildx imagetools`` command backed by a metadata store.

    The command, executor and sub-commands are fixed at construction; the
    metadata stays editable so callers can adjust flags after ``build()``.
    """

    def __init__(self, command: str, use_string_list: bool = False, store: MetadataStore | None = None):
        self._provider = ImageToolsProvider(command=command, use_string_list=use_string_list)
        self._store = store.copy() if store is not None else MetadataStore()
        self._assembler = ImageToolsAssembler(self._provider, self._store)
        self._formatter = CommandFormatter(self._assembler)

    @property
    def provider(self) -> ImageToolsProvider:
        return self._provider

    @property
    def command(self) -> str:
        return self._provider.command

    @property
    def executor(self) -> str:
        return self._provider.executor

    @property
    def sub_commands(self) -> tuple[str, ...]:
        return self._provider.sub_commands

    @property
    def use_string_list(self) -> bool:
        return self._provider.use_string_list

    @property
    def metadata(self) -> dict[str, list[str]]:
        """An insertion-ordered copy of the metadata."""
        return self._store.to_dict()

    def add_metadata(self, key: str = UNKEYED, value: str | None = None) -> "ImageToolsService":
        """Append a value under ``key``; see :meth:`MetadataStore.add`."""
        self._store.add(key, value)
        return self

    def set_metadata(self, key: str, values: str | list[str]) -> "ImageToolsService":
        """Replace the values under ``key``; see :meth:`MetadataStore.set`."""
        self._store.set(key, values)
        return self

    def get_metadata(self, key: str) -> list[str]:
        return self._store.get(key)

    def get_first_metadata(self, key: str) -> str | None:
        return self._store.get_first(key)

    def remove_metadata(self, key: str) -> "ImageToolsService":
        self._store.remove(key)
        return self

    def clear_metadata(self) -> "ImageToolsService":
        self._store.clear()
        return self

    def to_command_args(self) -> list[str]:
        """Return the argument tokens only."""
        return self._assembler.to_command_args()

    def build_command(self) -> list[str]:
        """Return the full argv array."""
        return self._assembler.build_command()

    def to_string(self) -> str:
        """Return the command as a single escaped line."""
        return self._formatter.to_string()

    def to_string_multi_line_command(self) -> str:
        """Return the multi-line command, or the flat layout in string-list mode."""
        if self._provider.use_string_list:
            return flat_metadata_line(self._provider, self._store)
        return self._formatter.to_string_multi_line_command()

    def to_string_list(self) -> list[str]:
        """Return the argv tokens for string-list display."""
        return self._formatter.to_string_list()

    def exec_request(self) -> ExecRequest:
        """Return the request for an external process executor."""
        return ExecRequest.from_command(self.build_command())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self._store.size() == 0:
            metadata = "{}"
        else:
            rendered = []
            for key, values in self._store.entries():
                shown = "(empty)" if key == UNKEYED else key
                value = repr(values[0]) if len(values) == 1 else repr(values)
                rendered.append(f"{shown!r}: {value}")
            metadata = "{" + ", ".join(rendered) + "}"
        return (
            f"{type(self).__name__}(command={self.command!r}, executor={self.executor!r}, "
            f"sub_commands={list(self.sub_commands)!r}, use_string_list={self.use_string_list}, "
            f"metadata={metadata})"
        )
