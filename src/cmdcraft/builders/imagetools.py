"""Fluent builder for ``docker buildx imagetools`` commands.

Unlike the Terraform-shaped builders, image-tools configuration is a plain
ordered metadata walk: every ``with_*`` call appends a flag/value pair to a
:class:`~cmdcraft.metadata.MetadataStore`, and sources are stored unkeyed so
they render as bare positional tokens.
"""

from collections.abc import Iterable, Mapping
from typing import Self

from loguru import logger

from cmdcraft.builders.base import require_text, require_value
from cmdcraft.capabilities import IMAGETOOLS_COMMANDS
from cmdcraft.errors import InvalidCommand
from cmdcraft.metadata import UNKEYED, MetadataStore
from cmdcraft.services import ImageToolsService

__all__ = ["ImageToolsBuilder"]


class ImageToolsBuilder:
    """Collects image-tools flags and builds an :class:`ImageToolsService`.

    Examples:
        >>> service = ImageToolsBuilder.for_create().with_tag("app:latest").with_source("app:sha").build()
        >>> service.build_command()
        ['docker', 'buildx', 'imagetools', 'create', '--tag', 'app:latest', 'app:sha']
    """

    def __init__(self) -> None:
        self._command: str | None = None
        self._use_string_list = False
        self._store = MetadataStore()

    @classmethod
    def create(cls, command: str | None = None) -> Self:
        """Return a new builder, optionally with its command already set."""
        builder = cls()
        if command:
            builder.with_command(command)
        return builder

    @classmethod
    def for_create(cls) -> Self:
        return cls.create("create")

    @classmethod
    def for_inspect(cls) -> Self:
        return cls.create("inspect")

    @classmethod
    def for_prune(cls) -> Self:
        return cls.create("prune")

    def with_command(self, command: str) -> Self:
        self._command = require_text(command, "command").strip()
        return self

    def with_string_list_output(self, use_string_list: bool = True) -> Self:
        """Render multi-line output as one flat ``--flag=v1,v2`` line."""
        self._use_string_list = use_string_list
        return self

    # Metadata

    def add_metadata(self, key: str = UNKEYED, value: str | None = None) -> Self:
        self._store.add(key, value)
        return self

    def set_metadata(self, key: str, values: str | list[str]) -> Self:
        self._store.set(key, values)
        return self

    def with_metadata(self, metadata: Mapping[str, str | list[str]]) -> Self:
        """Replace the values of every key in ``metadata``."""
        for key, values in metadata.items():
            self.set_metadata(key, values)
        return self

    # Flags

    def with_tag(self, tag: str) -> Self:
        return self.add_metadata("--tag", tag)

    def with_tags(self, tags: Iterable[str]) -> Self:
        for tag in tags:
            self.with_tag(tag)
        return self

    def with_file(self, file_path: str) -> Self:
        return self.add_metadata("--file", file_path)

    def with_output(self, output: str) -> Self:
        return self.add_metadata("--output", output)

    def with_platform(self, platform: str) -> Self:
        return self.add_metadata("--platform", platform)

    def with_platforms(self, platforms: Iterable[str]) -> Self:
        for platform in platforms:
            self.with_platform(platform)
        return self

    def with_annotation(self, key: str, value: str) -> Self:
        require_value(key, "annotation key")
        require_value(value, f"annotation {key}")
        return self.add_metadata("--annotation", f"{key}={value}")

    def with_annotations(self, annotations: Mapping[str, str]) -> Self:
        for key, value in annotations.items():
            self.with_annotation(key, value)
        return self

    def with_source(self, source: str) -> Self:
        """Add a source image reference, rendered as a bare positional token."""
        return self.add_metadata(UNKEYED, source)

    def with_sources(self, sources: Iterable[str]) -> Self:
        for source in sources:
            self.with_source(source)
        return self

    def with_dry_run(self) -> Self:
        return self._with_switch("--dry-run")

    def with_verbose(self) -> Self:
        return self._with_switch("--verbose")

    def _with_switch(self, flag: str) -> Self:
        # valueless flags live in the unkeyed bucket so no empty token is emitted
        if flag not in self._store.get(UNKEYED):
            self._store.add(UNKEYED, flag)
        return self

    # Lifecycle

    def reset(self) -> Self:
        """Clear the command, the output mode and all metadata."""
        self._command = None
        self._use_string_list = False
        self._store.clear()
        return self

    def build(self) -> ImageToolsService:
        """Freeze the command and hand a copy of the metadata to a new service.

        Raises:
            InvalidCommand: If the command is unset or not an image-tools command.
        """
        if self._command not in IMAGETOOLS_COMMANDS:
            raise InvalidCommand("Image tools", self._command, IMAGETOOLS_COMMANDS)
        service = ImageToolsService(self._command, self._use_string_list, self._store)
        logger.debug(f"Built image tools service: {service.to_string()}")
        return service
