"""Ordered multi-valued key/value store.

The store keeps every value added under a key, in the order it was added,
and remembers the order in which keys first appeared. The empty-string key
is reserved for positional values that are rendered without a flag.
"""

from collections.abc import Iterator

from cmdcraft.errors import InvalidArgument

__all__ = ["UNKEYED", "MetadataStore"]

UNKEYED = ""


def _validate_key(key: object) -> None:
    """Reject keys that cannot be rendered as a flag token."""
    if key is None:
        raise InvalidArgument("Metadata key cannot be None")  # noqa: TRY003
    if not isinstance(key, str):
        msg = f"Metadata key must be a string, got {type(key).__name__}"
        raise InvalidArgument(msg)


def _validate_value(value: object) -> None:
    """Reject values that cannot be rendered as an argv token."""
    if value is None:
        raise InvalidArgument("Metadata value cannot be None")  # noqa: TRY003
    if not isinstance(value, str):
        msg = f"Metadata value must be a string, got {type(value).__name__}"
        raise InvalidArgument(msg)


class MetadataStore:
    """Insertion-ordered mapping of flag to list of values.

    Examples:
        >>> store = MetadataStore()
        >>> _ = store.add("--tag", "latest").add(value="ctx")
        >>> list(store.entries())
        [('--tag', ['latest']), ('', ['ctx'])]
    """

    def __init__(self) -> None:
        self._data: dict[str, list[str]] = {}

    def add(self, key: str = UNKEYED, value: str | None = None) -> "MetadataStore":
        """Append ``value`` to the values stored under ``key``.

        Args:
            key: Flag the value belongs to. Defaults to the unkeyed bucket.
            value: Value to append.

        Returns:
            The store, for chaining.

        Raises:
            InvalidArgument: If the key or value is None or not a string.
        """
        _validate_key(key)
        _validate_value(value)
        self._data.setdefault(key, []).append(value)
        return self

    def set(self, key: str, values: str | list[str] | tuple[str, ...]) -> "MetadataStore":
        """Replace every value stored under ``key``.

        Args:
            key: Flag to replace.
            values: A single value or a sequence of values.

        Returns:
            The store, for chaining.

        Raises:
            InvalidArgument: If the key or any value is None or not a string.
        """
        _validate_key(key)
        value_list = list(values) if isinstance(values, (list, tuple)) else [values]
        for value in value_list:
            _validate_value(value)
        self._data[key] = value_list
        return self

    def get(self, key: str) -> list[str]:
        """Return a copy of the values for ``key`` (empty if absent)."""
        return list(self._data.get(key, []))

    def get_first(self, key: str) -> str | None:
        """Return the first value for ``key`` or None."""
        values = self._data.get(key)
        return values[0] if values else None

    def remove(self, key: str) -> "MetadataStore":
        """Delete ``key`` and all its values. Missing keys are ignored."""
        self._data.pop(key, None)
        return self

    def clear(self) -> "MetadataStore":
        """Remove every key."""
        self._data.clear()
        return self

    def entries(self) -> Iterator[tuple[str, list[str]]]:
        """Iterate over ``(key, values)`` pairs in insertion order.

        The snapshot is taken when this method is called, so mutation after
        the call is never seen by the returned iterator.
        """
        snapshot = [(key, list(values)) for key, values in self._data.items()]
        return iter(snapshot)

    def size(self) -> int:
        """Return the number of distinct keys."""
        return len(self._data)

    def to_dict(self) -> dict[str, list[str]]:
        """Return an insertion-ordered copy of the store."""
        return {key: list(values) for key, values in self._data.items()}

    def copy(self) -> "MetadataStore":
        """Return an independent copy of the store."""
        clone = MetadataStore()
        clone._data = self.to_dict()
        return clone

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __repr__(self) -> str:
        return f"MetadataStore({self.to_dict()!r})"
