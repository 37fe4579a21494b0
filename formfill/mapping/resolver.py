"""Reads and writes values in nested data by dotted/indexed path.

A path is a dot-separated list of segments. A segment may end with one
bracketed non-negative index: ``dependents[0].firstName`` reads
``dependents``, takes item 0 of it, then reads ``firstName``.
"""

import re
from dataclasses import dataclass
from typing import Any

from formfill.mapping.values import JSONValue

_INDEXED_SEGMENT_RE = re.compile(r"^(?P<key>[^\[\]]*)\[(?P<index>\d+)\]$")


@dataclass(frozen=True)
class PathSegment:
    """One step of a path: a key, then an optional index into its value."""

    key: str
    index: int | None = None


def split_path(path: str) -> list[PathSegment]:
    """Parse a path string into its segments."""
    segments: list[PathSegment] = []
    for part in path.split("."):
        match = _INDEXED_SEGMENT_RE.match(part)
        if match:
            segments.append(PathSegment(match.group("key"), int(match.group("index"))))
        else:
            segments.append(PathSegment(part))
    return segments


def resolve_path(data: JSONValue, path: str) -> JSONValue:
    """Return the value at *path*, or None as soon as any step is missing."""
    if data is None or not path:
        return None
    current: Any = data
    for segment in split_path(path):
        if current is None:
            return None
        current = _read_key(current, segment.key)
        if segment.index is not None:
            current = _read_index(current, segment.index)
    return current


def set_path(data: JSONValue, path: str, value: JSONValue) -> JSONValue:
    """Return a copy of *data* with *value* stored at *path*.

    Every container along the path is copied; containers off the path are
    shared with the input. Missing or non-container steps are replaced by
    new dicts (and lists for indexed steps, padded with None).
    """
    if not path:
        return value
    return _set(data, split_path(path), value)


def _read_key(container: Any, key: str) -> Any:
    if isinstance(container, dict):
        return container.get(key)
    if isinstance(container, list) and key.isdigit():
        return _read_index(container, int(key))
    return None


def _read_index(container: Any, index: int) -> Any:
    if isinstance(container, list) and index < len(container):
        return container[index]
    return None


def _set(node: Any, segments: list[PathSegment], value: JSONValue) -> dict[str, Any]:
    segment, rest = segments[0], segments[1:]
    container: dict[str, Any] = dict(node) if isinstance(node, dict) else {}

    if segment.index is None:
        container[segment.key] = _set(container.get(segment.key), rest, value) if rest else value
        return container

    existing = container.get(segment.key)
    items: list[Any] = list(existing) if isinstance(existing, list) else []
    if len(items) <= segment.index:
        items.extend([None] * (segment.index + 1 - len(items)))
    items[segment.index] = _set(items[segment.index], rest, value) if rest else value
    container[segment.key] = items
    return container
