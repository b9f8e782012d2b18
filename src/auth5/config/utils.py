from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Iterable, List, Tuple

Path = Tuple[str, ...]


def split_path(dotted: str, sep: str = ".") -> Path:
    return tuple(part for part in dotted.split(sep) if part)


def join_path(path: Iterable[Any]) -> str:
    return ".".join(str(part) for part in path)


def split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def resolve_key(container: Any, segment: str) -> Any:
    """Return the key or index that ``segment`` addresses in ``container``.

    Keys are matched verbatim first; when no verbatim key exists, an existing
    key that equals the segment ignoring case is reused. Digit segments
    address list positions. ``None`` means the segment does not exist yet.
    """
    if isinstance(container, list):
        if segment.isdigit() and int(segment) < len(container):
            return int(segment)
        return None
    if not isinstance(container, Mapping):
        return None
    if segment in container:
        return segment
    folded = segment.lower()
    for key in container:
        if isinstance(key, str) and key.lower() == folded:
            return key
    return None


def get_path(data: Any, path: Path) -> Any:
    current: Any = data
    for segment in path:
        key = resolve_key(current, segment)
        if key is None:
            return None
        current = current[key]
    return current


def set_path(data: MutableMapping[str, Any], path: Path, value: Any) -> Path:
    """Set ``value`` at ``path`` creating intermediate mappings as needed.

    Returns the path actually written, with existing key spellings and list
    indexes substituted for the requested segments. A string written over an
    existing list is split on commas.
    """
    current: Any = data
    written: List[str] = []
    for segment in path[:-1]:
        key = resolve_key(current, segment)
        if key is None:
            if isinstance(current, list):
                raise KeyError(f"list index out of range: {join_path(written + [segment])}")
            key = segment
            current[key] = {}
        elif not isinstance(current[key], (MutableMapping, list)):
            current[key] = {}
        written.append(str(key))
        current = current[key]

    last = resolve_key(current, path[-1])
    if last is None:
        if isinstance(current, list):
            raise KeyError(f"list index out of range: {join_path(written + [path[-1]])}")
        last = path[-1]
    elif isinstance(current[last], list) and isinstance(value, str):
        value = split_list(value)
    current[last] = value
    written.append(str(last))
    return tuple(written)
