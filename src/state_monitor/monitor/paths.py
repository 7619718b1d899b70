"""
Field path helpers: parsing, deep assignment and structural equality.

A field path is a tuple of keys addressing a value inside a plain structure
of mappings and sequences, e.g. ``("items", 0, "name")``. Paths can also be
written as strings in dot/bracket notation: ``"items[0].name"``.
"""

import math
import re
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any, Iterable, List, Tuple, Union

from .errors import InvalidPathError

PathKey = Union[str, int]
FieldPath = Tuple[PathKey, ...]
PathSpec = Union[str, FieldPath]

# Value written at every ignored path before comparing
IGNORED_SENTINEL = True

_SEGMENT = re.compile(r"""([^.\[\]]+)|\[(\d+)\]|\[(["'])(.*?)\3\]""")


def parse_path(spec: Any) -> FieldPath:
    """
    Convert a path specifier into a ``FieldPath``.

    Args:
        spec: Dot/bracket string (``"a.b[0]"``, ``'a["x.y"]'``) or a
            sequence of keys

    Returns:
        Tuple of path keys

    Raises:
        InvalidPathError: If the specifier is empty or malformed
    """
    if isinstance(spec, str):
        return _parse_string(spec)

    if isinstance(spec, (tuple, list)):
        if not spec:
            raise InvalidPathError("Field path must not be empty")
        for key in spec:
            if isinstance(key, bool) or not isinstance(key, (str, int)):
                raise InvalidPathError(f"Invalid key {key!r} in field path {spec!r}")
        return tuple(spec)

    raise InvalidPathError(f"Unsupported field path: {spec!r}")


def _parse_string(path: str) -> FieldPath:
    if not path:
        raise InvalidPathError("Field path must not be empty")

    keys: List[PathKey] = []
    pos = 0
    while True:
        match = _SEGMENT.match(path, pos)
        if not match:
            raise InvalidPathError(f"Malformed field path {path!r} at position {pos}")

        name, index, _, quoted = match.groups()
        if name is not None:
            keys.append(name)
        elif index is not None:
            keys.append(int(index))
        else:
            keys.append(quoted)

        pos = match.end()
        if pos == len(path):
            return tuple(keys)

        if path[pos] == ".":
            pos += 1
            if pos == len(path):
                raise InvalidPathError(f"Field path {path!r} ends with a dot")
        elif path[pos] != "[":
            raise InvalidPathError(f"Malformed field path {path!r} at position {pos}")


def parse_paths(paths: Union[PathSpec, Iterable[PathSpec]]) -> List[FieldPath]:
    """
    Parse one path or a collection of paths.

    A string or a tuple is a single path; any other iterable (typically a
    list) is treated as a collection of paths.
    """
    if isinstance(paths, (str, tuple)):
        return [parse_path(paths)]
    return [parse_path(path) for path in paths]


def format_path(path: FieldPath) -> str:
    """Render a ``FieldPath`` back to dot/bracket notation."""
    parts: List[str] = []
    for key in path:
        if isinstance(key, int):
            parts.append(f"[{key}]")
        elif re.fullmatch(r"[^.\[\]]+", key):
            parts.append(f".{key}" if parts else key)
        else:
            parts.append(f"[{key!r}]")
    return "".join(parts)


def _is_index(key: PathKey) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    return key.isascii() and key.isdigit()


def _new_container(next_key: PathKey) -> Any:
    return [] if _is_index(next_key) else {}


def deep_set(container: Any, path: FieldPath, value: Any) -> Any:
    """
    Write ``value`` at ``path`` inside ``container``, in place.

    Missing or scalar intermediates are replaced with a new list (when the
    next key is an index) or dict. Tuple intermediates are converted to
    lists so their other items are kept. Lists are padded with ``None`` up
    to the target index. Non-index keys addressed at a list are skipped,
    since a list has nowhere to hold them.

    Args:
        container: Root mapping or sequence
        path: Keys to follow
        value: Value to store

    Returns:
        The same container
    """
    if not path:
        raise InvalidPathError("Field path must not be empty")

    current = container
    for position, key in enumerate(path):
        if isinstance(current, MutableMapping):
            if isinstance(key, int) and key not in current:
                key = str(key)
        elif isinstance(current, MutableSequence):
            if not _is_index(key):
                return container
            key = int(key)
            if key >= len(current):
                current.extend([None] * (key + 1 - len(current)))
        else:
            return container

        if position == len(path) - 1:
            current[key] = value
            break

        child = current.get(key) if isinstance(current, MutableMapping) else current[key]
        if _is_sequence(child) and not isinstance(child, MutableSequence):
            child = list(child)
            current[key] = child
        elif not isinstance(child, (MutableMapping, MutableSequence)):
            child = _new_container(path[position + 1])
            current[key] = child
        current = child

    return container


def mask_paths(container: Any, paths: Iterable[FieldPath]) -> Any:
    """Overwrite every path in ``container`` with ``IGNORED_SENTINEL``."""
    for path in paths:
        deep_set(container, path, IGNORED_SENTINEL)
    return container


def deep_equal(left: Any, right: Any) -> bool:
    """
    Structural equality of two plain structures.

    Mappings compare independently of key order, sequences element-wise in
    order. Booleans never equal numbers and NaN equals NaN.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right

    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if left.keys() != right.keys():
            return False
        return all(deep_equal(left[key], right[key]) for key in left)

    if _is_sequence(left) or _is_sequence(right):
        if not (_is_sequence(left) and _is_sequence(right)):
            return False
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))

    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True

    return left == right


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
