from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple, Union

import structlog

from .merging import merge_values
from .paths import POINTER_SEP, is_writable_path, parse_array_index, split_pointer, unescape_pointer_segment

logger = structlog.get_logger(__name__)

_MISSING = object()


def _step(container: Any, segment: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment, _MISSING)
    if isinstance(container, list):
        index = parse_array_index(segment)
        if index is None or index >= len(container):
            return _MISSING
        return container[index]
    return _MISSING


def _resolve(data: Any, segments: List[str]) -> Any:
    val = data
    for segment in segments:
        val = _step(val, segment)
        if val is _MISSING:
            return _MISSING
    return val


def _locate(data: Any, segments: List[str]) -> Optional[Tuple[Any, Union[str, int]]]:
    """Find the container holding the last segment, with the key/index to use."""
    parent = _resolve(data, segments[:-1])
    last = segments[-1]
    if isinstance(parent, dict):
        return (parent, last) if last in parent else None
    if isinstance(parent, list):
        index = parse_array_index(last)
        if index is None or index >= len(parent):
            return None
        return parent, index
    return None


def get_value_by_path(data: Any, path: str, default: Any = None) -> Any:
    """Retrieve a value from nested data using a JSON pointer path.

    '' addresses the whole document. Missing keys, out-of-range indexes,
    traversal through scalars and paths without a leading '/' give `default`.
    """
    segments = split_pointer(path)
    if segments is None:
        return default
    val = _resolve(data, segments)
    return default if val is _MISSING else val


def to_canonical_text(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(',', ':'), ensure_ascii=False, allow_nan=False)


def read_field_text(data: Any, path: str) -> str:
    """Read the value at `path` as text.

    Strings come back verbatim, every other value as compact JSON. An
    unresolved path reads as '', which callers treat as "field absent".
    """
    val = get_value_by_path(data, path, _MISSING)
    if val is _MISSING:
        return ''
    if isinstance(val, str):
        return val
    return to_canonical_text(val)


def _merge_at(data: Any, segments: List[str], value: Any) -> Any:
    if not segments:
        return merge_values(data, value)
    container, key = _locate(data, segments)
    container[key] = merge_values(container[key], value)
    return data


def write_value_at_path(data: Any, path: str, value: Any) -> Any:
    """Write `value` at `path`, creating missing object levels on the way.

    The document is updated in place and returned; the return value only
    differs from `data` when the root itself had to be replaced.

        '/root/one' <- 'x'  merges {'root': {'one': 'x'}}
        '/root'     <- 'x'  merges {'root': 'x'}

    An existing location is merged into, so sibling keys survive. Otherwise
    the leaf segment is peeled off and the value wrapped one level deeper
    until an existing ancestor (or the root) takes the merge. Non-object
    content on the way is replaced by the nearest object ancestor's merge.
    Paths without any '/' are dropped so a bad destination cannot wipe out
    the record.
    """
    if not is_writable_path(path):
        logger.debug("write_dropped_malformed_path", path=path)
        return data

    current = path
    pending = value
    remaining: Optional[List[str]] = None
    while True:
        segments = split_pointer(current)
        if segments is not None and (not segments or _locate(data, segments) is not None):
            return _merge_at(data, segments, pending)

        if remaining is None:
            remaining = path.split(POINTER_SEP)[1:]
        if not remaining:
            return merge_values(data, pending)

        key = unescape_pointer_segment(remaining.pop())
        pending = {key: pending}
        if not remaining:
            return merge_values(data, pending)

        current = POINTER_SEP + POINTER_SEP.join(remaining)
