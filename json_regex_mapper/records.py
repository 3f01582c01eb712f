from __future__ import annotations

from typing import Any, List, Optional, Union

from .accessors import get_value_by_path
from .paths import join_pointer

ROOT_LABEL = '(root)'


def normalize_root(root_path: str) -> str:
    if root_path in (None, '', ROOT_LABEL):
        return ''
    return root_path


def resolve_records(data: Any, root_path: str = ROOT_LABEL) -> List[Any]:
    """Resolve the selected root into the list of records to transform.

    A list root yields its items, any other value is a single record and an
    unresolved root yields nothing.
    """
    if data is None:
        return []

    target = get_value_by_path(data, normalize_root(root_path))
    if isinstance(target, list):
        return target
    if target is not None:
        return [target]
    return []


def find_list_pointers(data: Any, parent: Optional[List[Union[str, int]]] = None) -> List[str]:
    """Find pointers to every list in the document (first element sampled)."""
    parent = parent or []
    paths: List[str] = []
    if isinstance(data, dict):
        for k, v in data.items():
            current = parent + [k]
            if isinstance(v, list):
                paths.append(join_pointer(current))
                if v and isinstance(v[0], dict):
                    paths.extend(find_list_pointers(v[0], current + [0]))
            elif isinstance(v, dict):
                paths.extend(find_list_pointers(v, current))
    elif isinstance(data, list) and not parent:
        paths.append(ROOT_LABEL)
        if data and isinstance(data[0], dict):
            paths.extend(find_list_pointers(data[0], [0]))
    return sorted(paths)
