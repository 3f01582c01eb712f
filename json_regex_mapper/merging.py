from __future__ import annotations

from copy import deepcopy
from typing import Any


def merge_values(into: Any, source: Any) -> Any:
    """Deep-merge `source` into `into` and return the merged value.

    Two objects merge key by key, recursively, and `into` is updated in place;
    keys only present in `into` are kept. In every other combination `source`
    wins outright and a copy of it is returned, so the caller must store the
    result at the merge position.
    """
    if isinstance(into, dict) and isinstance(source, dict):
        for key, value in source.items():
            into[key] = merge_values(into.get(key), value)
        return into
    return deepcopy(source)
