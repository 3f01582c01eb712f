from __future__ import annotations

from typing import List, Optional, Union

POINTER_SEP = '/'


def escape_pointer_segment(segment: str) -> str:
    """Escape a single key segment for pointer representation.

    - Tildes are escaped as '~0' first so the escape itself round-trips.
    - Slashes are escaped as '~1' so keys like 'a/b' remain one segment.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('~', '~0').replace('/', '~1')


def unescape_pointer_segment(segment: str) -> str:
    if segment is None:
        return ''
    # '~01' must decode to '~1', so '~1' is handled before '~0'.
    return segment.replace('~1', '/').replace('~0', '~')


def split_pointer(path: str) -> Optional[List[str]]:
    """Split a pointer into unescaped segments.

    Returns [] for the whole-document pointer '' and None when the path is
    not a pointer at all (does not start with '/').
    """
    if path is None:
        return None
    if not isinstance(path, str):
        path = str(path)
    if path == '':
        return []
    if not path.startswith(POINTER_SEP):
        return None
    return [unescape_pointer_segment(p) for p in path.split(POINTER_SEP)[1:]]


def join_pointer(segments: List[Union[str, int]]) -> str:
    if not segments:
        return ''
    return POINTER_SEP + POINTER_SEP.join(escape_pointer_segment(str(s)) for s in segments)


def parse_array_index(segment: str) -> Optional[int]:
    """Interpret a segment as an array index.

    Only plain decimal digits qualify, and a leading zero is allowed only for
    '0' itself; '-', '+1' and '01' are not indexes.
    """
    if not segment or not segment.isascii() or not segment.isdigit():
        return None
    if len(segment) > 1 and segment[0] == '0':
        return None
    return int(segment)


def is_writable_path(path: str) -> bool:
    return isinstance(path, str) and POINTER_SEP in path
