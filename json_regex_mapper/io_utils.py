from __future__ import annotations

import json
import math


def reject_non_finite(name):
    """`parse_constant` hook: NaN and 'Infinity' are not JSON."""
    raise ValueError(f"{name} is not a valid JSON value")


def parse_finite_float(text):
    """`parse_float` hook: numbers that overflow to infinity are out of range."""
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def loads_strict(content):
    return json.loads(content, parse_constant=reject_non_finite, parse_float=parse_finite_float)


def parse_json_text(content):
    """Parse a JSON document, falling back to JSON Lines (one record per line)."""
    if isinstance(content, bytes):
        content = content.decode('utf-8')
    try:
        return loads_strict(content)
    except json.JSONDecodeError as e:
        lines = [line for line in content.splitlines() if line.strip()]
        if len(lines) < 2:
            raise
        try:
            return [loads_strict(line) for line in lines]
        except json.JSONDecodeError:
            raise e


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return parse_json_text(file_obj.read())

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return parse_json_text(f.read())
