"""Regex operations and the configuration that declares them.

The configuration is a JSON array where every entry is exactly one of:

    {"capture": {"regex": "...", "target": "/src", "output": "/dest"}}
    {"replace": {"regex": "...", "target": "/src", "with": "..."}}

Capture writes group 1 of the first match to `output`. Replace substitutes
every match in place, so its destination is its own `target`.

Replacement templates reference groups with `$1`, `${1}`, `$name` or
`${name}`; `$$` is a literal dollar sign.
"""
from __future__ import annotations

import json
import re
from typing import Any, List, Tuple, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, TypeAdapter, ValidationError

from .errors import ConfigurationError

logger = structlog.get_logger(__name__)

_GROUP_NAME = re.compile(r'[A-Za-z0-9_]+')


class _GroupRef(str):
    """A named group reference inside a parsed template (as opposed to literal text)."""


def parse_template(template: str) -> Tuple[Any, ...]:
    """Split a replacement template into literal text and group references.

    Integers are numbered groups, `_GroupRef` strings named groups and plain
    strings literal text. A '$' that does not start a valid reference stays
    literal.
    """
    parts: List[Any] = []
    buf: List[str] = []

    def ref(name: str):
        if buf:
            parts.append(''.join(buf))
            buf.clear()
        parts.append(int(name) if name.isdigit() else _GroupRef(name))

    i = 0
    while i < len(template):
        ch = template[i]
        if ch != '$':
            buf.append(ch)
            i += 1
            continue

        nxt = template[i + 1] if i + 1 < len(template) else ''
        if nxt == '$':
            buf.append('$')
            i += 2
            continue

        if nxt == '{':
            # Any braced text names a group; only an unclosed brace stays literal.
            close = template.find('}', i + 2)
            if close != -1:
                ref(template[i + 2:close])
                i = close + 1
                continue
            buf.append('$')
            i += 1
            continue

        m = _GROUP_NAME.match(template, i + 1)
        if m:
            ref(m.group(0))
            i = m.end()
            continue

        buf.append('$')
        i += 1

    if buf:
        parts.append(''.join(buf))
    return tuple(parts)


def expand_template(match: re.Match, parts: Tuple[Any, ...]) -> str:
    out: List[str] = []
    pattern = match.re
    for part in parts:
        if isinstance(part, int):
            group = match.group(part) if part <= pattern.groups else None
        elif isinstance(part, _GroupRef):
            group = match.group(str(part)) if str(part) in pattern.groupindex else None
        else:
            group = part
        out.append(group or '')
    return ''.join(out)


class _OperationBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    regex: re.Pattern
    target: str

    @property
    def source_path(self) -> str:
        return self.target


class Capture(_OperationBase):
    """Extract capture group 1 of `regex` from `target` into `output`."""

    output: str

    @property
    def destination_path(self) -> str:
        return self.output

    def run_regex(self, text: str) -> str:
        # No match, no group 1, or group 1 not participating all read as ''.
        if self.regex.groups < 1:
            return ''
        match = self.regex.search(text)
        if match is None:
            return ''
        return match.group(1) or ''


class Replace(_OperationBase):
    """Replace every match of `regex` in `target` by the `with` template."""

    replacement: str = Field(alias='with')

    _parts: Tuple[Any, ...] = PrivateAttr(default=())

    def model_post_init(self, context: Any) -> None:
        self._parts = parse_template(self.replacement)

    @property
    def destination_path(self) -> str:
        return self.target

    def run_regex(self, text: str) -> str:
        return self.regex.sub(lambda m: expand_template(m, self._parts), text)


Operation = Union[Capture, Replace]


class _CaptureEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    capture: Capture


class _ReplaceEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    replace: Replace


_SPEC_ADAPTER = TypeAdapter(List[Union[_CaptureEntry, _ReplaceEntry]])


def load_operations(raw_spec: Union[str, bytes, List[Any]]) -> Tuple[Operation, ...]:
    """Parse the operation list; every failure is a ConfigurationError."""
    if raw_spec is None:
        raise ConfigurationError("operation spec is missing")

    if isinstance(raw_spec, (str, bytes, bytearray)):
        try:
            raw_spec = json.loads(raw_spec)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("spec_parse_failed", error=str(e))
            raise ConfigurationError(f"cannot parse `spec`: {e}") from e

    try:
        entries = _SPEC_ADAPTER.validate_python(raw_spec)
    except ValidationError as e:
        logger.error("spec_validation_failed", errors=e.error_count())
        raise ConfigurationError(f"invalid `spec`: {e}") from e

    operations: Tuple[Operation, ...] = tuple(
        entry.capture if isinstance(entry, _CaptureEntry) else entry.replace
        for entry in entries
    )
    logger.info("operations_loaded", count=len(operations))
    return operations


def dump_operations(operations) -> List[dict]:
    """Inverse of `load_operations`, used by the playground to show a spec."""
    out: List[dict] = []
    for op in operations:
        if isinstance(op, Capture):
            out.append({'capture': {'regex': op.regex.pattern, 'target': op.target, 'output': op.output}})
        else:
            out.append({'replace': {'regex': op.regex.pattern, 'target': op.target, 'with': op.replacement}})
    return out
