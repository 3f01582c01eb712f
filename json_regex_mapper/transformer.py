from __future__ import annotations

import json
from copy import deepcopy
from typing import Any, Iterable, Union

import structlog

from .accessors import read_field_text, write_value_at_path
from .errors import RecordError
from .io_utils import loads_strict
from .operations import Operation

logger = structlog.get_logger(__name__)


def apply_operations(document: Any, operations: Iterable[Operation]) -> Any:
    """Run every operation in order against `document` and return it.

    Each operation reads its source as text, runs its regex and writes the
    result string to its destination. An empty read (field absent) or an
    empty result (no match, empty capture) skips the write. Later operations
    see what earlier ones wrote.
    """
    for op in operations:
        text = read_field_text(document, op.source_path)
        if not text:
            logger.debug("operation_skipped", reason="source_absent", source=op.source_path)
            continue

        result = op.run_regex(text)
        if not result:
            logger.debug("operation_skipped", reason="empty_result", source=op.source_path)
            continue

        document = write_value_at_path(document, op.destination_path, result)
    return document


def transform_document(document: Any, operations: Iterable[Operation]) -> Any:
    """Same as `apply_operations` but leaves the caller's document untouched."""
    return apply_operations(deepcopy(document), operations)


def parse_record(payload: Union[bytes, bytearray, memoryview, str]) -> Any:
    if isinstance(payload, str):
        text = payload
    else:
        try:
            text = bytes(payload).decode('utf-8')
        except UnicodeDecodeError as e:
            logger.warning("record_rejected", reason="invalid_utf8", error=str(e))
            raise RecordError(f"record is not valid UTF-8: {e}") from e

    try:
        return loads_strict(text)
    except ValueError as e:
        logger.warning("record_rejected", reason="invalid_json", error=str(e))
        raise RecordError(f"record is not valid JSON: {e}") from e


def transform_record(payload: Union[bytes, bytearray, memoryview, str], operations: Iterable[Operation]) -> Any:
    """Decode one record payload and run the operations over it."""
    return apply_operations(parse_record(payload), operations)


def serialize_document(document: Any) -> bytes:
    return json.dumps(document, separators=(',', ':'), ensure_ascii=False, allow_nan=False).encode('utf-8')
