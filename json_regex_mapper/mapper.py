"""Record mapper bound to a process-wide operation list.

The host hands the mapper its parameters once (`init`) and then calls
`map_record` for every record. The operation list is fixed at `init` and
shared read-only by every call afterwards.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple

import structlog

from .errors import ConfigurationError, MapperNotInitializedError
from .operations import Operation, load_operations
from .transformer import serialize_document, transform_record

logger = structlog.get_logger(__name__)

PARAM_NAME = 'spec'


@dataclass(frozen=True)
class Record:
    value: bytes
    key: Optional[bytes] = None


class RegexMapper:
    def __init__(self, operations: Iterable[Operation]):
        self._operations: Tuple[Operation, ...] = tuple(operations)

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> 'RegexMapper':
        raw_spec = params.get(PARAM_NAME) if params is not None else None
        if raw_spec is None:
            logger.error("missing_param", param=PARAM_NAME)
            raise ConfigurationError(f"missing required parameter `{PARAM_NAME}`")
        return cls(load_operations(raw_spec))

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return self._operations

    def map(self, record: Record) -> Record:
        """Transform the record value; the key passes through unchanged."""
        document = transform_record(record.value, self._operations)
        return Record(value=serialize_document(document), key=record.key)


_lock = threading.Lock()
_mapper: Optional[RegexMapper] = None


def init(params: Mapping[str, str]) -> RegexMapper:
    global _mapper
    with _lock:
        if _mapper is not None:
            raise ConfigurationError("regex operations already initialized")
        _mapper = RegexMapper.from_params(params)
        return _mapper


def get_mapper() -> RegexMapper:
    if _mapper is None:
        raise MapperNotInitializedError("regex operations not initialized")
    return _mapper


def map_record(record: Record) -> Record:
    return get_mapper().map(record)


def reset() -> None:
    """Forget the initialized mapper. Test use only."""
    global _mapper
    with _lock:
        _mapper = None
