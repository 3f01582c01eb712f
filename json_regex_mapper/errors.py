from __future__ import annotations


class RegexMapperError(Exception):
    """Base class for errors raised by the record mapper."""


class ConfigurationError(RegexMapperError):
    """The operation list could not be loaded; the mapper must not start."""


class RecordError(RegexMapperError):
    """A record payload is not UTF-8 JSON. Only that record is aborted."""


class MapperNotInitializedError(RegexMapperError):
    """`map_record` was called before `init`."""
