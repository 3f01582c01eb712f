"""Core logic for JSON Regex Mapper.

The Gradio playground lives in `app.py`. This package contains the record
transformation engine:
- resolve JSON pointer paths and read fields as text
- run regex capture / replace operations
- write results back, building and merging nested objects
- bind the operation list once and map records
"""
from .errors import ConfigurationError, MapperNotInitializedError, RecordError, RegexMapperError
from .mapper import PARAM_NAME, Record, RegexMapper
from .operations import Capture, Operation, Replace, load_operations
from .transformer import apply_operations, transform_document, transform_record

__all__ = [
    'PARAM_NAME',
    'Capture',
    'ConfigurationError',
    'MapperNotInitializedError',
    'Operation',
    'Record',
    'RecordError',
    'RegexMapper',
    'RegexMapperError',
    'Replace',
    'apply_operations',
    'load_operations',
    'transform_document',
    'transform_record',
]
