from __future__ import annotations

import json
import os
import tempfile
from typing import Any, Dict, List

import gradio as gr
import structlog

from .errors import ConfigurationError
from .io_utils import read_json_content
from .operations import dump_operations, load_operations
from .records import ROOT_LABEL, find_list_pointers, resolve_records
from .transformer import transform_document

logger = structlog.get_logger(__name__)

TABLE_HEADERS = ["Kind", "Regex", "Target", "Output / With"]

EXAMPLE_SPEC = [
    {"capture": {"regex": r"(?i)Second:\s+(\w+)\b", "target": "/description", "output": "/parsed/second"}},
    {"replace": {"regex": r"\d{3}-\d{2}-\d{4}", "target": "/name/ssn", "with": "***-**-****"}},
]


def prepare_dataset_payload(file_obj):
    if file_obj is None:
        return None, gr.update(choices=[ROOT_LABEL]), "No file uploaded."

    try:
        data = read_json_content(file_obj)
    except Exception as e:
        return None, gr.update(choices=[ROOT_LABEL]), f"Error parsing JSON: {str(e)}"

    list_paths = find_list_pointers(data)
    if ROOT_LABEL not in list_paths:
        list_paths.insert(0, ROOT_LABEL)

    return data, gr.update(choices=list_paths, value=ROOT_LABEL), "Successfully loaded."


def compute_record_count_text(data: Any, root_path: str = ROOT_LABEL) -> str:
    if data is None:
        return ""
    return f"Records: {len(resolve_records(data, root_path or ROOT_LABEL))}"


def load_dataset_with_preview(file_obj):
    data, root_dropdown, message = prepare_dataset_payload(file_obj)
    if data is None:
        return None, root_dropdown, message, None, ""

    count_text = compute_record_count_text(
        data,
        root_dropdown.get("value") if isinstance(root_dropdown, dict) else ROOT_LABEL,
    )
    return data, root_dropdown, message, None, count_text


def handle_root_change(data: Any, root_path: str):
    return compute_record_count_text(data, root_path or ROOT_LABEL), None


def _table_rows(table) -> List[List[Any]]:
    if table is None:
        return []
    try:
        return table[TABLE_HEADERS].values.tolist()
    except Exception:
        return [list(row) for row in table]


def operations_from_table(table) -> List[Dict[str, Any]]:
    """Turn operation table rows into spec entries; rows without a regex are ignored."""
    entries: List[Dict[str, Any]] = []
    for row in _table_rows(table):
        if len(row) < 4:
            continue
        kind, regex, target, extra = ["" if v is None else str(v) for v in row[:4]]
        kind = kind.strip().lower()
        if not regex:
            continue
        if kind == "replace":
            entries.append({"replace": {"regex": regex, "target": target, "with": extra}})
        else:
            entries.append({"capture": {"regex": regex, "target": target, "output": extra}})
    return entries


def sync_spec_from_table(table) -> str:
    return json.dumps(operations_from_table(table), indent=2)


def table_from_spec(spec_text: str):
    try:
        operations = load_operations(spec_text)
    except ConfigurationError as e:
        return gr.update(), f"Invalid spec: {e}"

    rows = []
    for entry in dump_operations(operations):
        for kind, body in entry.items():
            rows.append([kind, body["regex"], body["target"], body.get("output", body.get("with"))])
    return rows, f"Loaded {len(rows)} operation(s)."


def validate_spec_handler(spec_text: str) -> str:
    if not spec_text or not spec_text.strip():
        return "No operations defined."
    try:
        operations = load_operations(spec_text)
    except ConfigurationError as e:
        return f"Invalid spec: {e}"
    return f"Spec is valid: {len(operations)} operation(s)."


def _transform_records(data, spec_text, root_path, limit=None):
    operations = load_operations(spec_text)
    records = resolve_records(data, root_path or ROOT_LABEL)
    if limit is not None:
        records = records[:max(1, int(limit))]
    return [transform_document(record, operations) for record in records]


def preview_transform_handler(data, spec_text, root_path=None):
    if data is None:
        return None, "No data loaded."
    try:
        rows = _transform_records(data, spec_text, root_path, limit=3)
    except ConfigurationError as e:
        return None, f"Invalid spec: {e}"
    return (rows if rows else None), f"Previewing {len(rows)} record(s)."


def export_transformed_handler(data, spec_text, output_format, file_name, root_path=None):
    if data is None:
        return None, "No data loaded."

    try:
        rows = _transform_records(data, spec_text, root_path)
    except ConfigurationError as e:
        return None, f"Invalid spec: {e}"

    if not file_name or not file_name.strip():
        file_name = "output"

    ext = ".jsonl" if output_format == "JSON Lines" else ".json"
    if not file_name.lower().endswith(ext):
        file_name += ext

    path = os.path.join(tempfile.gettempdir(), file_name)

    try:
        with open(path, 'w', encoding='utf-8') as f:
            if output_format == "JSON Lines":
                for row in rows:
                    f.write(json.dumps(row, ensure_ascii=False))
                    f.write("\n")
            else:
                json.dump(rows, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("export_failed", path=path, error=str(e))
        return None, f"Error during export: {str(e)}"

    logger.info("export_written", path=path, records=len(rows))
    return path, f"Export successful! Saved {len(rows)} record(s) to {path}"
