"""Tests for reading fields as text and writing values at pointer paths."""

import copy
import json

import pytest

from json_regex_mapper.accessors import get_value_by_path, read_field_text, write_value_at_path
from tests.conftest import DESCRIPTION


class TestGetValueByPath:
    def test_whole_document(self) -> None:
        doc = {"a": 1}
        assert get_value_by_path(doc, "") is doc

    def test_array_index(self) -> None:
        doc = {"items": [{"id": 1}, {"id": 2}]}
        assert get_value_by_path(doc, "/items/1/id") == 2

    def test_missing_returns_default(self) -> None:
        doc = {"items": [1]}
        assert get_value_by_path(doc, "/items/5", "absent") == "absent"
        assert get_value_by_path(doc, "/items/0/x", "absent") == "absent"
        assert get_value_by_path(doc, "items", "absent") == "absent"

    def test_present_null_is_not_missing(self) -> None:
        assert get_value_by_path({"a": None}, "/a", "absent") is None


class TestReadFieldText:
    def test_string_is_returned_verbatim(self, docket_record) -> None:
        assert read_field_text(docket_record, "/description") == DESCRIPTION

    def test_nested_string(self, docket_record) -> None:
        assert read_field_text(docket_record, "/name/last") == "Hardy"

    def test_object_is_serialized(self, docket_record) -> None:
        expected = json.dumps({"first": "Abby", "last": "Hardy", "ssn": "123-45-6789"}, separators=(",", ":"))
        assert read_field_text(docket_record, "/name") == expected

    def test_scalars_are_serialized(self) -> None:
        doc = {"n": 13, "f": 1.5, "b": True, "z": None, "l": [1, "x"]}
        assert read_field_text(doc, "/n") == "13"
        assert read_field_text(doc, "/f") == "1.5"
        assert read_field_text(doc, "/b") == "true"
        assert read_field_text(doc, "/z") == "null"
        assert read_field_text(doc, "/l") == '[1,"x"]'

    def test_unresolved_path_reads_empty(self, docket_record) -> None:
        assert read_field_text(docket_record, "/invalid") == ""
        assert read_field_text(docket_record, "/name/first/deeper") == ""
        assert read_field_text(docket_record, "description") == ""

    def test_non_finite_number_is_not_serialized(self) -> None:
        with pytest.raises(ValueError):
            read_field_text({"f": float("inf")}, "/f")


class TestWriteValueAtPath:
    def test_empty_tree(self) -> None:
        assert write_value_at_path({}, "/root", "xyz") == {"root": "xyz"}

    def test_scalar_root_is_replaced(self) -> None:
        assert write_value_at_path("", "/root", "xyz") == {"root": "xyz"}

    def test_malformed_path_leaves_document_untouched(self) -> None:
        assert write_value_at_path("", "root", "xyz") == ""

        doc = {"root": {"aaa": 1}}
        before = copy.deepcopy(doc)
        assert write_value_at_path(doc, "root", "xyz") == before

    def test_add_peer_leaf(self) -> None:
        doc = {"root": {"aaa": 1, "bbb": 2}}
        assert write_value_at_path(doc, "/root/ccc", 3) == {"root": {"aaa": 1, "bbb": 2, "ccc": 3}}

    def test_add_peer_beside_subtree(self) -> None:
        doc = {"root": {"aaa": {"bbb": 2}}}
        assert write_value_at_path(doc, "/root/ccc", 3) == {"root": {"aaa": {"bbb": 2}, "ccc": 3}}

    def test_add_deep_nested_leaf(self) -> None:
        doc = {"root": {"aaa": {"bbb": 2}}}
        assert write_value_at_path(doc, "/root/aaa/ccc", 3) == {"root": {"aaa": {"bbb": 2, "ccc": 3}}}

    def test_array_in_the_way_is_replaced(self) -> None:
        doc = {"root": [{"aaa": 1}, {"bbb": 2}]}
        assert write_value_at_path(doc, "/root/ccc", 3) == {"root": {"ccc": 3}}

    def test_missing_levels_are_created(self) -> None:
        doc = {"keep": 1}
        assert write_value_at_path(doc, "/a/b/c/d", "v") == {"keep": 1, "a": {"b": {"c": {"d": "v"}}}}

    def test_document_is_updated_in_place(self) -> None:
        doc = {"keep": 1}
        result = write_value_at_path(doc, "/new", "v")
        assert result is doc
        assert doc == {"keep": 1, "new": "v"}

    def test_existing_array_element_is_merged(self) -> None:
        doc = {"items": [{"id": 1}, {"id": 2}]}
        write_value_at_path(doc, "/items/1", {"tag": "x"})
        assert doc == {"items": [{"id": 1}, {"id": 2, "tag": "x"}]}

    def test_existing_leaf_is_overwritten(self) -> None:
        doc = {"name": {"first": "Abby", "ssn": "123-45-6789"}}
        write_value_at_path(doc, "/name/ssn", "***-**-****")
        assert doc == {"name": {"first": "Abby", "ssn": "***-**-****"}}

    def test_object_value_merges_into_existing_object(self) -> None:
        doc = {"parsed": {"first": "bk"}}
        write_value_at_path(doc, "/parsed", {"second": "4"})
        assert doc == {"parsed": {"first": "bk", "second": "4"}}

    def test_escaped_segment_becomes_plain_key(self) -> None:
        doc = {}
        write_value_at_path(doc, "/a~1b", "v")
        assert doc == {"a/b": "v"}
        assert read_field_text(doc, "/a~1b") == "v"

    @pytest.mark.parametrize("path", ["/x", "/x/y", "/root/aaa/z"])
    def test_write_twice_is_idempotent(self, path) -> None:
        once = write_value_at_path({"root": {"aaa": {"bbb": 2}}}, path, "v")
        twice = write_value_at_path(write_value_at_path({"root": {"aaa": {"bbb": 2}}}, path, "v"), path, "v")
        assert once == twice

    @pytest.mark.parametrize("path", ["/x", "/x/y", "/root/aaa/z", "/root/new/deep"])
    def test_write_then_read(self, path) -> None:
        doc = write_value_at_path({"root": {"aaa": {"bbb": 2}}}, path, "v")
        assert read_field_text(doc, path) == "v"
        assert read_field_text(doc, "/root/aaa/bbb") == "2"

    def test_very_deep_path(self) -> None:
        segments = [f"k{i}" for i in range(200)]
        path = "/" + "/".join(segments)
        doc = write_value_at_path({}, path, "leaf")
        assert get_value_by_path(doc, path) == "leaf"
