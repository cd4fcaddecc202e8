"""Tests for the JSON value model."""

import pytest

from ocrtool.protocol.values import (
    JSON_NULL,
    JsonArray,
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonNull,
    JsonObject,
    JsonString,
    is_request_id,
    json_value,
)


class TestJsonValueConversion:
    def test_bool_is_not_an_integer(self) -> None:
        value = json_value(True)
        assert value == JsonBool(True)
        assert value.as_int() is None
        assert value.as_bool() is True

    def test_integer_and_float_stay_distinct(self) -> None:
        assert json_value(1) == JsonInt(1)
        assert json_value(1.0) == JsonFloat(1.0)
        assert json_value(1).to_python() == 1
        assert isinstance(json_value(1.0).to_python(), float)

    def test_integer_widens_to_float_accessor(self) -> None:
        assert JsonInt(3).as_float() == 3.0
        assert JsonFloat(3.5).as_int() is None

    def test_none_is_null(self) -> None:
        assert json_value(None) is JSON_NULL
        assert JsonNull().to_python() is None

    def test_nested_structure(self) -> None:
        value = json_value({"a": [1, "two", None, {"b": False}]})
        assert isinstance(value, JsonObject)
        items = value.get("a").as_list()
        assert items is not None
        assert items[0] == JsonInt(1)
        assert items[1] == JsonString("two")
        assert items[2] == JSON_NULL
        assert items[3].get("b") == JsonBool(False)

    def test_round_trip_to_python(self) -> None:
        raw = {"name": "ocr_text", "arguments": {"lang": "en-US", "n": 2, "f": 0.5}, "x": [True]}
        assert json_value(raw).to_python() == raw

    def test_rejects_non_string_keys(self) -> None:
        with pytest.raises(TypeError, match="keys must be strings"):
            json_value({1: "x"})

    def test_rejects_unrepresentable(self) -> None:
        with pytest.raises(TypeError, match="not JSON-representable"):
            json_value(object())

    def test_existing_value_passes_through(self) -> None:
        value = JsonString("x")
        assert json_value(value) is value


class TestAccessors:
    def test_mismatched_accessors_return_none(self) -> None:
        value = JsonString("hello")
        assert value.as_str() == "hello"
        assert value.as_bool() is None
        assert value.as_int() is None
        assert value.as_list() is None
        assert value.as_object() is None
        assert value.get("anything") is None

    def test_object_get_missing_key(self) -> None:
        value = json_value({"present": 1})
        assert value.get("present") == JsonInt(1)
        assert value.get("absent") is None

    def test_array_accessor(self) -> None:
        value = JsonArray((JsonInt(1), JsonInt(2)))
        assert value.as_list() == (JsonInt(1), JsonInt(2))
        assert value.to_python() == [1, 2]


class TestEqualityAndHashing:
    def test_objects_compare_by_members(self) -> None:
        assert json_value({"a": 1, "b": 2}) == json_value({"b": 2, "a": 1})
        assert json_value({"a": 1}) != json_value({"a": 2})

    def test_objects_are_hashable(self) -> None:
        assert hash(json_value({"a": [1]})) == hash(json_value({"a": [1]}))


class TestRequestId:
    @pytest.mark.parametrize("value", [1, 0, -7, "abc", ""])
    def test_valid_ids(self, value: object) -> None:
        assert is_request_id(value)

    @pytest.mark.parametrize("value", [True, False, 1.5, None, [1], {"a": 1}])
    def test_invalid_ids(self, value: object) -> None:
        assert not is_request_id(value)
