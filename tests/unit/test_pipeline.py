"""Tests for the value pipeline (transform / validate / assign)."""

from decimal import Decimal

import pytest

from flexdto.fields import MISSING, TypeTag, type_tag
from flexdto.pipeline import ValuePipeline, is_compatible
from tests.utils.logs import warnings_of


class _Nested:
    pass


class TestTypeTag:
    """Test cases for runtime type classification."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("x", TypeTag.STRING),
            ("", TypeTag.STRING),
            (0, TypeTag.NUMBER),
            (1.5, TypeTag.NUMBER),
            (Decimal("2.5"), TypeTag.NUMBER),
            (True, TypeTag.BOOLEAN),
            (None, TypeTag.OBJECT),
            ({}, TypeTag.OBJECT),
            ([], TypeTag.OBJECT),
            (_Nested(), TypeTag.OBJECT),
            (len, TypeTag.FUNCTION),
            (lambda: None, TypeTag.FUNCTION),
            (MISSING, TypeTag.UNDEFINED),
        ],
    )
    def test_classifies_values(self, value, expected):
        assert type_tag(value) is expected


class TestCompatibility:
    """Test cases for is_compatible."""

    def test_same_tag_is_compatible(self):
        assert is_compatible(TypeTag.NUMBER, 3)
        assert is_compatible(TypeTag.STRING, "3")

    def test_different_scalar_tags_are_incompatible(self):
        assert not is_compatible(TypeTag.NUMBER, "30")
        assert not is_compatible(TypeTag.STRING, 30)
        assert not is_compatible(TypeTag.BOOLEAN, 1)

    def test_object_fields_accept_any_object_shape(self):
        assert is_compatible(TypeTag.OBJECT, None)
        assert is_compatible(TypeTag.OBJECT, [1, 2])
        assert is_compatible(TypeTag.OBJECT, {"a": 1})
        assert is_compatible(TypeTag.OBJECT, MISSING)

    def test_object_fields_reject_scalars(self):
        assert not is_compatible(TypeTag.OBJECT, "test")
        assert not is_compatible(TypeTag.OBJECT, 5)

    def test_none_does_not_fit_scalar_fields(self):
        assert not is_compatible(TypeTag.STRING, None)


class TestValuePipeline:
    """Test cases for ValuePipeline.convert."""

    def test_transform_result_is_assigned(self, captured_logs):
        pipeline = ValuePipeline("Product", {"price": float}, strict_mode=True)
        assert pipeline.convert("price", "1500", 0) == 1500.0
        assert warnings_of(captured_logs) == []

    def test_transform_skips_type_validation(self, captured_logs):
        pipeline = ValuePipeline("User", {"age": lambda v: "still a string"}, strict_mode=True)
        assert pipeline.convert("age", "30", 0) == "still a string"
        assert warnings_of(captured_logs, "Type mismatch") == []

    def test_failing_transform_keeps_raw_value(self, captured_logs):
        def explode(value):
            raise ValueError("Invalid value")

        pipeline = ValuePipeline("User", {"age": explode}, strict_mode=True)
        assert pipeline.convert("age", "invalid", 0) == "invalid"

        failures = warnings_of(captured_logs, "Transform failed")
        assert len(failures) == 1
        assert failures[0]["dto"] == "User"
        assert failures[0]["field"] == "age"
        assert failures[0]["error"] == "Invalid value"

    def test_failing_transform_is_silent_without_strict_mode(self, captured_logs):
        pipeline = ValuePipeline("User", {"age": int}, strict_mode=False)
        assert pipeline.convert("age", "abc", 0) == "abc"
        assert warnings_of(captured_logs) == []

    def test_mismatch_is_reported_and_value_kept(self, captured_logs):
        pipeline = ValuePipeline("AutoNumber", {}, strict_mode=True)
        assert pipeline.convert("age", "30", 0) == "30"

        mismatches = warnings_of(captured_logs, "Type mismatch")
        assert len(mismatches) == 1
        entry = mismatches[0]
        assert entry["dto"] == "AutoNumber"
        assert entry["field"] == "age"
        assert entry["expected_type"] == "number"
        assert entry["actual_type"] == "string"
        assert entry["value"] == '"30"'

    def test_mismatch_is_silent_without_strict_mode(self, captured_logs):
        pipeline = ValuePipeline("AutoNumber", {}, strict_mode=False)
        assert pipeline.convert("age", "30", 0) == "30"
        assert warnings_of(captured_logs) == []

    def test_unset_field_is_never_validated(self, captured_logs):
        pipeline = ValuePipeline("NoInitialValue", {}, strict_mode=True)
        assert pipeline.convert("age", "30", MISSING) == "30"
        assert warnings_of(captured_logs) == []

    def test_matching_type_passes_through(self, captured_logs):
        pipeline = ValuePipeline("AutoNumber", {}, strict_mode=True)
        assert pipeline.convert("age", 30, 0) == 30
        assert warnings_of(captured_logs) == []

    def test_values_are_passed_by_reference(self):
        payload = {"nested": True}
        pipeline = ValuePipeline("Holder", {}, strict_mode=True)
        assert pipeline.convert("metadata", payload, {}) is payload
