"""Tests for per-call mapping options."""

import pytest
from pydantic import ValidationError

from flexdto import MappingOptions, OptionsError
from tests.utils.models import AutoNumber


class TestCoerce:
    """Test cases for MappingOptions.coerce."""

    def test_defaults(self):
        options = MappingOptions.coerce()

        assert options.aliases == {}
        assert options.transforms == {}
        assert options.strict_mode is None

    def test_from_mapping_with_camel_case_key(self):
        options = MappingOptions.coerce({"strictMode": True, "aliases": {"a": ["b"]}})

        assert options.strict_mode is True
        assert options.aliases == {"a": ["b"]}

    def test_from_mapping_with_python_key(self):
        assert MappingOptions.coerce({"strict_mode": False}).strict_mode is False

    def test_keyword_overrides_win(self):
        options = MappingOptions.coerce({"strictMode": True}, strict_mode=False)

        assert options.strict_mode is False

    def test_none_overrides_are_ignored(self):
        options = MappingOptions.coerce({"strictMode": True}, strict_mode=None, aliases=None)

        assert options.strict_mode is True
        assert options.aliases == {}

    def test_from_instance_keeps_explicit_fields(self):
        base = MappingOptions(transforms={"age": int})

        options = MappingOptions.coerce(base, strict_mode=True)

        assert options.transforms == {"age": int}
        assert options.strict_mode is True

    def test_options_are_frozen(self):
        options = MappingOptions()

        with pytest.raises(ValidationError):
            options.strict_mode = True


class TestInvalidOptions:
    """Misconfiguration is a programming error and raises."""

    def test_unknown_key(self):
        with pytest.raises(OptionsError) as exc_info:
            MappingOptions.coerce({"strict": True})

        assert "strict" in exc_info.value.details["field_errors"]

    def test_non_callable_transform(self):
        with pytest.raises(OptionsError):
            MappingOptions.coerce(transforms={"age": "int"})

    def test_bad_alias_table(self):
        with pytest.raises(OptionsError):
            MappingOptions.coerce(aliases={"age": 5})

    def test_error_surfaces_through_init(self):
        with pytest.raises(OptionsError) as exc_info:
            AutoNumber({"age": 1}, {"unknown": 1})

        assert exc_info.value.error_code == "OPTIONS_ERROR"

    def test_no_validation_when_payload_is_ignored(self):
        dto = AutoNumber("not a mapping", {"unknown": 1})

        assert dto.age == 0
