"""Tests for the contactcore error types."""

import pytest

from contactcore.error_handling import (
    ConfigurationError,
    ContactCoreError,
    MergeError,
    ValidationError,
)


class TestErrorTypes:

    def test_base_error(self):
        error = ContactCoreError("boom", error_code="x", context={"k": 1})

        assert str(error) == "boom"
        assert error.error_code == "x"
        assert error.context == {"k": 1}

    def test_subclasses(self):
        validation = ValidationError("bad id", field_name="id", field_value="")
        config = ConfigurationError("bad threshold", config_key="deduplication.threshold")
        merge = MergeError("empty", group_size=0)

        assert validation.error_code == "validation_error"
        assert validation.field_name == "id"
        assert config.error_code == "configuration_error"
        assert config.config_key == "deduplication.threshold"
        assert merge.error_code == "merge_error"
        assert all(isinstance(e, ContactCoreError) for e in (validation, config, merge))

