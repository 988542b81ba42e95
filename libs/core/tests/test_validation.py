"""
Unit tests for record validation against module schemas.

Tests cover:
- Required fields
- Per-type checks
- Select options
- Error collection and labels
- Purity (no defaults applied, inputs untouched)
"""

import copy

import pytest

from forgekit_core.models.module import parse_schema
from forgekit_core.validation import ValidationResult, validate


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def product_schema():
    """Schema with a required string, a required number and a defaulted boolean."""
    return parse_schema(
        {
            "name": {"type": "string", "required": True},
            "price": {"type": "number", "required": True},
            "inStock": {"type": "boolean", "default": True},
        }
    )


@pytest.fixture
def order_schema():
    return parse_schema(
        {
            "orderNumber": {"type": "string", "required": True, "label": "Order Number"},
            "items": {"type": "array", "required": True, "label": "Items"},
            "status": {
                "type": "select",
                "required": True,
                "options": ["pending", "completed"],
                "label": "Status",
            },
        }
    )


def single_field(spec: dict):
    return parse_schema({"field": spec})


# =============================================================================
# Required Fields
# =============================================================================


class TestRequiredFields:
    """Tests for required field detection."""

    def test_valid_payload(self, product_schema):
        result = validate({"name": "Widget", "price": 9.99}, product_schema)

        assert result == ValidationResult(valid=True, errors=[])

    def test_missing_required_field_reports_one_error(self, product_schema):
        result = validate({"price": 9.99}, product_schema)

        assert result.valid is False
        assert result.errors == ["name is required"]

    def test_empty_string_counts_as_missing(self, product_schema):
        result = validate({"name": "", "price": 1}, product_schema)

        assert result.errors == ["name is required"]

    def test_null_counts_as_missing(self, product_schema):
        result = validate({"name": None, "price": 1}, product_schema)

        assert result.errors == ["name is required"]

    def test_zero_and_false_are_present(self):
        schema = parse_schema(
            {
                "count": {"type": "number", "required": True},
                "active": {"type": "boolean", "required": True},
            }
        )

        assert validate({"count": 0, "active": False}, schema).valid is True

    def test_missing_optional_field_is_skipped(self, product_schema):
        result = validate({"name": "Widget", "price": 1, "inStock": None}, product_schema)

        assert result.valid is True

    def test_label_used_in_message(self, order_schema):
        result = validate({"items": [], "status": "pending"}, order_schema)

        assert result.errors == ["Order Number is required"]


# =============================================================================
# Type Checks
# =============================================================================


class TestTypeChecks:
    """Tests for the per-type value checks."""

    @pytest.mark.parametrize("value", ["hello", " ", "123"])
    def test_string_accepts_strings(self, value):
        assert validate({"field": value}, single_field({"type": "string"})).valid

    @pytest.mark.parametrize("value", [123, True, ["a"], {"a": 1}])
    def test_string_rejects_non_strings(self, value):
        result = validate({"field": value}, single_field({"type": "string"}))

        assert result.errors == ["field must be a string"]

    def test_text_behaves_like_string(self):
        schema = single_field({"type": "text", "label": "Body"})

        assert validate({"field": "multi\nline"}, schema).valid
        assert validate({"field": 5}, schema).errors == ["Body must be a string"]

    @pytest.mark.parametrize("value", [0, 42, -3.5, "9.99", "1e3", " 7 "])
    def test_number_accepts_numbers_and_numeric_strings(self, value):
        assert validate({"field": value}, single_field({"type": "number"})).valid

    @pytest.mark.parametrize("value", ["abc", "", "  ", True, False, [1], "nan", "inf"])
    def test_number_rejects_non_numbers(self, value):
        result = validate({"field": value}, single_field({"type": "number"}))

        assert result.errors == ["field must be a number"]

    def test_number_rejects_non_finite_floats(self):
        schema = single_field({"type": "number"})

        assert not validate({"field": float("nan")}, schema).valid
        assert not validate({"field": float("inf")}, schema).valid

    def test_number_accepts_integers_beyond_float_range(self):
        schema = single_field({"type": "number"})

        assert validate({"field": 10**400}, schema).valid
        assert validate({"field": -(10**400)}, schema).valid

    @pytest.mark.parametrize("value", ["1_000", "1__0", "_1"])
    def test_number_rejects_digit_separators(self, value):
        result = validate({"field": value}, single_field({"type": "number"}))

        assert result.errors == ["field must be a number"]

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean_accepts_booleans(self, value):
        assert validate({"field": value}, single_field({"type": "boolean"})).valid

    @pytest.mark.parametrize("value", ["true", 1, 0, "false"])
    def test_boolean_rejects_truthy_values(self, value):
        result = validate({"field": value}, single_field({"type": "boolean"}))

        assert result.errors == ["field must be a boolean"]

    @pytest.mark.parametrize("value", ["a@b.co", "first.last@example.org"])
    def test_email_accepts_addresses(self, value):
        assert validate({"field": value}, single_field({"type": "email"})).valid

    @pytest.mark.parametrize(
        "value",
        ["not-an-email", "a@b", "a b@c.d", "@b.c", 5, "a@b.co\n", "a@b.co\nx@y.z"],
    )
    def test_email_rejects_invalid(self, value):
        result = validate({"field": value}, single_field({"type": "email"}))

        assert result.errors == ["field must be a valid email"]

    @pytest.mark.parametrize(
        "value",
        ["https://example.com/image.png", "http://localhost:8080/x?y=1"],
    )
    def test_url_accepts_absolute_urls(self, value):
        assert validate({"field": value}, single_field({"type": "url"})).valid

    @pytest.mark.parametrize("value", ["not a url", "/relative/path", 42])
    def test_url_rejects_invalid(self, value):
        result = validate({"field": value}, single_field({"type": "url"}))

        assert result.errors == ["field must be a valid URL"]

    @pytest.mark.parametrize(
        "value",
        ["2024-01-15", "2024-01-15T10:30:00", "2024-01-15T10:30:00+00:00", "Mon, 15 Jan 2024 10:30:00 GMT"],
    )
    def test_date_accepts_iso_and_rfc2822(self, value):
        assert validate({"field": value}, single_field({"type": "date"})).valid

    @pytest.mark.parametrize("value", ["not a date", "2024-13-45", "", 20240115])
    def test_date_rejects_invalid(self, value):
        result = validate({"field": value}, single_field({"type": "date"}))

        assert result.errors == ["field must be a valid date"]

    def test_array_accepts_lists(self):
        schema = single_field({"type": "array"})

        assert validate({"field": []}, schema).valid
        assert validate({"field": [1, "two", {"three": 3}]}, schema).valid

    @pytest.mark.parametrize("value", ["a,b", {"a": 1}, 3])
    def test_array_rejects_non_lists(self, value):
        result = validate({"field": value}, single_field({"type": "array"}))

        assert result.errors == ["field must be an array"]


# =============================================================================
# Select Fields
# =============================================================================


class TestSelectFields:
    """Tests for select fields and their options."""

    def test_accepts_listed_option(self, order_schema):
        payload = {"orderNumber": "A-1", "items": [], "status": "completed"}

        assert validate(payload, order_schema).valid

    def test_rejects_unlisted_option(self, order_schema):
        payload = {"orderNumber": "A-1", "items": [], "status": "shipped"}

        result = validate(payload, order_schema)

        assert result.errors == ["Status must be one of: pending, completed"]

    def test_without_options_accepts_anything(self):
        schema = single_field({"type": "select"})

        assert validate({"field": "whatever"}, schema).valid
        assert validate({"field": 3}, schema).valid

    @pytest.mark.parametrize("value", [True, False, "1", [1]])
    def test_options_compare_by_type(self, value):
        schema = single_field({"type": "select", "options": [0, 1, 2]})

        result = validate({"field": value}, schema)

        assert result.errors == ["field must be one of: 0, 1, 2"]

    @pytest.mark.parametrize("value", [1, 1.0, 2])
    def test_numeric_options_match_numbers(self, value):
        schema = single_field({"type": "select", "options": [0, 1, 2]})

        assert validate({"field": value}, schema).valid


# =============================================================================
# Error Collection and Purity
# =============================================================================


class TestValidateBehaviour:
    """Tests for properties that hold across all field types."""

    def test_reports_every_violation(self, order_schema):
        result = validate({"items": "nope", "status": "shipped"}, order_schema)

        assert result.valid is False
        assert result.errors == [
            "Order Number is required",
            "Items must be an array",
            "Status must be one of: pending, completed",
        ]

    def test_extra_keys_pass_through(self, product_schema):
        payload = {"name": "Widget", "price": 1, "colour": "red", "tags": [1, 2]}

        assert validate(payload, product_schema).valid

    def test_key_order_is_irrelevant(self, product_schema):
        first = validate({"name": "Widget", "price": "x"}, product_schema)
        second = validate({"price": "x", "name": "Widget"}, product_schema)

        assert first == second

    def test_is_idempotent(self, product_schema):
        payload = {"price": "abc"}

        assert validate(payload, product_schema) == validate(payload, product_schema)

    def test_defaults_are_not_applied(self, product_schema):
        payload = {"name": "Widget", "price": "9.99"}
        snapshot = copy.deepcopy(payload)

        result = validate(payload, product_schema)

        assert result.valid is True
        assert payload == snapshot
        assert "inStock" not in payload

    def test_empty_schema_accepts_any_payload(self):
        assert validate({"anything": object()}, {}).valid
