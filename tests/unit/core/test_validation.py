"""Tests for user field validation rules."""

import pytest

from src.user_api.core.services.user.validation import (
    humanize,
    resolve_integer,
    validate_user_fields,
)

VALID = {"name": "Ada", "email": "ada@example.com", "password": "12345678"}


class TestCreateRules:
    """Full payloads, as sent on create."""

    def test_valid_payload_passes(self):
        result = validate_user_fields(VALID)

        assert result.passed
        assert result.data == VALID

    def test_missing_required_fields_are_all_reported(self):
        """Every failing field is collected, not just the first."""
        result = validate_user_fields({})

        assert set(result.errors) == {"name", "email", "password"}
        assert result.errors["name"] == ["The name field is required."]
        assert result.errors["email"] == ["The email field is required."]
        assert result.errors["password"] == ["The password field is required."]

    def test_blank_strings_count_as_missing(self):
        result = validate_user_fields({**VALID, "name": "   "})

        assert result.errors == {"name": ["The name field is required."]}

    def test_optional_fields_accept_null(self):
        result = validate_user_fields({**VALID, "age": None, "membership_status": None})

        assert result.passed
        assert result.data["age"] is None
        assert result.data["membership_status"] is None

    def test_optional_fields_absent_are_not_in_data(self):
        result = validate_user_fields(VALID)

        assert "age" not in result.data
        assert "membership_status" not in result.data

    def test_unknown_keys_are_dropped(self):
        result = validate_user_fields({**VALID, "id": "forged", "is_admin": True})

        assert result.passed
        assert "id" not in result.data
        assert "is_admin" not in result.data

    def test_name_and_email_are_trimmed_and_email_lowercased(self):
        result = validate_user_fields(
            {**VALID, "name": "  Ada  ", "email": "  Ada@Example.COM "}
        )

        assert result.data["name"] == "Ada"
        assert result.data["email"] == "ada@example.com"

    def test_password_is_not_trimmed(self):
        result = validate_user_fields({**VALID, "password": " 1234567 "})

        assert result.passed
        assert result.data["password"] == " 1234567 "


class TestFieldConstraints:
    """Individual predicate checks."""

    def test_name_must_be_string(self):
        result = validate_user_fields({**VALID, "name": 42})

        assert result.errors == {"name": ["The name must be a string."]}

    def test_name_max_length(self):
        assert validate_user_fields({**VALID, "name": "x" * 255}).passed

        result = validate_user_fields({**VALID, "name": "x" * 256})
        assert result.errors == {
            "name": ["The name must not be greater than 255 characters."]
        }

    @pytest.mark.parametrize("email", ["not-an-email", "a@", "@x.com", "a b@x.com"])
    def test_email_format(self, email):
        result = validate_user_fields({**VALID, "email": email})

        assert result.errors["email"] == ["The email must be a valid email address."]

    def test_email_max_length(self):
        email = "a" * 64 + "@" + ".".join(["b" * 60] * 4) + ".com"
        assert len(email) > 255

        result = validate_user_fields({**VALID, "email": email})

        assert result.errors["email"][0] == (
            "The email must not be greater than 255 characters."
        )

    def test_password_min_length(self):
        result = validate_user_fields({**VALID, "password": "1234567"})

        assert result.errors == {
            "password": ["The password must be at least 8 characters."]
        }

    def test_password_of_spaces_is_accepted(self):
        result = validate_user_fields({**VALID, "password": " " * 8})

        assert result.passed
        assert result.data["password"] == " " * 8

    def test_empty_password_is_missing(self):
        result = validate_user_fields({**VALID, "password": ""})

        assert result.errors == {"password": ["The password field is required."]}

    def test_password_byte_limit(self):
        result = validate_user_fields({**VALID, "password": "é" * 40})

        assert result.errors == {
            "password": ["The password must not be greater than 72 bytes."]
        }

    @pytest.mark.parametrize("age, expected", [(0, 0), (30, 30), ("42", 42), (7.0, 7)])
    def test_age_accepts_integers(self, age, expected):
        result = validate_user_fields({**VALID, "age": age})

        assert result.passed
        assert result.data["age"] == expected

    @pytest.mark.parametrize("age", ["abc", 1.5, True, [], {}])
    def test_age_must_be_integer(self, age):
        result = validate_user_fields({**VALID, "age": age})

        assert result.errors == {"age": ["The age must be an integer."]}

    @pytest.mark.parametrize("age", [2**63, 10**20, str(10**20)])
    def test_age_must_fit_an_integer_column(self, age):
        result = validate_user_fields({**VALID, "age": age})

        assert result.errors == {
            "age": ["The age must not be greater than 9223372036854775807."]
        }

    def test_age_upper_bound_is_inclusive(self):
        assert validate_user_fields({**VALID, "age": 2**63 - 1}).passed

    def test_age_must_not_be_negative(self):
        result = validate_user_fields({**VALID, "age": -1})

        assert result.errors == {"age": ["The age must be at least 0."]}

    @pytest.mark.parametrize("status", ["free", "premium", "vip"])
    def test_membership_status_choices(self, status):
        result = validate_user_fields({**VALID, "membership_status": status})

        assert result.passed
        assert result.data["membership_status"] == status

    @pytest.mark.parametrize("status", ["gold", "FREE", 1])
    def test_membership_status_rejects_other_values(self, status):
        result = validate_user_fields({**VALID, "membership_status": status})

        assert result.errors == {
            "membership_status": ["The selected membership status is invalid."]
        }


class TestPartialRules:
    """Partial payloads, as sent on update."""

    def test_empty_payload_passes(self):
        result = validate_user_fields({}, partial=True)

        assert result.passed
        assert result.data == {}

    def test_only_present_fields_are_checked(self):
        result = validate_user_fields({"age": 5}, partial=True)

        assert result.passed
        assert result.data == {"age": 5}

    def test_present_fields_still_follow_create_constraints(self):
        result = validate_user_fields(
            {"age": -1, "email": "nope", "membership_status": "gold"}, partial=True
        )

        assert set(result.errors) == {"age", "email", "membership_status"}

    @pytest.mark.parametrize("field_name", ["name", "email", "password", "age", "membership_status"])
    def test_present_field_cannot_be_null(self, field_name):
        result = validate_user_fields({field_name: None}, partial=True)

        assert result.errors == {
            field_name: [f"The {humanize(field_name)} field is required."]
        }


class TestValidationResult:
    def test_add_error_removes_clean_value(self):
        result = validate_user_fields(VALID)

        result.add_error("email", "The {attribute} has already been taken.")

        assert "email" not in result.data
        assert result.errors == {"email": ["The email has already been taken."]}
        assert not result.passed


class TestResolveInteger:
    def test_rejects_booleans(self):
        with pytest.raises(ValueError):
            resolve_integer(False)

    def test_parses_signed_strings(self):
        assert resolve_integer(" -3 ") == -3
