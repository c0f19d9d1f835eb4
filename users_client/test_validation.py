"""
Unit tests for the client-side form rules.
"""
import pytest

from users_client.validation import validate_field, validate_form


class TestValidateField:

    @pytest.mark.parametrize("email", ["plain", "a@b", "@b.com", "a@.com x", "a b@c.com", "a@b@c", "a@b.com\n", "\na@b.com"])
    def test_bad_email_shape(self, email):
        assert validate_field("email", email) == "Invalid email format"

    @pytest.mark.parametrize("email", ["a@b.com", "first.last@sub.example.org"])
    def test_good_email_shape(self, email):
        assert validate_field("email", email) is None

    def test_short_password(self):
        assert validate_field("password", "1234567") == "Password must be at least 8 characters"

    def test_password_of_eight_characters(self):
        assert validate_field("password", "12345678") is None

    def test_unknown_field_not_checked(self):
        assert validate_field("nickname", "") is None


class TestValidateForm:

    def test_both_required(self):
        assert validate_form({"email": "", "password": ""}) == {
            "email": "Email is required",
            "password": "Password is required",
        }

    def test_missing_keys_count_as_empty(self):
        assert validate_form({}) == {
            "email": "Email is required",
            "password": "Password is required",
        }

    def test_rules_apply_to_filled_fields(self):
        assert validate_form({"email": "nope", "password": "short"}) == {
            "email": "Invalid email format",
            "password": "Password must be at least 8 characters",
        }

    def test_valid_form(self):
        assert validate_form({"email": "a@b.com", "password": "longenough1"}) == {}

    def test_trailing_newline_blocks_form(self):
        assert validate_form({"email": "a@b.com\n", "password": "longenough1"}) == {
            "email": "Invalid email format",
        }
