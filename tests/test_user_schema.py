from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from accounts.db.session import is_unique_violation, violated_column
from accounts.domain import users as user_schema
from tests.conftest import user_payload


def test_valid_registration_is_trimmed():
    values, errors = user_schema.validate_registration(user_payload(firstName="  Ada ", email=" ada@example.com "))
    assert errors == {}
    assert values["firstName"] == "Ada"
    assert values["email"] == "ada@example.com"


def test_short_username_reports_minlength_and_missing_fields():
    _, errors = user_schema.validate_registration({"userName": "abc"})
    assert errors["userName"] == {"message": "the Username is too short!", "kind": "minlength"}
    assert set(errors) == {"firstName", "lastName", "userName", "email", "phone", "password"}
    assert all(e["kind"] == "required" for f, e in errors.items() if f != "userName")


@pytest.mark.parametrize(
    "field, value, kind",
    [
        ("userName", "a" * 16, "maxlength"),
        ("password", "short", "minlength"),
        ("password", "x" * 81, "maxlength"),
        ("email", "not-an-email", "regexp"),
        ("email", "ada@example.comm", "regexp"),
        ("phone", "555-CALL-NOW", "regexp"),
        ("firstName", "   ", "required"),
        ("lastName", ["Byron"], "type"),
        ("phone", {"number": "555"}, "type"),
    ],
)
def test_field_violations(field, value, kind):
    _, errors = user_schema.validate_registration(user_payload(**{field: value}))
    assert list(errors) == [field]
    assert errors[field]["kind"] == kind


def test_password_is_not_trimmed():
    values, errors = user_schema.validate_registration(user_payload(password="  spaced pass  "))
    assert errors == {}
    assert values["password"] == "  spaced pass  "


def test_email_pattern_rejects_pathological_input_quickly():
    _, errors = user_schema.validate_registration(user_payload(email="a" * 5000 + "!"))
    assert errors["email"]["kind"] == "regexp"


def test_changes_reject_forbidden_keys():
    values, errors = user_schema.validate_changes({"lastName": "Byron", "password": "newpassword", "_id": "x"})
    assert values == {"lastName": "Byron"}
    assert errors["password"]["kind"] == "forbidden"
    assert errors["_id"]["kind"] == "forbidden"


def test_changes_only_check_supplied_fields():
    values, errors = user_schema.validate_changes({"phone": "+1 555 0100"})
    assert errors == {}
    assert user_schema.to_columns(values) == {"phone": "+1 555 0100"}


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, Exception(message))


@pytest.mark.parametrize(
    "message, column",
    [
        ("UNIQUE constraint failed: users.user_name", "user_name"),
        ('duplicate key value violates unique constraint "uq_users_email"', "email"),
        ("duplicate key value violates unique constraint\nDETAIL:  Key (phone)=(555) already exists.", "phone"),
        ("Duplicate entry 'x' for key 'users.uq_users_phone'", "phone"),
        ("UNIQUE constraint failed: users.nickname", None),
    ],
)
def test_violated_column(message, column):
    exc = _integrity(message)
    assert is_unique_violation(exc)
    assert violated_column(exc, "users", user_schema.DUPLICATE_MESSAGES) == column


def test_not_null_is_not_a_duplicate():
    assert not is_unique_violation(_integrity("NOT NULL constraint failed: users.email"))


def test_duplicate_messages():
    assert user_schema.duplicate_message("user_name").startswith("Username already taken")
    assert user_schema.duplicate_message(None) == user_schema.GENERIC_DUPLICATE_MESSAGE


def test_numbers_and_booleans_are_cast_to_strings():
    values, errors = user_schema.validate_registration(user_payload(phone=5550100, firstName=True))
    assert errors == {}
    assert values["phone"] == "5550100"
    assert values["firstName"] == "true"
