"""User schema rules, duplicate-key messages and wire serialization."""
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Mapping, Optional

from accounts.db.models import User
from accounts.domain.validation import FieldRule, check_fields

EMAIL_PATTERN = re.compile(r"\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+", re.ASCII)
PHONE_PATTERN = re.compile(r"[0-9\s+-]*", re.ASCII)

PROFILE_RULES = {
    "firstName": FieldRule(required_message="First name can't be empty"),
    "lastName": FieldRule(required_message="Last name can't be empty"),
    "userName": FieldRule(
        required_message="Username can't be empty",
        min_length=4,
        min_message="the Username is too short!",
        max_length=15,
        max_message="the Username is too long!",
    ),
    "email": FieldRule(
        required_message="Email can't be empty",
        pattern=EMAIL_PATTERN,
        pattern_message="Please fill a valid email address",
    ),
    "phone": FieldRule(
        required_message="please enter your phone number",
        pattern=PHONE_PATTERN,
        pattern_message="Please fill a valid phone number",
    ),
}

PASSWORD_RULE = FieldRule(
    required_message="Password can't be empty",
    trim=False,
    min_length=8,
    min_message="the password is too short!",
    max_length=80,
    max_message="the password is too long!",
)

REGISTRATION_RULES = {**PROFILE_RULES, "password": PASSWORD_RULE}

LOGIN_RULES = {
    "email": FieldRule(required_message="Email can't be empty"),
    "password": FieldRule(required_message="Password can't be empty", trim=False),
}

# wire field -> column
COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "userName": "user_name",
    "email": "email",
    "phone": "phone",
}

DUPLICATE_MESSAGES = {
    "user_name": "Username already taken, please choose a different username.",
    "email": "Email is already registered, please use a different email address.",
    "phone": "Phone number is already registered, please use a different phone number.",
}
GENERIC_DUPLICATE_MESSAGE = "Duplicate key error. Please check your input data."


def validate_registration(payload: Mapping[str, Any]) -> tuple[dict, dict]:
    return check_fields(payload, REGISTRATION_RULES)


def validate_changes(payload: Mapping[str, Any]) -> tuple[dict, dict]:
    """Only profile fields may change through an update; password and identifiers may not."""
    return check_fields(payload, PROFILE_RULES, partial=True)


def validate_login(payload: Mapping[str, Any]) -> tuple[dict, dict]:
    return check_fields(payload, LOGIN_RULES)


def to_columns(values: Mapping[str, Any]) -> dict:
    return {COLUMNS[k]: v for k, v in values.items() if k in COLUMNS}


def duplicate_message(column: Optional[str]) -> str:
    return DUPLICATE_MESSAGES.get(column or "", GENERIC_DUPLICATE_MESSAGE)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def public_user(user: User) -> dict:
    """Sanitized view: identifier and non-secret fields."""
    return {
        "_id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "userName": user.user_name,
    }


def user_record(user: User) -> dict:
    """Full stored record, password hash included."""
    return {
        "_id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "userName": user.user_name,
        "email": user.email,
        "phone": user.phone,
        "password": user.password_hash,
        "createdAt": _iso(user.created_at),
        "updatedAt": _iso(user.updated_at),
    }
