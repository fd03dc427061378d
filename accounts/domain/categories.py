"""Category schema rules and wire serialization."""
from __future__ import annotations

from typing import Any, Mapping

from accounts.db.models import Category
from accounts.domain.validation import FieldRule, check_fields

CATEGORY_RULES = {
    "name": FieldRule(
        required_message="Category name can't be empty",
        min_length=2,
        min_message="the category name is too short!",
        max_length=50,
        max_message="the category name is too long!",
    ),
    "description": FieldRule(max_length=255, max_message="the description is too long!"),
}

DUPLICATE_NAME_MESSAGE = "Category name already exists, please choose a different name."


def validate_category(payload: Mapping[str, Any]) -> tuple[dict, dict]:
    return check_fields(payload, CATEGORY_RULES)


def validate_category_changes(payload: Mapping[str, Any]) -> tuple[dict, dict]:
    return check_fields(payload, CATEGORY_RULES, partial=True)


def category_record(category: Category) -> dict:
    return {
        "_id": category.id,
        "name": category.name,
        "description": category.description,
        "createdAt": category.created_at.isoformat() if category.created_at else None,
        "updatedAt": category.updated_at.isoformat() if category.updated_at else None,
    }
