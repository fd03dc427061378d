"""Category CRUD use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from accounts.core.errors import DuplicateKeyError, NotFoundError, StoreError, ValidationError
from accounts.db.models import Category
from accounts.db.session import is_unique_violation
from accounts.domain import categories as category_schema
from accounts.repositories.sql_repository import SQLRepository

CATEGORY_NOT_FOUND = "Category not found"


@dataclass
class CategoryService:
    repository: SQLRepository

    def _write_error(self, exc: IntegrityError, fallback: str) -> Exception:
        if is_unique_violation(exc):
            return DuplicateKeyError(category_schema.DUPLICATE_NAME_MESSAGE, field="name")
        logger.opt(exception=exc).error("Category write failed: {}", fallback)
        return StoreError(fallback)

    def create(self, payload: Mapping[str, Any]) -> Category:
        values, errors = category_schema.validate_category(payload)
        if errors:
            raise ValidationError("Validation error", data=errors)
        try:
            return self.repository.create_category(values["name"], values.get("description"))
        except IntegrityError as exc:
            raise self._write_error(exc, "There is a problem with saving the data") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to save category")
            raise StoreError("There is a problem with saving the data") from exc

    def list_categories(self) -> list[Category]:
        try:
            return list(self.repository.list_categories())
        except SQLAlchemyError as exc:
            logger.exception("Failed to list categories")
            raise StoreError("There was a problem getting the categories data") from exc

    def get_by_id(self, category_id: str) -> Category:
        try:
            category = self.repository.get_category(category_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load category {}", category_id)
            raise StoreError("There was a problem getting the category data") from exc
        if not category:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        return category

    def get_by_name(self, name: str) -> Category:
        try:
            category = self.repository.get_category_by_name((name or "").strip())
        except SQLAlchemyError as exc:
            logger.exception("Failed to load category {}", name)
            raise StoreError("There was a problem getting the category data") from exc
        if not category:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        return category

    def update(self, name: str, payload: Mapping[str, Any]) -> Category:
        values, errors = category_schema.validate_category_changes(payload)
        if errors:
            raise ValidationError("Validation error", data=errors)
        if not values:
            raise ValidationError("No fields to update", data={})
        try:
            category = self.repository.update_category((name or "").strip(), values)
        except IntegrityError as exc:
            raise self._write_error(exc, "There was a problem updating the data") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to update category {}", name)
            raise StoreError("There was a problem updating the data") from exc
        if not category:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        return category

    def delete(self, name: str) -> None:
        try:
            deleted = self.repository.delete_category((name or "").strip())
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete category {}", name)
            raise StoreError("There was a problem deleting this category") from exc
        if not deleted:
            raise NotFoundError(CATEGORY_NOT_FOUND)
