"""
User registration, authentication and record management use cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from accounts.core.errors import (
    DuplicateKeyError,
    InvalidCredentialsError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from accounts.core.security import PasswordHasher
from accounts.core.tokens import TokenIssuer
from accounts.db.models import User
from accounts.db.session import is_unique_violation, violated_column
from accounts.domain import users as user_schema
from accounts.repositories.sql_repository import SQLRepository

USER_NOT_FOUND = "User not found"


@dataclass
class AuthResult:
    user: User
    token: str


@dataclass
class UserService:
    """Handles registration, login and CRUD over user records."""

    repository: SQLRepository
    hasher: PasswordHasher
    tokens: TokenIssuer

    # -------------------------------------- helpers --------------------------------------
    def _issue_token(self, user: User) -> str:
        return self.tokens.sign({"_id": user.id})

    def _write_error(self, exc: IntegrityError, fallback: str) -> Exception:
        if not is_unique_violation(exc):
            logger.opt(exception=exc).error("User write failed: {}", fallback)
            return StoreError(fallback)
        column = violated_column(exc, "users", user_schema.DUPLICATE_MESSAGES)
        logger.info("Duplicate key on users.{}", column or "?")
        return DuplicateKeyError(user_schema.duplicate_message(column), field=column)

    # -------------------------------------- registration --------------------------------------
    def register(self, payload: Mapping[str, Any]) -> AuthResult:
        values, errors = user_schema.validate_registration(payload)
        if errors:
            raise ValidationError("Validation error", data=errors)
        columns = user_schema.to_columns(values)
        try:
            user = self.repository.create_user(password_hash=self.hasher.hash(values["password"]), **columns)
        except IntegrityError as exc:
            raise self._write_error(exc, "There is a problem with saving the data") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to save new user")
            raise StoreError("There is a problem with saving the data") from exc
        logger.info("Registered user {}", user.id)
        return AuthResult(user=user, token=self._issue_token(user))

    # -------------------------------------- login --------------------------------------
    def login(self, payload: Mapping[str, Any]) -> AuthResult:
        values, errors = user_schema.validate_login(payload)
        if errors:
            raise ValidationError("Validation error", data=errors)
        try:
            user = self.repository.get_user_by_email(values["email"])
        except SQLAlchemyError as exc:
            logger.exception("Login lookup failed")
            raise StoreError("Login failed") from exc
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        if not self.hasher.verify(values["password"], user.password_hash):
            logger.info("Rejected password for user {}", user.id)
            raise InvalidCredentialsError("Invalid password")
        return AuthResult(user=user, token=self._issue_token(user))

    # -------------------------------------- records --------------------------------------
    def update(self, user_id: str, payload: Mapping[str, Any]) -> User:
        values, errors = user_schema.validate_changes(payload)
        if errors:
            raise ValidationError("Validation error", data=errors)
        if not values:
            raise ValidationError("No fields to update", data={})
        try:
            user = self.repository.update_user(user_id, user_schema.to_columns(values))
        except IntegrityError as exc:
            raise self._write_error(exc, "There was a problem updating the data") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to update user {}", user_id)
            raise StoreError("There was a problem updating the data") from exc
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    def delete(self, user_id: str) -> None:
        try:
            deleted = self.repository.delete_user(user_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete user {}", user_id)
            raise StoreError("There was a problem deleting this user") from exc
        if not deleted:
            raise NotFoundError(USER_NOT_FOUND)
        logger.info("Deleted user {}", user_id)

    def list_users(self) -> list[User]:
        try:
            return list(self.repository.list_users())
        except SQLAlchemyError as exc:
            logger.exception("Failed to list users")
            raise StoreError("There was a problem getting the users data") from exc

    def get_user(self, user_id: str) -> User:
        try:
            user = self.repository.get_user(user_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load user {}", user_id)
            raise StoreError("There was a problem getting the user data") from exc
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        return user
