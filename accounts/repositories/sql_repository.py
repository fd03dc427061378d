"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, delete

from accounts.db.models import Category, User
from accounts.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    def _session(self):
        return get_session(self.database_url)

    # -------------------------- users --------------------------
    def create_user(
        self,
        *,
        first_name: str,
        last_name: str,
        user_name: str,
        email: str,
        phone: str,
        password_hash: str,
    ) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            first_name=first_name,
            last_name=last_name,
            user_name=user_name,
            email=email,
            phone=phone,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        with self._session() as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalars().first()

    def list_users(self) -> list[User]:
        with self._session() as session:
            return session.execute(select(User).order_by(User.created_at)).scalars().all()

    def update_user(self, user_id: str, values: dict) -> Optional[User]:
        with self._session() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            for column, value in values.items():
                setattr(user, column, value)
            user.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(user)
            return user

    def delete_user(self, user_id: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(User).where(User.id == user_id))
            session.commit()
            return result.rowcount > 0

    # -------------------------- categories --------------------------
    def create_category(self, name: str, description: Optional[str] = None) -> Category:
        now = datetime.now(timezone.utc)
        category = Category(name=name, description=description, created_at=now, updated_at=now)
        with self._session() as session:
            session.add(category)
            session.commit()
            session.refresh(category)
            return category

    def get_category(self, category_id: str) -> Optional[Category]:
        with self._session() as session:
            return session.get(Category, category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        with self._session() as session:
            stmt = select(Category).where(Category.name == name)
            return session.execute(stmt).scalar_one_or_none()

    def list_categories(self) -> list[Category]:
        with self._session() as session:
            return session.execute(select(Category).order_by(Category.name)).scalars().all()

    def update_category(self, name: str, values: dict) -> Optional[Category]:
        with self._session() as session:
            stmt = select(Category).where(Category.name == name)
            category = session.execute(stmt).scalar_one_or_none()
            if not category:
                return None
            for column, value in values.items():
                setattr(category, column, value)
            category.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(category)
            return category

    def delete_category(self, name: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(Category).where(Category.name == name))
            session.commit()
            return result.rowcount > 0
