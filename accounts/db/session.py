"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

import re
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


@lru_cache
def get_engine(url: str):
    url = (url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


@lru_cache
def _get_sessionmaker(url: str):
    return sessionmaker(bind=get_engine(url), autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session(url: str) -> Iterator[Session]:
    session: Session = _get_sessionmaker(url)()
    try:
        yield session
    finally:
        session.close()


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a unique/duplicate-key constraint failure."""
    message = str(getattr(exc, "orig", None) or exc).lower()
    return "unique" in message or "duplicate" in message


def violated_column(exc: IntegrityError, table: str, columns: Iterable[str]) -> Optional[str]:
    """
    Name the column behind a unique violation, or None when it cannot be told.

    Recognizes the SQLite form (``users.email``), named constraints
    (``uq_users_email``) and the PostgreSQL detail line (``Key (email)=``).
    """
    message = str(getattr(exc, "orig", None) or exc)
    names = "|".join(re.escape(c) for c in columns)
    table_name = re.escape(table)
    match = re.search(rf"(?:\b{table_name}\.|uq_{table_name}_|\()({names})\b", message)
    return match.group(1) if match else None
