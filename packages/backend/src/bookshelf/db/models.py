"""SQLAlchemy ORM models — users and their saved books.

Learn: SQLAlchemy 2.0 declarative style (Mapped[] + mapped_column).
Column types are the portable ones (Uuid, JSON) so the same models run
on PostgreSQL in production and SQLite in tests.

A user's saved list lives in its own table keyed by (user_id, book_id).
That unique key is what makes "save" idempotent and atomic: the service
inserts with ON CONFLICT DO NOTHING instead of read-modify-write.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


class User(Base):
    """An account. Only the bcrypt hash of the password is stored."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=new_uuid
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    saved_books: Mapped[list["SavedBook"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="SavedBook.id",
    )

    @property
    def book_count(self) -> int:
        return len(self.saved_books)


class SavedBook(Base):
    """A book on one user's list, identified by its external catalog id."""

    __tablename__ = "saved_books"
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_saved_books_user_book"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    book_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    authors: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    link: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    user: Mapped["User"] = relationship(back_populates="saved_books")
