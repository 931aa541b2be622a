"""User service — accounts, credentials and saved-book lists.

Learn: service layer between the GraphQL resolvers and the database.
Resolvers never touch the session directly, and never pass a user id that
didn't come from a verified token (see auth/context.py).

Saved-book add/remove are each ONE statement against the unique
(user_id, book_id) key — INSERT ... ON CONFLICT DO NOTHING and DELETE —
so concurrent saves/removes on the same user can't lose updates.
"""

import re
import uuid
from typing import Optional, Union

import structlog
from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookshelf.auth.password import DUMMY_HASH, hash_password, verify_password
from bookshelf.db.models import SavedBook, User
from bookshelf.errors import AuthenticationError, ValidationError

logger = structlog.get_logger()

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _as_uuid(value: Union[str, uuid.UUID]) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Business logic for accounts and their saved books."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Lookup ─────────────────────────────────────────

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User)
            .where(User.email == normalize_email(email))
            .options(selectinload(User.saved_books))
        )
        return result.scalars().first()

    async def find_by_id(self, user_id: Union[str, uuid.UUID]) -> Optional[User]:
        uid = _as_uuid(user_id)
        if uid is None:
            return None
        result = await self.db.execute(
            select(User)
            .where(User.id == uid)
            .options(selectinload(User.saved_books))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    # ─── Credentials ────────────────────────────────────

    async def create(self, username: str, email: str, password: str) -> User:
        """Create an account. The password is hashed here and only here."""
        username = (username or "").strip()
        email = normalize_email(email or "")

        if not username:
            raise ValidationError("Username is required", field="username")
        if not email:
            raise ValidationError("Email is required", field="email")
        if not EMAIL_RE.match(email):
            raise ValidationError("Must use a valid email address", field="email")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        if await self.find_by_email(email):
            raise ValidationError("Email already registered", field="email")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            saved_books=[],
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            await self.db.rollback()
            raise ValidationError("Email already registered", field="email")

        logger.info("bookshelf.user_created", user_id=str(user.id))
        return user

    @staticmethod
    def verify_password(user: User, candidate: str) -> bool:
        return verify_password(candidate, user.password_hash)

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown email and wrong password raise the SAME error, and both
        cost one bcrypt check, so neither message nor timing says which
        part was wrong.
        """
        user = await self.find_by_email(email)
        if user is None:
            verify_password(password, DUMMY_HASH)
            logger.info("bookshelf.login_failed")
            raise AuthenticationError("Invalid credentials")

        if not self.verify_password(user, password):
            logger.info("bookshelf.login_failed", user_id=str(user.id))
            raise AuthenticationError("Invalid credentials")

        return user

    # ─── Saved books ────────────────────────────────────

    async def add_saved_book(self, user_id: Union[str, uuid.UUID], book: dict) -> User:
        """Add a book to the user's list; a repeated book_id is a no-op."""
        if not book.get("book_id"):
            raise ValidationError("Book id is required", field="bookId")
        if not book.get("title"):
            raise ValidationError("Book title is required", field="title")

        user = await self._require_user(user_id)

        insert = _DIALECT_INSERTS[self.db.get_bind().dialect.name]
        stmt = (
            insert(SavedBook)
            .values(
                user_id=user.id,
                book_id=book["book_id"],
                title=book["title"],
                authors=list(book.get("authors") or []),
                description=book.get("description"),
                image=book.get("image"),
                link=book.get("link"),
            )
            .on_conflict_do_nothing(index_elements=["user_id", "book_id"])
        )
        await self.db.execute(stmt)
        await self.db.commit()

        logger.info(
            "bookshelf.book_saved", user_id=str(user.id), book_id=book["book_id"]
        )
        return await self._require_user(user.id)

    async def remove_saved_book(self, user_id: Union[str, uuid.UUID], book_id: str) -> User:
        """Drop a book from the user's list; an absent book_id is a no-op."""
        user = await self._require_user(user_id)

        await self.db.execute(
            delete(SavedBook).where(
                SavedBook.user_id == user.id,
                SavedBook.book_id == book_id,
            )
        )
        await self.db.commit()

        logger.info("bookshelf.book_removed", user_id=str(user.id), book_id=book_id)
        return await self._require_user(user.id)

    async def _require_user(self, user_id: Union[str, uuid.UUID]) -> User:
        # A verified token can outlive its account (e.g. a wiped database)
        user = await self.find_by_id(user_id)
        if user is None:
            raise AuthenticationError("Not logged in")
        return user
