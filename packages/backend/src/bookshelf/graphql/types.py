"""GraphQL object and input types.

Learn: separate output types (Book, User, Auth) from the input type
(BookInput), the same split as Create/Read pydantic schemas. Output types
are built from ORM rows with ``from_model`` so resolvers never leak ORM
objects (or the password hash) into the schema.
"""

from typing import Optional

import strawberry

from bookshelf.db.models import SavedBook, User as UserModel


@strawberry.type
class Book:
    book_id: str
    authors: list[str]
    description: Optional[str]
    title: str
    image: Optional[str]
    link: Optional[str]

    @classmethod
    def from_model(cls, book: SavedBook) -> "Book":
        return cls(
            book_id=book.book_id,
            authors=list(book.authors or []),
            description=book.description,
            title=book.title,
            image=book.image,
            link=book.link,
        )


@strawberry.type
class User:
    id: strawberry.ID
    username: str
    email: str
    book_count: int
    saved_books: list[Book]

    @classmethod
    def from_model(cls, user: UserModel) -> "User":
        return cls(
            id=strawberry.ID(str(user.id)),
            username=user.username,
            email=user.email,
            book_count=user.book_count,
            saved_books=[Book.from_model(b) for b in user.saved_books],
        )


@strawberry.type
class Auth:
    token: str
    user: User


@strawberry.input
class BookInput:
    book_id: str
    title: str
    authors: Optional[list[str]] = strawberry.field(default_factory=list)
    description: Optional[str] = None
    image: Optional[str] = None
    link: Optional[str] = None
