"""Per-request GraphQL context.

Learn: Strawberry runs ``get_context`` as a FastAPI dependency, so it can
itself depend on get_db and the auth dependencies. Whatever it returns is
``info.context`` in every resolver. The auth state is resolved exactly
once here and never changes for the rest of the request.
"""

from functools import cached_property

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext

from bookshelf.auth.context import RequestContext
from bookshelf.auth.dependencies import get_request_context, get_token_service
from bookshelf.auth.tokens import TokenService
from bookshelf.db.engine import get_db
from bookshelf.services.user_service import UserService


class BookshelfContext(BaseContext):
    """What every resolver sees as ``info.context``."""

    def __init__(self, auth: RequestContext, db: AsyncSession, tokens: TokenService):
        super().__init__()
        self.auth = auth
        self.db = db
        self.tokens = tokens

    @cached_property
    def users(self) -> UserService:
        return UserService(self.db)


async def get_context(
    auth: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> BookshelfContext:
    return BookshelfContext(auth=auth, db=db, tokens=tokens)
