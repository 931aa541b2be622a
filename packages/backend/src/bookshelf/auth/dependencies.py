"""FastAPI auth dependencies.

Learn: used as Depends() by the GraphQL context getter. The TokenService
is built once from settings and shared by every request; tests swap it
via ``app.dependency_overrides[get_token_service]``.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from bookshelf.auth.context import RequestContext, resolve_context
from bookshelf.auth.tokens import TokenService
from bookshelf.config import settings


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """App-wide TokenService, configured once from settings."""
    return TokenService.from_settings(settings)


def get_request_context(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> RequestContext:
    """Resolve the caller's context from the Authorization header."""
    return resolve_context(authorization, tokens)
