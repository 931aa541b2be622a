"""Query and Mutation resolvers.

Learn: resolvers are thin — check auth, call UserService, convert the
row into a GraphQL type. Every identity-scoped operation takes the user
id from ``info.context.auth`` (the verified token), never from arguments.

Only BookshelfError messages reach the caller. Any other exception
(database down, bugs) is replaced by a generic message via MaskErrors;
Strawberry still logs the original server-side.
"""

import dataclasses

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.types import Info

from bookshelf.auth.context import require_authenticated
from bookshelf.errors import AuthenticationError, BookshelfError
from bookshelf.graphql.types import Auth, BookInput, User

PLEASE_LOGIN = "Please login!"


@strawberry.type
class Query:
    @strawberry.field
    async def me(self, info: Info) -> User:
        ctx = info.context
        identity = require_authenticated(ctx.auth, "Not logged in")
        user = await ctx.users.find_by_id(identity.user_id)
        if user is None:
            raise AuthenticationError("Not logged in")
        return User.from_model(user)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def login(self, info: Info, email: str, password: str) -> Auth:
        ctx = info.context
        user = await ctx.users.authenticate(email, password)
        return Auth(token=ctx.tokens.issue(user), user=User.from_model(user))

    @strawberry.mutation
    async def add_user(self, info: Info, username: str, email: str, password: str) -> Auth:
        ctx = info.context
        user = await ctx.users.create(username=username, email=email, password=password)
        return Auth(token=ctx.tokens.issue(user), user=User.from_model(user))

    @strawberry.mutation
    async def save_book(self, info: Info, new_book: BookInput) -> User:
        ctx = info.context
        identity = require_authenticated(ctx.auth, PLEASE_LOGIN)
        user = await ctx.users.add_saved_book(
            identity.user_id, dataclasses.asdict(new_book)
        )
        return User.from_model(user)

    @strawberry.mutation
    async def remove_book(self, info: Info, book_id: str) -> User:
        ctx = info.context
        identity = require_authenticated(ctx.auth, PLEASE_LOGIN)
        user = await ctx.users.remove_saved_book(identity.user_id, book_id)
        return User.from_model(user)


def should_mask_error(error: GraphQLError) -> bool:
    """Mask everything except domain errors and query/validation errors."""
    original = error.original_error
    if original is None:
        return False
    return not isinstance(original, BookshelfError)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskErrors(should_mask_error=should_mask_error)],
)
