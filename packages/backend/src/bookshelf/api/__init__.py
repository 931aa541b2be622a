"""Route aggregation.

All routers registered here get mounted in main.py.

Learn: there is no router-level auth here. The GraphQL endpoint is open;
each operation that needs a logged-in user checks for itself
(auth/context.py: require_authenticated).
"""

from fastapi import APIRouter
from strawberry.fastapi import GraphQLRouter

from bookshelf.api.health import router as health_router
from bookshelf.config import settings
from bookshelf.graphql.context import get_context
from bookshelf.graphql.schema import schema

api_router = APIRouter(prefix="/api")
api_router.include_router(health_router, tags=["health"])

graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide=None if settings.is_production else "graphiql",
)
