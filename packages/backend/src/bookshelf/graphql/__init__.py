"""GraphQL surface — schema, resolvers and per-request context.

Learn: Strawberry builds the schema from type-annotated classes and mounts
it on FastAPI as a plain APIRouter (see api/__init__.py). snake_case
Python fields become camelCase on the wire (book_id → bookId).
"""
