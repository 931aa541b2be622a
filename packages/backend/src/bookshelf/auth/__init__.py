"""Authentication and authorization boundary.

Learn: three small pieces, leaf first:
1. password.py → bcrypt hash/verify for stored credentials
2. tokens.py   → TokenService issues/verifies signed, expiring JWTs
3. context.py  → bearer header → RequestContext, plus the per-operation gate

Authentication is optional at the transport layer (a bad token just
means "anonymous"); authorization is enforced per GraphQL operation.
"""
