"""Bookshelf — book search account service.

Users sign up, log in with a bearer token, and keep a personal
list of saved books. Everything is served from one GraphQL endpoint.
"""

__version__ = "0.1.0"
