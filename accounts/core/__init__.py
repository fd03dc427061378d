"""
Cross-cutting primitives shared across the accounts API.

This package hosts configuration, logging setup, the error taxonomy, the
credential codec and the token issuer. Services depend on these primitives
instead of importing FastAPI or reading the environment themselves.
"""
