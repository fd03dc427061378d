"""
High-level use cases for the accounts API.

Each service orchestrates the repository and the injected capabilities
(password hasher, token issuer) to implement business rules. Routers call
these services instead of touching the database directly.
"""
