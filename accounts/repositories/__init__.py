"""
Persistence adapters.

Services depend on SQLRepository instead of opening SQLAlchemy sessions
themselves. Uniqueness is left to the database: writes surface
IntegrityError and callers decide what the collision means.
"""
