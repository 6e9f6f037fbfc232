"""
Persistence adapters.

Services depend on these repositories instead of opening SQLAlchemy sessions
themselves.
"""
