"""SQL persistence: declarative base, cached engine, per-call sessions and schema bootstrap."""

from .session import Base, create_all, get_engine, get_session

__all__ = ["Base", "create_all", "get_engine", "get_session"]
