"""Database engine and session management."""

from .database import create_tables, get_db, get_engine, get_session_local, session_scope

__all__ = ["create_tables", "get_db", "get_engine", "get_session_local", "session_scope"]
