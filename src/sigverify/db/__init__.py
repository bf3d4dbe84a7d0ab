# src/sigverify/db/__init__.py
"""Database configuration and utilities."""

from .session import SessionLocal, create_tables, drop_tables

__all__ = ["create_tables", "drop_tables", "SessionLocal"]
