"""Database Declarations — SQLAlchemy Base shared by every ORM model.

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
