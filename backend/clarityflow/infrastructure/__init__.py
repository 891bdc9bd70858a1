"""Infrastructure Layer — database session management, repositories, logging.

Invariants:
    - Infrastructure depends on core/ types and errors, never on services/ or api/
    - All SQLAlchemy failures mapped to DatabaseError
"""
