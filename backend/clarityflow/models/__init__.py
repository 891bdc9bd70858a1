"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Card is the only entity

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from clarityflow.models.card import Card  # noqa: F401
