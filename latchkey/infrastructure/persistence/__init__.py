"""Persistence layer: SQLAlchemy models, database wrapper, repositories."""

from latchkey.infrastructure.persistence.base import BaseModel
from latchkey.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "Database"]
