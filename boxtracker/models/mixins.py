from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class CreatedAtMixin:
    """Insert timestamp set by the database; never updated afterwards."""

    created_at = Column(DateTime, nullable=False, server_default=func.now())
