"""
Box model: one physical moving box and what is inside it.

`hidden` marks a box as unpacked; it is shown in its own tab.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Integer, String, Text

from boxtracker.db import Base
from boxtracker.models.mixins import CreatedAtMixin


class Box(Base, CreatedAtMixin):
    __tablename__ = "boxes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(Integer, nullable=False)
    room = Column(String(100), nullable=False)
    contents = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    hidden = Column(Boolean, nullable=True, default=False, server_default="0")

    def __repr__(self) -> str:
        return f"<Box id={self.id} number={self.number} room={self.room!r}>"
