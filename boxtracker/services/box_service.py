"""Service for box CRUD and the visibility toggle."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxtracker.core.errors import StorageError
from boxtracker.infra.logging_config import get_logger
from boxtracker.models.box import Box
from boxtracker.schemas.box import BoxCreate, BoxUpdate

logger = get_logger("box_service")


class BoxService:
    """Data access for the boxes table. Storage failures surface as StorageError."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _storage_failure(self, operation: str, exc: SQLAlchemyError) -> StorageError:
        self.db.rollback()
        logger.error("Box %s failed: %s", operation, exc)
        return StorageError(f"Could not {operation} box: {exc.__class__.__name__}")

    def list_boxes(self, include_hidden: bool = True) -> List[Box]:
        """All boxes ordered by number; hidden boxes only when asked for."""
        try:
            q = self.db.query(Box)
            if not include_hidden:
                q = q.filter(Box.hidden.is_not(True))
            return q.order_by(Box.number.asc(), Box.id.asc()).all()
        except SQLAlchemyError as e:
            raise self._storage_failure("list", e) from e

    def get_box(self, box_id: int) -> Optional[Box]:
        """Fetch a box by ID."""
        try:
            return self.db.query(Box).filter(Box.id == box_id).first()
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch", e) from e

    def create_box(self, data: BoxCreate) -> Box:
        """Insert a box; the database assigns id and created_at."""
        box = Box(
            number=data.number,
            room=data.room,
            contents=data.contents,
            image_url=data.image_url,
            hidden=False,
        )
        try:
            self.db.add(box)
            self.db.commit()
            self.db.refresh(box)
        except SQLAlchemyError as e:
            raise self._storage_failure("create", e) from e
        return box

    def update_box(self, box_id: int, data: BoxUpdate) -> Optional[Box]:
        """Overwrite room, contents and image_url. Returns None for an unknown id."""
        try:
            box = self.db.query(Box).filter(Box.id == box_id).first()
            if not box:
                return None
            box.room = data.room
            box.contents = data.contents
            box.image_url = data.image_url
            self.db.commit()
            self.db.refresh(box)
        except SQLAlchemyError as e:
            raise self._storage_failure("update", e) from e
        return box

    def toggle_hidden(self, box_id: int, hidden: bool) -> Optional[Box]:
        """Set the hidden flag. Returns None for an unknown id."""
        try:
            box = self.db.query(Box).filter(Box.id == box_id).first()
            if not box:
                return None
            box.hidden = hidden
            self.db.commit()
            self.db.refresh(box)
        except SQLAlchemyError as e:
            raise self._storage_failure("toggle", e) from e
        return box

    def delete_box(self, box_id: int) -> bool:
        """Delete a box. Missing ids are not an error; returns whether a row went away."""
        try:
            deleted = self.db.query(Box).filter(Box.id == box_id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure("delete", e) from e
        return deleted > 0
