"""
Boxes API: list, add, update, toggle and delete moving boxes.

Every handler makes one service call. Failures are rendered as {"error": ...}
by the handlers in boxtracker.routers.errors; storage details are only logged.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from fastapi import APIRouter, Body, Depends, Query
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from boxtracker.constants.rooms import ROOM_NAMES
from boxtracker.core.errors import (
    NotFoundError,
    StorageError,
    ValidationError,
)
from boxtracker.db import get_db
from boxtracker.infra.logging_config import get_logger
from boxtracker.routers.errors import describe_validation_errors
from boxtracker.schemas.box import (
    BoxCreate,
    BoxDelete,
    BoxRead,
    BoxToggleHidden,
    parse_update_payload,
)
from boxtracker.services.box_service import BoxService

logger = get_logger("boxes")

FETCH_FAILED = "Failed to fetch boxes"
ADD_FAILED = "Failed to add box"
UPDATE_FAILED = "Failed to update box"
DELETE_FAILED = "Failed to delete box"

router = APIRouter(
    prefix="",
    tags=["boxes"],
)


@contextmanager
def failure_message(message: str) -> Iterator[None]:
    """Collapse unexpected failures into a StorageError carrying `message`."""
    try:
        yield
    except (ValidationError, NotFoundError):
        raise
    except Exception as e:
        logger.exception("%s: %s", message, e)
        raise StorageError(message) from e


@router.get("/boxes", response_model=List[BoxRead])
def list_boxes(
    include_hidden: bool = Query(False, alias="includeHidden"),
    db: Session = Depends(get_db),
) -> List[BoxRead]:
    """List boxes ordered by number. Hidden boxes only with includeHidden=true."""
    with failure_message(FETCH_FAILED):
        return BoxService(db).list_boxes(include_hidden=include_hidden)


@router.post("/boxes", response_model=BoxRead)
def add_box(
    data: BoxCreate,
    db: Session = Depends(get_db),
) -> BoxRead:
    """Add a box."""
    with failure_message(ADD_FAILED):
        box = BoxService(db).create_box(data)
    logger.info("Added box %s (number %s, %s)", box.id, box.number, box.room)
    return box


@router.put("/boxes", response_model=BoxRead)
def update_box(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> BoxRead:
    """Overwrite a box, or flip its hidden flag when action=toggleHidden."""
    try:
        data = parse_update_payload(payload)
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_errors(e.errors())) from e

    svc = BoxService(db)
    with failure_message(UPDATE_FAILED):
        if isinstance(data, BoxToggleHidden):
            box = svc.toggle_hidden(data.id, data.hidden)
        else:
            box = svc.update_box(data.id, data)
    if box is None:
        raise NotFoundError("Box not found")
    return box


@router.delete("/boxes", response_model=Dict[str, bool])
def delete_box(
    data: BoxDelete,
    db: Session = Depends(get_db),
) -> Dict[str, bool]:
    """Delete a box. Unknown ids still report success."""
    with failure_message(DELETE_FAILED):
        deleted = BoxService(db).delete_box(data.id)
    if not deleted:
        logger.debug("Delete for unknown box %s ignored", data.id)
    return {"success": True}


@router.get("/rooms", response_model=List[str])
def list_rooms() -> List[str]:
    """Room names offered by the client."""
    return ROOM_NAMES
