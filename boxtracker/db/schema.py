"""
Startup schema management for the boxes table.

Steps run in order. Each one checks the live schema before acting, so running
the list again against an up-to-date database does nothing. A step that fails
is logged and the remaining steps still run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Engine
from sqlalchemy.engine.reflection import Inspector
from sqlalchemy.exc import SQLAlchemyError

from boxtracker.infra.logging_config import get_logger

logger = get_logger("schema")

BOXES_TABLE = "boxes"


@dataclass(frozen=True)
class MigrationStep:
    name: str
    is_applied: Callable[[Inspector], bool]
    apply: Callable[[Operations], None]


def _has_table(inspector: Inspector) -> bool:
    return inspector.has_table(BOXES_TABLE)


def _column_names(inspector: Inspector) -> set[str]:
    if not _has_table(inspector):
        return set()
    return {column["name"] for column in inspector.get_columns(BOXES_TABLE)}


def _create_boxes_table(op: Operations) -> None:
    op.create_table(
        BOXES_TABLE,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("room", sa.String(length=100), nullable=False),
        sa.Column("contents", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def _drop_priority_column(op: Operations) -> None:
    with op.batch_alter_table(BOXES_TABLE) as batch_op:
        batch_op.drop_column("priority")


def _add_image_url_column(op: Operations) -> None:
    op.add_column(BOXES_TABLE, sa.Column("image_url", sa.Text(), nullable=True))


def _add_hidden_column(op: Operations) -> None:
    op.add_column(
        BOXES_TABLE,
        sa.Column("hidden", sa.Boolean(), nullable=True, server_default="0"),
    )


MIGRATION_STEPS: List[MigrationStep] = [
    MigrationStep("create_boxes_table", _has_table, _create_boxes_table),
    MigrationStep(
        "drop_priority_column",
        lambda inspector: "priority" not in _column_names(inspector),
        _drop_priority_column,
    ),
    MigrationStep(
        "add_image_url_column",
        lambda inspector: "image_url" in _column_names(inspector),
        _add_image_url_column,
    ),
    MigrationStep(
        "add_hidden_column",
        lambda inspector: "hidden" in _column_names(inspector),
        _add_hidden_column,
    ),
]


def run_migrations(
    engine: Engine, steps: List[MigrationStep] | None = None
) -> List[str]:
    """Apply every pending step. Returns the names of the steps applied."""
    applied: List[str] = []
    for step in steps if steps is not None else MIGRATION_STEPS:
        try:
            with engine.begin() as conn:
                if step.is_applied(sa.inspect(conn)):
                    logger.debug("Schema step %s already applied", step.name)
                    continue
                step.apply(Operations(MigrationContext.configure(conn)))
        except SQLAlchemyError:
            logger.exception("Schema step %s failed; continuing", step.name)
            continue
        logger.info("Applied schema step %s", step.name)
        applied.append(step.name)
    return applied
