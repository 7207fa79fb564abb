"""
Shared SQLAlchemy base, timestamp/soft-delete mixins and the soft-delete query filter.
"""
from sqlalchemy import Column, DateTime, event
from sqlalchemy.orm import declarative_base, with_loader_criteria

from infradb.db.util import now_utc

Base = declarative_base()


class TimestampMixin:
    created = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)


class SoftDeleteMixin:
    """Rows with ``deleted`` set are hidden from ORM selects."""

    deleted = Column(DateTime(timezone=True), nullable=True)


def _exclude_soft_deleted(execute_state):
    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.is_relationship_load
        and not execute_state.execution_options.get("include_deleted", False)
    ):
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                SoftDeleteMixin,
                lambda cls: cls.deleted.is_(None),
                include_aliases=True,
            )
        )


def install_soft_delete_filter(session_factory) -> None:
    """Register the soft-delete criteria on a sessionmaker (idempotent)."""
    if not event.contains(session_factory, "do_orm_execute", _exclude_soft_deleted):
        event.listen(session_factory, "do_orm_execute", _exclude_soft_deleted)


__all__ = ["Base", "TimestampMixin", "SoftDeleteMixin", "install_soft_delete_filter", "now_utc"]
