import uuid
from sqlalchemy import Column, String, Text, Integer, Index
from sqlalchemy.dialects.postgresql import UUID

from .base import Base, TimestampMixin


class StatusDetail(TimestampMixin, Base):
    """Status history entry for any entity; not soft-deleted."""

    __tablename__ = 'status_detail'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    entity_id = Column(String(64), nullable=False)
    status = Column(String(32), nullable=False)
    message = Column(Text, nullable=True)
    count = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index('idx_status_detail_entity_id', 'entity_id'),
    )
