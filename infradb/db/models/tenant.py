import uuid
from sqlalchemy import Column, String, Index
from sqlalchemy.dialects.postgresql import UUID

from .base import Base, TimestampMixin, SoftDeleteMixin
from ..types import JSONDocument

TENANT_RELATION_NAME = "Tenant"


class Tenant(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'tenant'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    org = Column(String(255), nullable=False)
    org_display_name = Column(String(255), nullable=True)
    # {"enable_ssh_access": bool, "targeted_instance_creation": bool}
    config = Column(JSONDocument, nullable=False, default=lambda: {})
    created_by = Column(UUID(as_uuid=True), nullable=False)

    __table_args__ = (
        Index('idx_tenant_org', 'org'),
        Index('idx_tenant_created', 'created'),
    )
