from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, SoftDeleteMixin
from ..types import JSONDocument

NETWORK_SECURITY_GROUP_RELATION_NAME = "NetworkSecurityGroup"

NETWORK_SECURITY_GROUP_STATUS_PENDING = "Pending"
NETWORK_SECURITY_GROUP_STATUS_READY = "Ready"
NETWORK_SECURITY_GROUP_STATUS_ERROR = "Error"
NETWORK_SECURITY_GROUP_STATUS_DELETING = "Deleting"


class NetworkSecurityGroup(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'network_security_group'
    # String key: ids may be assigned by the site rather than generated here
    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    site_id = Column(UUID(as_uuid=True), ForeignKey('site.id'), nullable=False)
    tenant_org = Column(String(255), nullable=False)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey('tenant.id'), nullable=False)
    status = Column(String(32), nullable=False)
    stateful_egress = Column(Boolean, nullable=False, default=False)
    rules = Column(JSONDocument, nullable=False, default=lambda: [])
    labels = Column(JSONDocument, nullable=True)
    version = Column(String(64), nullable=True)
    created_by = Column(UUID(as_uuid=True), nullable=False)
    updated_by = Column(UUID(as_uuid=True), nullable=True)

    site = relationship("Site")
    tenant = relationship("Tenant")

    __table_args__ = (
        Index('idx_network_security_group_site_id', 'site_id'),
        Index('idx_network_security_group_tenant_id', 'tenant_id'),
    )
