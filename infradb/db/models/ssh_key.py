import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, SoftDeleteMixin

SSH_KEY_RELATION_NAME = "SSHKey"


class SSHKey(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'ssh_key'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    org = Column(String(255), nullable=False)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey('tenant.id'), nullable=False)
    public_key = Column(Text, nullable=False)
    fingerprint = Column(String(255), nullable=True)
    expires = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    tenant = relationship("Tenant")

    __table_args__ = (
        Index('idx_ssh_key_tenant_id', 'tenant_id'),
        Index('idx_ssh_key_org', 'org'),
    )


class SSHKeyAssociation(TimestampMixin, SoftDeleteMixin, Base):
    """Membership of an SSHKey in an SSHKeyGroup."""

    __tablename__ = 'ssh_key_association'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    ssh_key_id = Column(UUID(as_uuid=True), ForeignKey('ssh_key.id'), nullable=False)
    sshkey_group_id = Column(UUID(as_uuid=True), ForeignKey('sshkey_group.id'), nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    ssh_key = relationship("SSHKey")
    ssh_key_group = relationship("SSHKeyGroup")

    __table_args__ = (
        Index('idx_ssh_key_association_ssh_key_id', 'ssh_key_id'),
        Index('idx_ssh_key_association_sshkey_group_id', 'sshkey_group_id'),
    )
