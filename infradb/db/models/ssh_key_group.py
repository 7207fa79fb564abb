import uuid
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, SoftDeleteMixin

SSH_KEY_GROUP_RELATION_NAME = "SSHKeyGroup"

SSH_KEY_GROUP_STATUS_SYNCING = "Syncing"
SSH_KEY_GROUP_STATUS_SYNCED = "Synced"
SSH_KEY_GROUP_STATUS_ERROR = "Error"
SSH_KEY_GROUP_STATUS_DELETING = "Deleting"

SSH_KEY_GROUP_SITE_ASSOCIATION_STATUS_SYNCING = "Syncing"
SSH_KEY_GROUP_SITE_ASSOCIATION_STATUS_SYNCED = "Synced"
SSH_KEY_GROUP_SITE_ASSOCIATION_STATUS_ERROR = "Error"
SSH_KEY_GROUP_SITE_ASSOCIATION_STATUS_DELETING = "Deleting"


class SSHKeyGroup(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'sshkey_group'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    org = Column(String(255), nullable=False)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey('tenant.id'), nullable=False)
    # sha1 over member sites and keys, see SSHKeyGroupDAO.generate_and_update_version
    version = Column(String(64), nullable=True)
    status = Column(String(32), nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    tenant = relationship("Tenant")

    __table_args__ = (
        Index('idx_sshkey_group_tenant_id', 'tenant_id'),
        Index('idx_sshkey_group_org', 'org'),
    )


class SSHKeyGroupSiteAssociation(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'ssh_key_group_site_association'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sshkey_group_id = Column(UUID(as_uuid=True), ForeignKey('sshkey_group.id'), nullable=False)
    site_id = Column(UUID(as_uuid=True), ForeignKey('site.id'), nullable=False)
    version = Column(String(64), nullable=True)
    status = Column(String(32), nullable=False)
    is_missing_on_site = Column(Boolean, nullable=False, default=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    ssh_key_group = relationship("SSHKeyGroup")
    site = relationship("Site")

    __table_args__ = (
        Index('idx_skg_site_association_group_id', 'sshkey_group_id'),
        Index('idx_skg_site_association_site_id', 'site_id'),
    )


class SSHKeyGroupInstanceAssociation(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'ssh_key_group_instance_association'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    ssh_key_group_id = Column(UUID(as_uuid=True), ForeignKey('sshkey_group.id'), nullable=False)
    site_id = Column(UUID(as_uuid=True), ForeignKey('site.id'), nullable=False)
    instance_id = Column(UUID(as_uuid=True), ForeignKey('instance.id'), nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    ssh_key_group = relationship("SSHKeyGroup")
    site = relationship("Site")
    instance = relationship("Instance")

    __table_args__ = (
        Index('idx_skg_instance_association_group_id', 'ssh_key_group_id'),
        Index('idx_skg_instance_association_instance_id', 'instance_id'),
    )
