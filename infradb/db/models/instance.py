import uuid
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, SoftDeleteMixin
from ..types import JSONDocument

INSTANCE_RELATION_NAME = "Instance"

INSTANCE_STATUS_PENDING = "Pending"
INSTANCE_STATUS_PROVISIONING = "Provisioning"
INSTANCE_STATUS_CONFIGURING = "Configuring"
INSTANCE_STATUS_READY = "Ready"
INSTANCE_STATUS_UPDATING = "Updating"
INSTANCE_STATUS_ERROR = "Error"
INSTANCE_STATUS_TERMINATING = "Terminating"
INSTANCE_STATUS_TERMINATED = "Terminated"
INSTANCE_STATUS_UNKNOWN = "Unknown"

INSTANCE_POWER_STATUS_BOOT_COMPLETED = "BootCompleted"
INSTANCE_POWER_STATUS_REBOOTING = "Rebooting"
INSTANCE_POWER_STATUS_ERROR = "Error"


class Instance(TimestampMixin, SoftDeleteMixin, Base):
    """A bare-metal machine provisioned for a tenant."""

    __tablename__ = 'instance'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    allocation_id = Column(UUID(as_uuid=True), nullable=True)
    allocation_constraint_id = Column(UUID(as_uuid=True), nullable=True)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey('tenant.id'), nullable=False)
    infrastructure_provider_id = Column(UUID(as_uuid=True), nullable=False)
    site_id = Column(UUID(as_uuid=True), ForeignKey('site.id'), nullable=False)
    instance_type_id = Column(UUID(as_uuid=True), nullable=True)
    network_security_group_id = Column(String(64), ForeignKey('network_security_group.id'), nullable=True)
    network_security_group_propagation_details = Column(JSONDocument, nullable=True)
    vpc_id = Column(UUID(as_uuid=True), nullable=False)
    machine_id = Column(String(255), nullable=True)
    controller_instance_id = Column(UUID(as_uuid=True), nullable=True)
    hostname = Column(String(255), nullable=True)
    operating_system_id = Column(UUID(as_uuid=True), nullable=True)
    ipxe_script = Column(Text, nullable=True)
    always_boot_with_custom_ipxe = Column(Boolean, nullable=False, default=False)
    phone_home_enabled = Column(Boolean, nullable=False, default=False)
    user_data = Column(Text, nullable=True)
    labels = Column(JSONDocument, nullable=True)
    is_update_pending = Column(Boolean, nullable=False, default=False)
    infinity_rcr_status = Column(String(64), nullable=True)
    tpm_ek_certificate = Column(Text, nullable=True)
    status = Column(String(32), nullable=False)
    power_status = Column(String(32), nullable=True)
    is_missing_on_site = Column(Boolean, nullable=False, default=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    tenant = relationship("Tenant")
    site = relationship("Site")
    network_security_group = relationship("NetworkSecurityGroup")
    interfaces = relationship("Interface", back_populates="instance")

    __table_args__ = (
        Index('idx_instance_tenant_id', 'tenant_id'),
        Index('idx_instance_site_id', 'site_id'),
        Index('idx_instance_status', 'status'),
        Index('idx_instance_created', 'created'),
    )
