import uuid
from sqlalchemy import Column, String, Text, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, SoftDeleteMixin

DPU_EXTENSION_SERVICE_RELATION_NAME = "DpuExtensionService"

DPU_EXTENSION_SERVICE_DEPLOYMENT_STATUS_PENDING = "Pending"
DPU_EXTENSION_SERVICE_DEPLOYMENT_STATUS_RUNNING = "Running"
DPU_EXTENSION_SERVICE_DEPLOYMENT_STATUS_ERROR = "Error"
DPU_EXTENSION_SERVICE_DEPLOYMENT_STATUS_FAILED = "Failed"
DPU_EXTENSION_SERVICE_DEPLOYMENT_STATUS_TERMINATING = "Terminating"


class DpuExtensionService(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'dpu_extension_service'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    service_type = Column(String(64), nullable=False)
    site_id = Column(UUID(as_uuid=True), ForeignKey('site.id'), nullable=False)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey('tenant.id'), nullable=False)
    version = Column(String(64), nullable=True)
    status = Column(String(32), nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    site = relationship("Site")
    tenant = relationship("Tenant")

    __table_args__ = (
        Index('idx_dpu_extension_service_site_id', 'site_id'),
        Index('idx_dpu_extension_service_tenant_id', 'tenant_id'),
    )


class DpuExtensionServiceDeployment(TimestampMixin, SoftDeleteMixin, Base):
    """A DPU extension service deployed onto an Instance."""

    __tablename__ = 'dpu_extension_service_deployment'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    site_id = Column(UUID(as_uuid=True), ForeignKey('site.id'), nullable=False)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey('tenant.id'), nullable=False)
    instance_id = Column(UUID(as_uuid=True), ForeignKey('instance.id'), nullable=False)
    dpu_extension_service_id = Column(UUID(as_uuid=True), ForeignKey('dpu_extension_service.id'), nullable=False)
    version = Column(String(64), nullable=True)
    status = Column(String(32), nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    site = relationship("Site")
    tenant = relationship("Tenant")
    instance = relationship("Instance")
    dpu_extension_service = relationship("DpuExtensionService")

    __table_args__ = (
        Index('idx_dpu_esd_instance_id', 'instance_id'),
        Index('idx_dpu_esd_dpu_extension_service_id', 'dpu_extension_service_id'),
    )
