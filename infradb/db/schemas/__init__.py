"""Pydantic input schemas for the DAOs, re-exported for `from infradb.db import schemas`."""

from .tenants import TenantConfig, TenantCreate, TenantUpdate, TenantFilter
from .sites import SiteConfig, SiteCreate, SiteUpdate, SiteFilter
from .network_security_groups import (
    NetworkSecurityGroupRule,
    NetworkSecurityGroupCreate,
    NetworkSecurityGroupUpdate,
    NetworkSecurityGroupFilter,
)
from .instances import InstanceCreate, InstanceUpdate, InstanceClear, InstanceFilter
from .interfaces import InterfaceCreate, InterfaceUpdate, InterfaceFilter
from .ssh_keys import (
    SSHKeyCreate,
    SSHKeyUpdate,
    SSHKeyFilter,
    SSHKeyAssociationCreate,
    SSHKeyAssociationUpdate,
    SSHKeyAssociationFilter,
)
from .ssh_key_groups import (
    SSHKeyGroupCreate,
    SSHKeyGroupUpdate,
    SSHKeyGroupFilter,
    SSHKeyGroupSiteAssociationCreate,
    SSHKeyGroupSiteAssociationUpdate,
    SSHKeyGroupSiteAssociationFilter,
    SSHKeyGroupInstanceAssociationCreate,
    SSHKeyGroupInstanceAssociationUpdate,
    SSHKeyGroupInstanceAssociationFilter,
)
from .dpu_extension_services import (
    DpuExtensionServiceCreate,
    DpuExtensionServiceUpdate,
    DpuExtensionServiceFilter,
    DpuExtensionServiceDeploymentCreate,
    DpuExtensionServiceDeploymentUpdate,
    DpuExtensionServiceDeploymentFilter,
)
from .status_details import StatusDetailCreate, StatusDetailUpdate, StatusDetailFilter
from ..paginator import OrderBy, PageInput

__all__ = [
    "TenantConfig", "TenantCreate", "TenantUpdate", "TenantFilter",
    "SiteConfig", "SiteCreate", "SiteUpdate", "SiteFilter",
    "NetworkSecurityGroupRule", "NetworkSecurityGroupCreate", "NetworkSecurityGroupUpdate",
    "NetworkSecurityGroupFilter",
    "InstanceCreate", "InstanceUpdate", "InstanceClear", "InstanceFilter",
    "InterfaceCreate", "InterfaceUpdate", "InterfaceFilter",
    "SSHKeyCreate", "SSHKeyUpdate", "SSHKeyFilter",
    "SSHKeyAssociationCreate", "SSHKeyAssociationUpdate", "SSHKeyAssociationFilter",
    "SSHKeyGroupCreate", "SSHKeyGroupUpdate", "SSHKeyGroupFilter",
    "SSHKeyGroupSiteAssociationCreate", "SSHKeyGroupSiteAssociationUpdate", "SSHKeyGroupSiteAssociationFilter",
    "SSHKeyGroupInstanceAssociationCreate", "SSHKeyGroupInstanceAssociationUpdate",
    "SSHKeyGroupInstanceAssociationFilter",
    "DpuExtensionServiceCreate", "DpuExtensionServiceUpdate", "DpuExtensionServiceFilter",
    "DpuExtensionServiceDeploymentCreate", "DpuExtensionServiceDeploymentUpdate",
    "DpuExtensionServiceDeploymentFilter",
    "StatusDetailCreate", "StatusDetailUpdate", "StatusDetailFilter",
    "OrderBy", "PageInput",
]
