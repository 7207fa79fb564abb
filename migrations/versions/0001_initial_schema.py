"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-10-06 09:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _soft_delete():
    return sa.Column('deleted', sa.TIMESTAMP(timezone=True), nullable=True)


def _uuid_pk():
    return sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()'))


# (index name, table, column) pairs served by trigram GIN indexes for ILIKE search
_TRGM_INDEXES = [
    ('idx_tenant_name_trgm', 'tenant', 'name'),
    ('idx_site_name_trgm', 'site', 'name'),
    ('idx_network_security_group_name_trgm', 'network_security_group', 'name'),
    ('idx_instance_name_trgm', 'instance', 'name'),
    ('idx_ssh_key_name_trgm', 'ssh_key', 'name'),
    ('idx_sshkey_group_name_trgm', 'sshkey_group', 'name'),
    ('idx_dpu_extension_service_name_trgm', 'dpu_extension_service', 'name'),
]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS pgcrypto')
    op.execute('CREATE EXTENSION IF NOT EXISTS pg_trgm')

    op.create_table(
        'tenant',
        _uuid_pk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('display_name', sa.String(255), nullable=True),
        sa.Column('org', sa.String(255), nullable=False),
        sa.Column('org_display_name', sa.String(255), nullable=True),
        sa.Column('config', postgresql.JSONB(astext_type=sa.Text()), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_tenant_org', 'tenant', ['org'])
    op.create_index('idx_tenant_created', 'tenant', ['created'])

    op.create_table(
        'site',
        _uuid_pk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('display_name', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('org', sa.String(255), nullable=False),
        sa.Column('infrastructure_provider_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('site_controller_version', sa.String(64), nullable=True),
        sa.Column('site_agent_version', sa.String(64), nullable=True),
        sa.Column('registration_token', sa.String(255), nullable=True),
        sa.Column('registration_token_expiration', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('is_infinity_enabled', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('serial_console_hostname', sa.String(255), nullable=True),
        sa.Column('is_serial_console_enabled', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('serial_console_idle_timeout', sa.Integer(), nullable=True),
        sa.Column('serial_console_max_session_length', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('location', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('config', postgresql.JSONB(astext_type=sa.Text()), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_site_org', 'site', ['org'])
    op.create_index('idx_site_infrastructure_provider_id', 'site', ['infrastructure_provider_id'])
    op.create_index('idx_site_created', 'site', ['created'])

    op.create_table(
        'network_security_group',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('site_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('site.id'), nullable=False),
        sa.Column('tenant_org', sa.String(255), nullable=False),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenant.id'), nullable=False),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('stateful_egress', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('rules', postgresql.JSONB(astext_type=sa.Text()), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('labels', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('version', sa.String(64), nullable=True),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('updated_by', postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_network_security_group_site_id', 'network_security_group', ['site_id'])
    op.create_index('idx_network_security_group_tenant_id', 'network_security_group', ['tenant_id'])

    op.create_table(
        'instance',
        _uuid_pk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('allocation_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('allocation_constraint_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenant.id'), nullable=False),
        sa.Column('infrastructure_provider_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('site_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('site.id'), nullable=False),
        sa.Column('instance_type_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('network_security_group_id', sa.String(64), sa.ForeignKey('network_security_group.id'), nullable=True),
        sa.Column('network_security_group_propagation_details', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('vpc_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('machine_id', sa.String(255), nullable=True),
        sa.Column('controller_instance_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('hostname', sa.String(255), nullable=True),
        sa.Column('operating_system_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('ipxe_script', sa.Text(), nullable=True),
        sa.Column('always_boot_with_custom_ipxe', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('phone_home_enabled', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('user_data', sa.Text(), nullable=True),
        sa.Column('labels', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('is_update_pending', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('infinity_rcr_status', sa.String(64), nullable=True),
        sa.Column('tpm_ek_certificate', sa.Text(), nullable=True),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('power_status', sa.String(32), nullable=True),
        sa.Column('is_missing_on_site', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_instance_tenant_id', 'instance', ['tenant_id'])
    op.create_index('idx_instance_site_id', 'instance', ['site_id'])
    op.create_index('idx_instance_status', 'instance', ['status'])
    op.create_index('idx_instance_created', 'instance', ['created'])

    op.create_table(
        'interface',
        _uuid_pk(),
        sa.Column('instance_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('instance.id'), nullable=False),
        sa.Column('subnet_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('vpc_prefix_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('machine_interface_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('device', sa.String(255), nullable=True),
        sa.Column('device_instance', sa.Integer(), nullable=True),
        sa.Column('is_physical', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('virtual_function_id', sa.Integer(), nullable=True),
        sa.Column('mac_address', sa.String(32), nullable=True),
        sa.Column('ip_addresses', postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_interface_instance_id', 'interface', ['instance_id'])
    op.create_index('idx_interface_ip_addresses', 'interface', ['ip_addresses'], postgresql_using='gin')

    op.create_table(
        'ssh_key',
        _uuid_pk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('org', sa.String(255), nullable=False),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenant.id'), nullable=False),
        sa.Column('public_key', sa.Text(), nullable=False),
        sa.Column('fingerprint', sa.String(255), nullable=True),
        sa.Column('expires', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_ssh_key_tenant_id', 'ssh_key', ['tenant_id'])
    op.create_index('idx_ssh_key_org', 'ssh_key', ['org'])

    op.create_table(
        'sshkey_group',
        _uuid_pk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('org', sa.String(255), nullable=False),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenant.id'), nullable=False),
        sa.Column('version', sa.String(64), nullable=True),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_sshkey_group_tenant_id', 'sshkey_group', ['tenant_id'])
    op.create_index('idx_sshkey_group_org', 'sshkey_group', ['org'])

    op.create_table(
        'ssh_key_association',
        _uuid_pk(),
        sa.Column('ssh_key_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('ssh_key.id'), nullable=False),
        sa.Column('sshkey_group_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('sshkey_group.id'), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_ssh_key_association_ssh_key_id', 'ssh_key_association', ['ssh_key_id'])
    op.create_index('idx_ssh_key_association_sshkey_group_id', 'ssh_key_association', ['sshkey_group_id'])

    op.create_table(
        'ssh_key_group_site_association',
        _uuid_pk(),
        sa.Column('sshkey_group_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('sshkey_group.id'), nullable=False),
        sa.Column('site_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('site.id'), nullable=False),
        sa.Column('version', sa.String(64), nullable=True),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('is_missing_on_site', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_skg_site_association_group_id', 'ssh_key_group_site_association', ['sshkey_group_id'])
    op.create_index('idx_skg_site_association_site_id', 'ssh_key_group_site_association', ['site_id'])

    op.create_table(
        'ssh_key_group_instance_association',
        _uuid_pk(),
        sa.Column('ssh_key_group_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('sshkey_group.id'), nullable=False),
        sa.Column('site_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('site.id'), nullable=False),
        sa.Column('instance_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('instance.id'), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_skg_instance_association_group_id', 'ssh_key_group_instance_association', ['ssh_key_group_id'])
    op.create_index('idx_skg_instance_association_instance_id', 'ssh_key_group_instance_association', ['instance_id'])

    op.create_table(
        'dpu_extension_service',
        _uuid_pk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('service_type', sa.String(64), nullable=False),
        sa.Column('site_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('site.id'), nullable=False),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenant.id'), nullable=False),
        sa.Column('version', sa.String(64), nullable=True),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_dpu_extension_service_site_id', 'dpu_extension_service', ['site_id'])
    op.create_index('idx_dpu_extension_service_tenant_id', 'dpu_extension_service', ['tenant_id'])

    op.create_table(
        'dpu_extension_service_deployment',
        _uuid_pk(),
        sa.Column('site_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('site.id'), nullable=False),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenant.id'), nullable=False),
        sa.Column('instance_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('instance.id'), nullable=False),
        sa.Column(
            'dpu_extension_service_id',
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey('dpu_extension_service.id'),
            nullable=False,
        ),
        sa.Column('version', sa.String(64), nullable=True),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index('idx_dpu_esd_instance_id', 'dpu_extension_service_deployment', ['instance_id'])
    op.create_index('idx_dpu_esd_dpu_extension_service_id', 'dpu_extension_service_deployment', ['dpu_extension_service_id'])

    op.create_table(
        'status_detail',
        _uuid_pk(),
        sa.Column('entity_id', sa.String(64), nullable=False),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('count', sa.Integer(), server_default=sa.text('1'), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_status_detail_entity_id', 'status_detail', ['entity_id'])

    for name, table, column in _TRGM_INDEXES:
        op.execute(f'CREATE INDEX IF NOT EXISTS {name} ON {table} USING gin ({column} gin_trgm_ops)')


def downgrade() -> None:
    """Downgrade schema."""
    for name, _table, _column in _TRGM_INDEXES:
        op.execute(f'DROP INDEX IF EXISTS {name}')
    for table in (
        'status_detail',
        'dpu_extension_service_deployment',
        'dpu_extension_service',
        'ssh_key_group_instance_association',
        'ssh_key_group_site_association',
        'ssh_key_association',
        'sshkey_group',
        'ssh_key',
        'interface',
        'instance',
        'network_security_group',
        'site',
        'tenant',
    ):
        op.drop_table(table)
