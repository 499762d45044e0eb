"""initial_asset_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _tenant_column() -> sa.Column:
    return sa.Column(
        'tenant_id', postgresql.UUID(as_uuid=True),
        sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        'tenants',
        _id_column(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('plan', sa.String(20), nullable=False, server_default='FREE'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenants_slug', 'tenants', ['slug'], unique=True)

    op.create_table(
        'users',
        _id_column(),
        _tenant_column(),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='USER'),
        sa.Column('is_super_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', 'tenant_id', name='uq_users_email_tenant'),
    )
    op.create_index('ix_users_tenant_id', 'users', ['tenant_id'])
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'asset_categories',
        _id_column(),
        _tenant_column(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(100), nullable=True),
        sa.Column('field_schema', postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_asset_categories_tenant_name'),
    )
    op.create_index('ix_asset_categories_tenant_id', 'asset_categories', ['tenant_id'])

    op.create_table(
        'assets',
        _id_column(),
        _tenant_column(),
        sa.Column('category_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('asset_categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('serial_number', sa.String(255), nullable=True),
        sa.Column('asset_tag', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='AVAILABLE'),
        sa.Column('condition', sa.String(20), nullable=False, server_default='GOOD'),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('purchase_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('purchase_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('warranty_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('custom_fields', postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column('assigned_to_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'serial_number', name='uq_assets_tenant_serial'),
        sa.UniqueConstraint('tenant_id', 'asset_tag', name='uq_assets_tenant_tag'),
    )
    op.create_index('ix_assets_tenant_id', 'assets', ['tenant_id'])
    op.create_index('ix_assets_category_id', 'assets', ['category_id'])
    op.create_index('ix_assets_tenant_status', 'assets', ['tenant_id', 'status'])

    op.create_table(
        'asset_activities',
        _id_column(),
        _tenant_column(),
        sa.Column('action', sa.String(30), nullable=False),
        sa.Column('details', postgresql.JSONB(), nullable=True),
        sa.Column('asset_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('assets.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_asset_activities_tenant_id', 'asset_activities', ['tenant_id'])
    op.create_index('ix_asset_activities_asset_id', 'asset_activities', ['asset_id'])
    op.create_index('ix_asset_activities_tenant_created', 'asset_activities', ['tenant_id', 'created_at'])
    op.create_index('ix_asset_activities_tenant_action', 'asset_activities', ['tenant_id', 'action'])

    # Activity history is append-only for the application role
    op.execute("REVOKE UPDATE, DELETE ON asset_activities FROM PUBLIC;")


def downgrade() -> None:
    op.drop_table('asset_activities')
    op.drop_table('assets')
    op.drop_table('asset_categories')
    op.drop_table('users')
    op.drop_table('tenants')
