"""init_party_booking_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- tenant / tenant_policy: tenants and their optional policy overrides
- room, package, package_room_eligibility: catalog
- slot_template, blackout: schedule
- customer: per-tenant customers, deduplicated by email
- booking_hold: short-lived slot holds
- booking: committed bookings

booking carries an exclusion constraint (btree_gist) so two active bookings of
the same room can never overlap, whatever the application does.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ACTIVE_BOOKING_PREDICATE = "status IN ('pending', 'confirmed')"


def _tenant_fk() -> sa.Column:
    return sa.Column(
        'tenant_id',
        UUID(as_uuid=True),
        sa.ForeignKey('tenant.id', ondelete='CASCADE'),
        nullable=False,
    )


def upgrade() -> None:
    """Create all tables with final schema."""

    op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')

    # ========== Tenants ==========

    op.create_table(
        'tenant',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('timezone', sa.String(length=64), nullable=False, server_default='UTC'),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='USD'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
    )
    op.create_index(op.f('ix_tenant_slug'), 'tenant', ['slug'], unique=True)

    op.create_table(
        'tenant_policy',
        sa.Column(
            'tenant_id',
            UUID(as_uuid=True),
            sa.ForeignKey('tenant.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column('hold_minutes', sa.Integer(), nullable=True),
        sa.Column('buffer_minutes', sa.Integer(), nullable=True),
        sa.Column('default_duration_minutes', sa.Integer(), nullable=True),
        sa.Column('deposit_percent', sa.Integer(), nullable=True),
    )

    # ========== Catalog ==========

    op.create_table(
        'room',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('max_occupancy', sa.Integer(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint('max_occupancy > 0', name='ck_room_max_occupancy_positive'),
    )
    op.create_index(op.f('ix_room_tenant_id'), 'room', ['tenant_id'])

    op.create_table(
        'package',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('base_party_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('extra_guest_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint('duration_minutes > 0', name='ck_package_duration_positive'),
    )
    op.create_index(op.f('ix_package_tenant_id'), 'package', ['tenant_id'])

    op.create_table(
        'package_room_eligibility',
        sa.Column(
            'package_id',
            UUID(as_uuid=True),
            sa.ForeignKey('package.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column(
            'room_id',
            UUID(as_uuid=True),
            sa.ForeignKey('room.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        _tenant_fk(),
    )
    op.create_index(
        op.f('ix_package_room_eligibility_tenant_id'), 'package_room_eligibility', ['tenant_id']
    )

    # ========== Schedule ==========

    op.create_table(
        'slot_template',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column('day_of_week', sa.SmallInteger(), nullable=False),
        sa.Column('start_times', sa.JSON(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('tenant_id', 'day_of_week', name='uq_slot_template_tenant_day'),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_slot_template_day_of_week'),
    )

    op.create_table(
        'blackout',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint('start_date <= end_date', name='ck_blackout_range'),
    )
    op.create_index(op.f('ix_blackout_tenant_id'), 'blackout', ['tenant_id'])

    # ========== Reservations ==========

    op.create_table(
        'customer',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.UniqueConstraint('tenant_id', 'email', name='uq_customer_tenant_email'),
    )

    op.create_table(
        'booking_hold',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column(
            'room_id',
            UUID(as_uuid=True),
            sa.ForeignKey('room.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'package_id',
            UUID(as_uuid=True),
            sa.ForeignKey('package.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=True),
        sa.Column('client_token', sa.String(length=128), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('tenant_id', 'room_id', 'start_time', name='uq_booking_hold_slot'),
        sa.CheckConstraint('start_time < end_time', name='ck_booking_hold_window'),
    )
    op.create_index(
        'ix_booking_hold_room_window',
        'booking_hold',
        ['tenant_id', 'room_id', 'start_time', 'end_time'],
    )
    op.create_index(op.f('ix_booking_hold_expires_at'), 'booking_hold', ['expires_at'])

    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column('room_id', UUID(as_uuid=True), sa.ForeignKey('room.id'), nullable=False),
        sa.Column(
            'package_id',
            UUID(as_uuid=True),
            sa.ForeignKey('package.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column(
            'customer_id', UUID(as_uuid=True), sa.ForeignKey('customer.id'), nullable=False
        ),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('deposit_due', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('deposit_paid', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.CheckConstraint('start_time < end_time', name='ck_booking_window'),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled')", name='ck_booking_status'
        ),
    )
    op.create_index(op.f('ix_booking_customer_id'), 'booking', ['customer_id'])
    op.create_index(
        'ix_booking_room_window', 'booking', ['tenant_id', 'room_id', 'start_time', 'end_time']
    )
    op.create_index(
        'uq_booking_active_slot',
        'booking',
        ['tenant_id', 'room_id', 'start_time'],
        unique=True,
        postgresql_where=sa.text(ACTIVE_BOOKING_PREDICATE),
    )

    # Raw windows only: buffers are tenant policy and may change after the fact
    op.execute(
        f"""
        ALTER TABLE booking
        ADD CONSTRAINT booking_no_overlap
        EXCLUDE USING gist (
            tenant_id WITH =,
            room_id WITH =,
            tstzrange(start_time, end_time, '[)') WITH &&
        )
        WHERE ({ACTIVE_BOOKING_PREDICATE})
        """
    )


def downgrade() -> None:
    """Drop all tables."""
    op.execute('ALTER TABLE booking DROP CONSTRAINT IF EXISTS booking_no_overlap')
    op.drop_table('booking')
    op.drop_table('booking_hold')
    op.drop_table('customer')
    op.drop_table('blackout')
    op.drop_table('slot_template')
    op.drop_table('package_room_eligibility')
    op.drop_table('package')
    op.drop_table('room')
    op.drop_table('tenant_policy')
    op.drop_table('tenant')
