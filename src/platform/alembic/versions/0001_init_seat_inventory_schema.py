"""init_seat_inventory_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Schema:
- venue / seat: physical seating, one row per seat
- show / show_schedule: performances with cached total_seats / seats_available
- seat_reservation: TTL holds, unique per (seat, schedule)
- booking / seat_booking: committed seats, one unreleased row per (seat, schedule)
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


def upgrade() -> None:
    """Create all seat inventory tables."""

    # ========== Venue & seats ==========
    op.create_table(
        'venue',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('row_label', sa.String(length=4), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('price_multiplier', sa.Numeric(5, 2), nullable=False),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('venue_id', 'row_label', 'seat_number', name='uq_seat_position'),
    )
    op.create_index(op.f('ix_seat_venue_id'), 'seat', ['venue_id'])

    # ========== Show & schedule ==========
    op.create_table(
        'show',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('show_type', sa.String(length=50), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_show_created_by'), 'show', ['created_by'])

    op.create_table(
        'show_schedule',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('show_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('seats_available', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['show_id'], ['show.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'seats_available >= 0 AND seats_available <= total_seats',
            name='ck_show_schedule_seats_available_range',
        ),
    )
    op.create_index(op.f('ix_show_schedule_show_id'), 'show_schedule', ['show_id'])
    op.create_index(op.f('ix_show_schedule_venue_id'), 'show_schedule', ['venue_id'])

    # ========== Holds ==========
    op.create_table(
        'seat_reservation',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.Column('show_schedule_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['seat_id'], ['seat.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['show_schedule_id'], ['show_schedule.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'seat_id', 'show_schedule_id', name='uq_seat_reservation_seat_schedule'
        ),
    )
    op.create_index(
        op.f('ix_seat_reservation_show_schedule_id'), 'seat_reservation', ['show_schedule_id']
    )
    op.create_index(op.f('ix_seat_reservation_session_id'), 'seat_reservation', ['session_id'])
    op.create_index(op.f('ix_seat_reservation_expires_at'), 'seat_reservation', ['expires_at'])

    # ========== Bookings ==========
    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('booking_number', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('show_schedule_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('original_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('discount_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('promotion_code', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['show_schedule_id'], ['show_schedule.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_number'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_show_schedule_id'), 'booking', ['show_schedule_id'])

    op.create_table(
        'seat_booking',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.Column('show_schedule_id', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('released', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['booking.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['seat_id'], ['seat.id']),
        sa.ForeignKeyConstraint(['show_schedule_id'], ['show_schedule.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_id', 'seat_id', name='uq_seat_booking_booking_seat'),
    )
    op.create_index(op.f('ix_seat_booking_show_schedule_id'), 'seat_booking', ['show_schedule_id'])
    op.create_index(
        'uq_active_seat_booking',
        'seat_booking',
        ['seat_id', 'show_schedule_id'],
        unique=True,
        postgresql_where=sa.text('released = false'),
    )


def downgrade() -> None:
    op.drop_index('uq_active_seat_booking', table_name='seat_booking')
    op.drop_table('seat_booking')
    op.drop_table('booking')
    op.drop_table('seat_reservation')
    op.drop_table('show_schedule')
    op.drop_table('show')
    op.drop_table('seat')
    op.drop_table('venue')
