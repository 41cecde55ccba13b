"""init_storefront_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- event: Catalog entries with seat-availability counters
- seat: Per-event seat inventory with a 0/1 availability flag
- booking: Booking records with UUID7 primary key
- booked_seat: One row per seat of a booking
- outbox_message: Pending email and realtime deliveries
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'event',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('venue_name', sa.String(length=255), nullable=False),
        sa.Column('venue_address', sa.String(length=500), nullable=True),
        sa.Column('event_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('event_time', sa.String(length=20), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.String(length=1000), nullable=True),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('available_seats', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
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
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'available_seats >= 0 AND available_seats <= total_seats',
            name='ck_event_available_seats_range',
        ),
    )
    op.create_index(op.f('ix_event_category'), 'event', ['category'])
    op.create_index(op.f('ix_event_event_date'), 'event', ['event_date'])

    op.create_table(
        'seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('event.id'), nullable=False),
        sa.Column('row_name', sa.String(length=10), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('seat_type', sa.String(length=20), nullable=False, server_default='regular'),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_available', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('x_position', sa.Integer(), nullable=True),
        sa.Column('y_position', sa.Integer(), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'row_name', 'seat_number', name='uq_seat_position'),
        sa.CheckConstraint('is_available IN (0, 1)', name='ck_seat_is_available_flag'),
    )
    op.create_index(op.f('ix_seat_event_id'), 'seat', ['event_id'])

    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), nullable=False),  # UUID7
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('event.id'), nullable=False),
        sa.Column('booking_reference', sa.String(length=20), nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('booking_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column(
            'booking_status', sa.String(length=20), nullable=False, server_default='pending'
        ),
        sa.Column(
            'payment_status', sa.String(length=20), nullable=False, server_default='pending'
        ),
        sa.Column('payment_method', sa.String(length=20), nullable=False, server_default='card'),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=50), nullable=True),
        sa.Column('seat_count', sa.Integer(), nullable=False),
        sa.Column('qr_code', sa.String(length=50), nullable=False),
        sa.Column('refund_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_event_id'), 'booking', ['event_id'])
    op.create_index(op.f('ix_booking_booking_reference'), 'booking', ['booking_reference'])
    op.create_index(op.f('ix_booking_created_at'), 'booking', ['created_at'])

    op.create_table(
        'booked_seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), sa.ForeignKey('booking.id'), nullable=False),
        sa.Column('seat_id', sa.Integer(), sa.ForeignKey('seat.id'), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_id', 'seat_id', name='uq_booked_seat'),
    )
    op.create_index(op.f('ix_booked_seat_booking_id'), 'booked_seat', ['booking_id'])

    op.create_table(
        'outbox_message',
        sa.Column('id', UUID(as_uuid=True), nullable=False),  # UUID7
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('topic', sa.String(length=100), nullable=False),
        sa.Column('payload', JSONB(), nullable=False),
        sa.Column('dedupe_key', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('next_attempt_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_error', sa.Text(), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column('delivered_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dedupe_key'),
    )
    op.create_index('ix_outbox_message_due', 'outbox_message', ['status', 'next_attempt_at'])


def downgrade() -> None:
    op.drop_index('ix_outbox_message_due', table_name='outbox_message')
    op.drop_table('outbox_message')
    op.drop_index(op.f('ix_booked_seat_booking_id'), table_name='booked_seat')
    op.drop_table('booked_seat')
    op.drop_index(op.f('ix_booking_created_at'), table_name='booking')
    op.drop_index(op.f('ix_booking_booking_reference'), table_name='booking')
    op.drop_index(op.f('ix_booking_event_id'), table_name='booking')
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_table('booking')
    op.drop_index(op.f('ix_seat_event_id'), table_name='seat')
    op.drop_table('seat')
    op.drop_index(op.f('ix_event_event_date'), table_name='event')
    op.drop_index(op.f('ix_event_category'), table_name='event')
    op.drop_table('event')
