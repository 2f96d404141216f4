"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Schema:
- user: User accounts (user/admin)
- movie: Catalogue entries, genre and cast as JSON arrays
- showtime: Child of movie, unique per (movie_id, date, time), carries seat inventory
- booking: Booking records with UUID7 primary key and unique booking code
- seat_claim: One row per seat of an active booking, unique per showtime seat
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== User ==========
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    # ========== Movie ==========
    op.create_table(
        'movie',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('genre', sa.JSON(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('poster', sa.String(length=500), nullable=False),
        sa.Column('trailer', sa.String(length=500), nullable=True),
        sa.Column('director', sa.String(length=100), nullable=False),
        sa.Column('cast', sa.JSON(), nullable=False),
        sa.Column('release_date', sa.Date(), nullable=False),
        sa.Column('language', sa.String(length=50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False),
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
    )
    op.create_index(op.f('ix_movie_title'), 'movie', ['title'], unique=False)
    op.create_index(op.f('ix_movie_is_active'), 'movie', ['is_active'], unique=False)

    # ========== Showtime ==========
    op.create_table(
        'showtime',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('available_seats', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id', 'date', 'time', name='uq_showtime_movie_date_time'),
        sa.CheckConstraint(
            'available_seats >= 0 AND available_seats <= total_seats',
            name='ck_showtime_available_seats_range',
        ),
    )
    op.create_index(op.f('ix_showtime_movie_id'), 'showtime', ['movie_id'], unique=False)

    # ========== Booking ==========
    op.create_table(
        'booking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('showtime_date', sa.Date(), nullable=False),
        sa.Column('showtime_time', sa.String(length=5), nullable=False),
        sa.Column('seats', sa.JSON(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('booking_code', sa.String(length=16), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_by', sa.Integer(), nullable=True),
        sa.Column('cancellation_reason', sa.String(length=200), nullable=True),
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
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'], unique=False)
    op.create_index(op.f('ix_booking_movie_id'), 'booking', ['movie_id'], unique=False)
    op.create_index(op.f('ix_booking_status'), 'booking', ['status'], unique=False)
    op.create_index(op.f('ix_booking_booking_code'), 'booking', ['booking_code'], unique=True)
    op.create_index(op.f('ix_booking_created_at'), 'booking', ['created_at'], unique=False)

    # ========== Seat claim ==========
    op.create_table(
        'seat_claim',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('showtime_date', sa.Date(), nullable=False),
        sa.Column('showtime_time', sa.String(length=5), nullable=False),
        sa.Column('seat', sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'movie_id',
            'showtime_date',
            'showtime_time',
            'seat',
            name='uq_seat_claim_showtime_seat',
        ),
    )
    op.create_index(op.f('ix_seat_claim_booking_id'), 'seat_claim', ['booking_id'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_seat_claim_booking_id'), table_name='seat_claim')
    op.drop_table('seat_claim')

    op.drop_index(op.f('ix_booking_created_at'), table_name='booking')
    op.drop_index(op.f('ix_booking_booking_code'), table_name='booking')
    op.drop_index(op.f('ix_booking_status'), table_name='booking')
    op.drop_index(op.f('ix_booking_movie_id'), table_name='booking')
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_table('booking')

    op.drop_index(op.f('ix_showtime_movie_id'), table_name='showtime')
    op.drop_table('showtime')

    op.drop_index(op.f('ix_movie_is_active'), table_name='movie')
    op.drop_index(op.f('ix_movie_title'), table_name='movie')
    op.drop_table('movie')

    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
