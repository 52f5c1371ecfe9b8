"""Initial schema: users, donations, reservations, user_sessions

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 10:12:41.482113

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '3f1c9a2b7d40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create enums up front; DO blocks keep this idempotent on databases
    # that were bootstrapped by create_all
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE donation_category AS ENUM ('food', 'clothes');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE donation_status AS ENUM ('available', 'reserved', 'completed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    category = postgresql.ENUM('food', 'clothes', name='donation_category', create_type=False)
    donation_status = postgresql.ENUM('available', 'reserved', 'completed', name='donation_status', create_type=False)

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'donations',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('category', category, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('availability_start', sa.Text(), nullable=True),
        sa.Column('availability_end', sa.Text(), nullable=True),
        sa.Column('status', donation_status, nullable=False, server_default='available'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_donations_user_id', 'donations', ['user_id'])
    op.create_index('ix_donations_status', 'donations', ['status'])

    op.create_table(
        'reservations',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('donation_id', sa.String(length=36), sa.ForeignKey('donations.id'), nullable=False),
        sa.Column('receiver_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_reservations_donation_id', 'reservations', ['donation_id'])
    op.create_index('ix_reservations_receiver_id', 'reservations', ['receiver_id'])

    op.create_table(
        'user_sessions',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_user_sessions_user_id', 'user_sessions', ['user_id'])
    op.create_index('ix_user_sessions_expires_at', 'user_sessions', ['expires_at'])


def downgrade() -> None:
    op.drop_index('ix_user_sessions_expires_at', table_name='user_sessions')
    op.drop_index('ix_user_sessions_user_id', table_name='user_sessions')
    op.drop_table('user_sessions')

    op.drop_index('ix_reservations_receiver_id', table_name='reservations')
    op.drop_index('ix_reservations_donation_id', table_name='reservations')
    op.drop_table('reservations')

    op.drop_index('ix_donations_status', table_name='donations')
    op.drop_index('ix_donations_user_id', table_name='donations')
    op.drop_table('donations')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    op.execute("DROP TYPE IF EXISTS donation_status")
    op.execute("DROP TYPE IF EXISTS donation_category")
