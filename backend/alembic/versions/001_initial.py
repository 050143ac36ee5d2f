"""Initial migration - users, duty sessions, location fixes

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(128), nullable=False),
        sa.Column('role', sa.String(10), nullable=False),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('district', sa.String(100), nullable=True),
        sa.Column('assigned_regions', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_phone', 'users', ['phone'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create duty_sessions table
    op.create_table(
        'duty_sessions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('officer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('start_lat', sa.Float(), nullable=True),
        sa.Column('start_lng', sa.Float(), nullable=True),
        sa.Column('start_address', sa.String(500), nullable=True),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('start_odometer', sa.Float(), nullable=True),
        sa.Column('end_lat', sa.Float(), nullable=True),
        sa.Column('end_lng', sa.Float(), nullable=True),
        sa.Column('end_address', sa.String(500), nullable=True),
        sa.Column('ended_at', sa.DateTime(), nullable=True),
        sa.Column('end_odometer', sa.Float(), nullable=True),
        sa.Column('total_distance_km', sa.Float(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_duty_sessions_officer_id', 'duty_sessions', ['officer_id'])
    op.create_index('ix_duty_sessions_started_at', 'duty_sessions', ['started_at'])
    op.create_index('ix_duty_sessions_ended_at', 'duty_sessions', ['ended_at'])
    # At most one open session per officer
    op.create_index(
        'uq_duty_sessions_open_officer',
        'duty_sessions',
        ['officer_id'],
        unique=True,
        sqlite_where=sa.text('ended_at IS NULL'),
        postgresql_where=sa.text('ended_at IS NULL'),
    )

    # Create location_fixes table
    op.create_table(
        'location_fixes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('officer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('session_id', sa.String(36), sa.ForeignKey('duty_sessions.id'), nullable=True),
        sa.Column('lat', sa.Float(), nullable=False),
        sa.Column('lng', sa.Float(), nullable=False),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('accuracy_m', sa.Float(), nullable=True),
        sa.Column('activity', sa.String(20), nullable=False),
        sa.Column('captured_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_location_fixes_officer_id', 'location_fixes', ['officer_id'])
    op.create_index('ix_location_fixes_session_id', 'location_fixes', ['session_id'])
    op.create_index('ix_location_fixes_captured_at', 'location_fixes', ['captured_at'])


def downgrade() -> None:
    op.drop_table('location_fixes')
    op.drop_index('uq_duty_sessions_open_officer', table_name='duty_sessions')
    op.drop_table('duty_sessions')
    op.drop_table('users')
