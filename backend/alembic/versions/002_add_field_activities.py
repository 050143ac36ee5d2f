"""Add field activity tables - meetings, sample distributions, sales

Revision ID: 002_add_field_activities
Revises: 001_initial
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_add_field_activities'
down_revision: Union[str, None] = '001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _place_columns():
    return [
        sa.Column('village', sa.String(100), nullable=True),
        sa.Column('district', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('lat', sa.Float(), nullable=True),
        sa.Column('lng', sa.Float(), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
    ]


def _timestamp_columns():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    # Create meetings table
    op.create_table(
        'meetings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('officer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('person_name', sa.String(100), nullable=True),
        sa.Column('contact_number', sa.String(20), nullable=True),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('business_potential', sa.JSON(), nullable=True),
        sa.Column('attendees_count', sa.Integer(), nullable=True),
        sa.Column('meeting_kind', sa.String(50), nullable=True),
        *_place_columns(),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('follow_up_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('follow_up_date', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamp_columns(),
    )
    op.create_index('ix_meetings_officer_id', 'meetings', ['officer_id'])
    op.create_index('ix_meetings_created_at', 'meetings', ['created_at'])

    # Create sample_distributions table
    op.create_table(
        'sample_distributions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('officer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('product_name', sa.String(200), nullable=False),
        sa.Column('product_sku', sa.String(50), nullable=True),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('unit', sa.String(20), nullable=True),
        sa.Column('recipient_name', sa.String(100), nullable=True),
        sa.Column('recipient_contact', sa.String(20), nullable=True),
        sa.Column('recipient_category', sa.String(20), nullable=True),
        sa.Column('purpose', sa.String(20), nullable=True),
        sa.Column('expected_feedback_date', sa.DateTime(), nullable=True),
        *_place_columns(),
        sa.Column('feedback_received', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('feedback_notes', sa.Text(), nullable=True),
        sa.Column('converted_to_sale', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamp_columns(),
    )
    op.create_index('ix_sample_distributions_officer_id', 'sample_distributions', ['officer_id'])
    op.create_index('ix_sample_distributions_created_at', 'sample_distributions', ['created_at'])

    # Create sales table
    op.create_table(
        'sales',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('officer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('product_name', sa.String(200), nullable=False),
        sa.Column('product_sku', sa.String(50), nullable=True),
        sa.Column('pack_size', sa.String(20), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('price_per_unit', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('sale_type', sa.String(5), nullable=False),
        sa.Column('farmer_name', sa.String(100), nullable=True),
        sa.Column('farmer_contact', sa.String(20), nullable=True),
        sa.Column('distributor_name', sa.String(100), nullable=True),
        sa.Column('distributor_contact', sa.String(20), nullable=True),
        sa.Column('distributor_type', sa.String(50), nullable=True),
        sa.Column('is_repeat_order', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_mode', sa.String(20), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False),
        sa.Column('delivery_status', sa.String(20), nullable=False),
        sa.Column('delivery_date', sa.DateTime(), nullable=True),
        *_place_columns(),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index('ix_sales_officer_id', 'sales', ['officer_id'])
    op.create_index('ix_sales_created_at', 'sales', ['created_at'])


def downgrade() -> None:
    op.drop_table('sales')
    op.drop_table('sample_distributions')
    op.drop_table('meetings')
