"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_phone', sa.String(20), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('total', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(50), nullable=False, server_default='Pending'),
        sa.Column('eta_minutes', sa.Integer()),
        sa.Column('paid_at', sa.DateTime()),
        sa.Column('payment_session_id', sa.String(255)),
        sa.Column('payment_intent_id', sa.String(255)),
        sa.Column('sms_cooking_sent_at', sa.DateTime()),
        sa.Column('sms_ready_sent_at', sa.DateTime()),
        sa.Column('archived_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create menu_availability table
    op.create_table(
        'menu_availability',
        sa.Column('item_id', sa.String(100), primary_key=True),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create indexes
    op.create_index('ix_orders_payment_session_id', 'orders', ['payment_session_id'])
    op.create_index('ix_orders_paid_at', 'orders', ['paid_at'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])


def downgrade() -> None:
    op.drop_table('menu_availability')
    op.drop_table('orders')
