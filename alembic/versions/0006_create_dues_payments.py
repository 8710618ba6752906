"""create dues payments

Revision ID: 0006_create_dues_payments
Revises: 0005_create_feedback
Create Date: 2025-08-01 10:25:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0006_create_dues_payments'
down_revision: Union[str, Sequence[str], None] = '0005_create_feedback'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PAYMENT_TYPES = ('INITIATION', 'SEMESTER', 'SOCIAL', 'FINE', 'OTHER')
PAYMENT_METHODS = ('CASH', 'VENMO', 'ZELLE', 'CHECK', 'BANK_TRANSFER', 'OTHER')
PAYMENT_STATUSES = ('PAID', 'PARTIAL', 'NOT_PAID', 'OVERDUE', 'WAIVED')


def upgrade() -> None:
    op.create_table(
        'dues_payments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column(
            'payment_type',
            sa.Enum(*PAYMENT_TYPES, name='payment_type', native_enum=False, create_constraint=True, length=20),
            nullable=False,
        ),
        sa.Column(
            'payment_method',
            sa.Enum(*PAYMENT_METHODS, name='payment_method', native_enum=False, create_constraint=True, length=20),
            nullable=True,
        ),
        sa.Column(
            'status',
            sa.Enum(*PAYMENT_STATUSES, name='payment_status', native_enum=False, create_constraint=True, length=20),
            nullable=False,
            server_default='NOT_PAID',
        ),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('semester', sa.String(length=30), nullable=True),
        sa.Column('reference_number', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('recorded_by', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recorded_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount >= 0', name='ck_dues_payments_amount'),
    )

    op.create_index('ix_dues_payments_user_id', 'dues_payments', ['user_id'])
    op.create_index('ix_dues_payments_payment_type', 'dues_payments', ['payment_type'])
    op.create_index('ix_dues_payments_status', 'dues_payments', ['status'])
    op.create_index('ix_dues_payments_due_date', 'dues_payments', ['due_date'])
    op.create_index('ix_dues_payments_semester', 'dues_payments', ['semester'])
    op.create_index('ix_dues_payments_recorded_by', 'dues_payments', ['recorded_by'])


def downgrade() -> None:
    op.drop_index('ix_dues_payments_recorded_by', table_name='dues_payments')
    op.drop_index('ix_dues_payments_semester', table_name='dues_payments')
    op.drop_index('ix_dues_payments_due_date', table_name='dues_payments')
    op.drop_index('ix_dues_payments_status', table_name='dues_payments')
    op.drop_index('ix_dues_payments_payment_type', table_name='dues_payments')
    op.drop_index('ix_dues_payments_user_id', table_name='dues_payments')
    op.drop_table('dues_payments')
