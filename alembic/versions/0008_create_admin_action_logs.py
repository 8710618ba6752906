"""create admin action logs

Revision ID: 0008_create_admin_action_logs
Revises: 0007_create_interviews
Create Date: 2025-08-01 10:35:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0008_create_admin_action_logs'
down_revision: Union[str, Sequence[str], None] = '0007_create_interviews'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ADMIN_ACTIONS = (
    'SET_ROLE', 'SET_STAGE', 'DEACTIVATE_USER', 'REACTIVATE_USER',
    'OPEN_ROUND', 'CLOSE_ROUND', 'MARK_PAID', 'WAIVE_DUES',
)


def upgrade() -> None:
    op.create_table(
        'admin_action_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('actor_id', sa.Uuid(), nullable=True),
        sa.Column('target_user_id', sa.Uuid(), nullable=True),
        sa.Column(
            'action',
            sa.Enum(*ADMIN_ACTIONS, name='admin_action', native_enum=False, create_constraint=True, length=30),
            nullable=False,
        ),
        sa.Column('before_value', sa.String(length=50), nullable=True),
        sa.Column('after_value', sa.String(length=50), nullable=True),
        sa.Column('subject_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['target_user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_index('ix_admin_action_logs_created_at', 'admin_action_logs', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_admin_action_logs_created_at', table_name='admin_action_logs')
    op.drop_table('admin_action_logs')
