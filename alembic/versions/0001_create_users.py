"""create users

Revision ID: 0001_create_users
Revises:
Create Date: 2025-08-01 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_users'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = ('ADMIN', 'ACTIVE', 'PLEDGE', 'RUSHEE')
STAGES = (
    'INITIAL', 'FIRST_ROUND', 'SECOND_ROUND', 'THIRD_ROUND', 'BID_EXTENDED',
    'BID_ACCEPTED', 'BID_DECLINED', 'NO_BID', 'DROPPED',
)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('auth_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column(
            'role',
            sa.Enum(*ROLES, name='user_role', native_enum=False, create_constraint=True, length=20),
            nullable=False,
            server_default='RUSHEE',
        ),
        sa.Column(
            'candidate_stage',
            sa.Enum(*STAGES, name='candidate_stage', native_enum=False, create_constraint=True, length=20),
            nullable=True,
        ),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('deactivated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_index('ix_users_auth_id', 'users', ['auth_id'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_candidate_stage', 'users', ['candidate_stage'])
    op.create_index('ix_users_is_active', 'users', ['is_active'])


def downgrade() -> None:
    op.drop_index('ix_users_is_active', table_name='users')
    op.drop_index('ix_users_candidate_stage', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_auth_id', table_name='users')
    op.drop_table('users')
