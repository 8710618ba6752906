"""create events

Revision ID: 0002_create_events
Revises: 0001_create_users
Create Date: 2025-08-01 10:05:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002_create_events'
down_revision: Union[str, Sequence[str], None] = '0001_create_users'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EVENT_TYPES = ('DINNER', 'SMOKER', 'INTERVIEW', 'SOCIAL', 'MEETING', 'OTHER')


def upgrade() -> None:
    op.create_table(
        'events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'event_type',
            sa.Enum(*EVENT_TYPES, name='event_type', native_enum=False, create_constraint=True, length=20),
            nullable=False,
        ),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('is_mandatory', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_voting_event', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('max_capacity', sa.Integer(), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('end_time IS NULL OR end_time >= start_time', name='ck_events_end_after_start'),
        sa.CheckConstraint('max_capacity IS NULL OR max_capacity >= 1', name='ck_events_max_capacity'),
    )

    op.create_index('ix_events_event_type', 'events', ['event_type'])
    op.create_index('ix_events_start_time', 'events', ['start_time'])
    op.create_index('ix_events_created_by', 'events', ['created_by'])
    op.create_index('ix_events_is_active', 'events', ['is_active'])


def downgrade() -> None:
    op.drop_index('ix_events_is_active', table_name='events')
    op.drop_index('ix_events_created_by', table_name='events')
    op.drop_index('ix_events_start_time', table_name='events')
    op.drop_index('ix_events_event_type', table_name='events')
    op.drop_table('events')
