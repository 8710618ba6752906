"""create attendance

Revision ID: 0003_create_attendance
Revises: 0002_create_events
Create Date: 2025-08-01 10:10:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0003_create_attendance'
down_revision: Union[str, Sequence[str], None] = '0002_create_events'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RSVP_STATUSES = ('GOING', 'MAYBE', 'NOT_GOING')
ATTENDANCE_STATUSES = ('PENDING', 'PRESENT', 'ABSENT', 'EXCUSED', 'LATE')


def upgrade() -> None:
    op.create_table(
        'attendance',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column(
            'rsvp_status',
            sa.Enum(*RSVP_STATUSES, name='rsvp_status', native_enum=False, create_constraint=True, length=20),
            nullable=True,
        ),
        sa.Column(
            'status',
            sa.Enum(
                *ATTENDANCE_STATUSES, name='attendance_status', native_enum=False, create_constraint=True, length=20
            ),
            nullable=False,
            server_default='PENDING',
        ),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_in_by', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['checked_in_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_attendance_event_user'),
    )

    op.create_index('ix_attendance_event_id', 'attendance', ['event_id'])
    op.create_index('ix_attendance_user_id', 'attendance', ['user_id'])
    op.create_index('ix_attendance_status', 'attendance', ['status'])
    op.create_index('ix_attendance_checked_in_by', 'attendance', ['checked_in_by'])


def downgrade() -> None:
    op.drop_index('ix_attendance_checked_in_by', table_name='attendance')
    op.drop_index('ix_attendance_status', table_name='attendance')
    op.drop_index('ix_attendance_user_id', table_name='attendance')
    op.drop_index('ix_attendance_event_id', table_name='attendance')
    op.drop_table('attendance')
