"""create interviews

Revision ID: 0007_create_interviews
Revises: 0006_create_dues_payments
Create Date: 2025-08-01 10:30:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0007_create_interviews'
down_revision: Union[str, Sequence[str], None] = '0006_create_dues_payments'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RECOMMENDATIONS = ('STRONG_BID', 'BID', 'NEUTRAL', 'NO_BID', 'STRONG_NO_BID')


def upgrade() -> None:
    op.create_table(
        'interviews',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=True),
        sa.Column('interviewer_id', sa.Uuid(), nullable=False),
        sa.Column('candidate_id', sa.Uuid(), nullable=False),
        sa.Column('interview_date', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('questions_and_answers', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('overall_rating', sa.Integer(), nullable=True),
        sa.Column(
            'recommendation',
            sa.Enum(*RECOMMENDATIONS, name='recommendation', native_enum=False, create_constraint=True, length=20),
            nullable=True,
        ),
        sa.Column('strengths', sa.JSON(), nullable=False),
        sa.Column('concerns', sa.JSON(), nullable=False),
        sa.Column('is_complete', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['interviewer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['candidate_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'overall_rating IS NULL OR (overall_rating >= 1 AND overall_rating <= 5)',
            name='ck_interviews_overall_rating',
        ),
    )

    op.create_index('ix_interviews_event_id', 'interviews', ['event_id'])
    op.create_index('ix_interviews_interviewer_id', 'interviews', ['interviewer_id'])
    op.create_index('ix_interviews_candidate_id', 'interviews', ['candidate_id'])
    op.create_index('ix_interviews_interview_date', 'interviews', ['interview_date'])
    op.create_index('ix_interviews_overall_rating', 'interviews', ['overall_rating'])
    op.create_index('ix_interviews_recommendation', 'interviews', ['recommendation'])


def downgrade() -> None:
    op.drop_index('ix_interviews_recommendation', table_name='interviews')
    op.drop_index('ix_interviews_overall_rating', table_name='interviews')
    op.drop_index('ix_interviews_interview_date', table_name='interviews')
    op.drop_index('ix_interviews_candidate_id', table_name='interviews')
    op.drop_index('ix_interviews_interviewer_id', table_name='interviews')
    op.drop_index('ix_interviews_event_id', table_name='interviews')
    op.drop_table('interviews')
