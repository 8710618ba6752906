"""create feedback

Revision ID: 0005_create_feedback
Revises: 0004_create_votes
Create Date: 2025-08-01 10:20:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0005_create_feedback'
down_revision: Union[str, Sequence[str], None] = '0004_create_votes'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'feedback',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=True),
        sa.Column('author_id', sa.Uuid(), nullable=False),
        sa.Column('candidate_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_private', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['candidate_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_feedback_rating'),
    )

    op.create_index('ix_feedback_event_id', 'feedback', ['event_id'])
    op.create_index('ix_feedback_author_id', 'feedback', ['author_id'])
    op.create_index('ix_feedback_candidate_id', 'feedback', ['candidate_id'])
    op.create_index('ix_feedback_rating', 'feedback', ['rating'])


def downgrade() -> None:
    op.drop_index('ix_feedback_rating', table_name='feedback')
    op.drop_index('ix_feedback_candidate_id', table_name='feedback')
    op.drop_index('ix_feedback_author_id', table_name='feedback')
    op.drop_index('ix_feedback_event_id', table_name='feedback')
    op.drop_table('feedback')
