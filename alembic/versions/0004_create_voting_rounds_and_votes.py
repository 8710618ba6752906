"""create voting rounds and votes

Revision ID: 0004_create_votes
Revises: 0003_create_attendance
Create Date: 2025-08-01 10:15:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0004_create_votes'
down_revision: Union[str, Sequence[str], None] = '0003_create_attendance'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROUND_STATUSES = ('OPEN', 'CLOSED')
VOTE_TYPES = ('BID', 'NO_BID', 'ABSTAIN')


def upgrade() -> None:
    op.create_table(
        'voting_rounds',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=True),
        sa.Column(
            'status',
            sa.Enum(*ROUND_STATUSES, name='round_status', native_enum=False, create_constraint=True, length=10),
            nullable=False,
            server_default='OPEN',
        ),
        sa.Column('opened_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_voting_rounds_name'),
    )
    op.create_index('ix_voting_rounds_event_id', 'voting_rounds', ['event_id'])

    op.create_table(
        'votes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=True),
        sa.Column('voter_id', sa.Uuid(), nullable=False),
        sa.Column('candidate_id', sa.Uuid(), nullable=False),
        sa.Column('round_id', sa.Uuid(), nullable=False),
        sa.Column(
            'vote_type',
            sa.Enum(*VOTE_TYPES, name='vote_type', native_enum=False, create_constraint=True, length=10),
            nullable=False,
        ),
        sa.Column('vote_value', sa.Integer(), nullable=True),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['voter_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['candidate_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['round_id'], ['voting_rounds.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('voter_id', 'candidate_id', 'round_id', name='uq_votes_voter_candidate_round'),
        sa.CheckConstraint(
            'vote_value IS NULL OR (vote_value >= 1 AND vote_value <= 10)', name='ck_votes_vote_value'
        ),
    )

    op.create_index('ix_votes_event_id', 'votes', ['event_id'])
    op.create_index('ix_votes_voter_id', 'votes', ['voter_id'])
    op.create_index('ix_votes_candidate_id', 'votes', ['candidate_id'])
    op.create_index('ix_votes_round_id', 'votes', ['round_id'])
    op.create_index('ix_votes_vote_type', 'votes', ['vote_type'])


def downgrade() -> None:
    op.drop_index('ix_votes_vote_type', table_name='votes')
    op.drop_index('ix_votes_round_id', table_name='votes')
    op.drop_index('ix_votes_candidate_id', table_name='votes')
    op.drop_index('ix_votes_voter_id', table_name='votes')
    op.drop_index('ix_votes_event_id', table_name='votes')
    op.drop_table('votes')
    op.drop_index('ix_voting_rounds_event_id', table_name='voting_rounds')
    op.drop_table('voting_rounds')
