"""

후보자 단계 전이 표 테스트.

"""

import pytest

from rush_bff.models.user import CandidateStage as S
from rush_bff.services.stages import STAGE_TRANSITIONS, TERMINAL_STAGES, can_transition, is_terminal


@pytest.mark.parametrize(
    "current,target",
    [
        (None, S.INITIAL),
        (S.INITIAL, S.FIRST_ROUND),
        (S.FIRST_ROUND, S.SECOND_ROUND),
        (S.SECOND_ROUND, S.THIRD_ROUND),
        (S.THIRD_ROUND, S.BID_EXTENDED),
        (S.FIRST_ROUND, S.BID_EXTENDED),
        (S.BID_EXTENDED, S.BID_ACCEPTED),
        (S.BID_EXTENDED, S.BID_DECLINED),
        (S.SECOND_ROUND, S.NO_BID),
        (S.INITIAL, S.DROPPED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        (None, S.FIRST_ROUND),
        (S.INITIAL, S.SECOND_ROUND),
        (S.INITIAL, S.BID_EXTENDED),
        (S.THIRD_ROUND, S.FIRST_ROUND),
        (S.BID_EXTENDED, S.NO_BID),
        (S.BID_ACCEPTED, S.DROPPED),
        (S.NO_BID, S.INITIAL),
    ],
)
def test_rejected_transitions(current, target):
    assert not can_transition(current, target)


def test_terminal_stages_have_no_exits():
    for stage in TERMINAL_STAGES:
        assert is_terminal(stage)
        assert STAGE_TRANSITIONS[stage] == frozenset()

    assert not is_terminal(None)
    assert not is_terminal(S.BID_EXTENDED)


def test_every_stage_is_in_table():
    assert set(STAGE_TRANSITIONS) == set(S)
