"""
services/stages.py

후보자(RUSHEE) 진행 단계 전이 표.

INITIAL → FIRST_ROUND → SECOND_ROUND → THIRD_ROUND → BID_EXTENDED
BID_EXTENDED → BID_ACCEPTED | BID_DECLINED
라운드 단계에서는 조기 BID_EXTENDED 허용
종료되지 않은 모든 단계에서 NO_BID / DROPPED 로 이동 가능

종료 단계(BID_ACCEPTED, BID_DECLINED, NO_BID, DROPPED)에서는 이동 불가.
전이 규칙을 강제할지는 settings.ENFORCE_STAGE_TRANSITIONS 로 결정한다.

"""

from rush_bff.models.user import CandidateStage as S


TERMINAL_STAGES = frozenset({S.BID_ACCEPTED, S.BID_DECLINED, S.NO_BID, S.DROPPED})

_EXITS = {S.NO_BID, S.DROPPED}

STAGE_TRANSITIONS: dict[S, frozenset[S]] = {
    S.INITIAL: frozenset({S.FIRST_ROUND} | _EXITS),
    S.FIRST_ROUND: frozenset({S.SECOND_ROUND, S.BID_EXTENDED} | _EXITS),
    S.SECOND_ROUND: frozenset({S.THIRD_ROUND, S.BID_EXTENDED} | _EXITS),
    S.THIRD_ROUND: frozenset({S.BID_EXTENDED} | _EXITS),
    S.BID_EXTENDED: frozenset({S.BID_ACCEPTED, S.BID_DECLINED, S.DROPPED}),
    S.BID_ACCEPTED: frozenset(),
    S.BID_DECLINED: frozenset(),
    S.NO_BID: frozenset(),
    S.DROPPED: frozenset(),
}


def is_terminal(stage: S | None) -> bool:
    return stage in TERMINAL_STAGES


def can_transition(current: S | None, target: S) -> bool:
    # 단계가 없던 사용자는 INITIAL부터 시작
    if current is None:
        return target == S.INITIAL
    return target in STAGE_TRANSITIONS[current]
