"""
services/ballots.py

비밀 투표(Ballot Store) 비즈니스 로직.

리크루팅 데이터 중 가장 민감한 영역으로,
중복 투표 방지와 투표자 노출 방지를 이 파일에서 책임진다.

주요 기능:
- 투표 라운드 열기 / 닫기 (ADMIN)
- 투표 (ACTIVE / ADMIN → RUSHEE)
- 본인 투표 조회
- 집계 결과 조회 (후보자 x 라운드 별 BID / NO_BID / ABSTAIN 건수, 평균 점수)
- 원본 투표 조회 (ADMIN, is_anonymous 이면 voter 마스킹)

설계 원칙:
- (voter, candidate, round) 조합마다 투표 1건 (DB UNIQUE)
- 라운드가 OPEN 이면 기존 투표를 그대로 수정, CLOSED 이면 ConflictError
- check-then-insert 는 savepoint 안에서 수행하고
  동시 요청으로 UNIQUE 제약이 걸리면 살아남은 행을 다시 읽어 같은 규칙 적용
- 집계 결과에는 투표자 식별 정보가 절대 포함되지 않음
- 투표 내용(type / value / notes)은 로그에 남기지 않음

관련 파일:
- rush_bff.models.vote   : Vote / VotingRound 모델
- rush_bff.routers.votes : 투표 API

"""

import logging
import uuid

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rush_bff.core.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from rush_bff.db.time import utcnow
from rush_bff.models.admin_log import AdminAction
from rush_bff.models.user import Role, User
from rush_bff.models.vote import RoundStatus, Vote, VoteType, VotingRound
from rush_bff.services.access import require_admin, require_candidate, require_min_role
from rush_bff.services.admin_log import write_admin_log
from rush_bff.services.events import require_event

logger = logging.getLogger(__name__)

VOTE_VALUE_MIN = 1
VOTE_VALUE_MAX = 10


def validate_vote_value(vote_value: int | None) -> None:
    if vote_value is None:
        return
    if not VOTE_VALUE_MIN <= vote_value <= VOTE_VALUE_MAX:
        raise ValidationError(
            f"vote_value must be between {VOTE_VALUE_MIN} and {VOTE_VALUE_MAX}",
            field="vote_value",
        )


# ------------------------------------------------------------------
# 라운드
# ------------------------------------------------------------------

def get_round(db: Session, round_id: uuid.UUID) -> VotingRound:
    voting_round = db.scalar(select(VotingRound).where(VotingRound.id == round_id))
    if not voting_round:
        raise NotFoundError("Voting round not found", field="round_id")
    return voting_round


def get_round_by_name(db: Session, name: str) -> VotingRound:
    voting_round = db.scalar(select(VotingRound).where(VotingRound.name == name.strip()))
    if not voting_round:
        raise NotFoundError("Voting round not found", field="round")
    return voting_round


def list_rounds(db: Session, *, viewer: User, status: RoundStatus | None = None) -> list[VotingRound]:
    require_min_role(viewer, Role.ACTIVE, action="view voting rounds")
    query = select(VotingRound)
    if status is not None:
        query = query.where(VotingRound.status == status)
    return list(db.scalars(query.order_by(VotingRound.created_at)).all())


"""
투표 라운드 열기

- ADMIN 전용
- 라운드 이름은 전역 유일 (중복 시 ConflictError)
- event_id 지정 시 해당 라운드 투표의 기본 event 로 사용

"""
def open_round(
    db: Session,
    *,
    actor: User,
    name: str,
    event_id: uuid.UUID | None = None,
) -> VotingRound:
    require_admin(actor, action="open voting rounds")

    name = (name or "").strip()
    if not name:
        raise ValidationError("Round name is required", field="name")
    if event_id is not None:
        require_event(db, event_id)

    if db.scalar(select(VotingRound.id).where(VotingRound.name == name)):
        raise ConflictError("Voting round with that name already exists", field="name")

    voting_round = VotingRound(
        name=name,
        event_id=event_id,
        status=RoundStatus.OPEN,
        opened_at=utcnow(),
        created_by=actor.id,
    )
    try:
        with db.begin_nested():
            db.add(voting_round)
            db.flush()
    except IntegrityError:
        raise ConflictError("Voting round with that name already exists", field="name")

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.OPEN_ROUND,
        after_value=RoundStatus.OPEN.value,
        subject_id=voting_round.id,
    )
    db.flush()
    logger.info("Opened voting round %s by %s", voting_round.id, actor.id)
    return voting_round


def close_round(db: Session, *, actor: User, round_id: uuid.UUID) -> VotingRound:
    require_admin(actor, action="close voting rounds")

    voting_round = get_round(db, round_id)
    if not voting_round.is_open:
        raise InvalidStateError("Voting round already closed", field="round_id")

    voting_round.status = RoundStatus.CLOSED
    voting_round.closed_at = utcnow()
    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.CLOSE_ROUND,
        before_value=RoundStatus.OPEN.value,
        after_value=RoundStatus.CLOSED.value,
        subject_id=voting_round.id,
    )
    db.flush()
    logger.info("Closed voting round %s by %s", voting_round.id, actor.id)
    return voting_round


# ------------------------------------------------------------------
# 투표
# ------------------------------------------------------------------

def _find_ballot(db: Session, *, voter_id, candidate_id, round_id) -> Vote | None:
    return db.scalar(
        select(Vote).where(
            Vote.voter_id == voter_id,
            Vote.candidate_id == candidate_id,
            Vote.round_id == round_id,
        )
    )


def _revise(
    db: Session,
    ballot: Vote,
    voting_round: VotingRound,
    *,
    vote_type: VoteType,
    vote_value: int | None,
    notes: str | None,
    is_anonymous: bool,
) -> Vote:
    if not voting_round.is_open:
        raise ConflictError("already voted", field="round")

    ballot.vote_type = vote_type
    ballot.vote_value = vote_value
    ballot.is_anonymous = is_anonymous
    if notes is not None:
        ballot.notes = notes
    db.flush()
    logger.info("Revised ballot %s in round %s", ballot.id, voting_round.id)
    return ballot


"""
투표하기

1) vote_value 범위 검증 (쓰기 전에)
2) 투표자 ACTIVE / ADMIN, 후보자 RUSHEE 검증
3) 기존 투표가 있으면
   - 라운드 OPEN   → 그대로 수정
   - 라운드 CLOSED → ConflictError("already voted")
4) 기존 투표가 없으면
   - 라운드 CLOSED → InvalidStateError
   - savepoint 안에서 INSERT
   - UNIQUE 충돌(동시 요청) → 먼저 들어간 행을 다시 읽어 3) 규칙 적용

반환: (ballot, created)

"""
def cast_ballot(
    db: Session,
    *,
    voter: User,
    candidate_id: uuid.UUID,
    round_name: str,
    vote_type: VoteType,
    vote_value: int | None = None,
    notes: str | None = None,
    is_anonymous: bool = True,
    event_id: uuid.UUID | None = None,
) -> tuple[Vote, bool]:
    validate_vote_value(vote_value)
    require_min_role(voter, Role.ACTIVE, action="cast ballots")
    require_candidate(db, candidate_id)

    voting_round = get_round_by_name(db, round_name)
    if event_id is not None:
        require_event(db, event_id)
    else:
        event_id = voting_round.event_id

    revision = dict(vote_type=vote_type, vote_value=vote_value, notes=notes, is_anonymous=is_anonymous)

    existing = _find_ballot(db, voter_id=voter.id, candidate_id=candidate_id, round_id=voting_round.id)
    if existing:
        return _revise(db, existing, voting_round, **revision), False

    if not voting_round.is_open:
        raise InvalidStateError("Voting round is closed", field="round")

    ballot = Vote(
        event_id=event_id,
        voter_id=voter.id,
        candidate_id=candidate_id,
        round_id=voting_round.id,
        **revision,
    )
    try:
        with db.begin_nested():
            db.add(ballot)
            db.flush()
    except IntegrityError:
        # 동시 요청이 먼저 INSERT 한 경우
        survivor = _find_ballot(db, voter_id=voter.id, candidate_id=candidate_id, round_id=voting_round.id)
        if survivor is None:
            raise ConflictError("already voted", field="round")
        return _revise(db, survivor, voting_round, **revision), False

    logger.info("Cast ballot %s in round %s", ballot.id, voting_round.id)
    return ballot, True


def get_ballots_for_voter(db: Session, *, voter: User, round_id: uuid.UUID | None = None) -> list[Vote]:
    query = select(Vote).where(Vote.voter_id == voter.id)
    if round_id is not None:
        query = query.where(Vote.round_id == round_id)
    return list(db.scalars(query.order_by(Vote.created_at)).all())


# ------------------------------------------------------------------
# 집계 / 원본 조회
# ------------------------------------------------------------------

def _count_of(vote_type: VoteType):
    return func.sum(case((Vote.vote_type == vote_type, 1), else_=0))


"""
집계 결과 조회

- ACTIVE / ADMIN 전용
- 후보자 x 라운드 별 건수와 평균 점수만 반환
- 투표자 필드는 is_anonymous 값과 무관하게 포함하지 않음

"""
def get_results(
    db: Session,
    *,
    viewer: User,
    event_id: uuid.UUID | None = None,
    round_id: uuid.UUID | None = None,
) -> list[dict]:
    require_min_role(viewer, Role.ACTIVE, action="view vote results")

    query = (
        select(
            Vote.candidate_id,
            Vote.round_id,
            VotingRound.name,
            _count_of(VoteType.BID),
            _count_of(VoteType.NO_BID),
            _count_of(VoteType.ABSTAIN),
            func.count(Vote.id),
            func.avg(Vote.vote_value),
        )
        .join(VotingRound, VotingRound.id == Vote.round_id)
        .group_by(Vote.candidate_id, Vote.round_id, VotingRound.name)
        .order_by(VotingRound.name, Vote.candidate_id)
    )
    if event_id is not None:
        query = query.where(Vote.event_id == event_id)
    if round_id is not None:
        query = query.where(Vote.round_id == round_id)

    results = []
    for candidate_id, rid, round_name, bid, no_bid, abstain, total, average in db.execute(query).all():
        bid, no_bid, abstain, total = int(bid or 0), int(no_bid or 0), int(abstain or 0), int(total or 0)
        results.append(
            {
                "candidate_id": candidate_id,
                "round_id": rid,
                "round_name": round_name,
                "bid": bid,
                "no_bid": no_bid,
                "abstain": abstain,
                "total": total,
                "bid_pct": round(bid * 100 / total, 2) if total else 0.0,
                "average_value": round(float(average), 2) if average is not None else None,
            }
        )
    return results


def get_results_for_event(db: Session, *, viewer: User, event_id: uuid.UUID) -> list[dict]:
    require_event(db, event_id)
    return get_results(db, viewer=viewer, event_id=event_id)


"""
원본 투표 조회

- ADMIN 전용
- is_anonymous=True 인 투표는 voter_id 를 None 으로 마스킹
- notes 는 투표자 본인 전용이므로 포함하지 않음

"""
def list_raw_ballots(
    db: Session,
    *,
    actor: User,
    event_id: uuid.UUID | None = None,
    round_id: uuid.UUID | None = None,
) -> list[dict]:
    require_admin(actor, action="view raw ballots")

    query = select(Vote)
    if event_id is not None:
        query = query.where(Vote.event_id == event_id)
    if round_id is not None:
        query = query.where(Vote.round_id == round_id)

    return [
        {
            "id": ballot.id,
            "round_id": ballot.round_id,
            "event_id": ballot.event_id,
            "candidate_id": ballot.candidate_id,
            "voter_id": None if ballot.is_anonymous else ballot.voter_id,
            "vote_type": ballot.vote_type,
            "vote_value": ballot.vote_value,
            "is_anonymous": ballot.is_anonymous,
            "created_at": ballot.created_at,
        }
        for ballot in db.scalars(query.order_by(Vote.created_at)).all()
    ]
