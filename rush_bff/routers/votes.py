"""
votes.py

비밀 투표 API 모음.

주요 기능:
- 투표 라운드 열기 / 닫기 / 목록 (ADMIN, 목록은 ACTIVE 이상)
- 투표 (ACTIVE / ADMIN)
- 본인 투표 조회
- 집계 결과 조회 (ACTIVE / ADMIN, 투표자 정보 없음)
- 원본 투표 조회 (ADMIN, 익명 투표는 voter 마스킹)

설계 원칙:
- 투표 가능 여부 / 중복 처리 / 마스킹은 모두 service 계층(rush_bff.services.ballots)에서 결정
- 새 투표는 201, 기존 투표 수정은 200

"""

import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_active, get_current_admin, get_current_user, get_db
from rush_bff.models.user import User
from rush_bff.models.vote import RoundStatus
from rush_bff.schemas.vote import (
    BallotRequest,
    BallotResponse,
    CastBallotResponse,
    RawBallotResponse,
    RoundCreateRequest,
    RoundResponse,
    TallyResponse,
)
from rush_bff.services.ballots import (
    cast_ballot,
    close_round,
    get_ballots_for_voter,
    get_results,
    get_results_for_event,
    list_raw_ballots,
    list_rounds,
    open_round,
)

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/rounds", response_model=RoundResponse, status_code=status.HTTP_201_CREATED)
def create_round(
    body: RoundCreateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    voting_round = open_round(db, actor=admin, name=body.name, event_id=body.event_id)
    db.commit()
    db.refresh(voting_round)
    return voting_round


@router.get("/rounds", response_model=list[RoundResponse])
def rounds(
    round_status: RoundStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active),
):
    return list_rounds(db, viewer=current_user, status=round_status)


@router.post("/rounds/{round_id}/close", response_model=RoundResponse)
def close(
    round_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    voting_round = close_round(db, actor=admin, round_id=round_id)
    db.commit()
    db.refresh(voting_round)
    return voting_round


"""
투표 API

- 처음 투표하면 201, 열린 라운드에서 기존 투표를 수정하면 200
- 닫힌 라운드에서 기존 투표가 있으면 409 (already voted)

"""
@router.post("", response_model=CastBallotResponse)
def cast(
    body: BallotRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ballot, created = cast_ballot(
        db,
        voter=current_user,
        candidate_id=body.candidate_id,
        round_name=body.round,
        vote_type=body.vote_type,
        vote_value=body.vote_value,
        notes=body.notes,
        is_anonymous=body.is_anonymous,
        event_id=body.event_id,
    )
    db.commit()
    db.refresh(ballot)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return CastBallotResponse(created=created, ballot=BallotResponse.model_validate(ballot))


@router.get("/me", response_model=list[BallotResponse])
def my_ballots(
    round_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_ballots_for_voter(db, voter=current_user, round_id=round_id)


@router.get("/results", response_model=list[TallyResponse])
def results(
    event_id: uuid.UUID | None = Query(default=None),
    round_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_results(db, viewer=current_user, event_id=event_id, round_id=round_id)


@router.get("/events/{event_id}/results", response_model=list[TallyResponse])
def event_results(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_results_for_event(db, viewer=current_user, event_id=event_id)


@router.get("/raw", response_model=list[RawBallotResponse])
def raw_ballots(
    event_id: uuid.UUID | None = Query(default=None),
    round_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return list_raw_ballots(db, actor=admin, event_id=event_id, round_id=round_id)
