"""
services/interviews.py

후보자 인터뷰(Interview Store) 비즈니스 로직.

주요 기능:
- 인터뷰 기록 (ACTIVE / ADMIN → RUSHEE)
- 본인 인터뷰 수정
- 인터뷰 삭제 (ADMIN, 하드 삭제)
- 후보자별 / 면접관 본인 인터뷰 조회

설계 원칙:
- 질문/답변은 [{question, answer}, ...] 순서 그대로 저장
  챕터마다 질문이 달라서 두 필드 외의 구조는 강제하지 않음
- overall_rating 은 피드백과 같은 1~5 범위
- strengths / concerns 는 피드백 tags 와 같은 방식으로 정리

"""

import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from rush_bff.core.errors import AuthorizationError, NotFoundError, ValidationError
from rush_bff.db.time import as_utc, utcnow
from rush_bff.models.interview import Interview, Recommendation
from rush_bff.models.user import Role, User
from rush_bff.services.access import get_user_or_404, require_admin, require_candidate, require_min_role
from rush_bff.services.events import require_event
from rush_bff.services.feedback import normalize_tags, validate_rating

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "interview_date",
    "questions_and_answers",
    "notes",
    "overall_rating",
    "recommendation",
    "strengths",
    "concerns",
    "is_complete",
}


def normalize_qa(payload) -> list[dict]:
    if payload is None:
        return []
    if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
        raise ValidationError("questions_and_answers must be a list", field="questions_and_answers")

    pairs = []
    for item in payload:
        if not isinstance(item, Mapping):
            raise ValidationError("Each entry needs question and answer", field="questions_and_answers")
        question, answer = item.get("question"), item.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            raise ValidationError("question and answer must be text", field="questions_and_answers")
        pairs.append({"question": question, "answer": answer})
    return pairs


def get_interview(db: Session, interview_id: uuid.UUID) -> Interview:
    interview = db.scalar(select(Interview).where(Interview.id == interview_id))
    if not interview:
        raise NotFoundError("Interview not found", field="interview_id")
    return interview


def record_interview(
    db: Session,
    *,
    interviewer: User,
    candidate_id: uuid.UUID,
    questions_and_answers=None,
    notes: str | None = None,
    overall_rating: int | None = None,
    recommendation: Recommendation | None = None,
    strengths=None,
    concerns=None,
    is_complete: bool = True,
    interview_date: datetime | None = None,
    event_id: uuid.UUID | None = None,
) -> Interview:
    validate_rating(overall_rating, field="overall_rating")
    pairs = normalize_qa(questions_and_answers)
    require_min_role(interviewer, Role.ACTIVE, action="record interviews")
    require_candidate(db, candidate_id)
    if event_id is not None:
        require_event(db, event_id)

    interview = Interview(
        event_id=event_id,
        interviewer_id=interviewer.id,
        candidate_id=candidate_id,
        interview_date=as_utc(interview_date) if interview_date else utcnow(),
        questions_and_answers=pairs,
        notes=notes,
        overall_rating=overall_rating,
        recommendation=recommendation,
        strengths=normalize_tags(strengths),
        concerns=normalize_tags(concerns),
        is_complete=is_complete,
    )
    db.add(interview)
    db.flush()
    logger.info("Recorded interview %s by %s", interview.id, interviewer.id)
    return interview


def update_interview(db: Session, *, interviewer: User, interview_id: uuid.UUID, changes: dict) -> Interview:
    interview = get_interview(db, interview_id)
    if interview.interviewer_id != interviewer.id or not interviewer.is_active:
        raise AuthorizationError("Only the interviewer can edit this interview")

    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown interview fields: {', '.join(sorted(unknown))}", field=sorted(unknown)[0])
    if "overall_rating" in changes:
        validate_rating(changes["overall_rating"], field="overall_rating")
    if "is_complete" in changes and changes["is_complete"] is None:
        raise ValidationError("is_complete must be true or false", field="is_complete")

    for key, value in changes.items():
        if key == "questions_and_answers":
            value = normalize_qa(value)
        elif key in ("strengths", "concerns"):
            value = normalize_tags(value)
        elif key == "interview_date":
            if value is None:
                raise ValidationError("interview_date is required", field="interview_date")
            value = as_utc(value)
        setattr(interview, key, value)

    db.flush()
    logger.info("Updated interview %s by %s", interview.id, interviewer.id)
    return interview


def delete_interview(db: Session, *, actor: User, interview_id: uuid.UUID) -> None:
    require_admin(actor, action="delete interviews")
    interview = get_interview(db, interview_id)
    db.delete(interview)
    db.flush()
    logger.info("Deleted interview %s by %s", interview_id, actor.id)


def list_interviews_for_candidate(db: Session, *, viewer: User, candidate_id: uuid.UUID) -> list[Interview]:
    require_min_role(viewer, Role.ACTIVE, action="view interviews")
    get_user_or_404(db, candidate_id, field="candidate_id")
    return list(
        db.scalars(
            select(Interview)
            .where(Interview.candidate_id == candidate_id)
            .order_by(Interview.interview_date)
        ).all()
    )


def list_my_interviews(db: Session, *, interviewer: User) -> list[Interview]:
    return list(
        db.scalars(
            select(Interview)
            .where(Interview.interviewer_id == interviewer.id)
            .order_by(Interview.interview_date.desc())
        ).all()
    )
