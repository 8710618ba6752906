"""
services/feedback.py

후보자 피드백(Feedback Store) 비즈니스 로직.

주요 기능:
- 피드백 작성 (PLEDGE / ACTIVE / ADMIN → RUSHEE)
- 본인 피드백 수정
- 후보자별 피드백 조회 / 요약 (열람 권한 단계 적용)

열람 규칙:
- ADMIN          : 전체
- ACTIVE         : 비공개(is_private) 가 아닌 것 + 본인 작성분
- PLEDGE / RUSHEE: 본인 작성분만
- is_anonymous 피드백은 작성자 본인 외에는 author_id 를 가림 (ADMIN 포함)

설계 원칙:
- 같은 작성자/후보자 조합의 중복 작성 허용 (시즌 중 반복 피드백)
- rating 범위 검증은 DB 쓰기 전에 수행

"""

import logging
import uuid
from typing import Iterable

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from rush_bff.core.errors import AuthorizationError, NotFoundError, ValidationError
from rush_bff.models.feedback import Feedback
from rush_bff.models.user import Role, User
from rush_bff.services.access import get_user_or_404, require_candidate, require_min_role
from rush_bff.services.events import require_event

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"rating", "comment", "tags", "is_anonymous", "is_private"}


def validate_rating(rating: int | None, *, field: str = "rating") -> None:
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError(f"{field} must be between 1 and 5", field=field)


# 태그 정리: 앞뒤 공백 제거, 빈 값 제거, 순서 유지 중복 제거
def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    seen = []
    for tag in tags or ():
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def submit_feedback(
    db: Session,
    *,
    author: User,
    candidate_id: uuid.UUID,
    rating: int | None = None,
    comment: str | None = None,
    tags: Iterable[str] | None = None,
    is_anonymous: bool = False,
    is_private: bool = False,
    event_id: uuid.UUID | None = None,
) -> Feedback:
    validate_rating(rating)
    require_min_role(author, Role.PLEDGE, action="submit feedback")
    require_candidate(db, candidate_id)
    if event_id is not None:
        require_event(db, event_id)

    entry = Feedback(
        event_id=event_id,
        author_id=author.id,
        candidate_id=candidate_id,
        rating=rating,
        comment=comment,
        tags=normalize_tags(tags),
        is_anonymous=is_anonymous,
        is_private=is_private,
    )
    db.add(entry)
    db.flush()
    logger.info("Submitted feedback %s by %s", entry.id, author.id)
    return entry


def update_feedback(db: Session, *, author: User, feedback_id: uuid.UUID, changes: dict) -> Feedback:
    entry = db.scalar(select(Feedback).where(Feedback.id == feedback_id))
    if not entry:
        raise NotFoundError("Feedback not found", field="feedback_id")
    if entry.author_id != author.id or not author.is_active:
        raise AuthorizationError("Only the author can edit feedback")

    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown feedback fields: {', '.join(sorted(unknown))}", field=sorted(unknown)[0])
    if "rating" in changes:
        validate_rating(changes["rating"])
    for flag in ("is_anonymous", "is_private"):
        if flag in changes and changes[flag] is None:
            raise ValidationError(f"{flag} must be true or false", field=flag)

    for key, value in changes.items():
        if key == "tags":
            value = normalize_tags(value)
        setattr(entry, key, value)

    db.flush()
    logger.info("Updated feedback %s by %s", entry.id, author.id)
    return entry


def _visible_query(viewer: User, candidate_id: uuid.UUID):
    query = select(Feedback).where(Feedback.candidate_id == candidate_id)
    if viewer.role == Role.ADMIN:
        return query
    if viewer.role == Role.ACTIVE:
        return query.where(or_(Feedback.is_private.is_(False), Feedback.author_id == viewer.id))
    return query.where(Feedback.author_id == viewer.id)


def project_feedback(entry: Feedback, viewer: User) -> dict:
    masked = entry.is_anonymous and entry.author_id != viewer.id
    return {
        "id": entry.id,
        "event_id": entry.event_id,
        "candidate_id": entry.candidate_id,
        "author_id": None if masked else entry.author_id,
        "rating": entry.rating,
        "comment": entry.comment,
        "tags": list(entry.tags or []),
        "is_anonymous": entry.is_anonymous,
        "is_private": entry.is_private,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
    }


def list_feedback_for_candidate(db: Session, *, viewer: User, candidate_id: uuid.UUID) -> list[dict]:
    require_min_role(viewer, Role.RUSHEE, action="view feedback")
    get_user_or_404(db, candidate_id, field="candidate_id")

    entries = db.scalars(_visible_query(viewer, candidate_id).order_by(Feedback.created_at)).all()
    return [project_feedback(entry, viewer) for entry in entries]


def feedback_summary(db: Session, *, viewer: User, candidate_id: uuid.UUID) -> dict:
    entries = list_feedback_for_candidate(db, viewer=viewer, candidate_id=candidate_id)
    ratings = [e["rating"] for e in entries if e["rating"] is not None]
    return {
        "candidate_id": candidate_id,
        "count": len(entries),
        "rated_count": len(ratings),
        "average_rating": round(sum(ratings) / len(ratings), 2) if ratings else None,
    }
