"""
services/events.py

리크루팅 이벤트(Event Catalog) 비즈니스 로직.

주요 기능:
- 이벤트 생성 / 수정 / 비활성화 (ADMIN 전용)
- 이벤트 조회 및 목록 (event_type / 기간 필터, start_time 오름차순)

설계 원칙:
- end_time 은 start_time 이후 (수정 시에도 최종 값 기준으로 재검증)
- 하드 삭제 없음, is_active=False 로만 숨김
- 비활성 이벤트는 ADMIN 이 아니면 존재하지 않는 것처럼 취급

"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from rush_bff.core.errors import NotFoundError, ValidationError
from rush_bff.db.time import as_utc
from rush_bff.models.event import Event, EventType
from rush_bff.models.user import User
from rush_bff.services.access import is_admin, require_admin

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "title",
    "description",
    "event_type",
    "start_time",
    "end_time",
    "location",
    "is_mandatory",
    "is_voting_event",
    "max_capacity",
}


def _validate_times(start_time: datetime, end_time: datetime | None) -> None:
    if end_time is not None and as_utc(end_time) < as_utc(start_time):
        raise ValidationError("end_time must not be before start_time", field="end_time")


def _validate_capacity(max_capacity: int | None) -> None:
    if max_capacity is not None and max_capacity < 1:
        raise ValidationError("max_capacity must be at least 1", field="max_capacity")


def create_event(
    db: Session,
    *,
    actor: User,
    title: str,
    event_type: EventType,
    start_time: datetime,
    end_time: datetime | None = None,
    description: str | None = None,
    location: str | None = None,
    is_mandatory: bool = False,
    is_voting_event: bool = False,
    max_capacity: int | None = None,
) -> Event:
    require_admin(actor, action="manage events")
    if not title or not title.strip():
        raise ValidationError("title is required", field="title")
    _validate_times(start_time, end_time)
    _validate_capacity(max_capacity)

    event = Event(
        title=title.strip(),
        description=description,
        event_type=event_type,
        start_time=as_utc(start_time),
        end_time=as_utc(end_time),
        location=location,
        is_mandatory=is_mandatory,
        is_voting_event=is_voting_event,
        max_capacity=max_capacity,
        created_by=actor.id,
        is_active=True,
    )
    db.add(event)
    db.flush()
    logger.info("Created event %s by %s", event.id, actor.id)
    return event


def _load_event(db: Session, event_id: uuid.UUID) -> Event:
    event = db.scalar(select(Event).where(Event.id == event_id))
    if not event:
        raise NotFoundError("Event not found", field="event_id")
    return event


"""
이벤트 단건 조회

- 비활성 이벤트는 ADMIN 에게만 보임
- 그 외에는 NotFoundError

"""
def get_event(db: Session, *, viewer: User, event_id: uuid.UUID) -> Event:
    event = _load_event(db, event_id)
    if not event.is_active and not is_admin(viewer):
        raise NotFoundError("Event not found", field="event_id")
    return event


# 다른 저장소에서 이벤트 참조 검증용 (활성 여부 무관)
def require_event(db: Session, event_id: uuid.UUID) -> Event:
    return _load_event(db, event_id)


"""
이벤트 수정

- changes 에 포함된 필드만 변경 (None 값도 명시적으로 반영)
- 변경 후 start/end 조합을 다시 검증

"""
def update_event(db: Session, *, actor: User, event_id: uuid.UUID, changes: dict) -> Event:
    require_admin(actor, action="manage events")
    event = _load_event(db, event_id)

    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown event fields: {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

    if "title" in changes and (not changes["title"] or not changes["title"].strip()):
        raise ValidationError("title is required", field="title")
    for required in ("start_time", "event_type", "is_mandatory", "is_voting_event"):
        if required in changes and changes[required] is None:
            raise ValidationError(f"{required} is required", field=required)

    start_time = changes.get("start_time", event.start_time)
    end_time = changes.get("end_time", event.end_time)
    _validate_times(start_time, end_time)
    if "max_capacity" in changes:
        _validate_capacity(changes["max_capacity"])

    for key, value in changes.items():
        if key in ("start_time", "end_time"):
            value = as_utc(value)
        setattr(event, key, value)

    db.flush()
    logger.info("Updated event %s by %s", event.id, actor.id)
    return event


def deactivate_event(db: Session, *, actor: User, event_id: uuid.UUID) -> Event:
    require_admin(actor, action="manage events")
    event = _load_event(db, event_id)
    event.is_active = False
    db.flush()
    logger.info("Deactivated event %s by %s", event.id, actor.id)
    return event


def list_events(
    db: Session,
    *,
    viewer: User,
    event_type: EventType | None = None,
    starts_after: datetime | None = None,
    starts_before: datetime | None = None,
    include_inactive: bool = False,
) -> list[Event]:
    query = select(Event)
    if event_type is not None:
        query = query.where(Event.event_type == event_type)
    if starts_after is not None:
        query = query.where(Event.start_time >= as_utc(starts_after))
    if starts_before is not None:
        query = query.where(Event.start_time <= as_utc(starts_before))
    # 비활성 이벤트 포함은 ADMIN 만
    if not (include_inactive and is_admin(viewer)):
        query = query.where(Event.is_active.is_(True))

    return list(db.scalars(query.order_by(Event.start_time.asc(), Event.created_at.asc())).all())
