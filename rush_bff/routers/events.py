"""
events.py

리크루팅 이벤트 API 모음.

주요 기능:
- 이벤트 생성 / 수정 / 비활성화 (ADMIN)
- 이벤트 목록 / 단건 조회 (로그인 사용자)

설계 원칙:
- 비즈니스 검증(end_time, 정원, 권한)은 service 계층(rush_bff.services.events)에 위임
- DELETE 는 Soft Delete (is_active=False)

"""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_admin, get_current_user, get_db
from rush_bff.models.event import EventType
from rush_bff.models.user import User
from rush_bff.schemas.event import EventCreateRequest, EventResponse, EventUpdateRequest
from rush_bff.services.events import create_event, deactivate_event, get_event, list_events, update_event

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create(
    body: EventCreateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    event = create_event(db, actor=admin, **body.model_dump())
    db.commit()
    db.refresh(event)
    return event


"""
이벤트 목록 조회 API

- event_type / 기간 필터
- start_time 오름차순
- include_inactive 는 ADMIN 에게만 적용

"""
@router.get("", response_model=list[EventResponse])
def list_all(
    event_type: EventType | None = Query(default=None),
    starts_after: datetime | None = Query(default=None),
    starts_before: datetime | None = Query(default=None),
    include_inactive: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_events(
        db,
        viewer=current_user,
        event_type=event_type,
        starts_after=starts_after,
        starts_before=starts_before,
        include_inactive=include_inactive,
    )


@router.get("/{event_id}", response_model=EventResponse)
def detail(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_event(db, viewer=current_user, event_id=event_id)


@router.patch("/{event_id}", response_model=EventResponse)
def update(
    event_id: uuid.UUID,
    body: EventUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    event = update_event(db, actor=admin, event_id=event_id, changes=body.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(event)
    return event


@router.delete("/{event_id}", response_model=EventResponse)
def deactivate(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    event = deactivate_event(db, actor=admin, event_id=event_id)
    db.commit()
    db.refresh(event)
    return event
