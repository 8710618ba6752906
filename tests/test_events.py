"""

이벤트(Event Catalog) 서비스 테스트.
- 생성 / 수정 시 시간 검증, ADMIN 전용 쓰기,
  비활성 이벤트 숨김, 목록 필터 / 정렬을 확인한다.

"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from rush_bff.core.errors import AuthorizationError, NotFoundError, ValidationError
from rush_bff.db.time import as_utc
from rush_bff.models.event import EventType
from rush_bff.models.user import Role
from rush_bff.services.events import create_event, deactivate_event, get_event, list_events, update_event
from tests.helpers import make_user

START = datetime(2025, 9, 1, 18, 0, tzinfo=timezone.utc)


def test_create_event_by_admin(db):
    admin = make_user(db, role=Role.ADMIN)

    event = create_event(
        db,
        actor=admin,
        title="  Meet the Chapter ",
        event_type=EventType.SOCIAL,
        start_time=START,
        end_time=START + timedelta(hours=3),
        location="House",
        is_voting_event=True,
    )
    db.commit()

    assert event.title == "Meet the Chapter"
    assert event.created_by == admin.id
    assert event.is_active is True
    assert event.is_voting_event is True


def test_create_event_rejects_end_before_start(db):
    admin = make_user(db, role=Role.ADMIN)

    with pytest.raises(ValidationError) as exc:
        create_event(
            db,
            actor=admin,
            title="Backwards",
            event_type=EventType.DINNER,
            start_time=START,
            end_time=START - timedelta(minutes=1),
        )
    assert exc.value.field == "end_time"


def test_create_event_requires_admin(db):
    active = make_user(db, role=Role.ACTIVE)

    with pytest.raises(AuthorizationError):
        create_event(db, actor=active, title="Nope", event_type=EventType.OTHER, start_time=START)


def test_update_event_revalidates_times(db):
    admin = make_user(db, role=Role.ADMIN)
    event = create_event(
        db,
        actor=admin,
        title="Smoker",
        event_type=EventType.SMOKER,
        start_time=START,
        end_time=START + timedelta(hours=2),
    )
    db.commit()

    # start 만 end 뒤로 옮기면 거절
    with pytest.raises(ValidationError):
        update_event(db, actor=admin, event_id=event.id, changes={"start_time": START + timedelta(hours=5)})

    # end 를 함께 옮기면 허용
    update_event(
        db,
        actor=admin,
        event_id=event.id,
        changes={"start_time": START + timedelta(hours=5), "end_time": START + timedelta(hours=6)},
    )
    db.commit()
    db.refresh(event)
    assert as_utc(event.end_time) == START + timedelta(hours=6)

    # end_time 은 명시적으로 비울 수 있음
    update_event(db, actor=admin, event_id=event.id, changes={"end_time": None})
    assert event.end_time is None


def test_update_event_rejects_unknown_and_required_fields(db):
    admin = make_user(db, role=Role.ADMIN)
    event = create_event(db, actor=admin, title="Dinner", event_type=EventType.DINNER, start_time=START)

    with pytest.raises(ValidationError):
        update_event(db, actor=admin, event_id=event.id, changes={"created_by": None})
    with pytest.raises(ValidationError):
        update_event(db, actor=admin, event_id=event.id, changes={"start_time": None})
    with pytest.raises(ValidationError):
        update_event(db, actor=admin, event_id=event.id, changes={"max_capacity": 0})


def test_inactive_event_hidden_from_non_admins(db):
    admin = make_user(db, role=Role.ADMIN)
    rushee = make_user(db, role=Role.RUSHEE)
    event = create_event(db, actor=admin, title="Cancelled", event_type=EventType.OTHER, start_time=START)
    deactivate_event(db, actor=admin, event_id=event.id)
    db.commit()

    with pytest.raises(NotFoundError):
        get_event(db, viewer=rushee, event_id=event.id)
    assert get_event(db, viewer=admin, event_id=event.id).id == event.id

    assert list_events(db, viewer=rushee, include_inactive=True) == []
    assert [e.id for e in list_events(db, viewer=admin, include_inactive=True)] == [event.id]


def test_list_events_orders_by_start_and_filters(db):
    admin = make_user(db, role=Role.ADMIN)
    later = create_event(
        db, actor=admin, title="Later", event_type=EventType.DINNER, start_time=START + timedelta(days=2)
    )
    earlier = create_event(db, actor=admin, title="Earlier", event_type=EventType.SMOKER, start_time=START)
    db.commit()

    assert [e.id for e in list_events(db, viewer=admin)] == [earlier.id, later.id]
    assert [e.id for e in list_events(db, viewer=admin, event_type=EventType.DINNER)] == [later.id]
    assert [e.id for e in list_events(db, viewer=admin, starts_after=START + timedelta(days=1))] == [later.id]
    assert [e.id for e in list_events(db, viewer=admin, starts_before=START)] == [earlier.id]


def test_get_missing_event(db):
    admin = make_user(db, role=Role.ADMIN)

    with pytest.raises(NotFoundError):
        get_event(db, viewer=admin, event_id=uuid.uuid4())
