# tests/helpers.py
import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt
from sqlalchemy.orm import Session

from rush_bff.core.config import settings
from rush_bff.models.event import Event, EventType
from rush_bff.models.user import CandidateStage, Role, User


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def make_token(sub: str, *, email: str | None = None, expires_in: int = 3600, audience: str | None = None) -> str:
    """외부 인증 서비스가 발급하는 access token 흉내"""
    claims = {
        "sub": sub,
        "aud": audience or settings.AUTH_JWT_AUDIENCE,
        "exp": int((datetime.now(timezone.utc) + timedelta(seconds=expires_in)).timestamp()),
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def headers_for(user: User) -> dict:
    return auth_header(make_token(user.auth_id, email=user.email))


def make_user(
    db: Session,
    *,
    role: Role = Role.ACTIVE,
    email: str | None = None,
    full_name: str | None = None,
    stage: CandidateStage | None = None,
    is_active: bool = True,
) -> User:
    suffix = uuid.uuid4().hex[:8]
    if stage is None and role == Role.RUSHEE:
        stage = CandidateStage.INITIAL
    user = User(
        auth_id=f"auth-{suffix}",
        email=email or f"{role.value.lower()}_{suffix}@test.com",
        full_name=full_name or f"{role.value.title()} {suffix}",
        role=role,
        candidate_stage=stage,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_event(
    db: Session,
    *,
    creator: User | None = None,
    title: str = "Fall Smoker",
    event_type: EventType = EventType.SMOKER,
    start_time: datetime | None = None,
    max_capacity: int | None = None,
    is_active: bool = True,
) -> Event:
    start_time = start_time or datetime(2025, 9, 1, 18, 0, tzinfo=timezone.utc)
    event = Event(
        title=title,
        event_type=event_type,
        start_time=start_time,
        end_time=start_time + timedelta(hours=2),
        max_capacity=max_capacity,
        created_by=creator.id if creator else None,
        is_active=is_active,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event
