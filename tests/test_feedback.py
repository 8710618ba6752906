"""

후보자 피드백(Feedback Store) 서비스 테스트.
- rating 범위는 쓰기 전에 검증
- 역할별 열람 범위 (ADMIN 전체 / ACTIVE 비공개 제외 / PLEDGE 본인만)
- 익명 피드백의 작성자 마스킹, 작성자 본인만 수정 가능

"""

import pytest
from sqlalchemy import func, select

from rush_bff.core.errors import AuthorizationError, ValidationError
from rush_bff.models.feedback import Feedback
from rush_bff.models.user import Role
from rush_bff.services.feedback import (
    feedback_summary,
    list_feedback_for_candidate,
    normalize_tags,
    submit_feedback,
    update_feedback,
)
from tests.helpers import make_user


def _count(db):
    return db.scalar(select(func.count()).select_from(Feedback))


def test_rating_out_of_range_is_rejected_before_write(db):
    author = make_user(db, role=Role.ACTIVE)
    candidate = make_user(db, role=Role.RUSHEE)

    with pytest.raises(ValidationError) as exc:
        submit_feedback(db, author=author, candidate_id=candidate.id, rating=7)
    assert exc.value.field == "rating"
    assert _count(db) == 0


def test_rushee_cannot_submit_feedback(db):
    rushee = make_user(db, role=Role.RUSHEE)
    candidate = make_user(db, role=Role.RUSHEE)

    with pytest.raises(AuthorizationError):
        submit_feedback(db, author=rushee, candidate_id=candidate.id, rating=3)


def test_feedback_about_non_rushee_is_rejected(db):
    author = make_user(db, role=Role.PLEDGE)
    member = make_user(db, role=Role.ACTIVE)

    with pytest.raises(AuthorizationError):
        submit_feedback(db, author=author, candidate_id=member.id, rating=3)


def test_normalize_tags():
    assert normalize_tags([" leader ", "", "funny", "leader"]) == ["leader", "funny"]
    assert normalize_tags(None) == []


def test_visibility_by_role(db):
    admin = make_user(db, role=Role.ADMIN)
    active = make_user(db, role=Role.ACTIVE)
    other_active = make_user(db, role=Role.ACTIVE)
    pledge = make_user(db, role=Role.PLEDGE)
    candidate = make_user(db, role=Role.RUSHEE)

    public = submit_feedback(db, author=other_active, candidate_id=candidate.id, rating=4)
    private = submit_feedback(db, author=other_active, candidate_id=candidate.id, rating=2, is_private=True)
    mine = submit_feedback(db, author=pledge, candidate_id=candidate.id, rating=5, is_private=True)
    db.commit()

    def ids(viewer):
        return {e["id"] for e in list_feedback_for_candidate(db, viewer=viewer, candidate_id=candidate.id)}

    assert ids(admin) == {public.id, private.id, mine.id}
    assert ids(active) == {public.id}
    assert ids(other_active) == {public.id, private.id}
    assert ids(pledge) == {mine.id}


def test_anonymous_author_masked_except_for_author(db):
    admin = make_user(db, role=Role.ADMIN)
    author = make_user(db, role=Role.ACTIVE)
    candidate = make_user(db, role=Role.RUSHEE)

    submit_feedback(db, author=author, candidate_id=candidate.id, rating=4, is_anonymous=True)
    db.commit()

    [seen_by_admin] = list_feedback_for_candidate(db, viewer=admin, candidate_id=candidate.id)
    [seen_by_author] = list_feedback_for_candidate(db, viewer=author, candidate_id=candidate.id)

    assert seen_by_admin["author_id"] is None
    assert seen_by_author["author_id"] == author.id


def test_only_author_can_update(db):
    author = make_user(db, role=Role.ACTIVE)
    other = make_user(db, role=Role.ADMIN)
    candidate = make_user(db, role=Role.RUSHEE)
    entry = submit_feedback(db, author=author, candidate_id=candidate.id, rating=3, tags=["calm"])
    db.commit()

    with pytest.raises(AuthorizationError):
        update_feedback(db, author=other, feedback_id=entry.id, changes={"rating": 4})

    with pytest.raises(ValidationError):
        update_feedback(db, author=author, feedback_id=entry.id, changes={"rating": 0})
    with pytest.raises(ValidationError):
        update_feedback(db, author=author, feedback_id=entry.id, changes={"candidate_id": other.id})
    with pytest.raises(ValidationError):
        update_feedback(db, author=author, feedback_id=entry.id, changes={"is_private": None})

    updated = update_feedback(
        db, author=author, feedback_id=entry.id, changes={"rating": None, "tags": ["calm", " sharp "]}
    )
    db.commit()
    assert updated.rating is None
    assert updated.tags == ["calm", "sharp"]


def test_summary_averages_visible_ratings(db):
    admin = make_user(db, role=Role.ADMIN)
    author = make_user(db, role=Role.ACTIVE)
    candidate = make_user(db, role=Role.RUSHEE)

    submit_feedback(db, author=author, candidate_id=candidate.id, rating=4)
    submit_feedback(db, author=author, candidate_id=candidate.id, rating=5)
    submit_feedback(db, author=author, candidate_id=candidate.id, comment="no rating")
    db.commit()

    summary = feedback_summary(db, viewer=admin, candidate_id=candidate.id)
    assert summary == {
        "candidate_id": candidate.id,
        "count": 3,
        "rated_count": 2,
        "average_rating": 4.5,
    }
