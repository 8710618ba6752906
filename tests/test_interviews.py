"""

후보자 인터뷰(Interview Store) 서비스 테스트.
- 면접관은 ACTIVE 이상 (PLEDGE 는 AuthorizationError)
- 질문/답변 구조 검증, 본인 인터뷰만 수정, 삭제는 ADMIN 전용

"""

import pytest
from sqlalchemy import func, select

from rush_bff.core.errors import AuthorizationError, NotFoundError, ValidationError
from rush_bff.models.interview import Interview, Recommendation
from rush_bff.models.user import Role
from rush_bff.services.interviews import (
    delete_interview,
    get_interview,
    list_interviews_for_candidate,
    list_my_interviews,
    normalize_qa,
    record_interview,
    update_interview,
)
from tests.helpers import make_user

QA = [
    {"question": "Why this chapter?", "answer": "The people."},
    {"question": "Hobbies?", "answer": "Climbing"},
]


def _count(db):
    return db.scalar(select(func.count()).select_from(Interview))


def test_pledge_cannot_record_interview(db):
    pledge = make_user(db, role=Role.PLEDGE)
    candidate = make_user(db, role=Role.RUSHEE)

    with pytest.raises(AuthorizationError):
        record_interview(db, interviewer=pledge, candidate_id=candidate.id, questions_and_answers=QA)
    assert _count(db) == 0


def test_record_interview_keeps_qa_order(db):
    interviewer = make_user(db, role=Role.ACTIVE)
    candidate = make_user(db, role=Role.RUSHEE)

    interview = record_interview(
        db,
        interviewer=interviewer,
        candidate_id=candidate.id,
        questions_and_answers=QA,
        overall_rating=4,
        recommendation=Recommendation.BID,
        strengths=["honest", " honest ", "driven"],
    )
    db.commit()
    db.refresh(interview)

    assert [pair["question"] for pair in interview.questions_and_answers] == ["Why this chapter?", "Hobbies?"]
    assert interview.strengths == ["honest", "driven"]
    assert interview.concerns == []
    assert interview.is_complete is True
    assert interview.interview_date is not None


@pytest.mark.parametrize(
    "payload",
    [
        "not a list",
        [{"question": "Only a question"}],
        [{"question": 1, "answer": "x"}],
        ["plain string"],
    ],
)
def test_normalize_qa_rejects_malformed(payload):
    with pytest.raises(ValidationError):
        normalize_qa(payload)


def test_rating_validated_before_role(db):
    pledge = make_user(db, role=Role.PLEDGE)
    candidate = make_user(db, role=Role.RUSHEE)

    with pytest.raises(ValidationError):
        record_interview(db, interviewer=pledge, candidate_id=candidate.id, overall_rating=6)


def test_only_interviewer_can_update(db):
    interviewer = make_user(db, role=Role.ACTIVE)
    other = make_user(db, role=Role.ACTIVE)
    candidate = make_user(db, role=Role.RUSHEE)
    interview = record_interview(db, interviewer=interviewer, candidate_id=candidate.id, is_complete=False)
    db.commit()

    with pytest.raises(AuthorizationError):
        update_interview(db, interviewer=other, interview_id=interview.id, changes={"notes": "mine now"})
    with pytest.raises(ValidationError):
        update_interview(db, interviewer=interviewer, interview_id=interview.id, changes={"is_complete": None})

    updated = update_interview(
        db,
        interviewer=interviewer,
        interview_id=interview.id,
        changes={"is_complete": True, "concerns": ["late"], "questions_and_answers": QA[:1]},
    )
    db.commit()
    assert updated.is_complete is True
    assert updated.concerns == ["late"]
    assert len(updated.questions_and_answers) == 1


def test_delete_interview_is_admin_only(db):
    admin = make_user(db, role=Role.ADMIN)
    interviewer = make_user(db, role=Role.ACTIVE)
    candidate = make_user(db, role=Role.RUSHEE)
    interview_id = record_interview(db, interviewer=interviewer, candidate_id=candidate.id).id
    db.commit()

    with pytest.raises(AuthorizationError):
        delete_interview(db, actor=interviewer, interview_id=interview_id)

    delete_interview(db, actor=admin, interview_id=interview_id)
    db.commit()

    with pytest.raises(NotFoundError):
        get_interview(db, interview_id)


def test_listing_interviews(db):
    first = make_user(db, role=Role.ACTIVE)
    second = make_user(db, role=Role.ADMIN)
    pledge = make_user(db, role=Role.PLEDGE)
    candidate = make_user(db, role=Role.RUSHEE)
    record_interview(db, interviewer=first, candidate_id=candidate.id)
    record_interview(db, interviewer=second, candidate_id=candidate.id)
    db.commit()

    assert len(list_interviews_for_candidate(db, viewer=first, candidate_id=candidate.id)) == 2
    assert len(list_my_interviews(db, interviewer=first)) == 1

    with pytest.raises(AuthorizationError):
        list_interviews_for_candidate(db, viewer=pledge, candidate_id=candidate.id)
