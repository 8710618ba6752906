import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_user, get_db
from rush_bff.models.user import User
from rush_bff.schemas.feedback import (
    FeedbackCreateRequest,
    FeedbackResponse,
    FeedbackSummaryResponse,
    FeedbackUpdateRequest,
)
from rush_bff.services.feedback import (
    feedback_summary,
    list_feedback_for_candidate,
    project_feedback,
    submit_feedback,
    update_feedback,
)

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
def submit(
    body: FeedbackCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = submit_feedback(db, author=current_user, **body.model_dump())
    db.commit()
    db.refresh(entry)
    return project_feedback(entry, current_user)


# 작성자 본인만 수정 가능
@router.patch("/{feedback_id}", response_model=FeedbackResponse)
def update(
    feedback_id: uuid.UUID,
    body: FeedbackUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = update_feedback(
        db, author=current_user, feedback_id=feedback_id, changes=body.model_dump(exclude_unset=True)
    )
    db.commit()
    db.refresh(entry)
    return project_feedback(entry, current_user)


@router.get("/candidates/{candidate_id}", response_model=list[FeedbackResponse])
def for_candidate(
    candidate_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_feedback_for_candidate(db, viewer=current_user, candidate_id=candidate_id)


@router.get("/candidates/{candidate_id}/summary", response_model=FeedbackSummaryResponse)
def summary(
    candidate_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return feedback_summary(db, viewer=current_user, candidate_id=candidate_id)
