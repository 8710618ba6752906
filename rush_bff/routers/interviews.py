import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_active, get_current_admin, get_current_user, get_db
from rush_bff.models.user import User
from rush_bff.schemas.interview import InterviewCreateRequest, InterviewResponse, InterviewUpdateRequest
from rush_bff.services.interviews import (
    delete_interview,
    list_interviews_for_candidate,
    list_my_interviews,
    record_interview,
    update_interview,
)

router = APIRouter(prefix="/interviews", tags=["interviews"])


# 면접관 권한(ACTIVE / ADMIN) 검증은 서비스에서 수행
@router.post("", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED)
def create(
    body: InterviewCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    interview = record_interview(db, interviewer=current_user, **body.model_dump())
    db.commit()
    db.refresh(interview)
    return interview


@router.get("/me", response_model=list[InterviewResponse])
def mine(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active),
):
    return list_my_interviews(db, interviewer=current_user)


@router.get("/candidates/{candidate_id}", response_model=list[InterviewResponse])
def for_candidate(
    candidate_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active),
):
    return list_interviews_for_candidate(db, viewer=current_user, candidate_id=candidate_id)


@router.patch("/{interview_id}", response_model=InterviewResponse)
def update(
    interview_id: uuid.UUID,
    body: InterviewUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    interview = update_interview(
        db, interviewer=current_user, interview_id=interview_id, changes=body.model_dump(exclude_unset=True)
    )
    db.commit()
    db.refresh(interview)
    return interview


@router.delete("/{interview_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(
    interview_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    delete_interview(db, actor=admin, interview_id=interview_id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
