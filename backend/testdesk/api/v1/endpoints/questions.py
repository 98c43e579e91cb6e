from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from testdesk.api.deps import require_roles
from testdesk.db.session import get_db
from testdesk.models.rbac import User
from testdesk.schemas.common import error_responses
from testdesk.schemas.question import QuestionAdminOut, QuestionCountOut, QuestionCreate, SubjectOut
from testdesk.services import audit_service, question_bank_service


router = APIRouter(tags=['questions'])


@router.get('/subjects', response_model=list[SubjectOut])
def list_subjects(
    db: Session = Depends(get_db),
    _: User = Depends(require_roles('admin')),
) -> list[SubjectOut]:
    return [SubjectOut.model_validate(subject) for subject in question_bank_service.list_subjects(db)]


@router.get(
    '/subjects/{subject_id}/questions/count',
    response_model=QuestionCountOut,
    responses=error_responses(404),
)
def count_questions(
    subject_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles('admin')),
) -> QuestionCountOut:
    question_bank_service.get_active_subject(db, subject_id)
    return QuestionCountOut(
        subject_id=subject_id,
        count=question_bank_service.count_active_questions(db, subject_id),
    )


@router.post(
    '/questions',
    response_model=QuestionAdminOut,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(404, 422),
)
def create_question(
    payload: QuestionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles('admin')),
) -> QuestionAdminOut:
    question = question_bank_service.create_question(
        db,
        payload=payload.model_dump(),
        actor_user_id=current_user.id,
    )
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='question_create',
        entity_type='question',
        entity_id=question.id,
        details={'subject_id': question.subject_id, 'options': len(question.options)},
    )
    db.commit()
    return QuestionAdminOut.model_validate(question)
