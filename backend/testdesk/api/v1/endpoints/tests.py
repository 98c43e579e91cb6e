from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from testdesk.api.deps import get_current_active_user, require_roles
from testdesk.core.config import settings
from testdesk.db.session import get_db
from testdesk.models.assignment import Assignment
from testdesk.models.rbac import User
from testdesk.schemas.common import PaginationMeta, error_responses
from testdesk.schemas.test import (
    AssignmentChainResponse,
    AssignmentOut,
    AssignTestRequest,
    CandidateSummary,
    PendingReassignmentListResponse,
    PendingReassignmentOut,
    ReassignTestRequest,
    StartTestOut,
    SubmitTestOut,
    SubmitTestRequest,
)
from testdesk.services import audit_service, test_service


router = APIRouter(prefix='/tests', tags=['tests'])


def _to_pending_out(assignment: Assignment) -> PendingReassignmentOut:
    user = assignment.user
    return PendingReassignmentOut(
        assignment_id=assignment.id,
        subject_id=assignment.subject_id,
        subject_name=assignment.subject.name,
        reassign_count=assignment.reassign_count,
        started_at=assignment.started_at,
        updated_at=assignment.updated_at,
        user=CandidateSummary(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            mobile=user.mobile,
            position_name=user.position.name if user.position else None,
        ),
    )


@router.post(
    '/assign',
    response_model=AssignmentOut,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(404, 409),
)
def assign_test(
    payload: AssignTestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles('admin')),
) -> AssignmentOut:
    assignment = test_service.assign_test(
        db,
        user_id=payload.user_id,
        subject_id=payload.subject_id,
        actor_user_id=current_user.id,
    )
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='test_assign',
        entity_type='test_assignment',
        entity_id=assignment.id,
        details={'user_id': payload.user_id, 'subject_id': payload.subject_id},
    )
    db.commit()
    return AssignmentOut.model_validate(assignment)


@router.get('/start', response_model=StartTestOut, responses=error_responses(404))
def start_test(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> StartTestOut:
    started = test_service.start_test(db, user_id=current_user.id)
    db.commit()
    return StartTestOut.model_validate(started)


@router.post('/submit', response_model=SubmitTestOut, responses=error_responses(404, 409, 422))
def submit_test(
    payload: SubmitTestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> SubmitTestOut:
    assignment = test_service.evaluate_test(
        db,
        user_id=current_user.id,
        subject_id=payload.subject_id,
        answers=[(answer.question_id, answer.option_id) for answer in payload.answers],
    )
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='test_submit',
        entity_type='test_assignment',
        entity_id=assignment.id,
        details={'score': assignment.score, 'percentage': assignment.percentage},
    )
    db.commit()
    return SubmitTestOut(
        assignment_id=assignment.id,
        score=assignment.score,
        percentage=assignment.percentage,
    )


@router.patch('/reassign', response_model=AssignmentOut, responses=error_responses(404, 409, 429))
def reassign_test(
    payload: ReassignTestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles('super_admin')),
) -> AssignmentOut:
    assignment = test_service.reassign_test(
        db,
        user_id=payload.user_id,
        subject_id=payload.subject_id,
        actor_user_id=current_user.id,
    )
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='test_reassign',
        entity_type='test_assignment',
        entity_id=assignment.id,
        details={
            'user_id': payload.user_id,
            'subject_id': payload.subject_id,
            'reassign_count': assignment.reassign_count,
            'supersedes_id': assignment.supersedes_id,
        },
    )
    db.commit()
    return AssignmentOut.model_validate(assignment)


@router.get('/reassignments', response_model=PendingReassignmentListResponse, responses=error_responses(422))
def list_pending_reassignments(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.PENDING_REASSIGNMENTS_PAGE_SIZE, ge=1, le=100),
    subject_id: UUID | None = Query(default=None),
    position_id: UUID | None = Query(default=None),
    search: str | None = Query(default=None, max_length=255),
    date_filter: str = Query(default='All'),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles('super_admin')),
) -> PendingReassignmentListResponse:
    items, total = test_service.list_pending_reassignments(
        db,
        page=page,
        page_size=page_size,
        subject_id=subject_id,
        position_id=position_id,
        search=search,
        date_filter=date_filter,
        start_date=start_date,
        end_date=end_date,
    )
    return PendingReassignmentListResponse(
        items=[_to_pending_out(item) for item in items],
        meta=PaginationMeta(page=page, page_size=page_size, total=total),
    )


@router.get(
    '/assignments/{assignment_id}/chain',
    response_model=AssignmentChainResponse,
    responses=error_responses(404),
)
def get_reassignment_chain(
    assignment_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles('admin')),
) -> AssignmentChainResponse:
    chain = test_service.get_reassignment_chain(db, assignment_id)
    return AssignmentChainResponse(items=[AssignmentOut.model_validate(item) for item in chain])
