from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from testdesk.api.deps import get_current_active_user
from testdesk.db.session import get_db
from testdesk.models.rbac import User
from testdesk.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshRequest,
    TokenResponse,
    UserSummary,
)
from testdesk.schemas.common import error_responses
from testdesk.services import audit_service, auth_service, question_bank_service, test_service, user_service
from testdesk.utils.rate_limit import SimpleRateLimiter


router = APIRouter(prefix='/auth', tags=['auth'])
login_rate_limiter = SimpleRateLimiter(max_requests=8, window_seconds=60)


def _to_user_summary(user: User) -> UserSummary:
    return UserSummary(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        mobile=user.mobile,
        is_active=user.is_active,
        roles=user_service.get_user_roles(user),
        last_login_at=user.last_login_at,
    )


@router.post('/login', response_model=LoginResponse, responses=error_responses(404, 409))
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)) -> LoginResponse:
    client_ip = request.client.host if request.client else 'unknown'
    if not login_rate_limiter.hit(client_ip):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail='Too many login attempts. Try again later.',
            headers={'Retry-After': str(login_rate_limiter.retry_after(client_ip))},
        )

    user = auth_service.authenticate_user(db, payload.email, payload.password)
    if not user:
        audit_service.log_action(
            db,
            actor_user_id=None,
            action='user_login',
            entity_type='auth',
            status='failure',
            details={'email': payload.email.lower()},
            ip_address=client_ip,
        )
        db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid credentials')

    login_rate_limiter.reset(client_ip)

    subject_id = None
    question_count = None
    if user_service.has_role(user, 'candidate'):
        assignment = test_service.mark_started_on_login(db, user=user)
        subject_id = assignment.subject_id
        question_count = question_bank_service.count_active_questions(db, assignment.subject_id)

    access_token, refresh_token = auth_service.issue_token_pair(
        db,
        user=user,
        ip_address=client_ip,
        user_agent=request.headers.get('user-agent'),
    )
    audit_service.log_action(
        db,
        actor_user_id=user.id,
        action='user_login',
        entity_type='auth',
        status='success',
        details={'email': user.email, 'timestamp': datetime.now(UTC).isoformat()},
        ip_address=client_ip,
    )
    db.commit()
    db.refresh(user)

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=_to_user_summary(user),
        subject_id=subject_id,
        question_count=question_count,
    )


@router.post('/refresh', response_model=TokenResponse)
def refresh(payload: RefreshRequest, request: Request, db: Session = Depends(get_db)) -> TokenResponse:
    user, access_token, refresh_token = auth_service.refresh_token_pair(
        db,
        refresh_token=payload.refresh_token,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get('user-agent'),
    )
    db.commit()
    db.refresh(user)

    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=_to_user_summary(user),
    )


@router.post('/logout', status_code=status.HTTP_204_NO_CONTENT)
def logout(payload: LogoutRequest, db: Session = Depends(get_db)) -> None:
    auth_service.revoke_refresh_token(db, refresh_token=payload.refresh_token)
    db.commit()


@router.get('/me', response_model=UserSummary)
def me(current_user: User = Depends(get_current_active_user)) -> UserSummary:
    return _to_user_summary(current_user)
