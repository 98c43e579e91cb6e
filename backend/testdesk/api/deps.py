from collections.abc import Callable
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from testdesk.core.security import TokenDecodeError, decode_access_token, token_session_version
from testdesk.db.session import get_db
from testdesk.models.rbac import User
from testdesk.services import user_service


oauth2_scheme = OAuth2PasswordBearer(tokenUrl='/api/v1/auth/login')


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={'WWW-Authenticate': 'Bearer'},
    )


def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    """Resolve the bearer token to a user whose session has not been revoked."""
    try:
        payload = decode_access_token(token)
        subject = payload.get('sub')
        if not subject:
            raise _unauthorized('Invalid access token subject')
        user_id = UUID(subject)
    except (TokenDecodeError, ValueError) as exc:
        raise _unauthorized('Invalid access token') from exc

    user = user_service.get_user(db, user_id)
    if not user:
        raise _unauthorized('User not found')
    # Submitting a test bumps the version and logs the candidate out.
    if token_session_version(payload) != user.session_version:
        raise _unauthorized('Session has been revoked')

    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Inactive user')
    return current_user


def require_roles(*required_roles: str) -> Callable:
    """Allow users holding any of ``required_roles``; ``super_admin`` passes every check."""
    required_set = set(required_roles)

    def role_checker(current_user: User = Depends(get_current_active_user)) -> User:
        user_roles = set(user_service.get_user_roles(current_user))
        if 'super_admin' in user_roles:
            return current_user

        if not required_set.intersection(user_roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail='Insufficient role permissions',
            )
        return current_user

    return role_checker
