from datetime import UTC, datetime, timedelta
from hashlib import sha256
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from testdesk.core.config import settings


# Use bcrypt_sha256 for new hashes so long passwords are handled safely.
pwd_context = CryptContext(schemes=['bcrypt_sha256', 'bcrypt'], deprecated='auto')

# Claim holding the user's session version; bumping the version revokes the token.
SESSION_VERSION_CLAIM = 'ver'


class TokenDecodeError(Exception):
    pass


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


def _create_token(
    *,
    subject: str,
    session_version: int,
    token_type: str,
    secret: str,
    expires_delta: timedelta,
) -> str:
    data = {
        'sub': subject,
        'token_type': token_type,
        SESSION_VERSION_CLAIM: session_version,
        'exp': datetime.now(UTC) + expires_delta,
        'jti': uuid4().hex,
    }
    return jwt.encode(data, secret, algorithm=settings.JWT_ALGORITHM)


def _decode_token(token: str, *, secret: str, token_type: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise TokenDecodeError(f'Invalid {token_type} token') from exc

    if payload.get('token_type') != token_type:
        raise TokenDecodeError(f'Unexpected token type for {token_type} token')
    if not isinstance(payload.get(SESSION_VERSION_CLAIM), int):
        raise TokenDecodeError(f'{token_type.capitalize()} token carries no session version')
    return payload


def create_access_token(subject: str, session_version: int) -> str:
    return _create_token(
        subject=subject,
        session_version=session_version,
        token_type='access',
        secret=settings.JWT_SECRET_KEY,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(subject: str, session_version: int) -> str:
    return _create_token(
        subject=subject,
        session_version=session_version,
        token_type='refresh',
        secret=settings.JWT_REFRESH_SECRET_KEY,
        expires_delta=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def decode_access_token(token: str) -> dict[str, Any]:
    return _decode_token(token, secret=settings.JWT_SECRET_KEY, token_type='access')


def decode_refresh_token(token: str) -> dict[str, Any]:
    return _decode_token(token, secret=settings.JWT_REFRESH_SECRET_KEY, token_type='refresh')


def token_session_version(payload: dict[str, Any]) -> int:
    return payload[SESSION_VERSION_CLAIM]


def hash_token(token: str) -> str:
    return sha256(token.encode('utf-8')).hexdigest()
