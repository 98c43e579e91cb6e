from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from testdesk.core.errors import ConflictError, NotFoundError, UnprocessableError
from testdesk.core.security import hash_password
from testdesk.models.rbac import Role, User, UserRole


def _normalize_roles(role_names: list[str]) -> list[str]:
    return sorted({role.strip().lower() for role in role_names if role.strip()})


def get_user_roles(user: User) -> list[str]:
    return [user_role.role.name for user_role in user.user_roles]


def has_role(user: User, role: str) -> bool:
    return role in get_user_roles(user)


def get_user(db: Session, user_id: UUID, *, lock: bool = False) -> User | None:
    query = select(User).where(User.id == user_id).options(joinedload(User.user_roles).joinedload(UserRole.role))
    if lock:
        query = query.with_for_update(of=User).execution_options(populate_existing=True)
    return db.scalar(query)


def get_active_candidate(db: Session, user_id: UUID, *, lock: bool = False) -> User:
    """Return an active user holding the candidate role or raise NotFound."""
    user = get_user(db, user_id, lock=lock)
    if not user or not user.is_active or not has_role(user, 'candidate'):
        raise NotFoundError('User not found')
    return user


def create_user(
    db: Session,
    *,
    email: str,
    full_name: str,
    password: str,
    roles: list[str],
    mobile: str | None = None,
    position_id: UUID | None = None,
) -> User:
    existing = db.scalar(select(User).where(User.email == email.lower()))
    if existing:
        raise ConflictError('Email already registered')

    user = User(
        email=email.lower(),
        full_name=full_name,
        mobile=mobile,
        position_id=position_id,
        hashed_password=hash_password(password),
        is_active=True,
    )
    db.add(user)
    db.flush()

    normalized = _normalize_roles(roles or ['candidate'])
    role_rows = db.scalars(select(Role).where(Role.name.in_(normalized))).all()
    if len(role_rows) != len(normalized):
        found = {row.name for row in role_rows}
        missing = sorted(set(normalized) - found)
        raise UnprocessableError(f'Invalid roles: {", ".join(missing)}')

    for role in role_rows:
        db.add(UserRole(user_id=user.id, role_id=role.id))

    db.flush()
    db.expire(user, ['user_roles'])
    return get_user(db, user.id)
