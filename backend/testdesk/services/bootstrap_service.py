from sqlalchemy import select
from sqlalchemy.orm import Session

from testdesk.core.config import settings
from testdesk.core.security import hash_password
from testdesk.models.constants import DEFAULT_POSITIONS, DEFAULT_SUBJECTS
from testdesk.models.position import Position
from testdesk.models.question_bank import Subject
from testdesk.models.rbac import Role, User, UserRole


ROLE_DESCRIPTIONS = {
    'super_admin': 'Full system access, including reassignment of tests.',
    'admin': 'Assigns tests and maintains the question bank.',
    'candidate': 'Takes the assigned test.',
}


def ensure_reference_data(db: Session) -> None:
    existing_roles = {role.name for role in db.scalars(select(Role)).all()}
    for role_name, description in ROLE_DESCRIPTIONS.items():
        if role_name not in existing_roles:
            db.add(Role(name=role_name, description=description))

    existing_positions = set(db.scalars(select(Position.name)).all())
    for name in DEFAULT_POSITIONS:
        if name not in existing_positions:
            db.add(Position(name=name, is_active=True))

    existing_subjects = set(db.scalars(select(Subject.name)).all())
    for name in DEFAULT_SUBJECTS:
        if name not in existing_subjects:
            db.add(Subject(name=name, is_active=True))

    db.flush()

    admin = db.scalar(select(User).where(User.email == settings.FIRST_ADMIN_EMAIL.lower()))
    if not admin:
        admin = User(
            email=settings.FIRST_ADMIN_EMAIL.lower(),
            full_name='Initial Super Admin',
            hashed_password=hash_password(settings.FIRST_ADMIN_PASSWORD),
            is_active=True,
        )
        db.add(admin)
        db.flush()

    role_rows = db.scalars(select(Role).where(Role.name.in_(['super_admin', 'admin']))).all()
    role_ids = {row.role_id for row in db.scalars(select(UserRole).where(UserRole.user_id == admin.id)).all()}

    for role in role_rows:
        if role.id not in role_ids:
            db.add(UserRole(user_id=admin.id, role_id=role.id))

    db.flush()
