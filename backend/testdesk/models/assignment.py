import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from testdesk.db.base_class import Base
from testdesk.models.constants import LIVE_ASSIGNMENT_STATES
from testdesk.models.mixins import AuditUserMixin, SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from testdesk.models.question_bank import Subject
    from testdesk.models.rbac import User


LIVE_STATE_PREDICATE = "state in ('assigned', 'started')"


class Assignment(UUIDPrimaryKeyMixin, TimestampMixin, AuditUserMixin, SoftDeleteMixin, Base):
    """One attempt of one subject by one user.

    Attempts of the same (user, subject) pair form a chain: a reassignment
    supersedes the live attempt and inserts a new one pointing back at it
    through ``supersedes_id``.
    """

    __tablename__ = 'test_assignments'
    __table_args__ = (
        CheckConstraint(
            "state in ('assigned', 'started', 'finished', 'superseded')",
            name='test_assignment_state_values',
        ),
        CheckConstraint(
            "state != 'finished' or (score is not null and percentage is not null)",
            name='test_assignment_finished_has_score',
        ),
        CheckConstraint(
            'percentage is null or (percentage >= 0 and percentage <= 100)',
            name='test_assignment_percentage_range',
        ),
        CheckConstraint('reassign_count >= 0', name='test_assignment_reassign_count_non_negative'),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('subjects.id', ondelete='RESTRICT'), nullable=False
    )
    state: Mapped[str] = mapped_column(String(20), nullable=False, default='assigned')
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    score: Mapped[str | None] = mapped_column(String(50), nullable=True)
    percentage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reassign_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    supersedes_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('test_assignments.id', ondelete='SET NULL'), nullable=True
    )

    user: Mapped['User'] = relationship(back_populates='test_assignments')
    subject: Mapped['Subject'] = relationship()
    supersedes: Mapped['Assignment | None'] = relationship(remote_side='Assignment.id')
    answers: Mapped[list['AssignmentAnswer']] = relationship(
        back_populates='assignment', cascade='all, delete-orphan'
    )

    @property
    def is_active(self) -> bool:
        return self.state in LIVE_ASSIGNMENT_STATES

    @property
    def is_start(self) -> bool:
        return self.started_at is not None

    @property
    def is_finish(self) -> bool:
        return self.state == 'finished'


class AssignmentAnswer(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'assignment_answers'

    assignment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('test_assignments.id', ondelete='CASCADE'), nullable=False
    )
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    option_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    assignment: Mapped['Assignment'] = relationship(back_populates='answers')


Index(
    'uq_test_assignments_live_pair',
    Assignment.user_id,
    Assignment.subject_id,
    unique=True,
    postgresql_where=text(LIVE_STATE_PREDICATE),
    sqlite_where=text(LIVE_STATE_PREDICATE),
)
Index('ix_test_assignments_user_state', Assignment.user_id, Assignment.state)
Index('ix_test_assignments_subject_id', Assignment.subject_id)
Index('ix_test_assignments_updated_at', Assignment.updated_at)
Index('ix_assignment_answers_assignment_id', AssignmentAnswer.assignment_id)
