import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from testdesk.db.base_class import Base
from testdesk.models.mixins import AuditUserMixin, TimestampMixin, UUIDPrimaryKeyMixin


class Subject(UUIDPrimaryKeyMixin, TimestampMixin, AuditUserMixin, Base):
    __tablename__ = 'subjects'

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    questions: Mapped[list['Question']] = relationship(
        back_populates='subject',
        cascade='all, delete-orphan',
        order_by='Question.created_at',
    )


class Question(UUIDPrimaryKeyMixin, TimestampMixin, AuditUserMixin, Base):
    __tablename__ = 'questions'

    subject_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('subjects.id', ondelete='CASCADE'), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    subject: Mapped['Subject'] = relationship(back_populates='questions')
    options: Mapped[list['QuestionOption']] = relationship(
        back_populates='question',
        cascade='all, delete-orphan',
        order_by='QuestionOption.order_index',
    )


class QuestionOption(UUIDPrimaryKeyMixin, TimestampMixin, AuditUserMixin, Base):
    __tablename__ = 'question_options'

    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('questions.id', ondelete='CASCADE'), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    question: Mapped['Question'] = relationship(back_populates='options')


Index('ix_questions_subject_active', Question.subject_id, Question.is_active)
Index('ix_question_options_question_id', QuestionOption.question_id)
