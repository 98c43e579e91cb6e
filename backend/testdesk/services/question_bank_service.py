from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from testdesk.core.errors import NotFoundError, UnprocessableError
from testdesk.models.question_bank import Question, QuestionOption, Subject


def get_active_subject(db: Session, subject_id: UUID) -> Subject:
    subject = db.scalar(select(Subject).where(Subject.id == subject_id, Subject.is_active.is_(True)))
    if not subject:
        raise NotFoundError('Test not found')
    return subject


def list_subjects(db: Session) -> list[Subject]:
    return list(db.scalars(select(Subject).where(Subject.is_active.is_(True)).order_by(Subject.name)).all())


def list_active_questions_with_options(db: Session, subject_id: UUID) -> list[Question]:
    """Active questions of a subject, options ordered by ``order_index``."""
    questions = db.scalars(
        select(Question)
        .where(Question.subject_id == subject_id, Question.is_active.is_(True))
        .options(selectinload(Question.options))
        .order_by(Question.created_at)
    ).all()
    return list(questions)


def active_options(question: Question) -> list[QuestionOption]:
    return [option for option in question.options if option.is_active]


def correct_option_ids(db: Session, subject_id: UUID) -> dict[UUID, UUID | None]:
    correct: dict[UUID, UUID | None] = {}
    for question in list_active_questions_with_options(db, subject_id):
        correct[question.id] = next(
            (option.id for option in active_options(question) if option.is_correct),
            None,
        )
    return correct


def count_active_questions(db: Session, subject_id: UUID) -> int:
    total = db.scalar(
        select(func.count())
        .select_from(Question)
        .where(Question.subject_id == subject_id, Question.is_active.is_(True))
    )
    return int(total or 0)


def get_question(db: Session, question_id: UUID) -> Question:
    question = db.scalar(
        select(Question).where(Question.id == question_id).options(selectinload(Question.options))
    )
    if not question:
        raise NotFoundError('Question not found')
    return question


def create_question(db: Session, *, payload: dict, actor_user_id: UUID) -> Question:
    subject = get_active_subject(db, payload['subject_id'])
    options = payload.get('options', [])
    if not any(option.get('is_correct') and option.get('is_active', True) for option in options):
        raise UnprocessableError('A question needs at least one active correct option.')

    question = Question(
        subject_id=subject.id,
        text=payload['text'],
        is_active=payload.get('is_active', True),
        created_by=actor_user_id,
        updated_by=actor_user_id,
    )
    db.add(question)
    db.flush()

    for index, option in enumerate(options):
        db.add(
            QuestionOption(
                question_id=question.id,
                text=option['text'],
                is_correct=bool(option.get('is_correct', False)),
                is_active=option.get('is_active', True),
                order_index=index if option.get('order_index') is None else option['order_index'],
                created_by=actor_user_id,
                updated_by=actor_user_id,
            )
        )

    db.flush()
    db.expire(question, ['options'])
    return get_question(db, question.id)
