import math
from dataclasses import dataclass, field
from uuid import UUID

from testdesk.core.errors import UnprocessableError


@dataclass(frozen=True)
class GradedAnswer:
    question_id: UUID
    option_id: UUID
    is_correct: bool


@dataclass(frozen=True)
class ScoreResult:
    correct: int
    total: int
    score: str
    percentage: int
    graded: list[GradedAnswer] = field(default_factory=list)


def _percentage(correct: int, total: int) -> int:
    value = math.floor(correct * 100 / total + 0.5)
    return max(0, min(100, value))


def score_answers(
    correct_by_question: dict[UUID, UUID | None],
    answers: list[tuple[UUID, UUID]],
) -> ScoreResult:
    """Grade submitted ``(question_id, option_id)`` pairs.

    ``correct_by_question`` holds every active question of the subject; a
    ``None`` value means the question has no active correct option and can
    never be answered correctly. Answers to unknown questions are ignored
    and only the first answer per question counts.
    """
    total = len(correct_by_question)
    if total == 0:
        raise UnprocessableError('The test has no questions to evaluate.')

    graded: list[GradedAnswer] = []
    seen: set[UUID] = set()
    for question_id, option_id in answers:
        if question_id not in correct_by_question or question_id in seen:
            continue
        seen.add(question_id)
        expected = correct_by_question[question_id]
        graded.append(
            GradedAnswer(
                question_id=question_id,
                option_id=option_id,
                is_correct=expected is not None and option_id == expected,
            )
        )

    correct = sum(1 for item in graded if item.is_correct)
    return ScoreResult(
        correct=correct,
        total=total,
        score=f'{correct} / {total}',
        percentage=_percentage(correct, total),
        graded=graded,
    )
