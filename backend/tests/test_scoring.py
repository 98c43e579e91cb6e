from uuid import uuid4

import pytest

from testdesk.core.errors import UnprocessableError
from testdesk.services.scoring_service import score_answers


def _bank(size: int) -> dict:
    return {uuid4(): uuid4() for _ in range(size)}


def test_score_counts_correct_answers() -> None:
    bank = _bank(4)
    answers = [(question_id, option_id) for question_id, option_id in bank.items()]
    answers[0] = (answers[0][0], uuid4())

    result = score_answers(bank, answers)

    assert result.correct == 3
    assert result.total == 4
    assert result.score == '3 / 4'
    assert result.percentage == 75
    assert [item.is_correct for item in result.graded] == [False, True, True, True]


def test_percentage_rounds_half_up() -> None:
    bank = _bank(8)
    answers = list(bank.items())[:1]
    # 1 / 8 is 12.5
    assert score_answers(bank, answers).percentage == 13

    bank = _bank(3)
    answers = list(bank.items())[:2]
    assert score_answers(bank, answers).percentage == 67


def test_unanswered_questions_count_as_wrong() -> None:
    bank = _bank(4)
    result = score_answers(bank, [])
    assert result.score == '0 / 4'
    assert result.percentage == 0
    assert result.graded == []


def test_duplicate_and_unknown_answers() -> None:
    bank = _bank(2)
    (first_q, first_correct), (second_q, _) = bank.items()
    answers = [
        (first_q, uuid4()),
        (first_q, first_correct),
        (uuid4(), uuid4()),
    ]

    result = score_answers(bank, answers)

    assert result.correct == 0
    assert result.score == '0 / 2'
    assert len(result.graded) == 1


def test_question_without_correct_option_never_scores() -> None:
    question_id = uuid4()
    result = score_answers({question_id: None}, [(question_id, uuid4())])
    assert result.score == '0 / 1'


def test_empty_bank_is_unprocessable() -> None:
    with pytest.raises(UnprocessableError, match='The test has no questions to evaluate.'):
        score_answers({}, [])
