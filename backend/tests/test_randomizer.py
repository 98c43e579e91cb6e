import random

from testdesk.services.randomizer import shuffle


def test_shuffle_is_a_permutation_in_place() -> None:
    items = list(range(20))
    result = shuffle(items, random.Random(7))

    assert result is items
    assert sorted(items) == list(range(20))


def test_shuffle_produces_different_orders() -> None:
    orders = {tuple(shuffle(list(range(6)))) for _ in range(20)}
    assert len(orders) >= 2


def test_shuffle_is_reproducible_with_a_seeded_source() -> None:
    assert shuffle(list('abcdef'), random.Random(3)) == shuffle(list('abcdef'), random.Random(3))


def test_shuffle_handles_tiny_inputs() -> None:
    assert shuffle([]) == []
    assert shuffle(['only']) == ['only']
