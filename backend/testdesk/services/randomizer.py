import random
from typing import MutableSequence, TypeVar

T = TypeVar('T')

_system_random = random.SystemRandom()


def shuffle(items: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """Shuffle ``items`` in place with Fisher-Yates and return the same list.

    Uses the OS entropy source unless a ``random.Random`` instance is given.
    """
    source = rng or _system_random
    for i in range(len(items) - 1, 0, -1):
        j = source.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items
