import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle_options(options: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``options``; the input is left untouched."""
    rng = rng or random.Random()
    shuffled = list(options)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
