import random
from collections import Counter

from utils.row_parser import Option
from utils.shuffle import shuffle_options

OPTIONS = [
    Option(text="Paris", is_correct=True, feedback="Correct!"),
    Option(text="London", is_correct=False, feedback="Incorrect."),
    Option(text="Rome", is_correct=False, feedback="Incorrect."),
    Option(text="Madrid", is_correct=False, feedback="Try again."),
]


def test_shuffle_preserves_options():
    for _ in range(50):
        shuffled = shuffle_options(OPTIONS)
        assert len(shuffled) == len(OPTIONS)
        assert Counter(shuffled) == Counter(OPTIONS)


def test_shuffle_does_not_mutate_input():
    original = list(OPTIONS)
    shuffle_options(OPTIONS, random.Random(3))
    assert OPTIONS == original


def test_shuffle_accepts_tuples_and_returns_list():
    shuffled = shuffle_options(tuple(OPTIONS), random.Random(1))
    assert isinstance(shuffled, list)
    assert sorted(option.text for option in shuffled) == sorted(option.text for option in OPTIONS)


def test_seeded_rng_is_repeatable():
    assert shuffle_options(OPTIONS, random.Random(42)) == shuffle_options(OPTIONS, random.Random(42))


def test_every_ordering_is_reachable():
    rng = random.Random(7)
    seen = {tuple(shuffle_options(["a", "b", "c"], rng)) for _ in range(600)}
    assert len(seen) == 6


def test_empty_and_single():
    assert shuffle_options([]) == []
    assert shuffle_options(OPTIONS[:1]) == OPTIONS[:1]
