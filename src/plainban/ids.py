"""Identifier generation and syntax checks."""

import random
import re
import string
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

ALPHABET = string.ascii_lowercase + string.digits
BASE36 = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 5

_CARD_ID = re.compile(r"^[A-Za-z0-9/_-]+$")


def to_base36(n: int) -> str:
    """Encode a non-negative integer in lowercase base 36.

    0 → "0", 35 → "z", 36 → "10"
    """
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(BASE36[rem])
    return "".join(reversed(digits))


class IdGenerator:
    """Builds "<prefix>-<base36 millis>-<random suffix>" identifiers.

    The clock returns milliseconds since the epoch; the rng only needs a
    ``choice`` method. Both are injectable so tests can pin ids.
    """

    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.clock = clock or (lambda: time.time_ns() // 1_000_000)
        self.rng = rng or random.SystemRandom()

    def __call__(self, prefix: str) -> str:
        stamp = to_base36(self.clock())
        suffix = "".join(self.rng.choice(ALPHABET) for _ in range(SUFFIX_LENGTH))
        return f"{prefix}-{stamp}-{suffix}"


_generator = IdGenerator()


def generate_id(prefix: str) -> str:
    """Generate a fresh identifier with the current generator."""
    return _generator(prefix)


def set_generator(generator: Callable[[str], str]) -> Callable[[str], str]:
    """Install a new default generator. Returns the previous one."""
    global _generator
    previous = _generator
    _generator = generator
    return previous


@contextmanager
def use_generator(generator: Callable[[str], str]) -> Iterator[Callable[[str], str]]:
    """Temporarily swap the default generator."""
    previous = set_generator(generator)
    try:
        yield generator
    finally:
        set_generator(previous)


def counting_generator(start: int = 1) -> Callable[[str], str]:
    """Deterministic generator yielding "<prefix>-1", "<prefix>-2", ..."""
    counter = iter(range(start, 2**63))
    return lambda prefix: f"{prefix}-{next(counter)}"


def is_valid_card_id(value: str) -> bool:
    """Card ids double as block anchors, so they use the anchor charset."""
    return bool(_CARD_ID.fullmatch(value))


def is_valid_column_id(value: str) -> bool:
    """Column ids live inside "## [id]" headings: no brackets, no newlines."""
    return bool(value) and value == value.strip() and "]" not in value and "\n" not in value
