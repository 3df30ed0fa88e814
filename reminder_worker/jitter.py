import random
from typing import Callable

from .scheduler_config import EMISSION_PROBABILITY


def should_emit(
    probability: float = EMISSION_PROBABILITY,
    rng: Callable[[], float] = random.random,
) -> bool:
    """
    Per-tick coin flip spreading sends across the window.

    Memoryless: with p=0.1 and one tick a minute, the expected wait is 10 ticks.
    """
    return rng() < probability
