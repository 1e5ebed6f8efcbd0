"""
Randomness sources used by the password generator.

Every source exposes a single ``randbelow(upper)`` method returning a uniformly
distributed integer in ``[0, upper)``. Sources must not use modulo reduction of a
fixed-width value; both ``secrets.randbelow`` and ``random.Random.randrange`` draw
with rejection sampling, so the wrappers below stay unbiased.
"""

import logging
import random
import secrets
from typing import Protocol

from mpg.core.exceptions import RandomnessUnavailableError

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randbelow(self, upper: int) -> int: ...


def _check_upper(upper: int) -> None:
    if upper <= 0:
        raise ValueError(f"Upper bound must be positive, {upper} given")


class SecureRandomSource:
    """OS-backed cryptographically secure source. Safe for concurrent use."""

    def randbelow(self, upper: int) -> int:
        _check_upper(upper)
        try:
            return secrets.randbelow(upper)
        except (OSError, NotImplementedError) as e:
            logger.error(f"Secure randomness source failed: {e}")
            raise RandomnessUnavailableError(f"Secure randomness source unavailable: {e}") from e


class FastRandomSource:
    """
    Non-secure source backed by the process-wide ``random`` generator.

    Only suitable for permuting characters that were already chosen with a secure
    source; never use it to pick characters.
    """

    def randbelow(self, upper: int) -> int:
        _check_upper(upper)
        return random.randrange(upper)


class SeededRandomSource:
    """
    Deterministic source for tests.

    Args:
        seed: Seed passed to a private ``random.Random`` instance

    Not thread-safe.
    """

    def __init__(self, seed: int | str | bytes | None = None):
        self._random = random.Random(seed)

    def randbelow(self, upper: int) -> int:
        _check_upper(upper)
        return self._random.randrange(upper)


SECURE_SOURCE = SecureRandomSource()
FAST_SOURCE = FastRandomSource()


def get_shuffle_source(use_secure: bool = True) -> RandomSource:
    """Return the source used for positional shuffling."""
    return SECURE_SOURCE if use_secure else FAST_SOURCE
