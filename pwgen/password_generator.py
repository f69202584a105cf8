from __future__ import annotations

import logging
import random

from collections import Counter
from dataclasses import dataclass, field
from typing import Final, List, Optional, Protocol

from .charsets import DEFAULT_SELECTOR, CharacterClass, build_alphabet, count_in_class

logger = logging.getLogger(__name__)

LOWEST_LENGTH: Final[int] = 6
DEFAULT_LENGTH: Final[int] = 16
DEFAULT_MIN_CHAR: Final[int] = 3
DEFAULT_MAX_REPEAT: Final[int] = 1
MAX_ATTEMPTS: Final[int] = 10_000


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class ConfigurationError(ValueError):
    """Raised when generation parameters are invalid before any attempt."""


class GenerationFailed(RuntimeError):
    """Raised when the attempt ceiling is reached without a valid password."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            f'Failed to generate password matching criteria after {attempts} tries'
        )


@dataclass
class AttemptBudget:
    """
    Attempt counter shared by candidate construction and validation.

    Every rejected placement and every started candidate spends one unit.
    """

    ceiling: int = MAX_ATTEMPTS
    used: int = 0

    def spend(self) -> None:
        """
        Consume one attempt.

        Raises:
            GenerationFailed: If the ceiling has already been reached.
        """
        if self.used >= self.ceiling:
            raise GenerationFailed(self.used)
        self.used += 1


def _check_config(
    alphabet: str,
    length: int,
    minimums: dict[str, int],
    max_repeat: int,
) -> None:
    if not alphabet:
        msg = 'Alphabet must not be empty.'
        raise ConfigurationError(msg)
    if length < LOWEST_LENGTH:
        msg = f'Min length must be greater than or equal to {LOWEST_LENGTH}'
        raise ConfigurationError(msg)
    for name, value in minimums.items():
        if value < 0:
            msg = f'{name} must not be negative, got {value}'
            raise ConfigurationError(msg)
    if max_repeat < 0:
        msg = f'max_repeat must not be negative, got {max_repeat}'
        raise ConfigurationError(msg)


def is_valid(
    candidate: str,
    length: int,
    min_upper: int,
    min_lower: int,
    min_digit: int,
    min_special: int,
    max_repeat: int,
) -> bool:
    """
    Check a completed candidate against every constraint.

    The repeat bound is recounted over the whole candidate rather than
    taken from the counters used while building it.
    """
    if len(candidate) != length:
        return False

    required = (
        (CharacterClass.UPPER, min_upper),
        (CharacterClass.LOWER, min_lower),
        (CharacterClass.DIGIT, min_digit),
        (CharacterClass.SPECIAL, min_special),
    )
    for character_class, minimum in required:
        if count_in_class(candidate, character_class) < minimum:
            return False

    return all(count <= max_repeat for count in Counter(candidate).values())


def _build_candidate(
    alphabet: str,
    length: int,
    max_repeat: int,
    rng: RandomSource,
    budget: AttemptBudget,
) -> str:
    repeats = [0] * len(alphabet)
    chars: List[str] = []

    while len(chars) < length:
        idx = rng.randrange(len(alphabet))
        repeats[idx] += 1
        if repeats[idx] > max_repeat:
            repeats[idx] -= 1
            budget.spend()
            continue
        chars.append(alphabet[idx])

    return ''.join(chars)


def generate(
    alphabet: str,
    length: int = DEFAULT_LENGTH,
    min_upper: int = DEFAULT_MIN_CHAR,
    min_lower: int = DEFAULT_MIN_CHAR,
    min_digit: int = DEFAULT_MIN_CHAR,
    min_special: int = DEFAULT_MIN_CHAR,
    max_repeat: int = DEFAULT_MAX_REPEAT,
    *,
    rng: Optional[RandomSource] = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> str:
    """
    Generate a random string that satisfies all composition constraints.

    Candidates are built left to right from uniform draws over `alphabet`.
    A draw that would push a character past `max_repeat` is rejected and
    the position is drawn again. Completed candidates failing validation
    are discarded. Both kinds of rejection share one attempt budget.

    Args:
        alphabet: Characters eligible for selection, duplicates allowed.
        length: Exact length of the result.
        min_upper: Minimum number of uppercase letters.
        min_lower: Minimum number of lowercase letters.
        min_digit: Minimum number of digits.
        min_special: Minimum number of special characters.
        max_repeat: Maximum occurrences of any single character.
        rng: Object providing `randrange`; a new SystemRandom by default.
        max_attempts: Size of the shared attempt budget.

    Returns:
        The generated password.

    Raises:
        ConfigurationError: If the parameters are invalid.
        GenerationFailed: If the attempt budget runs out.
    """
    _check_config(
        alphabet,
        length,
        {
            'min_upper': min_upper,
            'min_lower': min_lower,
            'min_digit': min_digit,
            'min_special': min_special,
        },
        max_repeat,
    )

    if rng is None:
        rng = random.SystemRandom()
    budget = AttemptBudget(ceiling=max_attempts)

    try:
        while True:
            budget.spend()
            candidate = _build_candidate(alphabet, length, max_repeat, rng, budget)
            if is_valid(
                candidate,
                length,
                min_upper,
                min_lower,
                min_digit,
                min_special,
                max_repeat,
            ):
                logger.debug('Generated password after %d attempts', budget.used)
                return candidate
    except GenerationFailed:
        logger.debug('Attempt budget of %d exhausted', budget.ceiling)
        raise


@dataclass
class PasswordGenerator:
    """Generate random passwords based on configurable rules."""

    chars: str = DEFAULT_SELECTOR
    length: int = DEFAULT_LENGTH
    min_upper: int = DEFAULT_MIN_CHAR
    min_lower: int = DEFAULT_MIN_CHAR
    min_digit: int = DEFAULT_MIN_CHAR
    min_special: int = DEFAULT_MIN_CHAR
    max_repeat: int = DEFAULT_MAX_REPEAT
    max_attempts: int = MAX_ATTEMPTS
    rng: Optional[RandomSource] = field(default=None, repr=False)

    @property
    def alphabet(self) -> str:
        """Alphabet implied by the class selector in `chars`."""
        return build_alphabet(self.chars)

    def generate_password(self) -> str:
        """
        Return a randomly generated password.

        Raises:
            ConfigurationError: If the configured rules are invalid.
            GenerationFailed: If no valid password was found in time.
        """
        alphabet = self.alphabet
        logger.debug('Using alphabet of %d characters', len(alphabet))
        return generate(
            alphabet,
            self.length,
            self.min_upper,
            self.min_lower,
            self.min_digit,
            self.min_special,
            self.max_repeat,
            rng=self.rng,
            max_attempts=self.max_attempts,
        )
