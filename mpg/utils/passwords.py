"""
Password generation utilities for MySQL-compliant random passwords.

This module generates passwords that satisfy the MySQL user password policy:
at least one lowercase letter, uppercase letter, digit and special character,
drawn only from a fixed alphabet, and never starting with a character that
MySQL clients tend to misinterpret (``-``, ``_`` or ``;``).
"""

import logging
import string
from dataclasses import dataclass

from mpg.core.exceptions import InvalidLengthError, RandomnessUnavailableError
from mpg.utils.randomness import SECURE_SOURCE, RandomSource

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH: int = 8
DEFAULT_FIRST_CHAR_REDRAW_LIMIT: int = 256

SPECIAL_CHARACTERS: str = "#!~%^*_+-=?{}()<>|.,;"
FORBIDDEN_START_CHARACTERS: frozenset[str] = frozenset("-_;")


@dataclass(frozen=True)
class Alphabet:
    """Partition of the working alphabet into the mandatory character classes."""

    lowercase: str = string.ascii_lowercase
    uppercase: str = string.ascii_uppercase
    digits: str = string.digits
    special: str = SPECIAL_CHARACTERS

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for charset in self.classes:
            if not charset:
                raise ValueError("Character classes must not be empty")
            if seen & set(charset):
                raise ValueError(f"Character classes must be disjoint, {sorted(seen & set(charset))} repeated")
            seen |= set(charset)

    @property
    def classes(self) -> tuple[str, str, str, str]:
        """Mandatory classes in the order they are seeded."""
        return (self.lowercase, self.uppercase, self.digits, self.special)

    @property
    def characters(self) -> str:
        """Union of all classes."""
        return "".join(self.classes)


ALPHABET = Alphabet()


def _choice(source: RandomSource, charset: str) -> str:
    return charset[source.randbelow(len(charset))]


def _shuffle(chars: list[str], source: RandomSource) -> None:
    """Fisher-Yates shuffle in place; every permutation is equally likely."""
    for i in range(len(chars) - 1, 0, -1):
        j = source.randbelow(i + 1)
        chars[i], chars[j] = chars[j], chars[i]


def generate_password(
    length: int,
    source: RandomSource | None = None,
    shuffle_source: RandomSource | None = None,
    max_first_char_redraws: int = DEFAULT_FIRST_CHAR_REDRAW_LIMIT,
    alphabet: Alphabet = ALPHABET,
) -> str:
    """
    Generate a password compliant with the MySQL password policy.

    Args:
        length: Total length of the password, at least MIN_PASSWORD_LENGTH
        source: Source used to pick characters (default: OS secure source)
        shuffle_source: Source used to permute positions (default: same as source)
        max_first_char_redraws: Redraws allowed for a forbidden first character
            before the source is considered broken
        alphabet: Character classes to draw from

    Returns:
        A password of exactly ``length`` characters

    Raises:
        InvalidLengthError: If length is not an integer or below MIN_PASSWORD_LENGTH
        RandomnessUnavailableError: If the randomness source fails or keeps producing
            forbidden first characters

    Example:
        >>> password = generate_password(12)
        >>> len(password)
        12
    """
    # bool is an int subclass but never a meaningful length
    if isinstance(length, bool) or not isinstance(length, int) or length < MIN_PASSWORD_LENGTH:
        raise InvalidLengthError(length, MIN_PASSWORD_LENGTH)

    if source is None:
        source = SECURE_SOURCE
    if shuffle_source is None:
        shuffle_source = source
    all_chars = alphabet.characters

    # One character from each mandatory class
    password_chars = [_choice(source, charset) for charset in alphabet.classes]

    while len(password_chars) < length:
        password_chars.append(_choice(source, all_chars))

    redraws = 0
    while password_chars[0] in FORBIDDEN_START_CHARACTERS:
        if redraws >= max_first_char_redraws:
            raise RandomnessUnavailableError(
                f"Randomness source produced a forbidden first character {redraws} times in a row"
            )
        password_chars[0] = _choice(source, all_chars)
        redraws += 1

    # The first position is final, only the remainder gets shuffled
    remainder = password_chars[1:]
    _shuffle(remainder, shuffle_source)

    logger.debug(f"Generated password of length {length} ({redraws} first character redraws)")
    return password_chars[0] + "".join(remainder)


def validate_password(password: str) -> list[str]:
    """
    Check a password against the MySQL password policy.

    Args:
        password: The password to check

    Returns:
        Human readable descriptions of every violated rule, empty when compliant
    """
    violations = []

    if len(password) < MIN_PASSWORD_LENGTH:
        violations.append(f"password must be at least {MIN_PASSWORD_LENGTH} characters long")

    class_names = ("lowercase character", "uppercase character", "digit", "allowed special character")
    for name, charset in zip(class_names, ALPHABET.classes):
        if not any(ch in charset for ch in password):
            violations.append(f"password must contain at least one {name}")

    invalid = sorted({ch for ch in password if ch not in ALPHABET.characters})
    if invalid:
        violations.append(f"password contains invalid characters: {''.join(invalid)!r}")

    if password and password[0] in FORBIDDEN_START_CHARACTERS:
        violations.append(f"password must not start with {password[0]!r}")

    return violations
