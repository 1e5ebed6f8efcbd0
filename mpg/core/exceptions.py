"""
Exceptions raised by password generation.
"""


class PasswordGenerationError(Exception):
    """Base class for password generation failures."""


class InvalidLengthError(PasswordGenerationError, ValueError):
    """Raised when the requested password length is below the supported minimum."""

    def __init__(self, length: object, minimum: int):
        self.length = length
        self.minimum = minimum
        super().__init__(f"password length must be at least {minimum} characters, {length!r} given")


class RandomnessUnavailableError(PasswordGenerationError):
    """Raised when a randomness source cannot service a draw."""
