# src/serialbox/errors.py
# I/O failures are not wrapped: they surface as the built-in OSError family.


class PersistenceError(Exception):
    """Base class for failures while encoding or decoding a record."""


class EncodingError(PersistenceError):
    """The record cannot be represented in the binary frame."""


class FormatError(PersistenceError):
    """The bytes are not a valid frame (corrupt, truncated, unknown tag)."""


class TypeMismatchError(FormatError):
    """The frame decoded cleanly, but to a different record type than requested."""

    def __init__(self, expected: type, actual: type):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected.__name__}, got {actual.__name__}")
