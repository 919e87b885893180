"""Tagged value for a single decoded feed field."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class FieldState(StrEnum):
    """Outcome of decoding one scalar field."""

    PRESENT = "present"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class FieldValue:
    """A decoded scalar: ``Present(value) | Absent | Malformed(value)``.

    Resolved exactly once by the sanitizer; never passed further downstream.
    """

    state: FieldState
    value: Any = None

    @classmethod
    def present(cls, value: Any) -> "FieldValue":
        return cls(FieldState.PRESENT, value)

    @classmethod
    def absent(cls) -> "FieldValue":
        return ABSENT

    @classmethod
    def malformed(cls, value: Any) -> "FieldValue":
        return cls(FieldState.MALFORMED, value)

    @classmethod
    def of(cls, value: Any) -> "FieldValue":
        """Wrap a plain value, treating None as absent."""
        if value is None:
            return ABSENT
        return cls.present(value)

    @property
    def is_present(self) -> bool:
        return self.state is FieldState.PRESENT


ABSENT = FieldValue(FieldState.ABSENT)
