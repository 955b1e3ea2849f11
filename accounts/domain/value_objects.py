"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class Email:
    """Normalised email address; equality is case-insensitive."""

    value: str

    def __post_init__(self) -> None:
        if "@" not in self.value or self.value != self.value.strip().lower():
            raise ValueError("Email must be a normalised address")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip().lower())

    def __str__(self) -> str:
        return self.value
