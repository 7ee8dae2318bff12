"""Domain primitives: small value objects with total parsers.

Parsers never raise; malformed text degrades to the sentinel of the type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import ClassVar

_DATE_PATTERN = re.compile(r"^\s*(\d{4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?\s*$")
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z]+(\d+),(\d+)$")


@dataclass(frozen=True, order=True, slots=True)
class Version:
    major: int = 0
    minor: int = 0
    patch: int = 0

    ZERO: ClassVar[Version]

    @classmethod
    def parse(cls, text: str | None) -> Version:
        if text is None:
            return cls.ZERO
        parts = text.strip().split(".")
        if not parts or len(parts) > 3:
            return cls.ZERO
        try:
            numbers = [int(part) for part in parts]
        except ValueError:
            return cls.ZERO
        if any(number < 0 for number in numbers):
            return cls.ZERO
        numbers += [0] * (3 - len(numbers))
        return cls(*numbers)

    @property
    def is_zero(self) -> bool:
        return self == Version.ZERO

    def next_major(self) -> Version:
        return Version(self.major + 1)

    def __str__(self) -> str:
        if self.patch:
            return f"{self.major}.{self.minor}.{self.patch}"
        if self.minor:
            return f"{self.major}.{self.minor}"
        return str(self.major)


Version.ZERO = Version()


def identifier_version(identifier: str) -> Version:
    """Version encoded in a hardware identifier: ``iPad16,3`` -> ``16.3``."""

    match = _IDENTIFIER_PATTERN.match(identifier.strip())
    if match is None:
        return Version.ZERO
    return Version(int(match.group(1)), int(match.group(2)))


@dataclass(frozen=True, slots=True)
class OSVersionRange:
    launch: Version = Version.ZERO
    end_of_support: Version | None = None


@dataclass(frozen=True, slots=True)
class IntroductionDate:
    """Introduction date, frequently known only to the year."""

    year: int
    month: int | None = None
    day: int | None = None

    @classmethod
    def parse(cls, text: str | int | None) -> IntroductionDate | None:
        if text is None:
            return None
        match = _DATE_PATTERN.match(str(text))
        if match is None:
            return None
        year, month, day = (int(group) if group else None for group in match.groups())
        if year is None:
            return None
        try:
            date(year, month or 1, day or 1)
        except ValueError:
            return None
        return cls(year=year, month=month, day=day)

    @property
    def is_year_only(self) -> bool:
        return self.month is None

    def __str__(self) -> str:
        if self.month is None:
            return f"{self.year:04d}"
        if self.day is None:
            return f"{self.year:04d}-{self.month:02d}"
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, order=True, slots=True)
class Screen:
    diagonal: float
    width: int
    height: int
    ppi: int

    def __str__(self) -> str:
        return f"{self.diagonal:g},{self.width}x{self.height},{self.ppi}"

    @classmethod
    def parse(cls, text: str) -> Screen | None:
        parts = text.split(",")
        if len(parts) != 3:
            return None
        diagonal, size, ppi = parts
        width, _, height = size.partition("x")
        try:
            return cls(
                diagonal=float(diagonal),
                width=int(width),
                height=int(height),
                ppi=int(ppi),
            )
        except ValueError:
            return None
