from __future__ import annotations

import re
from dataclasses import dataclass

from services.errors import InvalidIdentifier

# catalog text uses both regular and non-breaking spaces between code and number
_SEPARATOR = re.compile(r"[ \u00a0]")
_DIGITS = re.compile(r"[0-9]+")
_MAX_NUMBER = 0xFFFF


@dataclass(frozen=True)
class CourseIdentifier:
    code: str  # MATH
    number: int  # 140
    suffix: str | None = None  # H (honors), W, Y, ...

    @classmethod
    def parse(cls, text: str) -> "CourseIdentifier":
        """
        "MATH 140H" -> CourseIdentifier("MATH", 140, "H")

        Splits at the first space (or nbsp). A trailing letter is the suffix,
        everything else after the separator must be the number.
        """
        parts = _SEPARATOR.split(text, maxsplit=1)
        if len(parts) < 2:
            raise InvalidIdentifier(f"No space in course identifier: {text!r}")

        code, rest = parts
        if not rest:
            raise InvalidIdentifier(f"Missing course number: {text!r}")

        suffix = None
        if rest[-1].isalpha():
            rest, suffix = rest[:-1], rest[-1]

        if not _DIGITS.fullmatch(rest):
            raise InvalidIdentifier(f"Couldn't parse course number: {text!r}")

        number = int(rest)
        if number > _MAX_NUMBER:
            raise InvalidIdentifier(f"Course number out of range: {text!r}")

        return cls(code=code, number=number, suffix=suffix)

    @classmethod
    def try_parse(cls, text: str) -> "CourseIdentifier | None":
        try:
            return cls.parse(text)
        except InvalidIdentifier:
            return None

    def __str__(self) -> str:
        return f"{self.code} {self.number}{self.suffix or ''}"


def parse_course_title(raw_title: str) -> tuple[CourseIdentifier, str]:
    # "MATH 140: Calculus With Analytic Geometry I"
    raw_identifier, sep, title = raw_title.partition(": ")
    if not sep:
        raise InvalidIdentifier(f"Course heading has no ': ' separator: {raw_title!r}")
    return CourseIdentifier.parse(raw_identifier.strip()), " ".join(title.split())
