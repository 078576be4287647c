from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from services.course_identifier import CourseIdentifier, parse_course_title
from services.extra_details import Fragment, parse_extra_details
from services.req_ir import CourseFlags, RequirementSet
from services.taxonomy import AttributeList

# Placeholder registrations the bulletin lists like real courses
NOISY_COURSE_TITLES = frozenset(
    {
        "EDAB TEMPH: Temporary Education Abroad Registration",
        "EDAB TEMPI: Temporary Education Abroad Registration",
    }
)

_CREDITS_SUFFIX = re.compile(r"\s*Credits?$")


# One course entry as handed over by the page extraction step (no markup left)
@dataclass(frozen=True)
class CourseRecord:
    title: str  # "MATH 141: Calculus II"
    credits: str  # "4 Credits"
    description: Optional[str] = None
    extra_details: Tuple[Tuple[Fragment, ...], ...] = ()

    @classmethod
    def from_dict(cls, raw: dict) -> "CourseRecord":
        return cls(
            title=str(raw["title"]),
            credits=str(raw.get("credits") or ""),
            description=raw.get("description") or None,
            extra_details=tuple(
                tuple(Fragment.from_dict(f) for f in block)
                for block in (raw.get("extra_details") or [])
            ),
        )


@dataclass
class ParsedCourse:
    identifier: CourseIdentifier
    title: str
    credits: float
    min_credits: Optional[float] = None  # set only for a credit range
    description: Optional[str] = None
    attributes: AttributeList = field(default_factory=AttributeList)
    crosslist: Optional[List[CourseIdentifier]] = None
    requirements: RequirementSet = field(default_factory=RequirementSet)
    flags: CourseFlags = field(default_factory=CourseFlags)
    residue: List[str] = field(default_factory=list)


def parse_credits(raw: str) -> Tuple[Optional[float], float]:
    """
    "3 Credits"                  -> (None, 3.0)
    "1-3 Credits"                -> (1.0, 3.0)
    "1-12 Credits/Maximum of 12" -> (1.0, 12.0)
    """
    text = raw.strip()
    try:
        if "/Maximum of " in text:
            raw_min, raw_max = text.split("/Maximum of ", 1)
            maximum = float(raw_max)
            minimum = float(_CREDITS_SUFFIX.sub("", raw_min).split("-")[0])
            return (None, maximum) if minimum == maximum else (minimum, maximum)

        text = _CREDITS_SUFFIX.sub("", text)
        if "-" in text:
            low, high = text.split("-", 1)
            return float(low), float(high)
        return None, float(text)
    except ValueError:
        raise ValueError(f"Couldn't parse credits: {raw!r}") from None


def parse_course_record(record: CourseRecord) -> Optional[ParsedCourse]:
    """Run a course entry through the requirement pipeline. None for noisy entries."""
    if record.title in NOISY_COURSE_TITLES:
        return None

    identifier, title = parse_course_title(record.title)
    min_credits, credits = parse_credits(record.credits)
    extra = parse_extra_details(record.extra_details, identifier)

    return ParsedCourse(
        identifier=identifier,
        title=title,
        credits=credits,
        min_credits=min_credits,
        description=record.description,
        attributes=extra.attributes,
        crosslist=extra.crosslist,
        requirements=extra.requirements,
        flags=extra.flags,
        residue=extra.residue,
    )


def load_catalog(directory: str) -> list[CourseRecord]:
    p = Path(directory)
    if not p.exists() or not p.is_dir():
        return []

    items: list[CourseRecord] = []

    for f in sorted(p.glob("*.json")):
        try:
            items.extend(_load_json_catalog(f))
        except (ValueError, KeyError, TypeError) as e:
            # Skip unreadable files, keep the rest of the catalog
            print(f"[catalog] Skipping {f.name}: {e}")

    # De-dup on heading, first file wins
    uniq: dict[str, CourseRecord] = {}
    for c in items:
        uniq.setdefault(c.title, c)
    return list(uniq.values())


def _load_json_catalog(f: Path) -> list[CourseRecord]:
    data = json.loads(f.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("courses") or []
    return [CourseRecord.from_dict(row) for row in data]


def parse_catalog(records) -> tuple[list[ParsedCourse], list[str]]:
    """
    Parse every record, skipping noisy and malformed ones.

    Returns (courses, skipped titles). UnknownTaxonomyValue is not caught:
    the static tables need a new entry before the catalog can be loaded.
    """
    courses: list[ParsedCourse] = []
    skipped: list[str] = []

    for record in records:
        try:
            course = parse_course_record(record)
        except ValueError as e:
            # bad heading or credits only loses this course
            print(f"[catalog] Skipping {record.title}: {e}")
            skipped.append(record.title)
            continue
        if course is None:
            skipped.append(record.title)
            continue
        courses.append(course)

    return courses, skipped
