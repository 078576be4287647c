from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from services.course_identifier import CourseIdentifier
from services.req_ir import CourseFlags, RequirementSet
from services.taxonomy import AttributeList, fix_attribute_typos
from utils.req_normalizer import trim_all
from utils.req_parser import parse_requirements

logger = logging.getLogger(__name__)

CROSSLIST_LABEL = "Cross-listed with:"
CROSSLIST_MARKER = "Cross-Listed"

# Plain-text details that introduce requirements instead of naming an attribute
REQUIREMENT_LABELS = frozenset(
    {
        "Prerequisite",
        "Prerequisites",
        "Enforced Prerequisite at Enrollment",
        "Enforced Corequisite at Enrollment",
        "Recommended Preparation",
    }
)

NOISY_DETAILS = frozenset(
    {
        "Full-Time Equivalent Course",
        "Faculty approval of work experience proposal including employment agreement "
        "with an approved supervisor (e.g., registered architect or other approved professional).",
        ".",
    }
)
NOISY_DETAIL_PREFIXES = ("GenEd Learning Objective:",)


@dataclass(frozen=True)
class Fragment:
    kind: str  # "label" (bold heading in the block) | "text"
    text: str

    @classmethod
    def from_dict(cls, raw) -> "Fragment":
        if isinstance(raw, str):
            return cls(kind="text", text=raw)
        kind = raw.get("kind") or "text"
        if kind not in ("label", "text"):
            raise ValueError(f"Unknown fragment kind: {kind!r}")
        return cls(kind=kind, text=str(raw.get("text") or ""))

    def to_dict(self) -> dict:
        return {"kind": self.kind, "text": self.text}


Block = Sequence[Fragment]


@dataclass
class CourseExtraDetails:
    attributes: AttributeList = field(default_factory=AttributeList)
    crosslist: Optional[List[CourseIdentifier]] = None
    requirements: RequirementSet = field(default_factory=RequirementSet)
    flags: CourseFlags = field(default_factory=CourseFlags)
    residue: List[str] = field(default_factory=list)


def is_noisy_extra_detail(detail: str) -> bool:
    return not detail or detail in NOISY_DETAILS or detail.startswith(NOISY_DETAIL_PREFIXES)


def is_crosslist_detail(detail: str) -> bool:
    return detail.startswith(CROSSLIST_LABEL) or detail == CROSSLIST_MARKER


def extract_crosslist(block: Block, detail: str) -> List[CourseIdentifier]:
    """
    Courses named in a crosslist block.

    Usually every course is its own fragment (a link); rarely the block is a
    single comma separated string.
    """
    if len(block) > 1:
        pieces = [f.text for f in block]
    else:
        pieces = detail.replace(CROSSLIST_LABEL, "").strip().split(",")

    found = []
    for piece in pieces:
        course = CourseIdentifier.try_parse(trim_all(piece.upper()))
        if course is not None:
            found.append(course)
    return found


def parse_extra_details(blocks: Sequence[Block], identifier: CourseIdentifier) -> CourseExtraDetails:
    """
    Sort the detail blocks under a course entry into requirements, crosslists
    and attributes.

    Raises UnknownTaxonomyValue for a plain-text detail that is not a known
    attribute.
    """
    details = CourseExtraDetails()

    for block in blocks:
        if not block:
            continue

        # requirement labels are mostly bold
        if any(f.kind == "label" for f in block):
            _apply_requirements(details, block, identifier)
            continue

        detail = trim_all(block[0].text)
        if is_noisy_extra_detail(detail):
            continue

        if is_crosslist_detail(detail):
            crosslist = extract_crosslist(block, detail)
            if crosslist:
                details.crosslist = crosslist
            else:
                logger.debug("%s: empty crosslist %r", identifier, detail)
                details.flags.deviant.empty_crosslist = True
            continue

        if detail in REQUIREMENT_LABELS:
            _apply_requirements(details, block, identifier)
            continue

        details.attributes.add(fix_attribute_typos(detail))

    return details


def _apply_requirements(details: CourseExtraDetails, block: Block, identifier: CourseIdentifier) -> None:
    parsed = parse_requirements([f.text for f in block], identifier)

    empty_crosslist = details.flags.deviant.empty_crosslist
    details.requirements = parsed.requirements
    details.flags = parsed.flags
    details.flags.deviant.empty_crosslist = empty_crosslist
    details.residue = parsed.residue
