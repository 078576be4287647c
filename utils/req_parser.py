from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from services.course_identifier import CourseIdentifier
from services.errors import RequisiteError
from services.req_ir import CourseFlags, Mode, RequirementSet, RequirementTree
from utils.req_normalizer import normalize_text, trim_all

logger = logging.getLogger(__name__)

STRUCTURAL_CHARS = "()[]"
IGNORED_CHARS = ".:"

MODE_KEYWORDS = {
    "PREREQUISITE": Mode.PREREQUISITE,
    "CONCURRENT": Mode.CONCURRENT,
    "COREQUISITE": Mode.COREQUISITE,
    "RECOMMENDED": Mode.RECOMMENDED,
}

# Phrases dropped silently when they fill the word buffer
NOISE_WORDS = frozenset(
    {
        "C OR BETTER IN",
        "PRIOR TO",
        "ENFORCED",
        "AT ENROLLMENT",
        "PREPARATION",
        # GEOG 462
        "PRIOR EXPOSURE TO R PROGRAMMING LANGUAGE",
    }
)

# "PREREQUISITES" switches mode on "PREREQUISITE" and leaves the plural S behind
IGNORED_RESIDUE = frozenset({"S"})


@dataclass
class CourseRequirementDetails:
    requirements: RequirementSet
    flags: CourseFlags
    # leftover text that set flags.deviant.unknown_requirement
    residue: List[str] = field(default_factory=list)


class RequirementScanner:
    """
    Single left-to-right scan over normalized text fragments.

    Structural characters go straight into the pending requirement text,
    words collect in a buffer until they resolve to a logic keyword, a noise
    phrase, a mode keyword or a course identifier. Switching mode flushes the
    pending text into the previous mode's tree (first flush wins).
    """

    def __init__(self, identifier: CourseIdentifier):
        self.identifier = identifier
        self.requirements = RequirementSet()
        self.flags = CourseFlags()
        self.residue: List[str] = []

        self.current_mode: Optional[Mode] = None
        self.requirement_text = ""

    def flush(self, new_mode: Optional[Mode]) -> None:
        # fragments can start or end mid-expression, drop dangling connectives
        text = self.requirement_text.strip("&|")
        if text and self.current_mode is not None:
            self._commit(self.current_mode, text)

        if new_mode is not None:
            logger.debug("%s: mode -> %s", self.identifier, new_mode.name)
        self.current_mode = new_mode
        self.requirement_text = ""

    def _commit(self, mode: Mode, text: str) -> None:
        if "{" not in text:
            return

        if self.requirements.get(mode) is not None:
            logger.debug("%s: ignoring repeated %s clause %r", self.identifier, mode.name, text)
            return

        try:
            tree = RequirementTree.from_grammar(text)
        except RequisiteError as e:
            logger.warning("%s: dropping %s requirements: %s", self.identifier, mode.name, e)
            return

        self.requirements.set_once(mode, tree)

    def scan(self, fragment: str) -> None:
        chunk = normalize_text(fragment)
        word = ""

        for i, ch in enumerate(chunk):
            if ch in STRUCTURAL_CHARS:
                self.requirement_text += ch
            elif ch not in IGNORED_CHARS:
                word += ch

            candidate = trim_all(word)

            if candidate == "AND":
                self.requirement_text += "&"
                word = ""
            elif candidate == "OR":
                self.requirement_text += "|"
                word = ""
            elif candidate in NOISE_WORDS:
                word = ""
            elif candidate in MODE_KEYWORDS:
                mode = MODE_KEYWORDS[candidate]
                # "... OR CONCURRENT: ..." -> either one satisfies the course
                if mode is Mode.CONCURRENT and self.requirement_text.endswith("|"):
                    self.flags.is_prerequisite_concurrent_separate = True
                self.flush(mode)
                word = ""
            elif self._is_complete_course(candidate, chunk, i):
                self._emit_course(candidate)
                word = ""

        leftover = trim_all(word)
        if leftover and leftover not in IGNORED_RESIDUE:
            logger.debug("%s: unknown requirement text %r", self.identifier, leftover)
            self.flags.deviant.unknown_requirement = True
            self.residue.append(leftover)

    @staticmethod
    def _is_complete_course(candidate: str, chunk: str, i: int) -> bool:
        # "MATH 1", "MATH 14" and "MATH 140" all parse while reading "MATH 140H";
        # only accept once the next character can't extend the identifier.
        if CourseIdentifier.try_parse(candidate) is None:
            return False
        if i == len(chunk) - 1:
            return True
        return CourseIdentifier.try_parse(candidate + chunk[i + 1]) is None

    def _emit_course(self, course_text: str) -> None:
        course = CourseIdentifier.parse(course_text)
        token = "{%s}" % course_text

        if course == self.identifier:
            return
        if token in self.requirement_text:
            return
        if "ANY" in course_text:
            return

        logger.debug("%s: course token %s", self.identifier, course)
        self.requirement_text += token

    def finish(self) -> CourseRequirementDetails:
        self.flush(None)
        return CourseRequirementDetails(
            requirements=self.requirements,
            flags=self.flags,
            residue=self.residue,
        )


def parse_requirements(
    text_chunks: Iterable[str], identifier: CourseIdentifier
) -> CourseRequirementDetails:
    """
    Turn the text fragments of one requirement block into requirement trees.

    text_chunks keeps the markup segmentation: "Prerequisite", ": ",
    "MATH 140", " or ", "MATH 141" arrive as separate items.
    """
    scanner = RequirementScanner(identifier)
    for chunk in text_chunks:
        scanner.scan(chunk)
    return scanner.finish()
