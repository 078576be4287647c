from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from extensions import db
from models.course import UndergraduateCourse
from models.course_attribute import CourseAttribute
from models.crosslist import Crosslist
from models.requirement_node import RequirementNode
from services.course_identifier import CourseIdentifier
from services.req_ir import Mode, RequirementTree
from utils.course_catalog import ParsedCourse

logger = logging.getLogger(__name__)


@dataclass
class SyncSummary:
    inserted: int = 0
    updated: int = 0
    requirement_rows: int = 0
    skipped_leaves: int = 0  # required course missing from the catalog
    skipped_crosslists: int = 0


def find_course(identifier: CourseIdentifier) -> Optional[UndergraduateCourse]:
    return UndergraduateCourse.query.filter_by(
        code=identifier.code,
        number=identifier.number,
        suffix=identifier.suffix or "",
    ).first()


def sync_courses(courses: Iterable[ParsedCourse]) -> SyncSummary:
    """
    Write parsed courses to the database.

    Courses go in first so crosslists and requirement leaves can point at
    them; a course that is synced again has its old links replaced.
    """
    courses = list(courses)
    summary = SyncSummary()

    rows: Dict[CourseIdentifier, UndergraduateCourse] = {}
    for parsed in courses:
        row, created = _upsert_course(parsed)
        rows[parsed.identifier] = row
        if created:
            summary.inserted += 1
        else:
            summary.updated += 1
    db.session.commit()

    for parsed in courses:
        row = rows[parsed.identifier]
        _clear_links(row)
        _add_attributes(row, parsed)
        _add_crosslist(row, parsed, summary)
        for mode, tree in parsed.requirements.items():
            _add_tree(row, mode, tree, summary)
    db.session.commit()

    return summary


def _upsert_course(parsed: ParsedCourse) -> tuple[UndergraduateCourse, bool]:
    ident = parsed.identifier
    row = find_course(ident)
    created = row is None
    if created:
        row = UndergraduateCourse(code=ident.code, number=ident.number, suffix=ident.suffix or "")
        db.session.add(row)

    row.title = parsed.title
    row.description = parsed.description
    row.credits = parsed.credits
    row.min_credits = parsed.min_credits
    row.is_prerequisite_concurrent_separate = parsed.flags.is_prerequisite_concurrent_separate
    row.empty_crosslist = parsed.flags.deviant.empty_crosslist
    row.unknown_requirement = parsed.flags.deviant.unknown_requirement
    return row, created


def _clear_links(row: UndergraduateCourse) -> None:
    CourseAttribute.query.filter_by(course_id=row.id).delete()
    Crosslist.query.filter_by(course_id=row.id).delete()
    # ORM delete so the children cascade follows the tree down
    for root in RequirementNode.query.filter_by(course_id=row.id).all():
        db.session.delete(root)
    db.session.flush()


def _add_attributes(row: UndergraduateCourse, parsed: ParsedCourse) -> None:
    for code in parsed.attributes.codes():
        db.session.add(CourseAttribute(course_id=row.id, code=code))


def _add_crosslist(row: UndergraduateCourse, parsed: ParsedCourse, summary: SyncSummary) -> None:
    seen = set()
    for ident in parsed.crosslist or []:
        other = find_course(ident)
        if other is None or other.id in seen:
            summary.skipped_crosslists += 1
            continue
        seen.add(other.id)
        db.session.add(Crosslist(course_id=row.id, crosslist_course_id=other.id))


def _add_tree(row: UndergraduateCourse, mode: Mode, tree: RequirementTree, summary: SyncSummary) -> None:
    # walk() is pre-order, so a node's parent row always exists already
    by_index: Dict[int, RequirementNode] = {}

    for index, node, _ in tree.walk():
        if node.parent is None:
            db_node = RequirementNode(category=mode.value, logic=node.kind.value, course_id=row.id)
        elif node.is_leaf:
            target = find_course(node.course)
            if target is None:
                logger.warning("%s: %s requirement %s not in catalog, skipping", row.identifier, mode.value, node.course)
                summary.skipped_leaves += 1
                continue
            db_node = RequirementNode(
                category=mode.value,
                logic=node.kind.value,
                req_course_id=target.id,
                parent_id=by_index[node.parent].id,
            )
        else:
            db_node = RequirementNode(
                category=mode.value,
                logic=node.kind.value,
                parent_id=by_index[node.parent].id,
            )

        db.session.add(db_node)
        # ids follow insertion order, load_requirements relies on it for sibling order
        db.session.flush()
        by_index[index] = db_node
        summary.requirement_rows += 1


def load_requirements(row: UndergraduateCourse) -> Dict[Mode, RequirementTree]:
    """Rebuild the stored requirement trees of a course."""
    trees: Dict[Mode, RequirementTree] = {}

    roots = (
        RequirementNode.query.filter_by(course_id=row.id, parent_id=None)
        .order_by(RequirementNode.id)
        .all()
    )
    for root in roots:
        flat = []

        def walk(node: RequirementNode) -> None:
            course = None
            if node.req_course is not None:
                target = node.req_course
                course = CourseIdentifier(code=target.code, number=target.number, suffix=target.suffix or None)
            flat.append((node.id, node.logic, node.parent_id, course))
            for child in node.children:
                walk(child)

        walk(root)
        trees[Mode(root.category)] = RequirementTree.from_rows(flat)

    return trees
