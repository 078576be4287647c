from flask import abort, jsonify, request

from . import main_bp
from models.course import UndergraduateCourse
from services.course_identifier import CourseIdentifier
from services.errors import InvalidIdentifier
from services.req_ir import requirements_payload
from services.sync import find_course, load_requirements


def _course_summary(course: UndergraduateCourse) -> dict:
    return {
        "identifier": course.identifier,
        "title": course.title,
        "credits": course.credits,
        "min_credits": course.min_credits,
    }


@main_bp.route("/courses")
def list_courses():
    query = UndergraduateCourse.query
    code = (request.args.get("code") or "").strip().upper()
    if code:
        query = query.filter_by(code=code)

    courses = query.order_by(
        UndergraduateCourse.code,
        UndergraduateCourse.number,
        UndergraduateCourse.suffix,
    ).all()
    return jsonify([_course_summary(c) for c in courses])


@main_bp.route("/courses/<code>/<number>")
def view_course(code: str, number: str):
    # /courses/MATH/140H
    try:
        identifier = CourseIdentifier.parse(f"{code.upper()} {number.upper()}")
    except InvalidIdentifier:
        abort(404)

    course = find_course(identifier)
    if course is None:
        abort(404, description=f"Course {identifier} not found")

    payload = _course_summary(course)
    payload.update(
        {
            "description": course.description,
            "attributes": sorted(a.code for a in course.attributes),
            "crosslist": [x.crosslist_course.identifier for x in course.crosslists],
            "flags": {
                "is_prerequisite_concurrent_separate": course.is_prerequisite_concurrent_separate,
                "empty_crosslist": course.empty_crosslist,
                "unknown_requirement": course.unknown_requirement,
            },
            "requirements": requirements_payload(load_requirements(course).items()),
        }
    )
    return jsonify(payload)
