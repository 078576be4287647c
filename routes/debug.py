from flask import Blueprint, abort, current_app, jsonify, request

from services.course_identifier import CourseIdentifier
from services.errors import InvalidIdentifier, UnknownTaxonomyValue
from services.extra_details import Fragment, parse_extra_details

debug_bp = Blueprint("debug", __name__, url_prefix="/debug")


@debug_bp.route("/parse", methods=["POST"])
def parse():
    """
    Parse one course's detail blocks without touching the database.

    Body: {"identifier": "MATH 141",
           "extra_details": [[{"kind": "label", "text": "Prerequisite"}, " MATH 140"]]}
    """
    body = request.get_json(silent=True) or {}

    try:
        identifier = CourseIdentifier.parse((body.get("identifier") or "").strip().upper())
        blocks = [
            [Fragment.from_dict(f) for f in block]
            for block in (body.get("extra_details") or [])
        ]
    except (InvalidIdentifier, ValueError, AttributeError, TypeError) as e:
        abort(400, description=str(e))

    try:
        details = parse_extra_details(blocks, identifier)
    except UnknownTaxonomyValue as e:
        # new bulletin label: not a parse failure, the tables need updating
        current_app.logger.warning("debug parse for %s: %s", identifier, e)
        return jsonify({"error": "unknown_taxonomy_value", "table": e.table, "value": e.value}), 422

    return jsonify(
        {
            "identifier": str(identifier),
            "attributes": details.attributes.codes(),
            "crosslist": [str(c) for c in details.crosslist] if details.crosslist is not None else None,
            "flags": details.flags.to_dict(),
            "residue": details.residue,
            "requirements": details.requirements.to_dict(),
        }
    )
