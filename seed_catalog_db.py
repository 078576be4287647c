from flask import current_app

from app import app
from extensions import db
import models  # noqa: F401
from services.sync import sync_courses
from utils.course_catalog import load_catalog, parse_catalog


def seed_catalog(catalog_dir=None):
    catalog = load_catalog(catalog_dir or current_app.config["CATALOG_DIR"])
    parsed, skipped = parse_catalog(catalog)

    db.create_all()
    summary = sync_courses(parsed)

    print(
        f"Catalog seed complete: {summary.inserted} inserted, {summary.updated} updated, "
        f"{len(skipped)} skipped"
    )
    print(
        f"Requirement rows: {summary.requirement_rows} "
        f"(unresolved leaves skipped: {summary.skipped_leaves}, "
        f"crosslists skipped: {summary.skipped_crosslists})"
    )
    return summary


if __name__ == "__main__":
    with app.app_context():
        seed_catalog()
