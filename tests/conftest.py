from pathlib import Path

import pytest

from app import create_app
from config import TestingConfig
from extensions import db
import models  # noqa: F401
from services.course_identifier import CourseIdentifier
from services.extra_details import Fragment
from utils.course_catalog import load_catalog, parse_course_record

CATALOG_DIR = Path(__file__).resolve().parents[1] / "data_catalog"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog_courses():
    parsed = (parse_course_record(r) for r in load_catalog(str(CATALOG_DIR)))
    return [c for c in parsed if c is not None]


def ident(text: str) -> CourseIdentifier:
    return CourseIdentifier.parse(text)


def label(text: str) -> Fragment:
    return Fragment(kind="label", text=text)


def text(value: str) -> Fragment:
    return Fragment(kind="text", text=value)
