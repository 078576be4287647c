import json

from models import UndergraduateCourse
from seed_catalog_db import seed_catalog
from services.sync import find_course
from tests.conftest import ident


def write_catalog(directory, courses):
    (directory / "catalog.json").write_text(json.dumps(courses), encoding="utf-8")


def test_seed_bundled_catalog(app, capsys):
    summary = seed_catalog()

    assert summary.inserted == 5
    assert "5 inserted, 0 updated, 1 skipped" in capsys.readouterr().out


def test_record_without_credits_is_skipped(app, tmp_path, capsys):
    write_catalog(
        tmp_path,
        [
            {"title": "MATH 140: Calculus I", "credits": "4 Credits"},
            {"title": "MATH 141: Calculus II"},
        ],
    )

    summary = seed_catalog(str(tmp_path))
    out = capsys.readouterr().out

    assert summary.inserted == 1
    assert UndergraduateCourse.query.count() == 1
    assert find_course(ident("MATH 140")) is not None
    assert "Skipping MATH 141: Calculus II" in out
    assert "1 inserted, 0 updated, 1 skipped" in out


def test_record_with_bad_heading_is_skipped(app, tmp_path):
    write_catalog(
        tmp_path,
        [
            {"title": "MATH: Calculus", "credits": "4 Credits"},
            {"title": "MATH 140: Calculus I", "credits": "4 Credits"},
        ],
    )

    assert seed_catalog(str(tmp_path)).inserted == 1
