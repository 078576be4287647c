import pytest

from services.errors import UnknownTaxonomyValue
from services.extra_details import (
    Fragment,
    extract_crosslist,
    is_noisy_extra_detail,
    parse_extra_details,
)
from tests.conftest import ident, label, text

MATH_141 = ident("MATH 141")


def test_fragment_from_dict():
    assert Fragment.from_dict("MATH 140") == text("MATH 140")
    assert Fragment.from_dict({"kind": "label", "text": "Prerequisite"}) == label("Prerequisite")
    assert Fragment.from_dict({"text": "MATH 140"}).kind == "text"
    with pytest.raises(ValueError):
        Fragment.from_dict({"kind": "link", "text": "MATH 140"})


def test_noisy_details():
    assert is_noisy_extra_detail("")
    assert is_noisy_extra_detail("Full-Time Equivalent Course")
    assert is_noisy_extra_detail("GenEd Learning Objective: Effective Communication")
    assert not is_noisy_extra_detail("Honors")


def test_attributes_are_collected():
    details = parse_extra_details(
        [
            [text("General Education: Quantification (GQ)")],
            [text("  Honors ")],
            [text("GenEd Learning Objective: Crit and Analytical Think")],
        ],
        MATH_141,
    )

    assert details.attributes.codes() == ["GQ", "HNR"]
    assert details.crosslist is None
    assert details.requirements.is_empty()


def test_attribute_typo_is_fixed():
    details = parse_extra_details(
        [[text("General Education: Social and Behavioral Scien (GS)")]], ident("ECON 102")
    )
    assert details.attributes.codes() == ["GS"]


def test_unknown_attribute_raises():
    with pytest.raises(UnknownTaxonomyValue) as excinfo:
        parse_extra_details([[text("Cultural Competence")]], MATH_141)

    assert excinfo.value.table == "attribute"
    assert excinfo.value.value == "Cultural Competence"


def test_labelled_block_is_a_requirement_block():
    details = parse_extra_details(
        [
            [
                label("Enforced Prerequisite at Enrollment:"),
                text(" "),
                text("MATH 140"),
                text(" or "),
                text("MATH 140H"),
            ]
        ],
        MATH_141,
    )

    assert str(details.requirements.prerequisites) == "MATH 140 OR MATH 140H"


def test_plain_text_requirement_label():
    details = parse_extra_details([[text("Prerequisite"), text(": "), text("MATH 140")]], MATH_141)
    assert str(details.requirements.prerequisites) == "MATH 140"


def test_crosslist_from_sibling_fragments():
    block = [text("Cross-listed with:"), text("MATH 140"), text("PHYS 140")]
    details = parse_extra_details([block], ident("MATH 140H"))

    assert details.crosslist == [ident("MATH 140"), ident("PHYS 140")]
    assert not details.flags.deviant.empty_crosslist


def test_crosslist_from_one_string():
    block = [text("Cross-listed with: MATH 140, phys 140")]
    assert extract_crosslist(block, block[0].text) == [ident("MATH 140"), ident("PHYS 140")]


def test_empty_crosslist_sets_flag():
    details = parse_extra_details([[text("Cross-Listed")]], MATH_141)

    assert details.crosslist is None
    assert details.flags.deviant.empty_crosslist


def test_empty_crosslist_flag_survives_requirement_block():
    details = parse_extra_details(
        [
            [text("Cross-Listed")],
            [label("Prerequisite"), text(": "), text("MATH 140"), text(" and fifth semester standing")],
        ],
        MATH_141,
    )

    assert details.flags.deviant.empty_crosslist
    assert details.flags.deviant.unknown_requirement
    assert details.residue == ["FIFTH SEMESTER STANDING"]


def test_empty_blocks_are_skipped():
    assert parse_extra_details([[], [text("")]], MATH_141).attributes.codes() == []
