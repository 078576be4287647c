import logging

from services.req_ir import Mode, NodeKind
from tests.conftest import ident
from utils.req_parser import RequirementScanner, parse_requirements


def parse(chunks, course="MATH 141"):
    return parse_requirements(chunks, ident(course))


def test_single_prerequisite():
    details = parse(["Prerequisite", ": ", "MATH 140"])

    assert details.requirements.prerequisites.courses() == [ident("MATH 140")]
    assert details.requirements.concurrent is None
    assert not details.flags.deviant.unknown_requirement
    assert details.residue == []


def test_alternatives_build_an_or_root():
    details = parse(["Prerequisite", ": ", "MATH 140", " or ", "MATH 140H"])

    tree = details.requirements.prerequisites
    assert tree.root.kind is NodeKind.OR
    assert str(tree) == "MATH 140 OR MATH 140H"


def test_plural_label_leaves_no_residue():
    details = parse(["Prerequisites", ": ", "MATH 140"])

    assert str(details.requirements.prerequisites) == "MATH 140"
    assert not details.flags.deviant.unknown_requirement


def test_mode_switch_within_one_fragment():
    details = parse(["PREREQUISITE: MATH 140. CONCURRENT: PHYS 211."], course="PHYS 212")

    assert str(details.requirements.prerequisites) == "MATH 140"
    assert str(details.requirements.concurrent) == "PHYS 211"
    assert not details.flags.is_prerequisite_concurrent_separate


def test_corequisite_and_recommended():
    details = parse(["Corequisite: MATH 140. Recommended Preparation: PHYS 211"], course="PHYS 212")

    assert str(details.requirements.corequisites) == "MATH 140"
    assert str(details.requirements.recommended) == "PHYS 211"
    assert details.requirements.prerequisites is None


def test_first_clause_per_category_wins():
    details = parse(["PREREQUISITE: MATH 140. PREREQUISITE: MATH 141."], course="MATH 230")

    assert str(details.requirements.prerequisites) == "MATH 140"


def test_nested_groups_and_unknown_residue():
    details = parse(
        [
            "Enforced Prerequisite at Enrollment:",
            " ",
            "MATH 141",
            " and (",
            "PHYS 211",
            " or ",
            "MATH 140H",
            ") and fifth semester standing",
        ],
        course="MATH 230",
    )

    tree = details.requirements.prerequisites
    assert tree.to_grammar() == "{MATH 141}&({PHYS 211}|{MATH 140H})"
    assert str(tree) == "MATH 141 AND (PHYS 211 OR MATH 140H)"
    assert details.flags.deviant.unknown_requirement
    assert details.residue == ["FIFTH SEMESTER STANDING"]


def test_self_reference_is_dropped():
    details = parse(["PREREQUISITE: MATH 141 OR MATH 140"])

    tree = details.requirements.prerequisites
    assert tree.courses() == [ident("MATH 140")]
    assert len(tree) == 2


def test_repeated_course_is_dropped():
    details = parse(["PREREQUISITE: MATH 140 OR MATH 140"])
    assert details.requirements.prerequisites.courses() == [ident("MATH 140")]


def test_any_placeholder_is_skipped():
    details = parse(["PREREQUISITE: ANY 100"])

    assert details.requirements.prerequisites is None
    assert details.residue == []


def test_dangling_connectives_are_stripped():
    details = parse(["PREREQUISITE", " and ", "MATH 140", " or "])

    tree = details.requirements.prerequisites
    assert tree.to_grammar() == "{MATH 140}"
    assert len(tree) == 2


def test_or_concurrent_marks_separate_requirements():
    details = parse(["Prerequisite", ": ", "MATH 140", " or Concurrent: ", "MATH 141"], course="PHYS 211")

    assert details.flags.is_prerequisite_concurrent_separate
    assert str(details.requirements.prerequisites) == "MATH 140"
    assert str(details.requirements.concurrent) == "MATH 141"


def test_noise_phrases_are_ignored():
    details = parse(["PREREQUISITE: C OR BETTER IN MATH 140"])

    assert str(details.requirements.prerequisites) == "MATH 140"
    assert details.residue == []


def test_legacy_separators():
    assert str(parse(["PREREQUISITE: MATH 140; MATH 150"]).requirements.prerequisites) == "MATH 140 OR MATH 150"
    assert str(parse(["PREREQUISITE: MATH 140, MATH 150"]).requirements.prerequisites) == "MATH 140 AND MATH 150"


def test_misspelled_label():
    details = parse(["Prerquisite: MATH 140"])
    assert str(details.requirements.prerequisites) == "MATH 140"


def test_longest_identifier_wins():
    details = parse(["PREREQUISITE: MATH 140H"], course="MATH 140")
    assert details.requirements.prerequisites.courses() == [ident("MATH 140H")]


def test_non_breaking_space_in_identifier():
    details = parse(["Prerequisite", ": ", "MATH\u00a0140"])
    assert details.requirements.prerequisites.courses() == [ident("MATH 140")]


def test_courses_before_any_label_are_dropped():
    details = parse(["MATH 140"])
    assert details.requirements.is_empty()


def test_label_without_courses_leaves_category_empty():
    details = parse(["Recommended Preparation: ", "sophomore standing"])

    assert details.requirements.recommended is None
    assert details.residue == ["SOPHOMORE STANDING"]
    assert details.flags.deviant.unknown_requirement


def test_malformed_clause_only_drops_its_category(caplog):
    scanner = RequirementScanner(ident("PHYS 212"))
    scanner.flush(Mode.PREREQUISITE)
    scanner.requirement_text = "{MATH 140}}"

    with caplog.at_level(logging.WARNING, logger="utils.req_parser"):
        scanner.flush(Mode.CONCURRENT)
    scanner.scan("PHYS 211")
    details = scanner.finish()

    assert details.requirements.prerequisites is None
    assert str(details.requirements.concurrent) == "PHYS 211"
    assert "dropping PREREQUISITE" in caplog.text


def test_clause_without_courses_does_not_claim_its_category():
    # "( )" builds no tree, so the later clause is the first one stored.
    # An empty first tree would otherwise block it under write-once.
    details = parse(["Prerequisite", ": (", ")", "Prerequisite", ": ", "MATH 140"])

    assert details.requirements.prerequisites.to_grammar() == "{MATH 140}"
    assert details.flags.deviant.unknown_requirement is False
