from collections import Counter

from config import Config
from services.req_ir import render_tree
from utils.course_catalog import load_catalog, parse_catalog

DEBUG = False


if __name__ == "__main__":
    catalog = load_catalog(Config.CATALOG_DIR)

    courses, skipped = parse_catalog(catalog)
    flag_counts = Counter()
    category_counts = Counter()
    residue_tokens = Counter()
    residue_examples = {}  # residue -> example "MATH 140 - Calculus ..."

    for course in courses:
        for mode, tree in course.requirements.items():
            category_counts[mode.value] += 1
            if DEBUG:
                print(f"{course.identifier} {mode.value}: {render_tree(tree)}")

        if course.flags.is_prerequisite_concurrent_separate:
            flag_counts["is_prerequisite_concurrent_separate"] += 1
        if course.flags.deviant.unknown_requirement:
            flag_counts["unknown_requirement"] += 1
        if course.flags.deviant.empty_crosslist:
            flag_counts["empty_crosslist"] += 1

        for tok in course.residue:
            residue_tokens[tok] += 1
            residue_examples.setdefault(tok, f"{course.identifier} - {course.title}")

    print("Courses parsed:", len(courses))
    print("Records skipped:", len(skipped))

    print("\nRequirement trees by category:")
    for category, cnt in sorted(category_counts.items()):
        print(f"{cnt:>5} x {category}")

    print("\nFlags:")
    for flag, cnt in flag_counts.most_common():
        print(f"{cnt:>5} x {flag}")

    print("\nTop unknown requirement text:")
    for tok, cnt in residue_tokens.most_common(20):
        example = residue_examples.get(tok, "")
        print(f"{cnt:>3} x {tok}   (e.g. {example})")
