# Run from the project root: python -m scripts.requirements_report --out report.csv
from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd

from config import Config
from services.req_ir import Mode, render_tree
from utils.course_catalog import ParsedCourse, load_catalog, parse_catalog


def build_report(courses: list[ParsedCourse]) -> pd.DataFrame:
    """One row per course: rendered requirements, flags and leftover text for review."""
    rows = []
    for c in courses:
        row = {
            "course": str(c.identifier),
            "title": c.title,
            "credits": c.credits,
            "min_credits": c.min_credits,
        }
        for mode in Mode:
            tree = c.requirements.get(mode)
            row[mode.value] = render_tree(tree) if tree is not None else None
        row["crosslist"] = ", ".join(str(x) for x in c.crosslist) if c.crosslist else None
        row["attributes"] = ", ".join(c.attributes.codes()) or None
        row["is_prerequisite_concurrent_separate"] = c.flags.is_prerequisite_concurrent_separate
        row["unknown_requirement"] = c.flags.deviant.unknown_requirement
        row["empty_crosslist"] = c.flags.deviant.empty_crosslist
        row["residue"] = " | ".join(c.residue) or None
        rows.append(row)

    columns = ["course", "title", "credits", "min_credits"]
    columns += [m.value for m in Mode]
    columns += [
        "crosslist",
        "attributes",
        "is_prerequisite_concurrent_separate",
        "unknown_requirement",
        "empty_crosslist",
        "residue",
    ]
    return pd.DataFrame(rows, columns=columns)


def write_report(df: pd.DataFrame, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if out_path.suffix.lower() == ".xlsx":
        df.to_excel(out_path, index=False)
    else:
        df.to_csv(out_path, index=False)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Write a per-course requirements audit table.")
    parser.add_argument("--catalog-dir", default=Config.CATALOG_DIR)
    parser.add_argument("--out", default=Config.REPORT_PATH, help=".xlsx or .csv")
    parser.add_argument("--deviant-only", action="store_true", help="only courses with a deviant flag")
    args = parser.parse_args(argv)

    courses, _ = parse_catalog(load_catalog(args.catalog_dir))
    df = build_report(courses)
    if args.deviant_only:
        df = df[df["unknown_requirement"] | df["empty_crosslist"]]

    out_path = Path(args.out)
    write_report(df, out_path)
    print(f"Wrote {out_path} with {len(df)} courses.")


if __name__ == "__main__":
    main()
