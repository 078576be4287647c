from __future__ import annotations

# Ordered: earlier rows are applied first and later rows see their output.
# Older course entries use ';' for OR and ',' for AND.
SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    (";", " OR"),
    (",", " AND"),
    ("CONCURRENT COURSES", "CONCURRENT"),
    ("RECOMMENDED PREPARATIONS", "RECOMMENDED PREPARATION"),
    # spelling mistakes seen in the bulletin
    ("PRERQUISITE", "PREREQUISITE"),
    ("PREREQUISTE", "PREREQUISITE"),
    ("PREQUISITE", "PREREQUISITE"),
    ("PREREQ ", "PREREQUISITE "),
)


def trim_all(s: str) -> str:
    """
    Collapse runs of spaces into one and trim both ends.

    Only ASCII spaces separate words here; a non-breaking space inside
    "MATH<nbsp>140" is kept so the identifier stays one token.
    """
    return " ".join(p for p in s.strip().split(" ") if p)


def replace_many(s: str, replacements) -> str:
    for old, new in replacements:
        s = s.replace(old, new)
    return s


def normalize_text(s: str) -> str:
    return trim_all(replace_many(s.upper(), SUBSTITUTIONS))
