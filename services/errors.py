from __future__ import annotations


class RequisiteError(ValueError):
    """Base class for errors raised while parsing requirement text."""


class InvalidIdentifier(RequisiteError):
    # Malformed course-code text ("MATH", "MATH ", "MATH 14X0")
    pass


class UnmatchedBrace(RequisiteError):
    pass


class UnknownTaxonomyValue(LookupError):
    """
    A college / campus / attribute label that the static tables do not cover.

    Not a parse error: it means the catalog introduced a label we don't know
    about yet, so callers should surface it instead of flagging and moving on.
    """

    def __init__(self, table: str, value: str):
        self.table = table
        self.value = value
        super().__init__(f"Unknown {table}: {value!r}")
