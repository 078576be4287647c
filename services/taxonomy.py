"""
Fixed lookup tables for bulletin labels (colleges, campuses, course attributes).

The bulletin changes independently of these tables, so lookups raise
UnknownTaxonomyValue instead of guessing. Table order is significant: it is
the order attributes and campuses are listed in.
"""

from __future__ import annotations

from typing import Iterable, List

from services.errors import UnknownTaxonomyValue

COLLEGES = {
    "Agricultural Sciences": "AgriculturalSciences",
    "Arts and Architecture": "ArtsAndArchitecture",
    "Donald P. Bellisario College of Communications": "Communications",
    "Earth and Mineral Sciences": "EarthAndMineralSciences",
    "Eberly College of Science": "Science",
    "Education": "Education",
    "Engineering": "Engineering",
    "Health and Human Development": "HealthAndHumanDevelopment",
    "Information Sciences and Technology": "InformationSciencesAndTechnology",
    "Intercollege": "Intercollege",
    "Liberal Arts": "LiberalArts",
    "Nursing": "Nursing",
    "Penn State Abington, The Abington College": "Abington",
    "Penn State Altoona, The Altoona College": "Altoona",
    "Penn State Berks, The Berks College": "Berks",
    "Penn State Erie, The Behrend College": "Behrend",
    "Penn State Harrisburg, The Capital College": "Capital",
    "Smeal College of Business": "Business",
    "University College": "UniversityCollege",
}

CAMPUSES = (
    "Abington",
    "Altoona",
    "Beaver",
    "Berks",
    "Brandywine",
    "DuBois",
    "Erie",  # aka Behrend
    "Fayette",
    "Greater Allegheny",
    "Harrisburg",  # aka Capital
    "Hazleton",
    "Lehigh Valley",
    "Mont Alto",
    "New Kensington",
    "Schuylkill",
    "Scranton",
    "Shenango",
    "University Park",
    "Wilkes-Barre",
    "World Campus",
    "York",
)

# listed on some programs but not campuses of their own
IGNORED_CAMPUSES = frozenset({"Hershey Med Ctr", "Nurses at Hershey"})

# label -> short code
ATTRIBUTES = {
    "General Education: Arts (GA)": "GA",
    "General Education: Health and Wellness (GHW)": "GHW",
    "General Education: Humanities (GH)": "GH",
    "General Education: Natural Sciences (GN)": "GN",
    "General Education: Quantification (GQ)": "GQ",
    "General Education: Social and Behavioral Sciences (GS)": "GS",
    "General Education: Writing/Speaking (GWS)": "GWS",
    "General Education - Integrative: Interdomain": "ITD",
    "General Education - Integrative: Linked": "LKD",
    "First-Year Seminar": "FYS",
    "International Cultures (IL)": "IC",
    "United States Cultures (US)": "US",
    "Writing Across the Curriculum": "WCC",
    "Bachelor of Arts: Arts": "BA",
    "Bachelor of Arts: Humanities": "BH",
    "Bachelor of Arts: Natural Sciences": "BN",
    "Bachelor of Arts: Other Cultures": "BO",
    "Bachelor of Arts: Quantification": "BQ",
    "Bachelor of Arts: Social and Behavioral Sciences": "BS",
    "Bachelor of Arts: Foreign/World Lang (12th Unit)": "BF1",
    "Bachelor of Arts: 2nd Foreign/World Language (All)": "BF2",
    "Honors": "HNR",
}

ATTRIBUTE_TYPOS = {
    "General Education: Social and Behavioral Scien (GS)": "General Education: Social and Behavioral Sciences (GS)",
}


def lookup_college(label: str) -> str:
    try:
        return COLLEGES[label]
    except KeyError:
        raise UnknownTaxonomyValue("college", label) from None


def lookup_campus(label: str) -> str:
    if label not in CAMPUSES:
        raise UnknownTaxonomyValue("campus", label)
    return label


def parse_campus_list(labels: Iterable[str]) -> List[str]:
    """Validated campuses in table order, e.g. from "Abington, Altoona, York"."""
    found = set()
    for label in labels:
        label = label.strip()
        if label in IGNORED_CAMPUSES:
            continue
        found.add(lookup_campus(label))
    return [c for c in CAMPUSES if c in found]


def fix_attribute_typos(label: str) -> str:
    return ATTRIBUTE_TYPOS.get(label, label)


def lookup_attribute(label: str) -> str:
    try:
        return ATTRIBUTES[label]
    except KeyError:
        raise UnknownTaxonomyValue("attribute", label) from None


class AttributeList:
    """Set of course attributes, iterated in table order."""

    def __init__(self, labels: Iterable[str] = ()):
        self._codes = set()
        for label in labels:
            self.add(label)

    def add(self, label: str) -> str:
        code = lookup_attribute(label)
        self._codes.add(code)
        return code

    def __contains__(self, label: str) -> bool:
        return lookup_attribute(label) in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self):
        return iter(self.labels())

    def labels(self) -> List[str]:
        return [label for label, code in ATTRIBUTES.items() if code in self._codes]

    def codes(self) -> List[str]:
        return [code for code in ATTRIBUTES.values() if code in self._codes]

    def __str__(self) -> str:
        return ", ".join(self.labels())
