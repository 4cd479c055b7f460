import pytest

from catalog import catalog_from_dict


def section(course, component, option, *meetings):
    return {
        "course": course,
        "component": component,
        "option": option,
        "meetings": [{"day": d, "start": s, "end": e} for d, s, e in meetings],
    }


def make_catalog(rules, *sections):
    return catalog_from_dict({
        "courseRules": [{"course": c, "required": r} for c, r in rules.items()],
        "sections": list(sections),
    })


@pytest.fixture
def cs100_catalog():
    # Lecture A overlaps Lab A; every other pairing fits.
    return make_catalog(
        {"CS100": ["Lecture", "Lab"]},
        section("CS100", "Lecture", "A", ("Mon", "09:00", "10:00")),
        section("CS100", "Lecture", "B", ("Mon", "11:00", "12:00")),
        section("CS100", "Lab", "A", ("Mon", "09:30", "10:30")),
        section("CS100", "Lab", "B", ("Wed", "14:00", "15:00")),
    )


@pytest.fixture
def campus_catalog():
    return make_catalog(
        {
            "MATH100": ["Lecture"],
            "PHYS100": ["Lecture"],
            "BIO200": ["Lecture"],
            "CHEM200": ["Lecture"],
            "HIST100": ["Lecture", "Discussion"],
            "ART100": ["Lecture", "Lab", "Discussion"],
            "EMPTY100": [],
        },
        section("MATH100", "Lecture", "101", ("Mon", "10:00", "11:00")),
        section("PHYS100", "Lecture", "101", ("Mon", "10:30", "11:30")),
        section("BIO200", "Lecture", "101", ("Mon", "09:00", "11:00")),
        section("CHEM200", "Lecture", "101", ("Mon", "11:00", "13:00")),
        section("CHEM200", "Lecture", "102", ("Mon", "14:00", "16:00")),
        section("HIST100", "Lecture", "101", ("Tue", "08:00", "09:30"), ("Thu", "08:00", "09:30")),
        section("HIST100", "Lecture", "102", ("Tue", "13:00", "14:30"), ("Thu", "13:00", "14:30")),
        section("HIST100", "Discussion", "D1", ("Fri", "10:00", "11:00")),
        section("HIST100", "Discussion", "D2", ("Wed", "16:00", "17:00")),
        section("ART100", "Lecture", "101", ("Wed", "09:00", "10:00")),
    )
