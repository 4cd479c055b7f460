import pytest

from errors import NoOptionsAfterHardFilter
from models import CourseOption, Meeting, Preferences
from preferences import filter_course_options, normalize_preferences, option_passes_hard_constraints


def option(*meetings):
    return CourseOption("CS100", (), tuple(Meeting.from_labels(d, s, e) for d, s, e in meetings))


def test_empty_input_means_no_constraints():
    assert normalize_preferences(None) == Preferences()
    assert normalize_preferences("early") == Preferences()


def test_valid_preferences_are_kept():
    prefs = normalize_preferences({
        "noClassBefore": "10:00",
        "noClassAfter": "18:00",
        "noClassOnDays": [" Fri ", "", None, "Sat"],
        "maxContinuousHours": 2,
    })
    assert prefs == Preferences("10:00", "18:00", ("Fri", "Sat"), 2)


@pytest.mark.parametrize("value", ["10", "ten", "25:00", "10:75", 1000, None])
def test_malformed_cutoffs_are_dropped(value):
    prefs = normalize_preferences({"noClassBefore": value, "noClassAfter": value})
    assert prefs.no_class_before is None
    assert prefs.no_class_after is None


def test_days_must_be_a_list():
    assert normalize_preferences({"noClassOnDays": "Fri"}).no_class_on_days == ()


@pytest.mark.parametrize("value, expected", [
    (2, 2),
    (1.5, 1.5),
    ("3", 3),
    (0, None),
    (-1, None),
    (float("inf"), None),
    (float("nan"), None),
    (10 ** 400, None),
    (True, None),
    ("lots", None),
])
def test_max_continuous_hours(value, expected):
    assert normalize_preferences({"maxContinuousHours": value}).max_continuous_hours == expected


def test_as_dict_echoes_camel_case():
    prefs = normalize_preferences({"noClassOnDays": ["Fri"]})
    assert prefs.as_dict() == {
        "noClassBefore": None,
        "noClassAfter": None,
        "noClassOnDays": ["Fri"],
        "maxContinuousHours": None,
    }


def test_hard_constraints():
    meetings = option(("Mon", "09:00", "10:00"), ("Wed", "15:00", "17:00")).meetings
    assert option_passes_hard_constraints(meetings, Preferences())
    assert not option_passes_hard_constraints(meetings, Preferences(no_class_before="09:30"))
    assert option_passes_hard_constraints(meetings, Preferences(no_class_before="09:00"))
    assert not option_passes_hard_constraints(meetings, Preferences(no_class_after="16:30"))
    assert option_passes_hard_constraints(meetings, Preferences(no_class_after="17:00"))
    assert not option_passes_hard_constraints(meetings, Preferences(no_class_on_days=("Wed",)))


def test_soft_constraint_is_not_applied_by_filter():
    long_day = option(("Mon", "08:00", "16:00"))
    assert filter_course_options("CS100", [long_day], Preferences(max_continuous_hours=1)) == [long_day]


def test_filter_keeps_survivors_in_order():
    early, late, later = option(("Mon", "08:00", "09:00")), option(("Mon", "10:00", "11:00")), option(("Tue", "12:00", "13:00"))
    prefs = Preferences(no_class_before="10:00")
    assert filter_course_options("CS100", [early, late, later], prefs) == [late, later]


def test_filter_error_names_supplied_constraints():
    prefs = Preferences(no_class_before="10:00", no_class_on_days=("Mon", "Tue"))
    with pytest.raises(NoOptionsAfterHardFilter) as exc:
        filter_course_options("CS100", [option(("Mon", "08:00", "09:00"))], prefs)
    assert exc.value.message == (
        "No valid options remain for CS100 (after applying noClassBefore=10:00 and noClassOnDays=Mon,Tue)."
    )
