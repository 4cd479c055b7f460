# preferences.py
# Normalizes the raw preference object and applies the hard constraints to a course's options.

import math
from typing import Any, List, Optional, Sequence

from errors import NoOptionsAfterHardFilter
from models import CourseOption, Meeting, Preferences, is_time_label, to_minutes

__all__ = ["normalize_preferences", "option_passes_hard_constraints", "filter_course_options"]


def _time_or_none(value: Any) -> Optional[str]:
    return value.strip() if is_time_label(value) else None


def _positive_number_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number


def normalize_preferences(raw: Any) -> Preferences:
    # Anything malformed becomes "no constraint" instead of an error.
    raw = raw if isinstance(raw, dict) else {}

    days = raw.get("noClassOnDays")
    if isinstance(days, list):
        blocked = tuple(s for s in ("" if d is None else str(d).strip() for d in days) if s)
    else:
        blocked = ()

    return Preferences(
        no_class_before=_time_or_none(raw.get("noClassBefore")),
        no_class_after=_time_or_none(raw.get("noClassAfter")),
        no_class_on_days=blocked,
        max_continuous_hours=_positive_number_or_none(raw.get("maxContinuousHours")),
    )


def option_passes_hard_constraints(meetings: Sequence[Meeting], prefs: Preferences) -> bool:
    if prefs.no_class_on_days:
        blocked = set(prefs.no_class_on_days)
        if any(m.day in blocked for m in meetings):
            return False

    if prefs.no_class_before:
        cutoff = to_minutes(prefs.no_class_before)
        if any(m.start < cutoff for m in meetings):
            return False

    if prefs.no_class_after:
        cutoff = to_minutes(prefs.no_class_after)
        if any(m.end > cutoff for m in meetings):
            return False

    return True


def _applied_reasons(prefs: Preferences) -> List[str]:
    reasons = []
    if prefs.no_class_before:
        reasons.append(f"noClassBefore={prefs.no_class_before}")
    if prefs.no_class_after:
        reasons.append(f"noClassAfter={prefs.no_class_after}")
    if prefs.no_class_on_days:
        reasons.append(f"noClassOnDays={','.join(prefs.no_class_on_days)}")
    return reasons


def filter_course_options(course: str, options: Sequence[CourseOption],
                          prefs: Preferences) -> List[CourseOption]:
    # maxContinuousHours is not checked here; it depends on the other courses' meetings.
    survivors = [opt for opt in options if option_passes_hard_constraints(opt.meetings, prefs)]
    if not survivors:
        raise NoOptionsAfterHardFilter(course, _applied_reasons(prefs))
    return survivors
