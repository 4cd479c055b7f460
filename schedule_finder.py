# schedule_finder.py
# Picks one section combination per requested course so that no two meetings overlap, using a backtracking DFS.

import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

import config
from catalog import Catalog
from errors import (
    DuplicateRequest,
    MissingSections,
    NoRules,
    ScheduleConflict,
    ScheduleError,
    TooManyOptions,
    UnknownCourse,
)
from models import CourseOption, Meeting, Preferences, Section
from preferences import filter_course_options, normalize_preferences

__all__ = [
    "schedule_courses",
    "build_course_options",
    "search",
    "meetings_conflict",
    "violates_max_continuous_hours",
    "find_unresolvable_pairs",
    "format_timetable",
]

logger = logging.getLogger(__name__)

CourseOptions = List[Tuple[str, List[CourseOption]]]


def schedule_courses(catalog: Catalog, requests: Any, preferences: Any = None) -> Dict[str, Any]:
    # Runs the whole pipeline; request-level failures come back as result dicts, never as exceptions.
    prefs = normalize_preferences(preferences)
    try:
        courses = _requested_courses(catalog, requests)
        per_course: CourseOptions = [
            (course, filter_course_options(course, build_course_options(catalog, course), prefs))
            for course in courses
        ]

        relaxed = False
        meetings = search(per_course, prefs, enforce_soft=True)
        # Without a soft constraint the relaxed pass would repeat the strict one.
        if meetings is None and prefs.has_soft_constraint:
            logger.info("Strict pass failed, relaxing maxContinuousHours=%s", prefs.max_continuous_hours)
            relaxed = True
            meetings = search(per_course, prefs, enforce_soft=False)
        if meetings is None:
            raise ScheduleConflict(find_unresolvable_pairs(per_course))
    except ScheduleError as e:
        logger.info("Scheduling failed (%s): %s", e.status, e.message)
        return e.to_result()

    warnings = []
    if relaxed:
        warnings.append(
            f"Could not satisfy maxContinuousHours={prefs.max_continuous_hours}. "
            "Generated a feasible schedule by relaxing it."
        )

    applied = prefs.as_dict()
    applied["softConstraintRelaxed"] = relaxed
    return {
        "status": "ok",
        "timetable": format_timetable(meetings),
        "warnings": warnings,
        "appliedPreferences": applied,
    }


def _requested_courses(catalog: Catalog, requests: Any) -> List[str]:
    # Course codes in request order; duplicates and unknown codes are rejected before any expansion.
    courses = []
    for entry in requests if isinstance(requests, list) else []:
        code = entry.get("course") if isinstance(entry, dict) else entry
        code = "" if code is None else str(code).strip()
        if code:
            courses.append(code)

    seen, duplicates = set(), []
    for code in courses:
        if code in seen and code not in duplicates:
            duplicates.append(code)
        seen.add(code)
    if duplicates:
        raise DuplicateRequest(duplicates)

    for code in courses:
        if catalog.required_components(code) is None:
            raise UnknownCourse(code)
    return courses


def build_course_options(catalog: Catalog, course: str,
                         max_options: Optional[int] = None) -> List[CourseOption]:
    # Every combination of one section per required component, in component order then section order.
    required = catalog.required_components(course)
    if required is None:
        raise UnknownCourse(course)
    if not required:
        raise NoRules(course)

    by_component = {component: catalog.sections_of(course, component) for component in required}
    missing = [component for component in required if not by_component[component]]
    if missing:
        raise MissingSections(course, missing)

    limit = config.MAX_OPTIONS_PER_COURSE if max_options is None else max_options
    total = 1
    for component in required:
        total *= len(by_component[component])
    if limit and total > limit:
        raise TooManyOptions(course, total, limit)

    options: List[CourseOption] = []
    chosen: List[Section] = []

    def build(i: int) -> None:
        if i == len(required):
            meetings = tuple(m for sec in chosen for m in sec.meetings)
            options.append(CourseOption(course, tuple(chosen), meetings))
            return
        for sec in by_component[required[i]]:
            chosen.append(sec)
            build(i + 1)
            chosen.pop()

    build(0)
    return options


def search(per_course: CourseOptions, prefs: Preferences,
           enforce_soft: bool = True) -> Optional[Tuple[Meeting, ...]]:
    # First conflict-free assignment in request order, or None once every branch is exhausted.
    check_soft = enforce_soft and prefs.has_soft_constraint
    logger.debug("Searching %d course(s), soft constraint %s",
                 len(per_course), "enforced" if check_soft else "ignored")

    def dfs(i: int, placed: Tuple[Meeting, ...]) -> Optional[Tuple[Meeting, ...]]:
        if i == len(per_course):
            return placed

        _, options = per_course[i]
        for opt in options:
            # Prune this branch if the option clashes with what is already placed.
            if meetings_conflict(placed, opt.meetings):
                continue
            candidate = placed + opt.meetings
            if check_soft and violates_max_continuous_hours(candidate, prefs.max_continuous_hours):
                continue
            found = dfs(i + 1, candidate)
            if found is not None:
                return found
        return None

    return dfs(0, ())


def meetings_conflict(current: Sequence[Meeting], candidate: Sequence[Meeting]) -> bool:
    # True if a candidate meeting overlaps a placed one, or another meeting of the same candidate.
    placed = list(current)
    for m in candidate:
        if any(m.overlaps(other) for other in placed):
            return True
        placed.append(m)
    return False


def violates_max_continuous_hours(meetings: Sequence[Meeting], max_hours: Optional[float],
                                  gap_minutes: Optional[int] = None) -> bool:
    if not max_hours or max_hours <= 0:
        return False
    if gap_minutes is None:
        gap_minutes = config.CONTINUOUS_GAP_MINUTES
    limit = max_hours * 60

    by_day: Dict[str, List[Meeting]] = defaultdict(list)
    for m in meetings:
        by_day[m.day].append(m)

    for day_meetings in by_day.values():
        day_meetings.sort(key=lambda m: m.start)
        block_start, block_end = day_meetings[0].start, day_meetings[0].end
        for m in day_meetings[1:]:
            if m.start - block_end <= gap_minutes:
                block_end = max(block_end, m.end)
                continue
            if block_end - block_start > limit:
                return True
            block_start, block_end = m.start, m.end
        if block_end - block_start > limit:
            return True

    return False


def find_unresolvable_pairs(per_course: CourseOptions) -> List[List[str]]:
    # Pairs of courses for which every combination of their surviving options conflicts.
    bad_pairs = []
    for i in range(len(per_course)):
        for j in range(i + 1, len(per_course)):
            (name_a, options_a), (name_b, options_b) = per_course[i], per_course[j]
            if not any(
                not meetings_conflict(oa.meetings, ob.meetings)
                for oa in options_a
                for ob in options_b
            ):
                bad_pairs.append([name_a, name_b])
    return bad_pairs


def format_timetable(meetings: Sequence[Meeting]) -> List[Dict[str, str]]:
    ordered = sorted(meetings, key=lambda m: (m.day, m.start))
    return [
        {
            "course": m.course,
            "component": m.component,
            "option": m.option,
            "day": m.day,
            "start": m.start_label,
            "end": m.end_label,
        }
        for m in ordered
    ]
