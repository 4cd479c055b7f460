# catalog.py
# Read-only index of course rules and sections, plus the loader for the JSON catalog file.

import json
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from models import Meeting, Section, is_time_label, to_minutes

__all__ = ["Catalog", "load_catalog", "catalog_from_dict"]

logger = logging.getLogger(__name__)


# Course requirements and available sections, indexed by course and component.
# Built once and shared between requests; nothing mutates it after construction.
class Catalog:
    def __init__(self, rules: Mapping[str, Iterable[str]], sections: Iterable[Section]) -> None:
        self._rules: Dict[str, Tuple[str, ...]] = {
            course: tuple(components) for course, components in rules.items()
        }
        self._sections: Tuple[Section, ...] = tuple(sections)

        by_component: Dict[Tuple[str, str], List[Section]] = defaultdict(list)
        for sec in self._sections:
            by_component[(sec.course, sec.component)].append(sec)
        self._by_component = {key: tuple(secs) for key, secs in by_component.items()}

    def required_components(self, course: str) -> Optional[Tuple[str, ...]]:
        # None marks an unknown course; an empty tuple is a course with no rules.
        return self._rules.get(course)

    def sections_of(self, course: str, component: str) -> List[Section]:
        return list(self._by_component.get((course, component), ()))

    def course_codes(self) -> List[str]:
        from_rules = sorted(c for c in self._rules if c)
        if from_rules:
            return from_rules
        return sorted({sec.course for sec in self._sections if sec.course})

    @property
    def source(self) -> str:
        return "courseRules" if self._rules else "sections"

    def stats(self) -> Dict[str, int]:
        return {
            "courseRulesCount": len(self._rules),
            "sectionsCount": len(self._sections),
            "coursesCount": len(self.course_codes()),
        }


def _rule_rows(raw: Any) -> Iterable[Tuple[Any, Any]]:
    # courseRules may be a list of {course, required} rows or a plain {course: [...]} mapping.
    if isinstance(raw, Mapping):
        return raw.items()
    if isinstance(raw, list):
        return [(row.get("course"), row.get("required")) for row in raw if isinstance(row, Mapping)]
    return []


def _parse_meetings(course: str, component: str, option: str, rows: Any) -> Tuple[Meeting, ...]:
    if not isinstance(rows, list):
        return ()

    meetings = []
    for mt in rows:
        if not isinstance(mt, Mapping):
            continue
        day, start, end = mt.get("day"), mt.get("start"), mt.get("end")
        # Drop meetings that can't be compared: bad labels or empty/negative spans.
        if not (day and is_time_label(start) and is_time_label(end)) or to_minutes(start) >= to_minutes(end):
            logger.warning("Dropping invalid meeting %r for %s %s %s", mt, course, component, option)
            continue
        meetings.append(Meeting.from_labels(
            str(day).strip(), start.strip(), end.strip(),
            course=course, component=component, option=option,
        ))
    return tuple(meetings)


def catalog_from_dict(data: Any) -> Catalog:
    # Builds a Catalog from the decoded JSON document {"courseRules": ..., "sections": [...]}.
    if not isinstance(data, Mapping):
        raise ValueError("Catalog must be a JSON object with courseRules and sections")

    rules: Dict[str, List[str]] = {}
    for course, required in _rule_rows(data.get("courseRules", [])):
        if course and isinstance(required, list):
            rules[str(course)] = [str(v) for v in required]

    sections: List[Section] = []
    for row in data.get("sections", []) or []:
        if not isinstance(row, Mapping) or not row.get("course"):
            continue
        course = str(row["course"])
        component = str(row.get("component") or "")
        option = "" if row.get("option") is None else str(row["option"])
        sections.append(Section(course, component, option,
                                _parse_meetings(course, component, option, row.get("meetings"))))

    return Catalog(rules, sections)


def load_catalog(path: str) -> Catalog:
    # Loads and validates the catalog file once at startup.
    with open(path, encoding="utf-8") as f:
        catalog = catalog_from_dict(json.load(f))

    stats = catalog.stats()
    logger.info("Loaded %d course rules, %d sections from %s",
                stats["courseRulesCount"], stats["sectionsCount"], path)
    return catalog
