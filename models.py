# models.py
# Value types shared by the catalog, the preference filter and the search.

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

__all__ = ["Meeting", "Section", "CourseOption", "Preferences", "to_minutes", "is_time_label"]

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def is_time_label(value: Any) -> bool:
    # True for wall-clock labels such as "9:30" or "14:00".
    if not isinstance(value, str):
        return False
    match = _TIME_RE.match(value.strip())
    return bool(match) and int(match.group(1)) < 24 and int(match.group(2)) < 60


def to_minutes(value: str) -> int:
    hours, minutes = value.strip().split(":")
    return int(hours) * 60 + int(minutes)


# One weekly meeting of a section. start/end are minutes since midnight; the labels keep the
# catalog's wall-clock text so the timetable can echo it back.
@dataclass(frozen=True)
class Meeting:
    day: str
    start: int
    end: int
    start_label: str
    end_label: str
    course: str = ""
    component: str = ""
    option: str = ""

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(f"Meeting must start before it ends: {self.start_label}-{self.end_label}")

    @classmethod
    def from_labels(cls, day: str, start: str, end: str, **tags: str) -> "Meeting":
        return cls(day, to_minutes(start), to_minutes(end), start, end, **tags)

    def overlaps(self, other: "Meeting") -> bool:
        return self.day == other.day and self.start < other.end and self.end > other.start


# A schedulable instance of one component of one course.
@dataclass(frozen=True)
class Section:
    course: str
    component: str
    option: str
    meetings: Tuple[Meeting, ...] = ()


# One section per required component, with their meetings flattened in component order.
@dataclass(frozen=True)
class CourseOption:
    course: str
    sections: Tuple[Section, ...]
    meetings: Tuple[Meeting, ...]


@dataclass(frozen=True)
class Preferences:
    no_class_before: Optional[str] = None
    no_class_after: Optional[str] = None
    no_class_on_days: Tuple[str, ...] = field(default_factory=tuple)
    max_continuous_hours: Optional[float] = None

    @property
    def has_soft_constraint(self) -> bool:
        return self.max_continuous_hours is not None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "noClassBefore": self.no_class_before,
            "noClassAfter": self.no_class_after,
            "noClassOnDays": list(self.no_class_on_days),
            "maxContinuousHours": self.max_continuous_hours,
        }
