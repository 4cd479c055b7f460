# errors.py
# Request-level failures of the scheduling pipeline. Each one knows how to render itself as a result dict.

from typing import Any, Dict, List

__all__ = [
    "ScheduleError",
    "DuplicateRequest",
    "UnknownCourse",
    "NoRules",
    "MissingSections",
    "NoOptionsAfterHardFilter",
    "TooManyOptions",
    "ScheduleConflict",
]


# Base class for failures that end a scheduling call early.
class ScheduleError(Exception):
    status = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_result(self) -> Dict[str, Any]:
        return {"status": self.status, "message": self.message}


class DuplicateRequest(ScheduleError):
    def __init__(self, courses: List[str]) -> None:
        self.courses = courses
        super().__init__(f"Duplicate course(s) in request: {', '.join(courses)}")


class UnknownCourse(ScheduleError):
    def __init__(self, course: str) -> None:
        self.course = course
        super().__init__(f"Unknown course: {course}.")


class NoRules(ScheduleError):
    def __init__(self, course: str) -> None:
        self.course = course
        super().__init__(f"No course rules found for {course}.")


class MissingSections(ScheduleError):
    def __init__(self, course: str, components: List[str]) -> None:
        self.course = course
        self.components = components
        super().__init__(f"Missing sections for {course}: {', '.join(components)}")


class NoOptionsAfterHardFilter(ScheduleError):
    def __init__(self, course: str, reasons: List[str]) -> None:
        self.course = course
        self.reasons = reasons
        suffix = f" (after applying {' and '.join(reasons)})" if reasons else ""
        super().__init__(f"No valid options remain for {course}{suffix}.")


class TooManyOptions(ScheduleError):
    def __init__(self, course: str, count: int, limit: int) -> None:
        self.course = course
        self.count = count
        self.limit = limit
        super().__init__(
            f"Too many section combinations for {course}: {count} exceeds the limit of {limit}."
        )


class ScheduleConflict(ScheduleError):
    status = "conflict"

    def __init__(self, unresolvable_pairs: List[List[str]]) -> None:
        self.unresolvable_pairs = unresolvable_pairs
        super().__init__("These courses conflict and cannot be scheduled together.")

    def to_result(self) -> Dict[str, Any]:
        result = super().to_result()
        result["unresolvablePairs"] = self.unresolvable_pairs
        return result
