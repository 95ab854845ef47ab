from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Union

from student_hub.enums.app_enum import ActivityStatusEnum

UNKNOWN = "Unknown"


def _get(item, field: str):
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def _plain(value):
    return value.value if isinstance(value, Enum) else value


def percentage(part, total) -> float:
    if not total:
        return 0
    return round(part / total * 100, 1)


def count_by(items: Iterable[Any], key: Union[str, Callable]) -> Dict[str, int]:
    """Group-by count. Missing or empty keys fall into the "Unknown" bucket."""
    getter = key if callable(key) else (lambda item: _get(item, key))
    counts = {}
    for item in items:
        bucket = _plain(getter(item)) or UNKNOWN
        counts[bucket] = counts.get(bucket, 0) + 1
    return counts


def status_counts(activities: Iterable[Any]) -> Dict[str, int]:
    counts = {status.value: 0 for status in ActivityStatusEnum}
    for activity in activities:
        status = _plain(_get(activity, "status"))
        counts[status] = counts.get(status, 0) + 1
    return counts


def status_percentages(counts: Dict[str, int]) -> Dict[str, float]:
    total = sum(counts.values())
    return {status: percentage(count, total) for status, count in counts.items()}


def approved_credits(activities: Iterable[Any]) -> float:
    total = sum(
        float(_get(a, "credits") or 0)
        for a in activities
        if _plain(_get(a, "status")) == ActivityStatusEnum.approved.value
    )
    return round(total, 1)


def top_performers(students: Iterable[Any], activities: Iterable[Any], limit: int = 10) -> List[dict]:
    """
    Rank students by the credits of their approved activities.

    Activity count breaks ties; remaining ties keep the order of ``students``.
    """
    by_student = {}
    for activity in activities:
        by_student.setdefault(_get(activity, "student_id"), []).append(activity)

    ranked = []
    for student in students:
        owned = by_student.get(_get(student, "id"), [])
        total_credits = approved_credits(owned)
        if not owned and not total_credits:
            continue
        ranked.append({
            "id": _get(student, "id"),
            "name": _get(student, "name") or UNKNOWN,
            "student_id": _get(student, "student_id") or "N/A",
            "department": _get(student, "department") or UNKNOWN,
            "total_credits": total_credits,
            "activity_count": len(owned)
        })

    ranked.sort(key=lambda s: (s["total_credits"], s["activity_count"]), reverse=True)
    return ranked[:limit]
