from __future__ import annotations

import calendar
from dataclasses import replace
from datetime import date

from app.domain.entities.timeline import TimelineTask

DEFAULT_TIMELINE: tuple[tuple[int, str], ...] = (
    (6, "Book venue"),
    (4, "Finalize catering"),
    (3, "Book photographer"),
    (2, "Send invitations"),
    (1, "Confirm vendors"),
    (0, "Event day"),
)


def months_before(day: date, months: int) -> date:
    """Same day `months` earlier, clamped to the last day of the target month."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def generate_timeline(
    event_date: date,
    milestones: tuple[tuple[int, str], ...] = DEFAULT_TIMELINE,
) -> list[TimelineTask]:
    return [
        TimelineTask(id=f"task-{idx}", title=title, due_date=months_before(event_date, offset))
        for idx, (offset, title) in enumerate(milestones)
    ]


def toggle_task(tasks: list[TimelineTask], task_id: str) -> list[TimelineTask]:
    return [replace(t, completed=not t.completed) if t.id == task_id else t for t in tasks]
