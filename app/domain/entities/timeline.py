from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TimelineTask:
    id: str
    title: str
    due_date: date
    completed: bool = False
