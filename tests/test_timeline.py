from datetime import date

from app.application.utils.timeline import generate_timeline, months_before, toggle_task


def test_generate_timeline_clamps_month_end():
    tasks = generate_timeline(date(2025, 8, 31))

    assert [t.id for t in tasks] == [f"task-{i}" for i in range(6)]
    assert [(t.title, t.due_date) for t in tasks] == [
        ("Book venue", date(2025, 2, 28)),
        ("Finalize catering", date(2025, 4, 30)),
        ("Book photographer", date(2025, 5, 31)),
        ("Send invitations", date(2025, 6, 30)),
        ("Confirm vendors", date(2025, 7, 31)),
        ("Event day", date(2025, 8, 31)),
    ]
    assert not any(t.completed for t in tasks)


def test_months_before_crosses_year():
    assert months_before(date(2025, 1, 15), 2) == date(2024, 11, 15)
    assert months_before(date(2024, 8, 29), 6) == date(2024, 2, 29)


def test_toggle_task():
    tasks = generate_timeline(date(2025, 6, 14))
    toggled = toggle_task(tasks, "task-2")

    assert toggled[2].completed is True
    assert tasks[2].completed is False
    assert toggle_task(toggled, "task-2")[2].completed is False
    assert toggle_task(tasks, "missing") == tasks
