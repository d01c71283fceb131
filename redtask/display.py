"""
Console rendering for task and project listings.

Receives sequences that are already filtered and sorted; only formats.
"""

import re
import sys
from datetime import datetime
from typing import Iterable, Sequence, TextIO

from redtask.logging_config import Colors
from redtask.models import Priority, Project, Task
from redtask.models.base import utcnow
from redtask.utils import format_time_difference

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
SEP = " | "

TASK_HEADERS = ("id", "task", "priority", "age", "tags", "due")
PROJECT_HEADERS = ("shortcode", "name", "description", "age")


def color(text: str, code: str) -> str:
    return f"{code}{text}{Colors.RESET}"


def visible_len(text: str) -> int:
    return len(ANSI_RE.sub("", text))


def display_priority(priority: Priority) -> str:
    if priority is Priority.NOW:
        return color(priority.value, Colors.BOLD_RED)
    if priority is Priority.HIGH:
        return color(priority.value, Colors.RED)
    return priority.value


def display_due_date(due: datetime | None, now: datetime | None = None) -> str:
    """
    Time left until ``due``: minutes under an hour, hours under a day, else days.

    Overdue values truncate toward zero, so 30 seconds late reads ``0m``.
    """
    if due is None:
        return ""
    seconds = int((due - (now or utcnow())).total_seconds())
    if seconds < 3600:
        return f"{int(seconds / 60)}m"
    if seconds < 86400:
        return f"{int(seconds / 3600)}h"
    return f"{int(seconds / 86400)}d"


def display_text(task: Task) -> str:
    return color(task.text, Colors.GREEN) if task.done else task.text


def task_row(task: Task, now: datetime | None = None) -> list[str]:
    now = now or utcnow()
    return [
        str(task.id),
        display_text(task),
        display_priority(task.priority),
        format_time_difference(task.created_at, now),
        " ".join(task.tags),
        display_due_date(task.due, now),
    ]


def project_row(project: Project, now: datetime | None = None) -> list[str]:
    return [
        project.shortcode,
        project.name,
        project.description or "",
        format_time_difference(project.created_at, now or utcnow()),
    ]


def render_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    rows = [list(row) for row in rows]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], visible_len(cell))

    def fmt(cells: Sequence[str]) -> str:
        return SEP.join(cell + " " * (w - visible_len(cell)) for cell, w in zip(cells, widths)).rstrip()

    lines = [fmt([color(h, Colors.CYAN) for h in headers])]
    lines.append("-+-".join("-" * w for w in widths))
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)


def print_tasks(tasks: Sequence[Task], out: TextIO | None = None) -> None:
    out = out or sys.stdout
    if not tasks:
        print(color("No tasks.", Colors.GREY), file=out)
        return
    now = utcnow()
    print(render_table(TASK_HEADERS, (task_row(t, now) for t in tasks)), file=out)


def print_projects(projects: Sequence[Project], out: TextIO | None = None) -> None:
    out = out or sys.stdout
    if not projects:
        print(color("No projects.", Colors.GREY), file=out)
        return
    now = utcnow()
    print(render_table(PROJECT_HEADERS, (project_row(p, now) for p in projects)), file=out)
