"""Fester Startdatensatz, wenn noch kein gespeicherter Zustand existiert."""

from datetime import date, datetime, time
from typing import Optional

from models.group import Group
from models.scheduled_class import ScheduledClass
from models.snapshot import Snapshot
from models.student import Student
from models.teacher import Teacher


def seed_snapshot(today: Optional[date] = None) -> Snapshot:
    """Zwei Lehrkräfte, zwei Schüler, eine Gruppe und eine Stunde heute 10:00."""
    today = today or date.today()
    start = datetime.combine(today, time(hour=10))

    return Snapshot(
        teachers=[
            Teacher(id="t1", name="Dr. Schmidt"),
            Teacher(id="t2", name="Prof. Jung"),
        ],
        students=[
            Student(id="s1", name="Anna", crm_profile_link="link1"),
            Student(id="s2", name="Ben", crm_profile_link="link2"),
        ],
        groups=[
            Group(id="g1", name="Mathematik 101", teacher_id="t1",
                  student_ids=["s1", "s2"]),
        ],
        scheduled_classes=[
            ScheduledClass(id="sc1", group_id="g1", teacher_id="t1",
                           start_time=start),
        ],
    )
