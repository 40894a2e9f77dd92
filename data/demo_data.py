"""Demo-Daten-Generator.

Erzeugt einen reproduzierbaren Datensatz mit Lehrkräften, Schülern, Gruppen
und einer gefüllten Woche. Alle Stunden laufen über den EntityStore, damit
nur konfliktfreie Platzierungen übernommen werden; abgelehnte Versuche
werden gezählt und verworfen.
"""

import random
from datetime import date, datetime, time, timedelta
from typing import Optional

from config.schema import GridConfig
from config.defaults import default_grid
from models.group import Group
from models.scheduled_class import ScheduledClass
from models.snapshot import Snapshot
from models.student import Student
from models.teacher import Teacher
from scheduler.store import EntityStore

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Anna", "Ben", "Clara", "David", "Emma", "Felix", "Greta", "Hannah",
    "Jonas", "Lena", "Leon", "Marie", "Mia", "Noah", "Paul", "Sophie",
    "Tim", "Lea", "Finn", "Ida", "Luis", "Nele", "Emil", "Frieda",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer",
    "Wagner", "Becker", "Schulz", "Hoffmann", "Schäfer", "Koch",
    "Bauer", "Richter", "Klein", "Wolf", "Schröder", "Neumann",
]

_TITLES = ["", "", "Dr. ", "Prof. "]

_SUBJECTS = [
    "Mathematik", "Englisch", "Physik", "Chemie", "Deutsch",
    "Informatik", "Französisch", "Biologie", "Musik", "Kunst",
]


class DemoDataGenerator:
    """Generiert einen vollständigen Demo-Datensatz."""

    def __init__(
        self,
        seed: Optional[int] = None,
        num_teachers: int = 4,
        num_students: int = 12,
        groups_per_teacher: int = 2,
        classes_per_group: int = 3,
        individual_classes: int = 6,
        grid: Optional[GridConfig] = None,
        week_of: Optional[date] = None,
    ) -> None:
        self.rng = random.Random(seed)
        self.num_teachers = num_teachers
        self.num_students = num_students
        self.groups_per_teacher = groups_per_teacher
        self.classes_per_group = classes_per_group
        self.individual_classes = individual_classes
        self.grid = grid or default_grid()
        week_of = week_of or date.today()
        self.monday = week_of - timedelta(days=week_of.weekday())
        self.rejected = 0

    # ─── Stammdaten ───────────────────────────────────────────────────────────

    def _generate_teachers(self) -> list[Teacher]:
        teachers = []
        for i in range(1, self.num_teachers + 1):
            name = (
                f"{self.rng.choice(_TITLES)}{self.rng.choice(_FIRST_NAMES)} "
                f"{self.rng.choice(_LAST_NAMES)}"
            )
            teachers.append(Teacher(id=f"t{i}", name=name))
        return teachers

    def _generate_students(self) -> list[Student]:
        students = []
        for i in range(1, self.num_students + 1):
            name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
            students.append(Student(
                id=f"s{i}", name=name,
                crm_profile_link=f"https://crm.example.org/students/s{i}",
            ))
        return students

    def _generate_groups(
        self, teachers: list[Teacher], students: list[Student]
    ) -> list[Group]:
        groups = []
        n = 1
        for teacher in teachers:
            for _ in range(self.groups_per_teacher):
                size = self.rng.randint(min(2, len(students)), min(5, len(students)))
                members = self.rng.sample([s.id for s in students], size)
                level = self.rng.choice(["A1", "A2", "B1", "101", "201"])
                groups.append(Group(
                    id=f"g{n}",
                    name=f"{self.rng.choice(_SUBJECTS)} {level}",
                    teacher_id=teacher.id,
                    student_ids=members,
                ))
                n += 1
        return groups

    # ─── Stunden ──────────────────────────────────────────────────────────────

    def _random_start(self) -> datetime:
        # Demo-Woche nur Montag bis Freitag
        day = self.monday + timedelta(days=self.rng.randint(0, 4))
        hour = self.rng.choice(self.grid.hours)
        return datetime.combine(day, time(hour=hour))

    def _place(self, store: EntityStore, candidate: ScheduledClass) -> None:
        if not store.add_scheduled_class(candidate).ok:
            self.rejected += 1

    def generate(self) -> Snapshot:
        """Erzeugt den Datensatz als Snapshot."""
        self.rejected = 0
        teachers = self._generate_teachers()
        students = self._generate_students()
        groups = self._generate_groups(teachers, students)

        store = EntityStore(snapshot=Snapshot(
            teachers=teachers, groups=groups, students=students,
            scheduled_classes=[],
        ))

        for group in groups:
            for _ in range(self.classes_per_group):
                self._place(store, ScheduledClass(
                    teacher_id=group.teacher_id, group_id=group.id,
                    start_time=self._random_start(),
                ))

        for _ in range(self.individual_classes):
            if not teachers or not students:
                break
            self._place(store, ScheduledClass(
                teacher_id=self.rng.choice(teachers).id,
                student_id=self.rng.choice(students).id,
                start_time=self._random_start(),
            ))

        return store.export_snapshot()

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: Snapshot) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Demo-Daten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        group_classes = sum(1 for c in data.scheduled_classes if c.is_group_class)
        table.add_row("Lehrkräfte", str(len(data.teachers)), "")
        table.add_row("Schüler", str(len(data.students)), "")
        table.add_row("Gruppen", str(len(data.groups)),
                      f"{self.groups_per_teacher} pro Lehrkraft")
        table.add_row("Stunden", str(len(data.scheduled_classes)),
                      f"{group_classes} Gruppe, "
                      f"{len(data.scheduled_classes) - group_classes} Einzel")
        table.add_row("Verworfen (Konflikt)", str(self.rejected), "")

        console.print(table)
