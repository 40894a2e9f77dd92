"""Integritätsprüfung eines Snapshots.

Prüft Referenzen, doppelte IDs und Doppelbelegungen unabhängig vom Store,
z.B. für importierte Dateien. Schüler-Doppelbelegungen werden nur als
Warnung gemeldet, der Store verhindert sie nicht.
"""

from collections import Counter, defaultdict
from typing import Literal

from pydantic import BaseModel

from models.slot import hour_key
from models.snapshot import Snapshot
from scheduler.conflicts import ConflictKind, find_conflict


class IntegrityIssue(BaseModel):
    """Ein einzelnes Problem im Datensatz."""

    severity: Literal["error", "warning"]
    check: str           # z.B. "teacher_double_booking"
    entity: str          # betroffene ID
    description: str


class IntegrityReport(BaseModel):
    """Ergebnis der Integritätsprüfung."""

    issues: list[IntegrityIssue]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    @property
    def errors(self) -> list[IntegrityIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[IntegrityIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KONSISTENT[/bold green]"
            if self.is_valid
            else "[bold red]✗ PROBLEME GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"]
        console.print(Panel("\n".join(lines), title="Integritätsprüfung", border_style="cyan"))

        if not self.issues:
            console.print("[dim]Keine Probleme gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Prüfung", width=26)
        table.add_column("Entität", width=16)
        table.add_column("Beschreibung")
        for issue in self.issues:
            color = "red" if issue.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{issue.severity.upper()}[/{color}]",
                issue.check,
                issue.entity,
                issue.description,
            )
        console.print(table)


class IntegrityValidator:
    """Prüft einen Snapshot auf Referenz- und Belegungsfehler."""

    def validate(self, snapshot: Snapshot) -> IntegrityReport:
        issues: list[IntegrityIssue] = []

        issues.extend(self._check_duplicate_ids(snapshot))
        issues.extend(self._check_class_references(snapshot))
        issues.extend(self._check_group_references(snapshot))
        issues.extend(self._check_double_booking(snapshot))
        issues.extend(self._check_student_double_booking(snapshot))

        has_errors = any(i.severity == "error" for i in issues)
        return IntegrityReport(issues=issues, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_duplicate_ids(self, snapshot: Snapshot) -> list[IntegrityIssue]:
        issues: list[IntegrityIssue] = []
        collections = {
            "teachers": snapshot.teachers,
            "groups": snapshot.groups,
            "students": snapshot.students,
            "scheduledClasses": snapshot.scheduled_classes,
        }
        for name, items in collections.items():
            counts = Counter(item.id for item in items)
            for entity_id, n in sorted(counts.items()):
                if n > 1:
                    issues.append(IntegrityIssue(
                        severity="error",
                        check="duplicate_id",
                        entity=entity_id,
                        description=f"ID kommt {n}× in '{name}' vor.",
                    ))
        return issues

    def _check_class_references(self, snapshot: Snapshot) -> list[IntegrityIssue]:
        """Jede Stunde verweist auf existierende Lehrkraft, Gruppe bzw. Schüler."""
        teacher_ids = {t.id for t in snapshot.teachers}
        group_ids = {g.id for g in snapshot.groups}
        student_ids = {s.id for s in snapshot.students}
        issues: list[IntegrityIssue] = []

        for c in snapshot.scheduled_classes:
            if c.teacher_id not in teacher_ids:
                issues.append(IntegrityIssue(
                    severity="error", check="unknown_teacher", entity=c.id,
                    description=f"Stunde verweist auf unbekannte Lehrkraft {c.teacher_id}.",
                ))
            if c.group_id and c.group_id not in group_ids:
                issues.append(IntegrityIssue(
                    severity="error", check="unknown_group", entity=c.id,
                    description=f"Stunde verweist auf unbekannte Gruppe {c.group_id}.",
                ))
            if c.student_id and c.student_id not in student_ids:
                issues.append(IntegrityIssue(
                    severity="error", check="unknown_student", entity=c.id,
                    description=f"Stunde verweist auf unbekannten Schüler {c.student_id}.",
                ))
        return issues

    def _check_group_references(self, snapshot: Snapshot) -> list[IntegrityIssue]:
        teacher_ids = {t.id for t in snapshot.teachers}
        student_ids = {s.id for s in snapshot.students}
        issues: list[IntegrityIssue] = []

        for g in snapshot.groups:
            if g.teacher_id not in teacher_ids:
                issues.append(IntegrityIssue(
                    severity="error", check="unknown_group_teacher", entity=g.id,
                    description=f"Gruppe '{g.name}' gehört unbekannter Lehrkraft {g.teacher_id}.",
                ))
            for sid in sorted(set(g.student_ids) - student_ids):
                issues.append(IntegrityIssue(
                    severity="warning", check="unknown_member", entity=g.id,
                    description=f"Gruppe '{g.name}' enthält unbekannten Schüler {sid}.",
                ))
            dupes = [sid for sid, n in Counter(g.student_ids).items() if n > 1]
            for sid in sorted(dupes):
                issues.append(IntegrityIssue(
                    severity="warning", check="duplicate_member", entity=g.id,
                    description=f"Schüler {sid} ist mehrfach Mitglied von '{g.name}'.",
                ))
        return issues

    def _check_double_booking(self, snapshot: Snapshot) -> list[IntegrityIssue]:
        """Lehrkraft- und Gruppen-Doppelbelegungen (jedes Paar einmal)."""
        issues: list[IntegrityIssue] = []
        classes = snapshot.scheduled_classes
        for idx, c in enumerate(classes):
            for other in classes[idx + 1:]:
                conflict = find_conflict(c, [other])
                if conflict is None:
                    continue
                check = (
                    "teacher_double_booking" if conflict.kind == ConflictKind.TEACHER
                    else "group_double_booking"
                )
                issues.append(IntegrityIssue(
                    severity="error", check=check, entity=c.id,
                    description=f"Kollidiert mit {conflict.existing_id}: {conflict.describe()}",
                ))
        return issues

    def _check_student_double_booking(self, snapshot: Snapshot) -> list[IntegrityIssue]:
        """Schüler gleichzeitig in mehreren Stunden (Einzel- oder Gruppenstunde)."""
        members = {g.id: set(g.student_ids) for g in snapshot.groups}
        seen: dict[tuple, list[str]] = defaultdict(list)
        for c in snapshot.scheduled_classes:
            attendees = {c.student_id} if c.student_id else members.get(c.group_id, set())
            for sid in attendees:
                seen[(sid, hour_key(c.start_time))].append(c.id)

        issues: list[IntegrityIssue] = []
        for (sid, hour), class_ids in sorted(seen.items()):
            if len(class_ids) > 1:
                issues.append(IntegrityIssue(
                    severity="warning", check="student_double_booking", entity=sid,
                    description=(
                        f"{hour.strftime('%Y-%m-%d %H:%M')}: gleichzeitig in "
                        f"{', '.join(class_ids)}"
                    ),
                ))
        return issues
