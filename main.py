"""teachcalc: Haupt-CLI für Lehrkräfte, Schüler, Gruppen und den Wochenplan.

Verwendung:
  python main.py teacher list|add|rename|delete       Lehrkräfte verwalten
  python main.py student list|add|edit|delete         Schüler verwalten
  python main.py group list|add|edit|add-member|...   Gruppen verwalten
  python main.py class list|add|edit|move|delete      Stunden planen
  python main.py show [--teacher ID] [--search TEXT]  Wochenraster anzeigen
  python main.py browse                               Interaktiver Browser (Textual)
  python main.py report [-o datei.txt]                Textbericht
  python main.py export-pdf | export-excel            Druckausgabe
  python main.py backup | restore <datei.json>        Sicherung / Wiederherstellung
  python main.py validate [--file datei.json]         Integritätsprüfung
  python main.py demo                                 Demo-Daten laden
  python main.py clear                                Alle Daten löschen
  python main.py config show|init                     Konfiguration
"""

import sys
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

DAY_CHOICE = click.Choice(
    ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
    case_sensitive=False,
)


class AppContext:
    """Kompositionswurzel: Konfiguration, Speicher und Store (lazy)."""

    def __init__(self, config, storage_dir: Optional[Path] = None) -> None:
        self.config = config
        self._storage_dir = storage_dir
        self._store = None

    @property
    def storage(self):
        from storage.local_storage import LocalStorage
        directory = self._storage_dir or Path(self.config.storage.directory)
        return LocalStorage(directory, self.config.storage.key)

    @property
    def store(self):
        if self._store is None:
            from scheduler.store import EntityStore
            self._store = EntityStore.load(self.storage)
        return self._store

    @property
    def output_dir(self) -> Path:
        return Path(self.config.export.output_dir)


pass_app = click.make_pass_decorator(AppContext)


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


def _report(result, success: str) -> None:
    """Gibt das Ergebnis einer Store-Änderung aus; beendet mit 1 bei Ablehnung."""
    from scheduler.store import MutationReason

    if result.ok:
        console.print(f"[green]✓[/green] {escape(success)}")
        return
    if result.reason == MutationReason.CONFLICT:
        _fail(f"Konflikt – Änderung verworfen: {result.conflict.describe()}")
    elif result.reason == MutationReason.NOT_FOUND:
        _fail(f"Nicht gefunden: {result.entity_id}")
    else:
        console.print("[dim]Keine Änderung.[/dim]")


def _require(entity, kind: str, entity_id: str):
    if entity is None:
        _fail(f"{kind} nicht gefunden: {entity_id}")
    return entity


def _start_time(day_name: str, hour: int, week: Optional[datetime]) -> datetime:
    """Startzeit am Wochentag der Woche von `week` (Standard: aktuelle Woche)."""
    from models.slot import DAY_NAME_TO_INDEX

    ref = week.date() if week else date.today()
    monday = ref - timedelta(days=ref.weekday())
    day = monday + timedelta(days=DAY_NAME_TO_INDEX[day_name.capitalize()])
    return datetime.combine(day, time(hour=hour))


# ─── LEHRKRÄFTE ───────────────────────────────────────────────────────────────

@click.group("teacher")
def cmd_teacher():
    """Lehrkräfte verwalten."""


@cmd_teacher.command("list")
@click.option("--search", "-s", default="", help="Nach Namen filtern.")
@pass_app
def teacher_list(app: AppContext, search: str):
    """Listet alle Lehrkräfte mit Gruppen- und Stundenzahl."""
    from scheduler.filters import search_by_name

    store = app.store
    table = Table(title="Lehrkräfte", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Gruppen", justify="right")
    table.add_column("Stunden", justify="right")
    for t in search_by_name(store.teachers, search):
        groups = sum(1 for g in store.groups if g.teacher_id == t.id)
        classes = sum(1 for c in store.scheduled_classes if c.teacher_id == t.id)
        table.add_row(t.id, t.name, str(groups), str(classes))
    console.print(table)


@cmd_teacher.command("add")
@click.argument("name")
@pass_app
def teacher_add(app: AppContext, name: str):
    """Legt eine neue Lehrkraft an."""
    from models.teacher import Teacher
    from scheduler.store import generate_id

    teacher = Teacher(id=generate_id("t"), name=name)
    _report(app.store.add_teacher(teacher), f"Lehrkraft angelegt: {teacher.id} ({name})")


@cmd_teacher.command("rename")
@click.argument("teacher_id")
@click.argument("name")
@pass_app
def teacher_rename(app: AppContext, teacher_id: str, name: str):
    """Ändert den Namen einer Lehrkraft."""
    teacher = _require(app.store.get_teacher(teacher_id), "Lehrkraft", teacher_id)
    _report(app.store.update_teacher(teacher.model_copy(update={"name": name})),
            f"Lehrkraft {teacher_id} umbenannt.")


@cmd_teacher.command("delete")
@click.argument("teacher_id")
@click.option("--yes", is_flag=True, help="Ohne Rückfrage löschen.")
@pass_app
def teacher_delete(app: AppContext, teacher_id: str, yes: bool):
    """Löscht eine Lehrkraft samt ihrer Gruppen und Stunden."""
    _require(app.store.get_teacher(teacher_id), "Lehrkraft", teacher_id)
    if not yes and not click.confirm(
        "Lehrkraft wirklich löschen? Alle ihre Gruppen und Stunden werden ebenfalls entfernt.",
        default=False,
    ):
        return
    _report(app.store.delete_teacher(teacher_id), f"Lehrkraft {teacher_id} gelöscht.")


# ─── SCHÜLER ──────────────────────────────────────────────────────────────────

@click.group("student")
def cmd_student():
    """Schüler verwalten."""


@cmd_student.command("list")
@click.option("--search", "-s", default="", help="Nach Namen filtern.")
@pass_app
def student_list(app: AppContext, search: str):
    """Listet alle Schüler mit Gruppen und Einzelstunden."""
    from scheduler.filters import (
        groups_of_student, individual_classes_of_student, search_by_name,
    )

    store = app.store
    table = Table(title="Schüler", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("CRM-Profil")
    table.add_column("Gruppen")
    table.add_column("Einzelstunden", justify="right")
    for s in search_by_name(store.students, search):
        groups = ", ".join(g.name for g in groups_of_student(store.groups, s.id))
        individual = individual_classes_of_student(store.scheduled_classes, s.id)
        table.add_row(s.id, s.name, s.crm_profile_link or "", groups, str(len(individual)))
    console.print(table)


@cmd_student.command("add")
@click.argument("name")
@click.option("--link", default=None, help="Link auf das CRM-Profil.")
@pass_app
def student_add(app: AppContext, name: str, link: Optional[str]):
    """Legt einen neuen Schüler an."""
    from models.student import Student
    from scheduler.store import generate_id

    student = Student(id=generate_id("s"), name=name, crm_profile_link=link)
    _report(app.store.add_student(student), f"Schüler angelegt: {student.id} ({name})")


@cmd_student.command("edit")
@click.argument("student_id")
@click.option("--name", default=None)
@click.option("--link", default=None, help="Link auf das CRM-Profil.")
@pass_app
def student_edit(app: AppContext, student_id: str, name: Optional[str], link: Optional[str]):
    """Ändert Name und/oder CRM-Link eines Schülers."""
    student = _require(app.store.get_student(student_id), "Schüler", student_id)
    update = {k: v for k, v in {"name": name, "crm_profile_link": link}.items() if v is not None}
    _report(app.store.update_student(student.model_copy(update=update)),
            f"Schüler {student_id} aktualisiert.")


@cmd_student.command("delete")
@click.argument("student_id")
@click.option("--yes", is_flag=True, help="Ohne Rückfrage löschen.")
@pass_app
def student_delete(app: AppContext, student_id: str, yes: bool):
    """Löscht einen Schüler und entfernt ihn aus allen Gruppen."""
    from scheduler.filters import groups_of_student, individual_classes_of_student

    store = app.store
    _require(store.get_student(student_id), "Schüler", student_id)
    groups = groups_of_student(store.groups, student_id)
    individual = individual_classes_of_student(store.scheduled_classes, student_id)

    message = "Schüler wirklich löschen?"
    if groups:
        message += f"\n- Wird aus {len(groups)} Gruppe(n) entfernt"
    if individual:
        message += f"\n- {len(individual)} Einzelstunde(n) bleiben erhalten"
    if not yes and not click.confirm(message, default=False):
        return
    _report(store.delete_student(student_id), f"Schüler {student_id} gelöscht.")


# ─── GRUPPEN ──────────────────────────────────────────────────────────────────

@click.group("group")
def cmd_group():
    """Gruppen verwalten."""


@cmd_group.command("list")
@click.option("--search", "-s", default="", help="Nach Namen filtern.")
@pass_app
def group_list(app: AppContext, search: str):
    """Listet alle Gruppen mit Lehrkraft und Mitgliedern."""
    from export.helpers import NameLookup
    from scheduler.filters import search_by_name

    store = app.store
    lookup = NameLookup(store.export_snapshot())
    table = Table(title="Gruppen", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Lehrkraft")
    table.add_column("Mitglieder")
    for g in search_by_name(store.groups, search):
        members = ", ".join(lookup.student_name(sid) for sid in g.student_ids)
        table.add_row(g.id, g.name, lookup.teacher_name(g.teacher_id), members)
    console.print(table)


@cmd_group.command("add")
@click.argument("name")
@click.option("--teacher", "teacher_id", required=True, help="ID der Lehrkraft.")
@click.option("--student", "student_ids", multiple=True, help="Schüler-ID (mehrfach).")
@pass_app
def group_add(app: AppContext, name: str, teacher_id: str, student_ids: tuple[str, ...]):
    """Legt eine neue Gruppe an."""
    from models.group import Group
    from scheduler.store import generate_id

    store = app.store
    _require(store.get_teacher(teacher_id), "Lehrkraft", teacher_id)
    for sid in student_ids:
        _require(store.get_student(sid), "Schüler", sid)
    group = Group(id=generate_id("g"), name=name, teacher_id=teacher_id,
                  student_ids=list(dict.fromkeys(student_ids)))
    _report(store.add_group(group), f"Gruppe angelegt: {group.id} ({name})")


@cmd_group.command("edit")
@click.argument("group_id")
@click.option("--name", default=None)
@click.option("--teacher", "teacher_id", default=None, help="Neue Lehrkraft.")
@pass_app
def group_edit(app: AppContext, group_id: str, name: Optional[str], teacher_id: Optional[str]):
    """Ändert Name und/oder Lehrkraft einer Gruppe."""
    store = app.store
    group = _require(store.get_group(group_id), "Gruppe", group_id)
    if teacher_id is not None:
        _require(store.get_teacher(teacher_id), "Lehrkraft", teacher_id)
    update = {k: v for k, v in {"name": name, "teacher_id": teacher_id}.items() if v is not None}
    _report(store.update_group(group.model_copy(update=update)),
            f"Gruppe {group_id} aktualisiert.")


@cmd_group.command("add-member")
@click.argument("group_id")
@click.argument("student_id")
@pass_app
def group_add_member(app: AppContext, group_id: str, student_id: str):
    """Nimmt einen Schüler in eine Gruppe auf."""
    store = app.store
    group = _require(store.get_group(group_id), "Gruppe", group_id)
    _require(store.get_student(student_id), "Schüler", student_id)
    if student_id in group.student_ids:
        console.print("[dim]Schüler ist bereits Mitglied.[/dim]")
        return
    updated = group.model_copy(update={"student_ids": [*group.student_ids, student_id]})
    _report(store.update_group(updated), f"Schüler {student_id} zu {group.name} hinzugefügt.")


@cmd_group.command("remove-member")
@click.argument("group_id")
@click.argument("student_id")
@pass_app
def group_remove_member(app: AppContext, group_id: str, student_id: str):
    """Entfernt einen Schüler aus einer Gruppe."""
    store = app.store
    group = _require(store.get_group(group_id), "Gruppe", group_id)
    _report(store.update_group(group.without_student(student_id)),
            f"Schüler {student_id} aus {group.name} entfernt.")


@cmd_group.command("delete")
@click.argument("group_id")
@click.option("--yes", is_flag=True, help="Ohne Rückfrage löschen.")
@pass_app
def group_delete(app: AppContext, group_id: str, yes: bool):
    """Löscht eine Gruppe samt ihrer Stunden."""
    _require(app.store.get_group(group_id), "Gruppe", group_id)
    if not yes and not click.confirm(
        "Gruppe wirklich löschen? Alle Stunden dieser Gruppe werden ebenfalls entfernt.",
        default=False,
    ):
        return
    _report(app.store.delete_group(group_id), f"Gruppe {group_id} gelöscht.")


# ─── STUNDEN ──────────────────────────────────────────────────────────────────

@click.group("class")
def cmd_class():
    """Stunden planen, verschieben und löschen."""


@cmd_class.command("list")
@click.option("--teacher", "teacher_id", default=None, help="Nur diese Lehrkraft.")
@click.option("--group", "group_id", default=None, help="Nur diese Gruppe.")
@pass_app
def class_list(app: AppContext, teacher_id: Optional[str], group_id: Optional[str]):
    """Listet alle Stunden chronologisch."""
    from export.helpers import NameLookup
    from scheduler.filters import filter_classes

    store = app.store
    lookup = NameLookup(store.export_snapshot())
    classes = sorted(filter_classes(store.scheduled_classes, teacher_id, group_id),
                     key=lambda c: c.start_time)
    table = Table(title="Stunden", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Beginn")
    table.add_column("Slot")
    table.add_column("Gruppe / Schüler")
    table.add_column("Lehrkraft")
    for c in classes:
        table.add_row(c.id, c.start_time.strftime("%a %d.%m.%Y %H:%M"), c.slot.slot_id,
                      lookup.class_title(c), lookup.teacher_name(c.teacher_id))
    console.print(table)


@cmd_class.command("add")
@click.option("--teacher", "teacher_id", required=True, help="ID der Lehrkraft.")
@click.option("--group", "group_id", default=None, help="ID der Gruppe (Gruppenunterricht).")
@click.option("--student", "student_id", default=None, help="ID des Schülers (Einzelunterricht).")
@click.option("--day", required=True, type=DAY_CHOICE, help="Wochentag.")
@click.option("--hour", required=True, type=click.IntRange(0, 23), help="Stunde (0-23).")
@click.option("--week", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Datum innerhalb der Zielwoche (Standard: aktuelle Woche).")
@pass_app
def class_add(app: AppContext, teacher_id: str, group_id: Optional[str],
              student_id: Optional[str], day: str, hour: int, week: Optional[datetime]):
    """Plant eine neue Stunde ein (abgelehnt bei Konflikt)."""
    from pydantic import ValidationError
    from models.scheduled_class import ScheduledClass

    store = app.store
    _require(store.get_teacher(teacher_id), "Lehrkraft", teacher_id)
    if group_id:
        _require(store.get_group(group_id), "Gruppe", group_id)
    if student_id:
        _require(store.get_student(student_id), "Schüler", student_id)
    try:
        candidate = ScheduledClass(
            teacher_id=teacher_id, group_id=group_id, student_id=student_id,
            start_time=_start_time(day, hour, week),
        )
    except ValidationError as e:
        _fail(f"Ungültige Stunde:\n{e}")
    result = store.add_scheduled_class(candidate)
    _report(result, f"Stunde angelegt: {result.entity_id}")


@cmd_class.command("edit")
@click.argument("class_id")
@click.option("--teacher", "teacher_id", default=None)
@click.option("--group", "group_id", default=None, help="Wechsel auf Gruppenunterricht.")
@click.option("--student", "student_id", default=None, help="Wechsel auf Einzelunterricht.")
@click.option("--day", type=DAY_CHOICE, default=None)
@click.option("--hour", type=click.IntRange(0, 23), default=None)
@pass_app
def class_edit(app: AppContext, class_id: str, teacher_id: Optional[str],
               group_id: Optional[str], student_id: Optional[str],
               day: Optional[str], hour: Optional[int]):
    """Bearbeitet eine Stunde an Ort und Stelle (abgelehnt bei Konflikt)."""
    from pydantic import ValidationError
    from models.scheduled_class import ScheduledClass
    from models.slot import DAYS_OF_WEEK

    store = app.store
    cls = _require(store.get_scheduled_class(class_id), "Stunde", class_id)
    data = cls.model_dump(exclude={"end_time"})
    if teacher_id:
        _require(store.get_teacher(teacher_id), "Lehrkraft", teacher_id)
        data["teacher_id"] = teacher_id
    if group_id:
        _require(store.get_group(group_id), "Gruppe", group_id)
        data.update(group_id=group_id, student_id=None)
    if student_id:
        _require(store.get_student(student_id), "Schüler", student_id)
        data.update(student_id=student_id, group_id=None)
    if day is not None or hour is not None:
        current = cls.slot
        data["start_time"] = _start_time(
            day or DAYS_OF_WEEK[current.day],
            current.hour if hour is None else hour,
            cls.start_time,
        )
    try:
        updated = ScheduledClass.model_validate(data)
    except ValidationError as e:
        _fail(f"Ungültige Stunde:\n{e}")
    _report(store.update_scheduled_class(updated), f"Stunde {class_id} aktualisiert.")


@cmd_class.command("move")
@click.argument("class_id")
@click.argument("destination")
@pass_app
def class_move(app: AppContext, class_id: str, destination: str):
    """Verschiebt eine Stunde in eine andere Zelle, z.B. "Tuesday-10:00".

    Entspricht dem Ablegen per Drag-and-Drop; die Woche bleibt erhalten.
    """
    from models.slot import SLOT_PREFIX
    from scheduler.placement import DropEvent, apply_drop

    store = app.store
    cls = _require(store.get_scheduled_class(class_id), "Stunde", class_id)
    if not destination.startswith(f"{SLOT_PREFIX}-"):
        destination = f"{SLOT_PREFIX}-{destination}"
    event = DropEvent(
        class_id=class_id,
        source_slot_id=cls.slot.slot_id,
        destination_slot_id=destination,
    )
    _report(apply_drop(store, event), f"Stunde {class_id} verschoben nach {destination}.")


@cmd_class.command("delete")
@click.argument("class_id")
@pass_app
def class_delete(app: AppContext, class_id: str):
    """Löscht eine Stunde."""
    _report(app.store.delete_scheduled_class(class_id), f"Stunde {class_id} gelöscht.")


# ─── ANZEIGE ──────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--teacher", "teacher_id", default=None, help="Nur diese Lehrkraft.")
@click.option("--group", "group_id", default=None, help="Nur diese Gruppe.")
@click.option("--search", "-s", default="", help="Gruppen hervorheben (Namenssuche).")
@pass_app
def cmd_show(app: AppContext, teacher_id: Optional[str], group_id: Optional[str], search: str):
    """Zeigt das Wochenraster im Terminal."""
    from export.grid_renderer import render_week_rows

    grid = app.config.grid
    rows = render_week_rows(app.store.export_snapshot(), grid,
                            teacher_id=teacher_id, group_id=group_id, search=search)
    table = Table(title=app.config.export.title, box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="bold")
    for name in grid.day_names:
        table.add_column(name, overflow="fold")
    for row in rows:
        table.add_row(*row)
    console.print(table)


@click.command("browse")
@pass_app
def cmd_browse(app: AppContext):
    """Startet den interaktiven Wochenplan-Browser (Textual)."""
    from export.tui_browser import SchedulerBrowser
    SchedulerBrowser(app.store, app.config.grid).run()


@click.command("status")
@pass_app
def cmd_status(app: AppContext):
    """Zeigt eine Übersicht über den gespeicherten Datensatz."""
    snapshot = app.store.export_snapshot()
    storage = app.storage
    console.print(Panel(
        f"{snapshot.summary()}\n\nSpeicher: {storage.path} ({storage.size_kb():.1f} KB)",
        title="teachcalc",
        border_style="cyan",
    ))


# ─── BERICHTE ─────────────────────────────────────────────────────────────────

@click.command("report")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Bericht in Datei schreiben statt ausgeben.")
@pass_app
def cmd_report(app: AppContext, output: Optional[Path]):
    """Erzeugt den Textbericht (alle Stunden nach Wochentag)."""
    from export.text_report import build_text_report

    text = build_text_report(app.store.export_snapshot(), app.config.grid,
                             title=app.config.export.title)
    if output is None:
        console.print(text, markup=False, highlight=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]✓[/green] Bericht gespeichert: {output}")


@click.command("export-pdf")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None)
@pass_app
def cmd_export_pdf(app: AppContext, output: Optional[Path]):
    """Exportiert den Wochenplan als druckbare PDF."""
    from export.pdf_export import PdfExporter

    output = output or app.output_dir / "stundenplan.pdf"
    PdfExporter(app.store.export_snapshot(), app.config.grid,
                title=app.config.export.title).export(output)
    console.print(f"[green]✓[/green] PDF gespeichert: {output}")


@click.command("export-excel")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None)
@pass_app
def cmd_export_excel(app: AppContext, output: Optional[Path]):
    """Exportiert den Wochenplan als Excel-Datei."""
    from export.excel_export import ExcelExporter

    output = output or app.output_dir / "stundenplan.xlsx"
    ExcelExporter(app.store.export_snapshot(), app.config.grid,
                  title=app.config.export.title).export(output)
    console.print(f"[green]✓[/green] Excel gespeichert: {output}")


# ─── SICHERUNG ────────────────────────────────────────────────────────────────

@click.command("backup")
@click.option("--dir", "directory", type=click.Path(path_type=Path), default=None,
              help="Zielverzeichnis (Standard: Ausgabeverzeichnis).")
@pass_app
def cmd_backup(app: AppContext, directory: Optional[Path]):
    """Exportiert alle Daten als JSON-Sicherung."""
    from storage.backup import export_to_json

    path = export_to_json(app.store.export_snapshot(), directory or app.output_dir,
                          prefix=app.config.export.app_prefix)
    console.print(f"[green]✓[/green] Sicherung gespeichert: {path}")


@click.command("restore")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--yes", is_flag=True, help="Ohne Rückfrage überschreiben.")
@pass_app
def cmd_restore(app: AppContext, datei: Path, yes: bool):
    """Importiert eine JSON-Sicherung (ersetzt alle Daten)."""
    from models.snapshot import SnapshotImportError
    from storage.backup import import_from_json

    try:
        snapshot = import_from_json(datei)
    except SnapshotImportError as e:
        _fail(f"Import fehlgeschlagen:\n{e}")
    console.print(f"\n{snapshot.summary()}\n")
    if not yes and not click.confirm("Alle aktuellen Daten ersetzen?", default=False):
        return
    _report(app.store.import_snapshot(snapshot), f"Daten importiert aus {datei}")


@click.command("clear")
@click.option("--yes", is_flag=True, help="Ohne Rückfrage löschen.")
@pass_app
def cmd_clear(app: AppContext, yes: bool):
    """Löscht alle Daten und den gespeicherten Zustand."""
    if not yes and not click.confirm(
        "Wirklich alle Daten löschen? Dies kann nicht rückgängig gemacht werden.",
        default=False,
    ):
        return
    _report(app.store.clear_all(), "Alle Daten gelöscht.")


@click.command("validate")
@click.option("--file", "datei", type=click.Path(exists=True, path_type=Path), default=None,
              help="Sicherungsdatei prüfen statt des gespeicherten Zustands.")
@pass_app
def cmd_validate(app: AppContext, datei: Optional[Path]):
    """Prüft Referenzen und Doppelbelegungen."""
    from models.snapshot import SnapshotImportError
    from scheduler.validation import IntegrityValidator
    from storage.backup import import_from_json

    if datei is not None:
        try:
            snapshot = import_from_json(datei)
        except SnapshotImportError as e:
            _fail(f"Import fehlgeschlagen:\n{e}")
    else:
        snapshot = app.store.export_snapshot()

    report = IntegrityValidator().validate(snapshot)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


@click.command("demo")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--teachers", "num_teachers", default=4, type=click.IntRange(1, 50))
@click.option("--students", "num_students", default=12, type=click.IntRange(0, 500))
@click.option("--yes", is_flag=True, help="Ohne Rückfrage überschreiben.")
@pass_app
def cmd_demo(app: AppContext, seed: int, num_teachers: int, num_students: int, yes: bool):
    """Ersetzt alle Daten durch einen Demo-Datensatz."""
    from data.demo_data import DemoDataGenerator

    if not yes and not click.confirm("Alle aktuellen Daten ersetzen?", default=False):
        return
    gen = DemoDataGenerator(seed=seed, num_teachers=num_teachers,
                            num_students=num_students, grid=app.config.grid)
    snapshot = gen.generate()
    gen.print_summary(snapshot)
    _report(app.store.import_snapshot(snapshot), "Demo-Daten geladen.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@pass_app
def config_show(app: AppContext):
    """Zeigt die aktuelle Konfiguration an."""
    cfg = app.config
    table = Table(title="Konfiguration", box=box.ROUNDED)
    table.add_column("Bereich", style="bold")
    table.add_column("Parameter")
    table.add_column("Wert")
    for section, model in [("storage", cfg.storage), ("grid", cfg.grid),
                           ("export", cfg.export), ("logging", cfg.logging)]:
        for key, value in model.model_dump().items():
            table.add_row(section, key, str(value))
    console.print(table)


@cmd_config.command("init")
@click.option("--force", is_flag=True, help="Bestehende Datei überschreiben.")
def config_init(force: bool):
    """Legt die Konfigurationsdatei mit Standardwerten an."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {mgr.DEFAULT_CONFIG}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_app_config())


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--storage-dir", type=click.Path(path_type=Path), default=None,
              help="Verzeichnis des lokalen Speichers (überschreibt Config).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], storage_dir: Optional[Path],
        verbose: bool):
    """teachcalc – Wochenplanung für Lehrkräfte, Gruppen und Einzelunterricht.

    Keine Lehrkraft und keine Gruppe kann zur selben Stunde doppelt belegt werden.
    """
    from config.logging_config import setup_logging
    from config.manager import ConfigManager

    try:
        config = ConfigManager().load_or_default(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))
    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    setup_logging("DEBUG" if verbose else config.logging.level, log_file)
    ctx.obj = AppContext(config, storage_dir)


# Befehle registrieren
cli.add_command(cmd_teacher)
cli.add_command(cmd_student)
cli.add_command(cmd_group)
cli.add_command(cmd_class)
cli.add_command(cmd_show)
cli.add_command(cmd_browse)
cli.add_command(cmd_status)
cli.add_command(cmd_report)
cli.add_command(cmd_export_pdf)
cli.add_command(cmd_export_excel)
cli.add_command(cmd_backup)
cli.add_command(cmd_restore)
cli.add_command(cmd_clear)
cli.add_command(cmd_validate)
cli.add_command(cmd_demo)
cli.add_command(cmd_config)


def main():
    """Einstiegspunkt."""
    cli()


if __name__ == "__main__":
    main()
