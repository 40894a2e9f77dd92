"""Textual TUI Browser für den Wochenplan.

Startet mit: python main.py browse
Navigation: ↑↓, Enter=Auswahl, /=Suche, q=Beenden, ?=Hilfe
Die Suche filtert die Liste und markiert passende Gruppen im Raster mit "*".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.schema import GridConfig
    from scheduler.store import EntityStore


class SchedulerBrowser:
    """Textual TUI App für den Wochenplan.

    Lazy-importiert textual um Startzeit zu minimieren.
    """

    def __init__(self, store: "EntityStore", grid: "GridConfig") -> None:
        self.store = store
        self.grid = grid

    def run(self) -> None:
        """Startet die TUI Anwendung."""
        from textual.app import App, ComposeResult
        from textual.widgets import (
            Header, Footer, ListView, ListItem, DataTable, Input, Label,
        )
        from textual.containers import Horizontal
        from textual.binding import Binding

        from export.grid_renderer import render_week_rows

        store = self.store
        grid = self.grid

        def entity_items(query: str) -> list[tuple[str, str | None, str]]:
            items: list[tuple[str, str | None, str]] = [("all", None, "Alle Stunden")]
            for teacher in sorted(store.teachers, key=lambda t: t.name):
                items.append(("teacher", teacher.id, f"Lehrkraft: {teacher.name}"))
            for group in sorted(store.groups, key=lambda g: g.name):
                items.append(("group", group.id, f"Gruppe: {group.name}"))
            if query:
                items = [i for i in items if i[0] == "all" or query in i[2].lower()]
            return items

        class _App(App):
            CSS = """
            ListView { width: 34; border: solid $primary; }
            DataTable { border: solid $secondary; }
            Input { dock: bottom; }
            """
            BINDINGS = [
                Binding("q", "quit", "Beenden"),
                Binding("escape", "quit", "Beenden"),
                Binding("/", "focus_search", "Suche"),
                Binding("?", "show_help", "Hilfe"),
            ]

            def compose(self) -> ComposeResult:
                yield Header()
                with Horizontal():
                    yield ListView(id="entity_list")
                    yield DataTable(id="schedule_table")
                yield Input(placeholder="Suche (Gruppe oder Lehrkraft)...", id="search")
                yield Footer()

            def on_mount(self) -> None:
                self._query = ""
                self._selection: tuple[str, str | None] = ("all", None)
                self._fill_list()
                self._show()

            def _fill_list(self) -> None:
                lv = self.query_one("#entity_list", ListView)
                lv.clear()
                self._items = entity_items(self._query)
                for _, _, label in self._items:
                    lv.append(ListItem(Label(label)))

            def on_list_view_selected(self, event: ListView.Selected) -> None:
                idx = event.list_view.index
                if idx is not None and 0 <= idx < len(self._items):
                    kind, eid, _ = self._items[idx]
                    self._selection = (kind, eid)
                    self._show()

            def on_input_changed(self, event: Input.Changed) -> None:
                self._query = event.value.strip().lower()
                self._fill_list()
                self._show()

            def _show(self) -> None:
                kind, eid = self._selection
                table = self.query_one("#schedule_table", DataTable)
                table.clear(columns=True)
                table.add_columns("Zeit", *grid.day_names)
                rows = render_week_rows(
                    store.export_snapshot(), grid,
                    teacher_id=eid if kind == "teacher" else None,
                    group_id=eid if kind == "group" else None,
                    search=self._query,
                )
                for row in rows:
                    height = max(cell.count("\n") + 1 for cell in row)
                    table.add_row(*row, height=height)

            def action_focus_search(self) -> None:
                self.query_one("#search", Input).focus()

            def action_show_help(self) -> None:
                self.notify(
                    "↑↓: Navigation | Enter: Auswählen | /: Suche | q: Beenden",
                    title="Hilfe",
                )

        _App().run()
