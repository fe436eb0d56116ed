"""Results table screen."""

from pathlib import Path
from typing import List, Optional, Sequence

from seats_aero.export import ExportFormat, export_to_file
from seats_aero.models import Availability, Cabin
from seats_aero.render import availability_details, format_cabin_cell
from seats_aero.tui import styles

EXPORT_BASENAME = "seats_results"

_ROW = "{:<12} {:<5} {:<5} {:<12} {:<11} {:<11} {:<11} {:<11}"


class ResultsView:
    """Scrollable availability table with a detail box for the selected row."""

    def __init__(self, export_dir: Optional[Path] = None, height: int = 15):
        self.results: List[Availability] = []
        self.cursor = 0
        self.offset = 0
        self.height = height
        self.export_dir = export_dir if export_dir is not None else Path.cwd()
        self.status = ""

    def set_results(self, results: Sequence[Availability]) -> None:
        self.results = list(results)
        self.cursor = 0
        self.offset = 0
        self.status = ""

    @property
    def selected(self) -> Optional[Availability]:
        if 0 <= self.cursor < len(self.results):
            return self.results[self.cursor]
        return None

    def handle_key(self, key: str) -> None:
        if key in ("j", "down"):
            self.move(1)
        elif key in ("k", "up"):
            self.move(-1)
        elif key == "e":
            self.export(ExportFormat.JSON)
        elif key == "c":
            self.export(ExportFormat.CSV)

    def move(self, delta: int) -> None:
        if not self.results:
            return
        self.cursor = max(0, min(len(self.results) - 1, self.cursor + delta))
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.height:
            self.offset = self.cursor - self.height + 1

    def export(self, export_format: ExportFormat) -> Optional[Path]:
        """
        Write all results next to the working directory.

        Args:
            export_format: JSON or CSV

        Returns:
            The written path, or None when there was nothing to export or
            the write failed (the reason is kept in ``status``)
        """
        if not self.results:
            self.status = "Nothing to export"
            return None
        try:
            path = export_to_file(self.export_dir / EXPORT_BASENAME, self.results, export_format)
        except OSError as e:
            self.status = f"Export failed: {e}"
            return None
        self.status = f"Exported {len(self.results)} results to {path}"
        return path

    def view(self) -> str:
        lines = [
            styles.title("Search Results"),
            styles.subtitle(f"Found {len(self.results)} results"),
            "",
            styles.header(_ROW.format("Date", "From", "To", "Source", *(c.code for c in Cabin))),
            styles.subtitle("─" * 91),
        ]

        visible = self.results[self.offset:self.offset + self.height]
        for index, item in enumerate(visible, start=self.offset):
            row = _ROW.format(
                item.date,
                item.origin,
                item.destination,
                item.source,
                *(format_cabin_cell(item.cabin(c)) for c in Cabin),
            )
            lines.append(styles.selected_row(row) if index == self.cursor else row)
        lines.append("")

        if self.selected is not None:
            lines.append(styles.box(availability_details(self.selected)))

        if self.status:
            lines += ["", styles.success(self.status)]
        lines += [
            "",
            styles.help_text(
                "j/k: navigate  |  e: export JSON  |  c: export CSV  |  Esc: back  |  q: back  |  Ctrl-C: quit"
            ),
        ]
        return "\n".join(lines)
