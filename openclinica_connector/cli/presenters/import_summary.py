from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from ...application.models import ImportDataResponse


class ImportSummaryPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, response: ImportDataResponse, *, dry_run: bool) -> None:
        self.console.print()
        table = Table(title="Clinical Data Import Summary", show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Study OID", response.study_oid)
        table.add_row("Rows read", f"{response.row_count:,}")
        table.add_row("Subjects", str(response.subject_count))
        table.add_row("Item values", f"{response.item_count:,}")
        if response.output_path is not None:
            table.add_row("ODM file", str(response.output_path))
        if dry_run:
            table.add_row("Submitted", "no (dry run)")
        else:
            table.add_row("Submitted", "yes" if response.submitted else "no")
            table.add_row("Result", response.result or "-")
        self.console.print(table)

        if response.error:
            self.console.print(f"[red]✗[/red] {response.error}")
        for message in response.errors:
            self.console.print(f"[red]✗[/red] {message}")
        if response.success:
            self.console.print("[green]✓[/green] Import completed")
