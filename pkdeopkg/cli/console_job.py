"""Job sink that renders backend signals to a rich console."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from pkdeopkg.enums import PkErrorEnum, PkGroupEnum, PkInfoEnum, PkStatusEnum


class ConsoleJob:
    """Collects signals from one job and prints them as tables."""

    def __init__(self, console: Console):
        self.console = console
        self.packages: list[tuple[str, str, str]] = []
        self.repos: list[tuple[str, str, bool]] = []
        self.detail_rows: list[tuple[str, str]] = []
        self.file_rows: list[tuple[str, list[str]]] = []
        self.error: tuple[PkErrorEnum, str] | None = None
        self.done = False

    def package(self, info: PkInfoEnum, package_id: str, summary: str) -> None:
        self.packages.append((info.text, package_id, summary))

    def details(
        self,
        package_id: str,
        summary: str,
        license: str,
        group: PkGroupEnum,
        description: str,
        url: str,
        size: int,
    ) -> None:
        self.detail_rows.extend(
            [
                ("Package", package_id),
                ("Summary", summary),
                ("License", license),
                ("Group", group.text),
                ("URL", url),
                ("Size", f"{size} bytes"),
                ("Description", description),
            ]
        )

    def files(self, package_id: str, files: list[str]) -> None:
        self.file_rows.append((package_id, list(files)))

    def repo_detail(self, repo_id: str, description: str, enabled: bool) -> None:
        self.repos.append((repo_id, description, enabled))

    def set_percentage(self, percent: int) -> None:
        self.console.print(f"[dim]{percent}%[/dim]")

    def set_status(self, status: PkStatusEnum) -> None:
        self.console.print(f"[dim]status: {status.text}[/dim]")

    def finished(self) -> None:
        self.done = True

    def failed(self, code: PkErrorEnum, message: str) -> None:
        self.error = (code, message)

    def render(self) -> None:
        if self.packages:
            table = Table(title="Packages")
            table.add_column("Info", style="cyan")
            table.add_column("Package ID")
            table.add_column("Summary", style="dim")
            for row in self.packages:
                table.add_row(*row)
            self.console.print(table)
        if self.repos:
            table = Table(title="Repositories")
            table.add_column("ID", style="cyan")
            table.add_column("Description")
            table.add_column("Enabled")
            for repo_id, description, enabled in self.repos:
                table.add_row(repo_id, description, "[green]✓[/green]" if enabled else "[dim]no[/dim]")
            self.console.print(table)
        if self.detail_rows:
            table = Table(show_header=False)
            table.add_column("Field", style="cyan")
            table.add_column("Value")
            for row in self.detail_rows:
                table.add_row(*row)
            self.console.print(table)
        for package_id, files in self.file_rows:
            self.console.print(f"[cyan]{package_id}[/cyan]")
            for path in files:
                self.console.print(f"  {path}")
        if self.error is not None:
            code, message = self.error
            self.console.print(f"[red]Error ({code.text}):[/red] {message}")
