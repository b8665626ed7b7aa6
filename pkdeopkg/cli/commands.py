"""CLI commands for pkdeopkg.

A local stand-in for the PackageKit daemon: each command loads the backend,
runs exactly one job through a console sink and tears the backend down.
"""

from __future__ import annotations

from collections.abc import Callable
from configparser import ConfigParser
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from pkdeopkg import __version__
from pkdeopkg.backend import Backend
from pkdeopkg.bitfield import Bitfield, bitfield_from_enums, bitfield_to_enums
from pkdeopkg.cli.console_job import ConsoleJob
from pkdeopkg.enums import PkFilterEnum, PkGroupEnum, PkRoleEnum, PkTransactionFlagEnum
from pkdeopkg.jobs.types import JobState

app = typer.Typer(
    name="pkdeopkg",
    help=f"pkdeopkg v{__version__} - PackageKit backend for eopkg",
    no_args_is_help=True,
)

console = Console()

ConfigOption = typer.Option(None, "--config", "-c", help="Daemon key file (PackageKit.conf)")
FilterOption = typer.Option(
    None, "--filter", "-f", help="Filter name, e.g. installed, ~installed, gui, development"
)


def _backend_factory() -> Backend:
    return Backend()


def _read_key_file(path: Path | None) -> ConfigParser | None:
    if path is None:
        return None
    if not path.exists():
        console.print(f"[red]Config not found: {path}[/red]")
        raise typer.Exit(2)
    parser = ConfigParser()
    parser.optionxform = str
    parser.read(path, encoding="utf-8")
    return parser


def _parse_filters(values: list[str] | None) -> Bitfield:
    members: list[PkFilterEnum] = []
    for raw in values or []:
        text = raw.strip().lower()
        if text.startswith("~"):
            text = "not-" + text[1:]
        member = PkFilterEnum.from_text(text)
        if member is PkFilterEnum.UNKNOWN:
            console.print(f"[red]Unknown filter: {raw}[/red]")
            raise typer.Exit(2)
        members.append(member)
    return bitfield_from_enums(members)


def _flags(simulate: bool) -> Bitfield:
    return bitfield_from_enums([PkTransactionFlagEnum.SIMULATE]) if simulate else 0


def _run(config: Path | None, call: Callable[[Backend, ConsoleJob], JobState]) -> None:
    backend = _backend_factory()
    backend.initialize(_read_key_file(config))
    job = ConsoleJob(console)
    try:
        state = call(backend, job)
    finally:
        backend.destroy()
    job.render()
    if state is not JobState.FINISHED:
        raise typer.Exit(1)


@app.command()
def about() -> None:
    """Show backend identity and advertised capabilities."""
    backend = _backend_factory()
    console.print(f"[bold]{backend.get_name()}[/bold] - {backend.get_description()} ({backend.get_author()})")
    table = Table(title="Capabilities")
    table.add_column("Kind", style="cyan")
    table.add_column("Values")
    table.add_row("Roles", ", ".join(r.text for r in bitfield_to_enums(backend.get_roles(), PkRoleEnum)))
    table.add_row("Groups", ", ".join(g.text for g in bitfield_to_enums(backend.get_groups(), PkGroupEnum)))
    table.add_row("Filters", ", ".join(f.text for f in bitfield_to_enums(backend.get_filters(), PkFilterEnum)))
    mime_types = [m for m in backend.get_mime_types() if m is not None]
    table.add_row("Mime types", ", ".join(mime_types) or "-")
    table.add_row("Parallel jobs", "yes" if backend.supports_parallelization() else "no")
    console.print(table)


@app.command()
def search(
    terms: list[str] = typer.Argument(..., help="Search terms"),
    details: bool = typer.Option(False, "--details", help="Search summaries and descriptions too"),
    filters: list[str] = FilterOption,
    config: Path = ConfigOption,
) -> None:
    """Search packages by name."""
    bits = _parse_filters(filters)
    if details:
        _run(config, lambda b, job: b.search_details(job, bits, terms))
    else:
        _run(config, lambda b, job: b.search_names(job, bits, terms))


@app.command("search-file")
def search_file(
    paths: list[str] = typer.Argument(..., help="File paths"),
    filters: list[str] = FilterOption,
    config: Path = ConfigOption,
) -> None:
    """Find packages owning files."""
    bits = _parse_filters(filters)
    _run(config, lambda b, job: b.search_files(job, bits, paths))


@app.command("search-group")
def search_group(
    groups: list[str] = typer.Argument(..., help="Group names (e.g. programming) or eopkg components"),
    filters: list[str] = FilterOption,
    config: Path = ConfigOption,
) -> None:
    """List packages in groups."""
    bits = _parse_filters(filters)
    _run(config, lambda b, job: b.search_groups(job, bits, groups))


@app.command("list")
def list_packages(filters: list[str] = FilterOption, config: Path = ConfigOption) -> None:
    """List all packages."""
    bits = _parse_filters(filters)
    _run(config, lambda b, job: b.get_packages(job, bits))


@app.command()
def resolve(
    names: list[str] = typer.Argument(..., help="Package names or ids"),
    filters: list[str] = FilterOption,
    config: Path = ConfigOption,
) -> None:
    """Resolve names to package ids."""
    bits = _parse_filters(filters)
    _run(config, lambda b, job: b.resolve(job, bits, names))


@app.command()
def info(package_ids: list[str] = typer.Argument(...), config: Path = ConfigOption) -> None:
    """Show package details."""
    _run(config, lambda b, job: b.get_details(job, package_ids))


@app.command()
def files(package_ids: list[str] = typer.Argument(...), config: Path = ConfigOption) -> None:
    """List files owned by packages."""
    _run(config, lambda b, job: b.get_files(job, package_ids))


@app.command()
def depends(
    package_ids: list[str] = typer.Argument(...),
    reverse: bool = typer.Option(False, "--reverse", help="Show packages requiring these instead"),
    recursive: bool = typer.Option(False, "--recursive", "-r"),
    filters: list[str] = FilterOption,
    config: Path = ConfigOption,
) -> None:
    """Show dependencies (or reverse dependencies)."""
    bits = _parse_filters(filters)
    if reverse:
        _run(config, lambda b, job: b.required_by(job, bits, package_ids, recursive))
    else:
        _run(config, lambda b, job: b.depends_on(job, bits, package_ids, recursive))


@app.command()
def repos(config: Path = ConfigOption) -> None:
    """List repositories."""
    _run(config, lambda b, job: b.get_repo_list(job, 0))


@app.command("repo-enable")
def repo_enable(
    repo_id: str = typer.Argument(...),
    disable: bool = typer.Option(False, "--disable"),
    config: Path = ConfigOption,
) -> None:
    """Enable or disable a repository."""
    _run(config, lambda b, job: b.repo_enable(job, repo_id, not disable))


@app.command()
def refresh(force: bool = typer.Option(False, "--force"), config: Path = ConfigOption) -> None:
    """Refresh repository metadata."""
    _run(config, lambda b, job: b.refresh_cache(job, force))


@app.command()
def updates(filters: list[str] = FilterOption, config: Path = ConfigOption) -> None:
    """List available updates."""
    bits = _parse_filters(filters)
    _run(config, lambda b, job: b.get_updates(job, bits))


@app.command()
def install(
    package_ids: list[str] = typer.Argument(...),
    simulate: bool = typer.Option(False, "--simulate"),
    config: Path = ConfigOption,
) -> None:
    """Install packages."""
    _run(config, lambda b, job: b.install_packages(job, _flags(simulate), package_ids))


@app.command()
def remove(
    package_ids: list[str] = typer.Argument(...),
    simulate: bool = typer.Option(False, "--simulate"),
    allow_deps: bool = typer.Option(False, "--allow-deps"),
    autoremove: bool = typer.Option(False, "--autoremove"),
    config: Path = ConfigOption,
) -> None:
    """Remove packages."""
    _run(config, lambda b, job: b.remove_packages(job, _flags(simulate), package_ids, allow_deps, autoremove))


@app.command()
def update(
    package_ids: list[str] = typer.Argument(...),
    simulate: bool = typer.Option(False, "--simulate"),
    config: Path = ConfigOption,
) -> None:
    """Update packages."""
    _run(config, lambda b, job: b.update_packages(job, _flags(simulate), package_ids))


@app.command()
def download(
    package_ids: list[str] = typer.Argument(...),
    directory: Path = typer.Option(None, "--dir", "-d", help="Target directory"),
    config: Path = ConfigOption,
) -> None:
    """Download packages without installing."""
    target = str(directory) if directory else None
    _run(config, lambda b, job: b.download_packages(job, package_ids, target))


@app.command()
def repair(config: Path = ConfigOption) -> None:
    """Repair the system (acknowledged, no work is done)."""
    _run(config, lambda b, job: b.repair_system(job, 0))


if __name__ == "__main__":
    app()
