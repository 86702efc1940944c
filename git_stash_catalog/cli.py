"""Typer-based CLI for git-stash-catalog."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .catalog import StashCatalogService
from .config import load_settings
from .exceptions import StashCatalogError
from .models import CatalogResult, CatalogStatus, StashRecord, WipMode

app = typer.Typer(help="List and annotate git stash entries", add_completion=False, no_args_is_help=True)
console = Console()

EXIT_CODES = {
    CatalogStatus.OK: 0,
    CatalogStatus.EMPTY: 0,
    CatalogStatus.NO_REPOSITORY: 1,
    CatalogStatus.ERROR: 1,
    CatalogStatus.CANCELLED: 130,
}
INFORMATIONAL = (CatalogStatus.EMPTY, CatalogStatus.NO_REPOSITORY)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-stash-catalog {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-stash-catalog version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@app.command(help="List stashes for the repository containing PATH")
def ls(
    path: Path = typer.Argument(Path("."), help="File or directory inside the repository."),
    as_json: bool = typer.Option(False, "--json", help="Output JSON for scripting."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds to wait for each git process (0 disables)."),
    workers: Optional[int] = typer.Option(None, "--workers", help="Resolve stash details with this many threads."),
    wip_mode: Optional[WipMode] = typer.Option(
        None,
        "--wip-mode",
        case_sensitive=False,
        help="Detect WIP stashes from the full description or from the resolved message.",
    ),
) -> None:
    service = _build_service(timeout=timeout, workers=workers, wip_mode=wip_mode)
    result = _run_cancellable(service, path)
    if as_json:
        typer.echo(json.dumps(result_to_dict(result), indent=2))
        raise typer.Exit(EXIT_CODES[result.status])
    _print_header(result)
    if result.stashes:
        _print_table(result.stashes)
    _finish(result)


@app.command(help="Show a single stash by index")
def show(
    index: int = typer.Argument(..., min=0, help="Stash index, as in stash@{INDEX}."),
    path: Path = typer.Argument(Path("."), help="File or directory inside the repository."),
) -> None:
    service = _build_service()
    result = _run_cancellable(service, path)
    if result.status not in (CatalogStatus.OK, CatalogStatus.EMPTY):
        _finish(result)
    stash = result.find(index)
    if stash is None:
        _fail(f"stash@{{{index}}} not found.")
    for label, value in (
        ("Name", stash.name),
        ("Display name", stash.display_name),
        ("Message", stash.message),
        ("Branch", stash.branch_name or "-"),
        ("WIP", "yes" if stash.is_work_in_progress else "no"),
        ("Custom name", stash.custom_name or "-"),
        ("Created", _format_time(stash)),
    ):
        console.print(f"[bold]{label}:[/bold] {value}")


def stash_to_dict(stash: StashRecord) -> dict:
    return {
        "index": stash.index,
        "name": stash.name,
        "message": stash.message,
        "branch": stash.branch_name,
        "wip": stash.is_work_in_progress,
        "custom_name": stash.custom_name,
        "display_name": stash.display_name,
        "created_at": stash.created_at.isoformat() if stash.created_at else None,
    }


def result_to_dict(result: CatalogResult) -> dict:
    return {
        "repository": str(result.repo_path) if result.repo_path else None,
        "branch": result.current_branch,
        "status": result.status.value,
        "message": result.message,
        "stashes": [stash_to_dict(stash) for stash in result.stashes],
    }


def _build_service(
    *,
    timeout: float | None = None,
    workers: int | None = None,
    wip_mode: WipMode | None = None,
) -> StashCatalogService:
    try:
        settings = load_settings().override(
            timeout=timeout,
            workers=workers,
            wip_mode=wip_mode.value if wip_mode else None,
        )
    except StashCatalogError as err:
        _fail(str(err))
    return StashCatalogService.from_settings(settings)


def _run_cancellable(service: StashCatalogService, path: Path) -> CatalogResult:
    """Build the catalog on a worker thread so Ctrl-C can cancel it."""

    cancel = threading.Event()
    results: list[CatalogResult] = []
    worker = threading.Thread(target=lambda: results.append(service.build_catalog(path, cancel)), daemon=True)
    worker.start()
    try:
        while worker.is_alive():
            worker.join(0.1)
    except KeyboardInterrupt:
        cancel.set()
        _wait_ignoring_interrupts(worker)
    return results[0]


def _wait_ignoring_interrupts(worker: threading.Thread) -> None:
    while worker.is_alive():
        try:
            worker.join(0.1)
        except KeyboardInterrupt:
            continue


def _print_header(result: CatalogResult) -> None:
    if result.repo_path is None:
        return
    branch = result.current_branch or "(detached)"
    console.print(f"[bold]{result.repo_path}[/bold] on [cyan]{branch}[/cyan]")


def _print_table(stashes: tuple[StashRecord, ...]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name", no_wrap=True)
    table.add_column("Branch", no_wrap=True)
    table.add_column("WIP", justify="center")
    table.add_column("Created", no_wrap=True)
    table.add_column("Description")
    for stash in stashes:
        table.add_row(
            str(stash.index),
            stash.name,
            stash.branch_name or "-",
            "✓" if stash.is_work_in_progress else "",
            _format_time(stash),
            stash.display_name,
        )
    console.print(table)


def _format_time(stash: StashRecord) -> str:
    if stash.created_at is None:
        return "?"
    return stash.created_at.strftime("%Y-%m-%d %H:%M")


def _finish(result: CatalogResult) -> None:
    code = EXIT_CODES[result.status]
    if result.status in INFORMATIONAL:
        console.print(result.message)
        if code:
            raise typer.Exit(code)
        return
    if result.message and code:
        _fail(result.message, code)


def _fail(message: str, code: int = 1) -> None:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
