from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from adapters.filesystem.calendar_repository import (
    FileSystemCalendarRepository,
    FileSystemLayoutRepository,
    layout_path_for,
)
from adapters.layout.greedy_columns import GreedyColumnLayoutEngine, LayoutConfig
from app.config import AppSettings, load_settings
from domain.models import LayoutPlan
from domain.services.lay_out_day import DayLayoutService

app = typer.Typer(no_args_is_help=True)
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load(config_path: Path | None, verbose: bool) -> AppSettings:
    try:
        settings = load_settings(config_path)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid configuration:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _configure_logging("DEBUG" if verbose else settings.layout.log_level)
    return settings


def _build_service(settings: AppSettings, container_width: float | None) -> DayLayoutService:
    config = settings.layout.to_layout_config()
    if container_width is not None:
        try:
            config = LayoutConfig(container_width=container_width)
        except ValueError as exc:
            console.print(f"[red]Invalid container width:[/] {escape(str(exc))}")
            raise typer.Exit(code=1) from exc
    return DayLayoutService(GreedyColumnLayoutEngine(config))


def _render_plan(plan: LayoutPlan, title: str) -> Table:
    table = Table(title=title)
    for column_name in ("#", "start", "end", "column", "left", "width"):
        table.add_column(column_name, justify="right")
    for result in plan.results:
        table.add_row(
            str(result.index),
            f"{result.start:g}",
            f"{result.end:g}",
            str(result.column),
            f"{result.left:g}",
            f"{result.width:g}",
        )
    return table


@app.command("layout")
def layout(
    input_dir: Optional[Path] = typer.Option(None, help="Directory with day JSON files."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory to write layout JSON files."),
    container_width: Optional[float] = typer.Option(
        None, help="Override the configured container width."
    ),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every column pass."),
) -> None:
    settings = _load(config, verbose)
    source_dir = input_dir or settings.layout.input_dir
    target_dir = output_dir or settings.layout.output_dir
    service = _build_service(settings, container_width)
    calendar_repo = FileSystemCalendarRepository()
    layout_repo = FileSystemLayoutRepository()

    try:
        pairs = calendar_repo.load_all_with_paths(source_dir)
    except ValueError as exc:
        console.print(f"[red]Validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    if not pairs:
        console.print(f"[yellow]No day files found in {source_dir}[/]")
        raise typer.Exit(code=0)

    target_dir.mkdir(parents=True, exist_ok=True)
    for path, day in pairs:
        plan = service.lay_out(day)
        target_path = layout_path_for(path, target_dir)
        layout_repo.save(plan, target_path)
        logger.info("Laid out %d events from %s", len(plan.results), path)
        console.print(f"[green]Wrote[/] {target_path}")


@app.command("show")
def show(
    input_path: Path = typer.Argument(..., help="Day JSON file to lay out."),
    container_width: Optional[float] = typer.Option(
        None, help="Override the configured container width."
    ),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every column pass."),
) -> None:
    settings = _load(config, verbose)
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    service = _build_service(settings, container_width)
    try:
        day = FileSystemCalendarRepository().load_by_path(input_path)
    except ValueError as exc:
        console.print(f"[red]Validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    plan = service.lay_out(day)
    console.print(_render_plan(plan, title=f"{input_path.name} ({plan.container_width:g} wide)"))


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Day JSON file to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        day = FileSystemCalendarRepository().load_by_path(input_path)
    except ValueError as exc:
        console.print(f"[red]Validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid day file with {len(day.events)} events:[/] {input_path}")


if __name__ == "__main__":
    app()
