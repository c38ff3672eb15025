"""Build cross-filtered dashboard view data from the athlete and medal CSVs."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import typer

from medalboard.config import Settings
from medalboard.ingest.errors import LoadFailure
from medalboard.views.controller import DashboardController, DashboardSnapshot

app = typer.Typer(help="Aggregate medal data and derive per-chart view payloads")

DEFAULT_OUTPUT = Path("data/processed/dashboard_snapshot.json")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")


def _build(athletes: Optional[str], medals: Optional[str], select: List[str]) -> DashboardSnapshot:
    overrides = {}
    if athletes:
        overrides["athletes_source"] = athletes
    if medals:
        overrides["medals_source"] = medals
    controller = DashboardController(settings=Settings(**overrides))
    try:
        snapshot = controller.load()
    except LoadFailure as exc:
        typer.secho(f"Load failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    for code in select:
        snapshot = controller.toggle(code)
    return snapshot


@app.command()
def snapshot(
    athletes: Optional[str] = typer.Option(None, help="Athletes CSV path or URL"),
    medals: Optional[str] = typer.Option(None, help="Medals CSV path or URL"),
    select: List[str] = typer.Option([], help="Country code to toggle; repeat to toggle several times"),
    output: Path = typer.Option(DEFAULT_OUTPUT, help="Where to write the snapshot JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Write every chart's view data for the resulting selection as JSON."""
    configure_logging(verbose)
    result = _build(athletes, medals, select)

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        json.dump(asdict(result), f, indent=2)

    typer.secho(f"Snapshot ({result.selection.state}) written to {output}", fg=typer.colors.GREEN)


@app.command()
def summary(
    athletes: Optional[str] = typer.Option(None, help="Athletes CSV path or URL"),
    medals: Optional[str] = typer.Option(None, help="Medals CSV path or URL"),
    select: List[str] = typer.Option([], help="Country code to toggle; repeat to toggle several times"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the leading countries and the selection-scoped figures."""
    configure_logging(verbose)
    result = _build(athletes, medals, select)

    typer.secho(f"Selection: {result.selection.state}", fg=typer.colors.CYAN)
    for bar in result.bar.bars:
        p = bar.profile
        marker = "*" if bar.selected else " "
        typer.echo(
            f"{marker} {p.country_code:<4} {p.country_name:<32} "
            f"G{p.gold:>3} S{p.silver:>3} B{p.bronze:>3} total {p.total:>3}"
        )

    scatter = result.scatter
    typer.echo(f"Age/medal points: {len(scatter.rows)} (legend: {', '.join(scatter.legend)})")
    if scatter.age_domain is not None:
        typer.echo(
            f"Age axis {scatter.age_domain.low}-{scatter.age_domain.high}, "
            f"medal axis {scatter.medal_domain.low}-{scatter.medal_domain.high}"
        )

    profile = result.profile
    if profile.featured is not None:
        shares = ", ".join(f"{key}={value:.2f}" for key, value in profile.normalized.items())
        typer.echo(f"Profile of {profile.featured.country_code}: {shares}")


if __name__ == "__main__":  # pragma: no cover
    app()
