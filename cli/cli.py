"""Developer CLI for competition scoring.

Reads competition and submission documents exported from the store as JSON
and runs the same scoring and ranking code the app uses.
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fitcomp.competitions.errors import CompetitionValidationError, ScoringConfigurationError
from fitcomp.competitions.leaderboard import podium, rank, standing_for
from fitcomp.competitions.models import Competition, Submission
from fitcomp.competitions.scoring import find_rule, preview_points
from fitcomp.competitions.serializers import competition_from_document, submission_from_document
from fitcomp.competitions.validation import create_competition
from fitcomp.config.settings import settings
from fitcomp.core.logger import setup_logger_from_settings

app = typer.Typer(
    name="fitcomp",
    help="Score workouts and rank competition leaderboards from exported documents",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
) -> None:
    setup_logger_from_settings(settings, level=log_level)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


def _load_competition(path: Path) -> Competition:
    try:
        return competition_from_document(_load_json(path))
    except ValidationError as e:
        console.print(f"[red]Malformed competition document {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


def _documents(data: Any) -> list[tuple[str | None, dict[str, Any]]]:
    """Accept either a list of documents or an {id: document} mapping."""
    if isinstance(data, dict):
        return [(doc_id, doc) for doc_id, doc in data.items()]
    return [(doc.get("id"), doc) for doc in data]


@app.command()
def preview(
    competition_file: Path = typer.Argument(..., help="Competition document (JSON)"),
    activity: str = typer.Option(..., "--activity", "-a", help="Activity type to score"),
    duration: float = typer.Option(0.0, "--duration", help="Duration in minutes"),
    distance: float = typer.Option(0.0, "--distance", help="Distance or count"),
    calories: float = typer.Option(0.0, "--calories", help="Calories burned"),
    prior: float = typer.Option(0.0, "--prior", help="Points already earned today"),
) -> None:
    """Show the points a workout would earn."""
    competition = _load_competition(competition_file)
    try:
        rule = find_rule(competition, activity)
    except ScoringConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print(f"Known activities: {', '.join(competition.activity_types)}")
        raise typer.Exit(1) from e

    try:
        submission = Submission(
            competition_id=competition.id,
            user_id="cli-user",
            activity_type=activity,
            duration=duration,
            distance=distance,
            calories=calories,
            date=datetime.now(UTC),
        )
    except ValidationError as e:
        console.print(f"[red]Invalid workout values: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    breakdown = preview_points(rule, submission, prior, competition.daily_cap)

    table = Table(title=f"{competition.name}: {activity}")
    table.add_column("Field")
    table.add_column("Value", justify="right")
    table.add_row("Formula", breakdown.formula)
    table.add_row("Value", f"{breakdown.value:g}")
    table.add_row("Thresholds", str(breakdown.thresholds))
    table.add_row("Raw points", f"{breakdown.raw_points:g}")
    if breakdown.headroom is not None:
        table.add_row("Headroom today", f"{breakdown.headroom:g}")
    table.add_row("Awarded", f"[bold]{breakdown.awarded_points:.1f}[/bold]")
    console.print(table)
    if breakdown.capped:
        console.print("[yellow]Daily cap reached: this workout earns less than its full value[/yellow]")


@app.command()
def leaderboard(
    competition_file: Path = typer.Argument(..., help="Competition document (JSON)"),
    submissions_file: Path = typer.Argument(..., help="Submission documents (JSON list or id mapping)"),
    names_file: Path | None = typer.Option(None, "--names", help="JSON mapping of user id to display name"),
    me: str | None = typer.Option(None, "--me", help="Highlight this user id"),
) -> None:
    """Print ranked standings for a competition."""
    competition = _load_competition(competition_file)
    try:
        submissions = [
            submission_from_document(doc, doc_id)
            for doc_id, doc in _documents(_load_json(submissions_file))
            if doc.get("competitionId") == competition.id
        ]
    except ValidationError as e:
        console.print(f"[red]Malformed submission document in {submissions_file}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    names: dict[str, str] = _load_json(names_file) if names_file else {}
    logger.debug(f"Ranking {len(submissions)} submissions for competition={competition.id}")

    standings = rank(competition.participants, submissions, names, placeholder_name=settings.unknown_user_name)

    top = podium(standings, size=settings.podium_size)
    if top:
        console.print("  ".join(f"[bold]#{s.rank}[/bold] {s.display_name} ({s.total_points:g} pts)" for s in top))

    table = Table(title=f"{competition.name} rankings")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Points", justify="right")
    for standing in standings:
        style = "bold green" if standing.user_id == me else None
        table.add_row(str(standing.rank), standing.display_name, f"{standing.total_points:g}", style=style)
    console.print(table)

    if me:
        mine = standing_for(standings, me)
        if mine is None:
            console.print(f"[yellow]{me} is not on this leaderboard[/yellow]")
        else:
            console.print(f"You are #{mine.rank} with {mine.total_points:g} pts")


@app.command()
def validate(
    competition_file: Path = typer.Argument(..., help="Competition document (JSON)"),
) -> None:
    """Run the creation checks against a competition document."""
    document = _load_json(competition_file)
    try:
        start_date = datetime.fromisoformat(document["startDate"])
        end_date = datetime.fromisoformat(document["endDate"]) if document.get("endDate") else None
        create_competition(
            owner_id=document.get("ownerId", ""),
            name=document.get("name", ""),
            rules=document.get("rules", []),
            start_date=start_date,
            end_date=end_date,
            daily_cap=document.get("dailyCap") or None,
            invitees=document.get("pendingParticipants", []),
            description=document.get("description", ""),
            competition_id=document.get("id"),
            default_days=settings.default_competition_days,
        )
    except CompetitionValidationError as e:
        for detail in e.details:
            console.print(f"[red]✗ {detail}[/red]")
        raise typer.Exit(1) from e
    except (KeyError, ValueError, ValidationError) as e:
        console.print(f"[red]Malformed competition document: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    console.print("[green]✓ Competition is valid[/green]")


if __name__ == "__main__":
    app()
