"""
CodeTrack: terminal interface for the progress tracker.

Commands:
- codetrack lists              - Show problem lists and overall progress
- codetrack show               - Problem table with review schedule
- codetrack solve PROBLEM      - Toggle a problem solved/unsolved
- codetrack review PROBLEM N   - Toggle review N (1-5)
- codetrack stats              - Progress card for a list
- codetrack due                - Problems with reviews due today
- codetrack export / import    - Back up or restore all progress
- codetrack clear              - Reset all progress
- codetrack roadmap / info     - Study roadmap link, how reviews work
"""
from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from config import get_settings

from .catalog import Difficulty, Problem, ProblemCatalog
from .progress import ProblemProgress
from .scheduler import (
    REVIEW_COUNT,
    REVIEW_INTERVALS,
    days_overdue,
    due_review_indices,
    next_review,
    schedule_reviews,
)
from .state_store import ProgressImportError, StateStore
from .stats import ALL, DIFFICULTIES, categories
from .tracker import ProgressTracker

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="codetrack",
    help="CodeTrack: spaced-repetition tracker for coding-interview problem lists",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


# =============================================================================
# Styling
# =============================================================================

STYLES = {
    "solved": "bold green",
    "due": "bold yellow",
    "info": "bold cyan",
    "error": "bold red",
    "dim": "dim",
    "difficulty": {
        Difficulty.EASY: "green",
        Difficulty.MEDIUM: "yellow",
        Difficulty.HARD: "red",
    },
}


def style_difficulty(difficulty: Difficulty) -> str:
    color = STYLES["difficulty"].get(difficulty, "white")
    return f"[{color}]{difficulty.value}[/{color}]"


def _fail(message: str) -> NoReturn:
    console.print(f"[{STYLES['error']}]{message}[/]")
    raise typer.Exit(1)


# =============================================================================
# Wiring
# =============================================================================


def configure_logging(level: str, log_file: str | None = None) -> None:
    """Route loguru output to stderr (and optionally a rotating file)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{message}</level>",
    )
    if log_file:
        logger.add(log_file, level="DEBUG", rotation="1 MB", retention=3)


def _build_tracker() -> ProgressTracker:
    """Load the catalog and rehydrate persisted progress."""
    settings = get_settings()
    catalog = ProblemCatalog(catalog_dir=settings.catalog_dir)
    if catalog.load() == 0:
        _fail(f"No problem lists found in {catalog.catalog_dir}")

    state_store = StateStore(data_dir=settings.data_dir, storage_key=settings.storage_key)
    return ProgressTracker(state_store, catalog)


def _resolve_list(tracker: ProgressTracker, list_name: str | None) -> str:
    """Match a --list value against the catalog, ignoring case."""
    wanted = list_name or get_settings().default_list
    for name in tracker.catalog.list_names:
        if name.lower() == wanted.lower():
            return name
    _fail(f"Unknown list: {wanted}. Choose from: {', '.join(tracker.catalog.list_names)}")


ListOption = Annotated[
    str | None, typer.Option("--list", "-l", help="Problem list (default from settings)")
]


# =============================================================================
# Display Helpers
# =============================================================================


def _review_cell(progress: ProblemProgress, index: int, scheduled: list[date], today: date) -> str:
    if not progress.solved or not scheduled:
        return f"[{STYLES['dim']}]-[/]"
    entry = progress.entries[index]
    if entry.completed:
        stamp = f" {entry.completed_date.strftime('%m-%d')}" if entry.completed_date else ""
        return f"[green]✓{stamp}[/green]"
    target = scheduled[index]
    if target <= today:
        return f"[{STYLES['due']}]{target.isoformat()}[/]"
    return f"[{STYLES['dim']}]{target.isoformat()}[/]"


def _problem_table(
    title: str,
    problems: list[Problem],
    tracker: ProgressTracker,
    list_name: str,
) -> Table:
    today = tracker.today
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Problem")
    table.add_column("Difficulty")
    table.add_column("Topics", style="dim")
    table.add_column("Solved", justify="center")
    for idx in range(REVIEW_COUNT):
        table.add_column(f"R{idx + 1}", justify="center")

    for position, problem in enumerate(problems, 1):
        progress = tracker.progress_for(list_name, problem.id)
        scheduled = schedule_reviews(progress.solved_date)
        solved = (
            f"[{STYLES['solved']}]✓[/]" if progress.solved else f"[{STYLES['dim']}]·[/]"
        )
        table.add_row(
            str(position),
            f"{problem.title}\n[dim]{problem.id}[/dim]",
            style_difficulty(problem.difficulty),
            ", ".join(problem.topics),
            solved,
            *(_review_cell(progress, idx, scheduled, today) for idx in range(REVIEW_COUNT)),
        )
    return table


# =============================================================================
# Commands
# =============================================================================


@app.callback()
def callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """
    [bold cyan]CodeTrack[/] - track solved problems and spaced-repetition reviews.

    \b
    Quick Start:
      codetrack show                 # Blind 75 table
      codetrack solve two-sum        # Mark solved, schedules R1-R5
      codetrack review two-sum 1     # Tick off the first review
      codetrack due                  # What needs review today
    """
    if verbose:
        configure_logging("DEBUG", get_settings().log_file)


@app.command()
def lists() -> None:
    """Show available problem lists with progress."""
    tracker = _build_tracker()

    table = Table(title="Problem Lists")
    table.add_column("List", style="bold")
    table.add_column("Solved", justify="right")
    table.add_column("Due", justify="right")
    table.add_column("Roadmap", style="dim")

    for name in tracker.catalog.list_names:
        stats = tracker.stats(name)
        table.add_row(
            name,
            f"{stats.solved}/{stats.total}",
            str(stats.due_today),
            tracker.catalog.roadmap_url(name) or "-",
        )

    console.print(table)


@app.command()
def show(
    list_name: ListOption = None,
    category: Annotated[
        str, typer.Option("--category", "-c", help="Topic filter")
    ] = ALL,
    difficulty: Annotated[
        str, typer.Option("--difficulty", "-d", help="Easy, Medium or Hard")
    ] = ALL,
    due: Annotated[
        bool, typer.Option("--due", help="Only problems with reviews due today")
    ] = False,
) -> None:
    """
    Show the problem table with solve state and review dates.

    Review columns show the target date, a yellow date when due,
    or a check mark with the day the review was done.
    """
    tracker = _build_tracker()
    name = _resolve_list(tracker, list_name)

    difficulty = difficulty.capitalize()
    if difficulty not in DIFFICULTIES:
        _fail(f"Unknown difficulty: {difficulty}. Choose from: {', '.join(DIFFICULTIES)}")
    problems = tracker.catalog.problems(name)
    if category not in categories(problems):
        _fail(f"Unknown category: {category}")

    shown = tracker.filtered(name, category=category, difficulty=difficulty, due_today_only=due)
    if not shown:
        console.print("[yellow]No problems match these filters.[/]")
        return

    title = f"{name} Progress Tracker {tracker.today.isoformat()}"
    console.print(_problem_table(title, shown, tracker, name))


@app.command()
def solve(
    problem_id: Annotated[str, typer.Argument(help="Problem id, e.g. two-sum")],
    list_name: ListOption = None,
) -> None:
    """Toggle a problem between solved and unsolved."""
    tracker = _build_tracker()
    name = _resolve_list(tracker, list_name)

    try:
        progress = tracker.toggle_solved(name, problem_id)
    except KeyError as e:
        _fail(str(e.args[0]))

    if progress.solved:
        dates = ", ".join(d.isoformat() for d in schedule_reviews(progress.solved_date))
        console.print(f"[{STYLES['solved']}]✓ {problem_id} solved[/]")
        console.print(f"  Reviews scheduled: {dates}")
    else:
        console.print(f"[yellow]{problem_id} marked unsolved; reviews cleared[/]")


@app.command()
def review(
    problem_id: Annotated[str, typer.Argument(help="Problem id, e.g. two-sum")],
    number: Annotated[
        int, typer.Argument(min=1, max=REVIEW_COUNT, help="Review number 1-5")
    ],
    list_name: ListOption = None,
) -> None:
    """Toggle review N (1-5) of a problem."""
    tracker = _build_tracker()
    name = _resolve_list(tracker, list_name)

    try:
        progress = tracker.toggle_review(name, problem_id, number - 1)
    except KeyError as e:
        _fail(str(e.args[0]))

    if not progress.solved:
        console.print(f"[yellow]Note: {problem_id} is not marked solved yet[/]")
    if progress.reviews[number - 1]:
        console.print(f"[{STYLES['solved']}]✓ R{number} done for {problem_id}[/]")
    else:
        console.print(f"[yellow]R{number} for {problem_id} marked not done[/]")

    upcoming = next_review(progress)
    if upcoming:
        idx, target = upcoming
        console.print(f"  Next: R{idx + 1} on {target.isoformat()}")
    elif progress.solved and progress.solved_date:
        console.print(f"[{STYLES['solved']}]  All reviews complete![/]")


@app.command()
def stats(list_name: ListOption = None) -> None:
    """Show the progress card for a list."""
    tracker = _build_tracker()
    name = _resolve_list(tracker, list_name)
    card = tracker.stats(name)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Solved", f"{card.solved}/{card.total} ({card.percent_complete:.1f}%)")
    table.add_row("Easy", f"[green]{card.easy}[/green]/{card.easy_total}")
    table.add_row("Medium", f"[yellow]{card.medium}[/yellow]/{card.medium_total}")
    table.add_row("Hard", f"[red]{card.hard}[/red]/{card.hard_total}")
    table.add_row("Due today", str(card.due_today))

    console.print(Panel(table, title=f"[bold cyan]{name}[/]", border_style="cyan"))


@app.command()
def due(list_name: ListOption = None) -> None:
    """List problems with at least one review due today or overdue."""
    tracker = _build_tracker()
    name = _resolve_list(tracker, list_name)
    today = tracker.today

    problems = tracker.due_problems(name)
    if not problems:
        console.print("[green]Nothing due for review! All caught up.[/green]")
        return

    table = Table(title=f"Due for review ({today.isoformat()})")
    table.add_column("Problem")
    table.add_column("Difficulty")
    table.add_column("Reviews due")
    table.add_column("Overdue", justify="right")

    for problem in problems:
        progress = tracker.progress_for(name, problem.id)
        slots = ", ".join(f"R{idx + 1}" for idx in due_review_indices(progress, today))
        overdue = days_overdue(progress, today)
        table.add_row(
            problem.id,
            style_difficulty(problem.difficulty),
            slots,
            f"{overdue}d" if overdue else "today",
        )

    console.print(table)


@app.command("export")
def export_data(
    output: Annotated[
        Path, typer.Option("--output", "-o", help="Output file path")
    ] = Path("codetrack_export.json"),
) -> None:
    """Export all progress to a JSON file."""
    tracker = _build_tracker()
    try:
        tracker.state_store.export_to(tracker.store, output)
    except OSError as e:
        _fail(f"Export failed: {e}")

    solved = sum(
        1 for entries in tracker.store.lists.values() for p in entries.values() if p.solved
    )
    console.print(f"[green]✓ Exported progress ({solved} solved problems) to {output}[/]")


@app.command("import")
def import_data(
    input_file: Annotated[Path, typer.Argument(help="Exported progress file")],
) -> None:
    """Replace all progress with the contents of an export file."""
    if not input_file.exists():
        _fail(f"File not found: {input_file}")

    tracker = _build_tracker()
    try:
        store = tracker.state_store.import_from(input_file, tracker.catalog.list_names)
    except ProgressImportError as e:
        _fail(str(e))

    tracker.replace_store(store)
    console.print(f"[green]✓ Imported progress for {len(store.list_names)} lists from {input_file}[/]")


@app.command()
def clear(
    confirm: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
) -> None:
    """Reset ALL progress. A backup is written first."""
    if not confirm and not Confirm.ask("Reset ALL progress?", default=False):
        raise typer.Exit(0)

    tracker = _build_tracker()
    try:
        backup_file = tracker.state_store.backup(tracker.store)
    except OSError as e:
        _fail(f"Backup failed, nothing was cleared: {e}")

    tracker.clear()
    console.print(f"[green]All progress has been reset.[/green] Backup: {backup_file}")


@app.command()
def roadmap(list_name: ListOption = None) -> None:
    """Show the official study roadmap for a list."""
    tracker = _build_tracker()
    name = _resolve_list(tracker, list_name)
    url = tracker.catalog.roadmap_url(name)
    if not url:
        _fail(f"No roadmap known for {name}")
    console.print(f"{name} roadmap: [link={url}]{url}[/link]")


@app.command()
def info() -> None:
    """Explain how the review schedule works."""
    settings = get_settings()
    schedule = "\n".join(
        f"  R{idx + 1}: review after {days} day{'s' if days > 1 else ''}"
        for idx, days in enumerate(REVIEW_INTERVALS)
    )
    console.print(Panel(
        "Spaced repetition helps you retain coding problems long-term.\n\n"
        f"[bold]Review Schedule:[/bold]\n{schedule}\n\n"
        "[bold]How to Use:[/bold]\n"
        "  1. Mark a problem solved when you complete it (codetrack solve)\n"
        "  2. The table shows the target date of each review (codetrack show)\n"
        "  3. Tick off a review when you redo the problem (codetrack review)\n"
        "  4. Check what needs review today (codetrack due)\n"
        "  5. Follow the official roadmap for study order (codetrack roadmap)"
        f"\n\n[dim]Progress file: {settings.progress_file}[/dim]",
        title="How Spaced Repetition Works",
        border_style="blue",
    ))


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    app()


if __name__ == "__main__":
    main()
