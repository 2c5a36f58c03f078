"""CLI commands for the academic records service.

Commands:
- serve: Run the Web API with uvicorn
- stats: Dashboard summary
- students / courses / grades: Tabular listings
- report: Student or course performance report
- show-config: Print the effective configuration

Read commands work on a freshly built store (demo dataset unless disabled
in config); the store is process-local, so they never see data created
through a running server.
"""

from __future__ import annotations

import typer
import yaml
from rich.console import Console
from rich.table import Table

from records.config.app_config import get_config_path, load_app_config
from records.core.aggregation import course_performance, dashboard_stats, student_performance
from records.core.enrichment import (
    all_courses_with_students,
    all_full_grades,
    all_students_with_courses,
)
from records.core.scoring import letter_grade
from records.db.demo_data import create_store
from records.db.store import RecordStore

app = typer.Typer(
    name="records",
    help="Academic records manager: students, courses, enrollments and grades.",
    no_args_is_help=True,
)

console = Console()

# Colour per letter band
LETTER_COLORS = {
    "A": "green",
    "B": "blue",
    "C": "yellow",
    "D": "dark_orange",
    "F": "red",
}


def _build_store(empty: bool = False) -> RecordStore:
    config = load_app_config()
    return create_store(seed=config.store.seed_demo_data and not empty)


def _colored_score(score: float) -> str:
    color = LETTER_COLORS[letter_grade(score)]
    return f"[{color}]{score:.1f}[/{color}]"


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    empty: bool = typer.Option(False, "--empty", help="Start without the demo dataset"),
) -> None:
    """Run the Web API."""
    import uvicorn

    from records.web.api import create_app

    config = load_app_config()
    web_app = create_app(store=_build_store(empty=empty), config=config)

    bind_host = host or config.api.host
    bind_port = port or config.api.port
    console.print(f"[green]✓ Serving on http://{bind_host}:{bind_port}[/green]")
    uvicorn.run(web_app, host=bind_host, port=bind_port)


@app.command()
def stats(
    empty: bool = typer.Option(False, "--empty", help="Use an empty store"),
) -> None:
    """Show dashboard statistics."""
    config = load_app_config()
    summary = dashboard_stats(_build_store(empty=empty), top_limit=config.dashboard.top_students)

    console.print("\n[bold]Dashboard[/bold]\n")
    console.print(f"  [dim]students:[/dim]       {summary.total_students}")
    console.print(f"  [dim]courses:[/dim]        {summary.active_courses}")
    console.print(f"  [dim]average grade:[/dim]  {_colored_score(summary.average_grade)}")
    console.print(f"  [dim]pending grades:[/dim] {summary.pending_grades}")

    console.print("\n[bold]Grade distribution[/bold]")
    for label, count in zip(summary.grade_distribution.labels, summary.grade_distribution.data):
        console.print(f"  {label:<15} {count}")

    if summary.top_students:
        console.print("\n[bold]Top students[/bold]")
        for rank, student in enumerate(summary.top_students, start=1):
            console.print(f"  {rank}. {student.name} ({_colored_score(student.average_grade)})")
    console.print()


@app.command()
def students() -> None:
    """List students with their courses and average grade."""
    views = all_students_with_courses(_build_store())

    if not views:
        console.print("[yellow]No students[/yellow]")
        return

    table = Table(title=f"Students ({len(views)})")
    table.add_column("ID", justify="right")
    table.add_column("Code")
    table.add_column("Name")
    table.add_column("Year", justify="right")
    table.add_column("Courses")
    table.add_column("Average", justify="right")

    for view in views:
        table.add_row(
            str(view.id),
            view.student_code,
            view.name,
            str(view.year),
            ", ".join(c.course_code for c in view.courses) or "-",
            _colored_score(view.average_grade),
        )
    console.print(table)


@app.command()
def courses() -> None:
    """List courses with enrolled students and average grade."""
    views = all_courses_with_students(_build_store())

    if not views:
        console.print("[yellow]No courses[/yellow]")
        return

    table = Table(title=f"Courses ({len(views)})")
    table.add_column("ID", justify="right")
    table.add_column("Code")
    table.add_column("Name")
    table.add_column("Credits", justify="right")
    table.add_column("Students", justify="right")
    table.add_column("Average", justify="right")

    for view in views:
        table.add_row(
            str(view.id),
            view.course_code,
            view.name,
            str(view.credits),
            str(len(view.students)),
            _colored_score(view.average_grade),
        )
    console.print(table)


@app.command()
def grades(
    term: str = typer.Option(None, "--term", "-t", help="Only show this term"),
) -> None:
    """List grades with student and course."""
    rows = all_full_grades(_build_store())
    if term:
        rows = [g for g in rows if g.term == term]

    if not rows:
        console.print("[yellow]No grades[/yellow]")
        return

    table = Table(title=f"Grades ({len(rows)})")
    table.add_column("ID", justify="right")
    table.add_column("Student")
    table.add_column("Course")
    table.add_column("Term")
    table.add_column("Score", justify="right")
    table.add_column("Letter", justify="center")

    for grade in rows:
        table.add_row(
            str(grade.id),
            f"{grade.student.name} ({grade.student.student_code})",
            grade.course.course_code,
            grade.term,
            _colored_score(grade.score),
            letter_grade(grade.score),
        )
    console.print(table)


@app.command()
def report(
    kind: str = typer.Argument("students", help="'students' or 'courses'"),
    term: str = typer.Option(None, "--term", "-t", help="Restrict to one term"),
) -> None:
    """Show a performance report."""
    store = _build_store()

    if kind == "students":
        table = Table(title="Student performance" + (f" - {term}" if term else ""))
        table.add_column("Code")
        table.add_column("Name")
        table.add_column("Year", justify="right")
        table.add_column("Courses", justify="right")
        table.add_column("Average", justify="right")
        table.add_column("Letter", justify="center")
        for row in student_performance(store, term):
            table.add_row(
                row.student_code,
                row.name,
                str(row.year),
                str(row.course_count),
                _colored_score(row.average_score),
                row.letter,
            )
    elif kind == "courses":
        table = Table(title="Course performance" + (f" - {term}" if term else ""))
        table.add_column("Code")
        table.add_column("Name")
        table.add_column("Students", justify="right")
        table.add_column("Average", justify="right")
        table.add_column("A/B/C/D/F", justify="center")
        for row in course_performance(store, term):
            bands = "/".join(str(n) for n in row.grade_distribution.values())
            table.add_row(
                row.course_code,
                row.name,
                str(row.student_count),
                _colored_score(row.average_score),
                bands,
            )
    else:
        console.print(f"[red]✗ Unknown report '{kind}' (use 'students' or 'courses')[/red]")
        raise typer.Exit(code=1)

    console.print(table)


@app.command(name="show-config")
def show_config() -> None:
    """Print the effective configuration."""
    path = get_config_path()
    config = load_app_config()

    source = str(path) if path.exists() else "defaults"
    console.print(f"[dim]source:[/dim] {source}\n")
    console.print(yaml.safe_dump(config.to_dict(), sort_keys=False).rstrip())


if __name__ == "__main__":
    app()
