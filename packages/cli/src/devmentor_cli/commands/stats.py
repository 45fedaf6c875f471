"""stats and progress commands — dashboard aggregates over stored reviews."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from devmentor_cli.session import require_store, require_submitter
from devmentor_core.analytics import dashboard_stats, insights, progress_trends
from devmentor_store.base import StoreError

console = Console()

_PRIORITY_STYLE = {"high": "red", "medium": "yellow", "low": "blue"}


@click.command("stats")
@click.pass_context
def stats_cmd(ctx):
    """Show dashboard statistics for your stored reviews.

    Reports the average score and its trend, sub-score averages, the weekly
    score history, the language mix, recent activity and a few insights
    about where to focus next.
    """
    submitter_id = require_submitter(ctx)
    store = require_store(ctx)

    try:
        reviews = store.all_reviews(submitter_id)
    except StoreError as e:
        raise click.ClickException(str(e))
    if not reviews:
        console.print("[yellow]No review records found.[/yellow]")
        for insight in insights(reviews):
            console.print(f"[bold]{insight.title}[/bold] {insight.message}")
        return

    stats = dashboard_stats(reviews)

    # --- Summary ---
    console.print(f"\n[bold]Review stats for [cyan]{escape(submitter_id)}[/cyan][/bold]")
    console.print(f"  Total reviews:     {stats.total_reviews}")
    console.print(f"  Average score:     {stats.average_score:g}/10")
    trend_style = "green" if stats.improvement_rate > 0 else "red" if stats.improvement_rate < 0 else "dim"
    console.print(f"  Improvement rate:  [{trend_style}]{stats.improvement_rate:+.2f}%[/{trend_style}]")
    console.print(f"  Issues flagged:    {stats.total_issues}")

    # --- Sub-scores ---
    metrics = Table(title="Average Metrics", show_header=True)
    metrics.add_column("Maintainability", justify="right")
    metrics.add_column("Performance", justify="right")
    metrics.add_column("Security", justify="right")
    metrics.add_row(str(stats.maintainability), str(stats.performance), str(stats.security))
    console.print(metrics)

    # --- Weekly score history ---
    if stats.score_history:
        history = Table(title="Score History", show_header=True)
        history.add_column("Week")
        history.add_column("Starting")
        history.add_column("Avg score", justify="right")
        history.add_column("Reviews", justify="right")
        for week in stats.score_history:
            history.add_row(week.label, week.week_start, f"{week.score:g}", str(week.reviews))
        console.print(history)

    # --- Language distribution ---
    languages = Table(title="Languages", show_header=True)
    languages.add_column("Language")
    languages.add_column("Reviews", justify="right")
    languages.add_column("% of total", justify="right")
    for share in stats.language_distribution:
        pct = f"{share.value / stats.total_reviews * 100:.1f}%"
        languages.add_row(f"[{share.color}]{share.name}[/{share.color}]", str(share.value), pct)
    console.print(languages)

    # --- Recent activity ---
    recent = Table(title="Recent Activity", show_header=True)
    recent.add_column("ID", width=8)
    recent.add_column("Title", max_width=40)
    recent.add_column("Score", justify="right")
    recent.add_column("Language")
    for item in stats.recent_activity:
        recent.add_row(item.id[:8], escape(item.title[:40]), str(item.score), item.language)
    console.print(recent)

    # --- Insights ---
    found = insights(reviews)
    if found:
        console.print("\n[bold]Insights[/bold]")
        for insight in found:
            style = _PRIORITY_STYLE.get(insight.priority, "white")
            console.print(f"  [{style}]●[/{style}] [bold]{insight.title}[/bold] {insight.message}")


@click.command("progress")
@click.option("--language", "-l", default=None, help="Only show one language's trend.")
@click.pass_context
def progress_cmd(ctx, language: str | None):
    """Show how your scores evolved over time."""
    submitter_id = require_submitter(ctx)
    store = require_store(ctx)

    try:
        reviews = store.all_reviews(submitter_id)
    except StoreError as e:
        raise click.ClickException(str(e))
    if not reviews:
        console.print("[yellow]No review records found.[/yellow]")
        return

    points, by_language = progress_trends(reviews)
    if language:
        points = by_language.get(language.lower(), [])
        if not points:
            console.print(f"[yellow]No reviews found for {escape(language)}.[/yellow]")
            return

    table = Table(title=f"Progress — {language or 'all languages'}", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Score", justify="right")
    table.add_column("Maint.", justify="right")
    table.add_column("Perf.", justify="right")
    table.add_column("Sec.", justify="right")
    for p in points:
        table.add_row(
            str(p.review),
            p.date,
            f"{p.overall_score:g}",
            str(p.maintainability),
            str(p.performance),
            str(p.security),
        )
    console.print(table)

    if not language and len(by_language) > 1:
        console.print("\n[bold]Average score per language[/bold]")
        for lang, lang_points in by_language.items():
            avg = sum(p.overall_score for p in lang_points) / len(lang_points)
            console.print(f"  {lang}: {avg:.2f} over {len(lang_points)} review(s)")
