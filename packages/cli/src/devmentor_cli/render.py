"""Rich rendering of stored reviews for the review and show commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from devmentor_store.models import StoredReview

_SEVERITY_STYLE = {"critical": "red", "high": "red", "medium": "yellow", "low": "blue"}
_COMPLEXITY_STYLE = {"low": "green", "medium": "yellow", "high": "red"}


def _score_style(score: float) -> str:
    if score >= 8:
        return "green"
    if score >= 6:
        return "yellow"
    return "red"


def print_review(console: Console, review: StoredReview, raw: bool = False) -> None:
    console.print(f"\n[bold]{escape(review.title)}[/bold]  [dim]{review.id}[/dim]")
    if review.description:
        console.print(f"[dim]{escape(review.description)}[/dim]")
    console.print(f"Language: {review.language} · Model: {review.model_id or 'unknown'} · Tokens: {review.token_count}")

    style = _score_style(review.overall_score)
    complexity_style = _COMPLEXITY_STYLE.get(review.complexity, "white")
    console.print(
        f"\nOverall score: [{style}]{review.overall_score:g}/10[/{style}]   "
        f"Complexity: [{complexity_style}]{review.complexity}[/{complexity_style}]"
    )
    if review.low_confidence:
        console.print("[yellow]Low confidence: no recognizable signals in the review text; defaults shown.[/yellow]")

    metrics = Table(show_header=True, header_style="bold cyan")
    metrics.add_column("Maintainability", justify="right")
    metrics.add_column("Performance", justify="right")
    metrics.add_column("Security", justify="right")
    metrics.add_row(str(review.maintainability), str(review.performance), str(review.security))
    console.print(metrics)

    if review.issues:
        issues = Table(title=f"Issues ({review.issues_count})", show_header=True)
        issues.add_column("Type", style="bold")
        issues.add_column("Severity")
        issues.add_column("Line", justify="right")
        issues.add_column("Message")
        for issue in review.issues:
            sev_style = _SEVERITY_STYLE.get(issue.severity, "white")
            message = issue.message + (f"\n[dim]{issue.suggestion}[/dim]" if issue.suggestion else "")
            issues.add_row(issue.type, f"[{sev_style}]{issue.severity}[/{sev_style}]", str(issue.line), message)
        console.print(issues)

    if review.suggestions:
        console.print(f"\n[bold]Suggestions ({review.suggestions_count})[/bold]")
        for suggestion in review.suggestions:
            console.print(f"  [cyan]{suggestion.type}[/cyan]: {suggestion.message}")
            if suggestion.code_example:
                console.print(f"    [dim]{suggestion.code_example}[/dim]")

    if raw:
        console.print("\n[bold]Full review[/bold]\n")
        console.print(Markdown(review.raw_text))
