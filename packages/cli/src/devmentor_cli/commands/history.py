"""history, show, update and delete commands — manage stored reviews."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from devmentor_cli.render import print_review
from devmentor_cli.session import require_store, require_submitter
from devmentor_store.base import StoreError

console = Console()


@click.command("history")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1), help="Page number.")
@click.option("--limit", default=None, type=click.IntRange(min=1), help="Reviews per page (config: page_size).")
@click.pass_context
def history_cmd(ctx, page: int, limit: int | None):
    """Show your stored reviews, newest first."""
    submitter_id = require_submitter(ctx)
    store = require_store(ctx)
    limit = limit or ctx.obj["config"].get("page_size") or 10

    try:
        result = store.list_reviews(submitter_id, page=page, limit=limit)
    except StoreError as e:
        raise click.ClickException(str(e))
    if not result.reviews:
        console.print("[yellow]No review records found.[/yellow]")
        return

    table = Table(
        title=f"Review History — page {result.page}/{result.total_pages}",
        show_header=True,
        header_style="bold cyan",
    )
    # sized for an 80-column terminal; `show` has the complexity
    table.add_column("ID", no_wrap=True)
    table.add_column("Title", min_width=12, max_width=40, overflow="fold")
    table.add_column("Language")
    table.add_column("Score", justify="right")
    table.add_column("Issues", justify="right")
    table.add_column("Created", no_wrap=True)

    for r in result.reviews:
        table.add_row(
            r.id[:8],
            escape(r.title[:40]),
            r.language,
            f"{r.overall_score:g}",
            str(r.issues_count),
            r.created_at[:10],
        )

    console.print(table)
    console.print(
        f"[dim]{result.total_count} review(s)"
        + (f" · next: --page {result.page + 1}" if result.has_next else "")
        + "[/dim]"
    )


def _resolve_id(store, submitter_id: str, review_id: str) -> str:
    """Accept a full id or the unique 8-character prefix shown by history."""
    try:
        if store.get(review_id, submitter_id) is not None:
            return review_id
        matches = [r.id for r in store.all_reviews(submitter_id) if r.id.startswith(review_id)]
    except StoreError as e:
        raise click.ClickException(str(e))
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise click.UsageError(f"Review id prefix {review_id!r} is ambiguous.")
    raise click.ClickException("Review not found")


@click.command("show")
@click.argument("review_id")
@click.option("--raw", is_flag=True, help="Also print the full review text.")
@click.pass_context
def show_cmd(ctx, review_id: str, raw: bool):
    """Show one stored review in full."""
    submitter_id = require_submitter(ctx)
    store = require_store(ctx)
    full_id = _resolve_id(store, submitter_id, review_id)
    try:
        review = store.get(full_id, submitter_id)
    except StoreError as e:
        raise click.ClickException(str(e))
    if review is None:
        raise click.ClickException("Review not found")
    print_review(console, review, raw=raw)


@click.command("update")
@click.argument("review_id")
@click.option("--title", default=None, help="New title.")
@click.option("--description", default=None, help="New description.")
@click.pass_context
def update_cmd(ctx, review_id: str, title: str | None, description: str | None):
    """Change the title and/or description of a stored review.

    The analysis itself is never recomputed.
    """
    if not title and not description:
        raise click.UsageError("Nothing to update. Pass --title and/or --description.")
    submitter_id = require_submitter(ctx)
    store = require_store(ctx)
    full_id = _resolve_id(store, submitter_id, review_id)
    try:
        review = store.update(full_id, submitter_id, title=title, description=description)
    except StoreError as e:
        raise click.ClickException(f"Failed to update review: {e}")
    if review is None:
        raise click.ClickException("Review not found")
    console.print(f"[green]Review updated: {review.id}[/green]")


@click.command("delete")
@click.argument("review_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt.")
@click.pass_context
def delete_cmd(ctx, review_id: str, yes: bool):
    """Delete a stored review."""
    submitter_id = require_submitter(ctx)
    store = require_store(ctx)
    full_id = _resolve_id(store, submitter_id, review_id)
    if not yes:
        click.confirm(f"Delete review {full_id}?", abort=True)
    try:
        deleted = store.delete(full_id, submitter_id)
    except StoreError as e:
        raise click.ClickException(f"Failed to delete review: {e}")
    if not deleted:
        raise click.ClickException("Review not found")
    console.print("[green]Review deleted successfully.[/green]")
