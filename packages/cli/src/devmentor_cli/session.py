"""Shared accessors for the objects main() stores on the click context."""

from __future__ import annotations

import click


def require_submitter(ctx: click.Context) -> str:
    submitter_id = ctx.obj.get("submitter_id") if ctx.obj else None
    if not submitter_id:
        raise click.UsageError("No user identity found. Set DEVMENTOR_USER or configure `git config user.email`.")
    return submitter_id


def require_store(ctx: click.Context):
    store = ctx.obj.get("store") if ctx.obj else None
    if store is None:
        raise click.UsageError("No store configured. Run `devmentor init` to set one up.")
    return store
