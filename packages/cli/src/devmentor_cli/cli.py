"""CLI entry point for devmentor.

Commands:
  review    — submit a code file for AI review and store the result
  history   — list stored reviews, newest first
  show      — display one stored review in full
  update    — change the title or description of a stored review
  delete    — remove a stored review
  stats     — dashboard statistics and insights across stored reviews
  progress  — score trends over time, overall and per language
  init      — interactive setup wizard
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from devmentor_cli.commands.history import delete_cmd, history_cmd, show_cmd, update_cmd
from devmentor_cli.commands.init import init_cmd
from devmentor_cli.commands.review import review_cmd
from devmentor_cli.commands.stats import progress_cmd, stats_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured store from .devmentor.yml settings.

    Store selection:
      store: sqlite → SQLiteStore (store_path or .devmentor.db), the default
      store: memory → MemoryStore (nothing survives the process)

    This factory lives in cli.py so neither devmentor_core nor
    devmentor_store know about the CLI config format.
    """
    store_type = config.get("store", "sqlite")

    if store_type == "memory":
        from devmentor_store.memory import MemoryStore

        return MemoryStore()

    if store_type == "sqlite":
        from devmentor_store.sqlite import SQLiteStore

        db_path = config.get("store_path") or ".devmentor.db"
        return SQLiteStore(db_path=db_path)

    raise click.UsageError(f"Unknown store {store_type!r} in config. Use 'sqlite' or 'memory'.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("devmentor"),
    prog_name="devmentor",
)
@click.option(
    "--config",
    "config_path",
    default=".devmentor.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="DEVMENTOR_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-powered code review mentor."""
    from devmentor_cli.identity import resolve_submitter_id
    from devmentor_core.config import load_config
    from devmentor_core.errors import ConfigurationError
    from devmentor_store.base import StoreError

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    ctx.obj["config_path"] = config_path
    ctx.obj["config"] = config
    ctx.obj["submitter_id"] = resolve_submitter_id()

    # init chooses the store; opening one first would create .devmentor.db
    if ctx.invoked_subcommand == "init":
        return

    try:
        store = _build_store(config)
    except StoreError as e:
        raise click.ClickException(str(e))
    ctx.obj["store"] = store
    ctx.call_on_close(store.close)


main.add_command(review_cmd)
main.add_command(history_cmd)
main.add_command(show_cmd)
main.add_command(update_cmd)
main.add_command(delete_cmd)
main.add_command(stats_cmd)
main.add_command(progress_cmd)
main.add_command(init_cmd)
