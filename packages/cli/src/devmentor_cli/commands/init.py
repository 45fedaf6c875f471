"""init command — interactive setup wizard.

Writes .devmentor.yml with the chosen provider and store so later commands
need no flags. API keys are never written to the file; they stay in the
environment.
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from rich.console import Console

console = Console()

_API_KEY_ENV = {
    "openrouter": "OPENROUTER_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@click.command("init")
@click.pass_context
def init_cmd(ctx):
    """Set up devmentor in the current directory.

    Creates (or updates) .devmentor.yml with your AI provider and review store.
    """
    config_path = (ctx.obj or {}).get("config_path", ".devmentor.yml")
    console.print("\n[bold cyan]devmentor init[/bold cyan] — setup wizard\n")

    # --- Choose provider ---
    provider = click.prompt(
        "AI provider",
        type=click.Choice(["openrouter", "openai", "anthropic"]),
        default="openrouter",
    )
    model_id = click.prompt("Model (leave empty for the provider default)", default="", show_default=False)

    # --- Choose store backend ---
    console.print("\nReview store:")
    console.print("  [bold]sqlite[/bold]  — local SQLite file (default)")
    console.print("  [bold]memory[/bold]  — nothing is kept between runs")
    store_type = click.prompt(
        "Store backend",
        type=click.Choice(["sqlite", "memory"]),
        default="sqlite",
    )

    config: dict = {"model": provider, "store": store_type}
    if model_id.strip():
        config["model_id"] = model_id.strip()

    if store_type == "sqlite":
        db_path = click.prompt("SQLite database path", default=".devmentor.db")
        config["store_path"] = db_path
        console.print(f"[green]SQLite store configured at {db_path}[/green]")

    _write_config(config, config_path)
    console.print(f"[green]Created {config_path}[/green]")

    api_key_env = _API_KEY_ENV[provider]
    console.print(f"\n[yellow]Remember to export [bold]{api_key_env}[/bold] before running a review.[/yellow]")
    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Run a review with: [bold]devmentor review path/to/file.py[/bold]")


def _write_config(config: dict, config_path: str = ".devmentor.yml") -> None:
    """Write or update the config file, preserving any existing keys."""
    path = Path(config_path)
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
