"""review command — submit a code file for AI review."""

from __future__ import annotations

import click
from rich.console import Console

from devmentor_cli.render import print_review
from devmentor_cli.session import require_store, require_submitter
from devmentor_core.errors import ConfigurationError, DevMentorError, ValidationError
from devmentor_core.orchestrator import ReviewOrchestrator, get_provider
from devmentor_core.utils.languages import SUPPORTED_LANGUAGES, detect_language
from devmentor_core.validation import build_request

console = Console()


@click.command("review")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--language",
    "-l",
    type=click.Choice(SUPPORTED_LANGUAGES, case_sensitive=False),
    default=None,
    help="Language of the code. Detected from the file extension when omitted.",
)
@click.option("--title", "-t", default=None, help="Review title. Defaults to the file name.")
@click.option("--description", "-d", default=None, help="What the code is supposed to do.")
@click.option(
    "--model",
    type=click.Choice(["openrouter", "openai", "anthropic"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--raw", is_flag=True, help="Also print the full review text.")
@click.pass_context
def review_cmd(
    ctx,
    source,
    language: str | None,
    title: str | None,
    description: str | None,
    model: str | None,
    raw: bool,
):
    """Submit SOURCE (a file path, or - for stdin) for AI code review.

    The provider's review is analysed for a score, complexity, issues and
    suggestions, then stored alongside the full text.

    \b
    Required environment variables:
      OPENROUTER_API_KEY   When using --model openrouter (the default)
      OPENAI_API_KEY       When using --model openai
      ANTHROPIC_API_KEY    When using --model anthropic
    """
    config = dict(ctx.obj["config"])
    if model:
        config["model"] = model
    submitter_id = require_submitter(ctx)
    store = require_store(ctx)

    source_name = getattr(source, "name", "-")
    if language is None and source_name not in ("-", "<stdin>"):
        language = detect_language(source_name)
    if language is None:
        raise click.UsageError("Could not detect the language. Pass --language.")
    if title is None and source_name not in ("-", "<stdin>"):
        title = source_name.replace("\\", "/").rsplit("/", 1)[-1]

    try:
        code = source.read()
    except UnicodeDecodeError:
        raise click.UsageError(f"{source_name} is not valid UTF-8 text.")

    try:
        request = build_request(
            code=code,
            language=language,
            submitter_id=submitter_id,
            title=title,
            description=description,
            max_code_chars=config.get("max_code_chars") or 50000,
        )
    except ValidationError as e:
        raise click.UsageError(str(e))

    try:
        provider = get_provider(config)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    orchestrator = ReviewOrchestrator(
        provider=provider,
        store=store,
        retry_after=config.get("retry_after_seconds") or 60,
    )

    with console.status(f"Reviewing {request.title} with {provider.model}..."):
        try:
            review = orchestrator.submit(request)
        except DevMentorError as e:
            raise click.ClickException(e.user_message)

    console.print("[green]Code review completed successfully.[/green]")
    print_review(console, review, raw=raw)
