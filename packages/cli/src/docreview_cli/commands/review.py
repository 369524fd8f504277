"""full and incremental commands — rewrite target files with the configured model."""

from __future__ import annotations

import click
from rich.console import Console

from docreview_core.config import load_guidelines
from docreview_core.reviewer import ReviewSummary, get_rewriter, run_review
from docreview_store.errors import StateFormatError

console = Console()

_DRY_RUN_WORD = "dry-run"

_model_option = click.option(
    "--model",
    type=click.Choice(["anthropic", "openai"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
_dry_run_option = click.option(
    "--dry-run",
    "dry_run_flag",
    is_flag=True,
    help="List the files that would be reviewed without calling the model or changing anything.",
)
_repo_argument = click.argument("repo_path", type=click.Path(exists=True, file_okay=False, dir_okay=True))
_guidelines_argument = click.argument(
    "guideline_file", type=click.Path(exists=True, file_okay=True, dir_okay=False)
)
_dry_run_argument = click.argument("dry_run_word", required=False, metavar="[dry-run]")


def _is_dry_run(dry_run_word: str | None, dry_run_flag: bool) -> bool:
    """Accept both the trailing `dry-run` word and the --dry-run flag."""
    if dry_run_word is None:
        return dry_run_flag
    if dry_run_word != _DRY_RUN_WORD:
        raise click.UsageError(f"Unexpected argument {dry_run_word!r}. Only '{_DRY_RUN_WORD}' is accepted here.")
    return True


def _resolve_config(ctx: click.Context, model: str | None) -> dict:
    """Apply the --model override and inject the provider's API key.

    A missing key is fatal even for a dry run, so a dry run also proves the
    environment is ready for the real thing.
    """
    from docreview_cli.auth import api_key_env_var, resolve_api_key

    config = dict(ctx.obj["config"]) if ctx.obj else {}
    if model is not None:
        config["model"] = model
    config.setdefault("model", "anthropic")

    try:
        env_var = api_key_env_var(config["model"])
    except ValueError as e:
        raise click.UsageError(str(e))

    api_key = resolve_api_key(config["model"])
    if not api_key:
        raise click.UsageError(f"{env_var} environment variable is not set.")
    config[f"{config['model']}_api_key"] = api_key
    return config


def _execute(
    config: dict,
    repo_path: str,
    guideline_file: str,
    incremental: bool,
    commit_id: str,
    dry_run: bool,
) -> ReviewSummary:
    """Run the review and turn fatal errors into click exceptions."""
    try:
        guidelines = load_guidelines(guideline_file)
    except (FileNotFoundError, UnicodeDecodeError) as e:
        raise click.UsageError(f"Could not read guidelines: {e}")

    rewriter = None if dry_run else get_rewriter(config)

    try:
        return run_review(
            repo_root=repo_path,
            guidelines=guidelines,
            rewriter=rewriter,
            incremental=incremental,
            commit_id=commit_id,
            dry_run=dry_run,
            target_dir=config.get("target_dir", "ballerina"),
            target_names=tuple(config.get("target_files") or ()),
        )
    except StateFormatError as e:
        raise click.ClickException(f"Malformed review state file: {e}")
    except OSError as e:
        raise click.ClickException(f"Review aborted: {e}")


@click.command("full")
@_repo_argument
@_guidelines_argument
@_dry_run_argument
@_model_option
@_dry_run_option
@click.pass_context
def full_cmd(
    ctx,
    repo_path: str,
    guideline_file: str,
    dry_run_word: str | None,
    model: str | None,
    dry_run_flag: bool,
):
    """Review every target file under REPO_PATH.

    Sends each file with GUIDELINE_FILE to the model and overwrites it with the
    result. The review state file is neither read nor written.

    \b
    Required environment variables:
      ANTHROPIC_API_KEY    Required when using --model anthropic (default)
      OPENAI_API_KEY       Required when using --model openai
    """
    dry_run = _is_dry_run(dry_run_word, dry_run_flag)
    config = _resolve_config(ctx, model)
    _execute(config, repo_path, guideline_file, incremental=False, commit_id="", dry_run=dry_run)


@click.command("incremental")
@_repo_argument
@_guidelines_argument
@click.argument("commit_id")
@_dry_run_argument
@_model_option
@_dry_run_option
@click.pass_context
def incremental_cmd(
    ctx,
    repo_path: str,
    guideline_file: str,
    commit_id: str,
    dry_run_word: str | None,
    model: str | None,
    dry_run_flag: bool,
):
    """Review only target files that changed since the last recorded review.

    Changes are detected by content checksum against the repository's
    .docreview-state.json. COMMIT_ID is recorded in the state file for
    bookkeeping; it is not used to compute a diff.

    \b
    Required environment variables:
      ANTHROPIC_API_KEY    Required when using --model anthropic (default)
      OPENAI_API_KEY       Required when using --model openai
    """
    if not commit_id.strip():
        raise click.UsageError("COMMIT_ID must not be empty.")
    dry_run = _is_dry_run(dry_run_word, dry_run_flag)
    config = _resolve_config(ctx, model)
    _execute(config, repo_path, guideline_file, incremental=True, commit_id=commit_id, dry_run=dry_run)
