"""Core documentation review orchestration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from docreview_core.locator import TARGET_DIR, TARGET_FILE_NAMES, find_target_files
from docreview_core.providers.anthropic import AnthropicRewriter
from docreview_core.providers.base import BaseRewriter, RewriteError
from docreview_core.providers.openai import OpenAIRewriter
from docreview_store.fileio import atomic_write_text
from docreview_store.state import StateStore, has_changed, mark_reviewed, state_key

console = Console()
logger = logging.getLogger(__name__)

MODE_FULL = "full"
MODE_INCREMENTAL = "incremental"


@dataclass
class ReviewSummary:
    """Result returned by run_review.

    Distinguishes files discovered on disk, files eligible after incremental
    filtering, and files actually overwritten. Per-file failures are listed
    with their absolute path and error message; they never make the run
    itself fail.
    """

    mode: str  # "full" | "incremental"
    repo_root: str = ""
    dry_run: bool = False
    commit_id: str = ""
    discovered: list[str] = field(default_factory=list)
    eligible: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)
    state_saved: bool = False
    reviewed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def get_rewriter(config: dict) -> BaseRewriter:
    model = config["model"]
    timeout = config.get("timeout", 300)
    max_tokens = config.get("max_tokens")
    if model == "anthropic":
        return AnthropicRewriter(api_key=config["anthropic_api_key"], timeout=timeout, max_tokens=max_tokens)
    if model == "openai":
        return OpenAIRewriter(api_key=config["openai_api_key"], timeout=timeout, max_tokens=max_tokens)
    raise ValueError(f"Unknown model provider: {model!r}. Choose 'anthropic' or 'openai'.")


def _display_path(path: str, repo_root: str) -> str:
    try:
        return os.path.relpath(path, repo_root)
    except ValueError:
        return path


def process_file(rewriter: BaseRewriter, guidelines: str, path: str, repo_root: str) -> None:
    """Rewrite one file in place.

    The new content replaces the file atomically, so on RewriteError, OSError
    or UnicodeDecodeError the original bytes are left exactly as they were.
    """
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")
    updated = rewriter.rewrite(
        guidelines=guidelines,
        file_name=_display_path(path, repo_root),
        file_content=content,
    )
    atomic_write_text(file_path, updated)


def print_dry_run(summary: ReviewSummary, repo_root: str) -> None:
    """List the files a real run would send for review."""
    if not summary.eligible:
        console.print("[yellow]Dry run: no files would be reviewed.[/yellow]")
        return
    console.print(f"\n[bold]Dry run — {len(summary.eligible)} file(s) would be reviewed:[/bold]")
    for path in summary.eligible:
        console.print(f"  [cyan]{escape(_display_path(path, repo_root))}[/cyan]")


def print_summary(summary: ReviewSummary) -> None:
    console.print("\n[bold]Review summary[/bold]")
    console.print(f"  Mode: {summary.mode}" + (f" (commit {escape(summary.commit_id)})" if summary.commit_id else ""))
    console.print(f"  Files discovered: {len(summary.discovered)}")
    console.print(f"  Files eligible: {len(summary.eligible)}")
    console.print(f"  Files modified: {len(summary.modified)}")
    if summary.failed:
        console.print(f"  [red]Files failed: {len(summary.failed)}[/red]")
        for path, error in summary.failed:
            shown = _display_path(path, summary.repo_root) if summary.repo_root else path
            console.print(f"    - {escape(shown)}: {escape(error)}")
    if summary.state_saved:
        console.print("  [dim]Review state updated.[/dim]")
    if summary.dry_run:
        console.print("\n[yellow]This was a dry run. No changes were made.[/yellow]")


def run_review(
    repo_root: str,
    guidelines: str,
    rewriter: BaseRewriter | None,
    incremental: bool = False,
    commit_id: str = "",
    dry_run: bool = False,
    target_dir: str = TARGET_DIR,
    target_names: tuple[str, ...] | list[str] = TARGET_FILE_NAMES,
    state_store: StateStore | None = None,
) -> ReviewSummary:
    """Run one review pass over ``repo_root`` and return a ReviewSummary.

    Full mode rewrites every target file and never touches the state file.
    Incremental mode loads the state, keeps only files whose checksum changed,
    records each rewritten file and saves the state once at the end if
    anything was modified. ``commit_id`` is stored for bookkeeping only;
    change detection is purely checksum based.

    ``rewriter`` may be None for a dry run, which discovers and filters but
    never calls the model, writes files, or touches the state.

    Fatal errors propagate: directory scan failures (OSError), a malformed
    state file (StateFormatError) and state save failures. Per-file rewrite
    and write failures are recorded in the summary and the run continues.
    """
    if incremental and not commit_id:
        raise ValueError("Incremental review requires a commit id.")
    if rewriter is None and not dry_run:
        raise ValueError("A rewriter is required unless this is a dry run.")

    repo_root = os.path.abspath(repo_root)
    mode = MODE_INCREMENTAL if incremental else MODE_FULL
    summary = ReviewSummary(mode=mode, repo_root=repo_root, dry_run=dry_run, commit_id=commit_id if incremental else "")

    store = None
    state = None
    if incremental:
        store = state_store if state_store is not None else StateStore(repo_root)
        state = store.load()
        console.print(
            f"[dim]Loaded review state: {len(state.reviewed_files)} file(s) recorded"
            + (f", last commit {escape(state.last_reviewed_commit)}" if state.last_reviewed_commit else "")
            + ".[/dim]"
        )

    summary.discovered = find_target_files(repo_root, target_dir=target_dir, target_names=target_names)
    console.print(f"Found {len(summary.discovered)} target file(s) under {target_dir}/.")

    if incremental:
        summary.eligible = [p for p in summary.discovered if has_changed(p, state, key=state_key(p, repo_root))]
        unchanged = len(summary.discovered) - len(summary.eligible)
        console.print(
            f"[cyan]Incremental review: {len(summary.eligible)} changed file(s), {unchanged} unchanged.[/cyan]"
        )
    else:
        summary.eligible = list(summary.discovered)

    if dry_run:
        print_dry_run(summary, repo_root)
        print_summary(summary)
        return summary

    total = len(summary.eligible)
    for i, path in enumerate(summary.eligible, 1):
        shown = _display_path(path, repo_root)
        console.print(f"\n[[{i}/{total}]] Reviewing: {escape(shown)}")
        try:
            process_file(rewriter, guidelines, path, repo_root)
        except (RewriteError, OSError, UnicodeDecodeError) as e:
            logger.error("Failed to review %s: %s", path, e)
            console.print(f"  [red]Failed: {escape(str(e))}[/red]")
            summary.failed.append((path, str(e)))
            continue

        summary.modified.append(path)
        console.print("  [green]Updated.[/green]")

        if state is not None:
            try:
                mark_reviewed(state, path, key=state_key(path, repo_root))
            except OSError as e:
                # The next incremental run will pick the file up again.
                logger.warning("Could not fingerprint %s after rewrite: %s", path, e)

    if incremental and summary.modified:
        state.last_reviewed_commit = commit_id
        state.last_review_timestamp = datetime.now(timezone.utc).isoformat()
        store.save(state)
        summary.state_saved = True

    print_summary(summary)
    return summary
