"""status command — display the recorded review state of a repository."""

from __future__ import annotations

import os

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docreview_store.errors import StateFormatError
from docreview_store.state import StateStore, has_changed

console = Console()


def _file_status(path: str, key: str, state) -> str:
    if not os.path.isfile(path):
        return "missing"
    try:
        return "changed" if has_changed(path, state, key=key) else "unchanged"
    except OSError:
        return "unreadable"


def _resolve(key: str, root: str) -> str:
    # Keys are repo-relative with "/" separators; older states may hold absolute paths.
    if os.path.isabs(key):
        return key
    return os.path.join(root, *key.split("/"))


@click.command("status")
@click.argument("repo_path", type=click.Path(exists=True, file_okay=False, dir_okay=True))
def status_cmd(repo_path: str):
    """Show which files have been reviewed and whether they changed since.

    Reads REPO_PATH/.docreview-state.json. Nothing is modified.
    """
    store = StateStore(repo_path)
    try:
        state = store.load()
    except StateFormatError as e:
        raise click.ClickException(f"Malformed review state file: {e}")
    except OSError as e:
        raise click.ClickException(f"Could not read review state file {store.path}: {e}")

    if not state.reviewed_files:
        console.print("[yellow]No review state recorded.[/yellow]")
        return

    console.print(f"Last reviewed commit: [bold]{escape(state.last_reviewed_commit) or '—'}[/bold]")
    console.print(f"Last review: {state.last_review_timestamp[:19].replace('T', ' ') or '—'}")

    table = Table(title=f"Review State — {repo_path}", show_header=True, header_style="bold cyan")
    table.add_column("File", overflow="fold")
    table.add_column("Checksum", width=14)
    table.add_column("Reviewed At", width=20)
    table.add_column("Status", width=12)

    _status_style = {
        "unchanged": "green",
        "changed": "yellow",
        "missing": "red",
        "unreadable": "red",
    }

    root = os.path.abspath(repo_path)
    for key, info in sorted(state.reviewed_files.items()):
        status = _file_status(_resolve(key, root), key, state)
        style = _status_style[status]
        table.add_row(
            escape(key),
            info.checksum[:12],
            info.last_reviewed[:19].replace("T", " "),
            f"[{style}]{status}[/{style}]",
        )

    console.print(table)
