"""CLI entry point for docreview.

Commands:
  full         — review every target file in a repository
  incremental  — review only target files whose content changed since the last review
  status       — show the recorded review state of a repository
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from docreview_cli.commands.review import full_cmd, incremental_cmd
from docreview_cli.commands.status import status_cmd


def _setup_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("docreview"),
    prog_name="docreview",
)
@click.option(
    "--config",
    "config_path",
    default=".docreview.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="DOCREVIEW_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-assisted API documentation reviewer for Ballerina connectors."""
    from docreview_core.config import load_config

    _setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


main.add_command(full_cmd)
main.add_command(incremental_cmd)
main.add_command(status_cmd)
