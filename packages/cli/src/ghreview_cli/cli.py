"""CLI entry point for gh-review.

Commands:
  add       add a draft comment to your pending review (creating one if needed)
  comments  list review and discussion comments, filtered and grouped
  delete    delete a draft comment
  discard   discard your pending review
  edit      edit a draft comment
  submit    submit your pending review with a verdict
  view      show review threads with their comments
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from ghreview_cli.commands.add import add_cmd
from ghreview_cli.commands.comments import comments_cmd
from ghreview_cli.commands.delete import delete_cmd
from ghreview_cli.commands.discard import discard_cmd
from ghreview_cli.commands.edit import edit_cmd
from ghreview_cli.commands.submit import submit_cmd
from ghreview_cli.commands.view import view_cmd
from ghreview_core.config import FORMATS


def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr through rich; DEBUG with --verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("ghreview"),
    prog_name="gh-review",
)
@click.option(
    "--config",
    "config_path",
    default=".ghreview.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="GH_REVIEW_CONFIG",
)
@click.option("-f", "--format", "output_format", type=click.Choice(FORMATS), default=None, help="Output format.")
@click.option("-R", "--repo", default=None, help="Select repository using OWNER/REPO format.")
@click.option("-v", "--verbose", is_flag=True, help="Log GraphQL operations and resolution steps to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, output_format: str | None, repo: str | None, verbose: bool):
    """Manage pull request review comments.

    Start a review, add inline comments, edit or delete them, then submit
    or discard the entire review.
    """
    from ghreview_cli.auth import resolve_github_token
    from ghreview_core.config import load_config

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path, cli_overrides={"format": output_format, "repo": repo})
    except ValueError as e:
        raise click.UsageError(str(e))

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(add_cmd)
main.add_command(comments_cmd)
main.add_command(delete_cmd)
main.add_command(discard_cmd)
main.add_command(edit_cmd)
main.add_command(submit_cmd)
main.add_command(view_cmd)
