"""Plumbing shared by every subcommand.

Commands receive the merged config through ``ctx.obj["config"]``, build
the review client lazily (edit/delete validation never needs a token
before it fails), and hand exactly one result record to ``emit``.
"""

from __future__ import annotations

import functools
import logging
import sys
from typing import TextIO

import click
from rich.console import Console

from ghreview_core.config import FORMATS
from ghreview_core.errors import GhReviewError, UnsupportedFormat
from ghreview_core.gh.client import ReviewClient
from ghreview_core.gh.graphql import GithubGraphQL
from ghreview_core.gh.reference import resolve_reference
from ghreview_core.models import PRReference
from ghreview_output.base import Renderer
from ghreview_output.models import Result

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

TRUNCATED_WARNING = "Warning: results may be truncated. Use --limit to fetch more."


def config_of(ctx: click.Context) -> dict:
    return ctx.ensure_object(dict).setdefault("config", {})


def _store_override(ctx: click.Context, param: click.Parameter, value):
    if value is not None:
        config_of(ctx)[param.name] = value
    return value


def output_options(f):
    """Accept ``-f/--format`` and ``-R/--repo`` after the subcommand name as well."""
    f = click.option(
        "-R",
        "--repo",
        "repo",
        default=None,
        expose_value=False,
        callback=_store_override,
        help="Select repository using OWNER/REPO format.",
    )(f)
    f = click.option(
        "-f",
        "--format",
        "format",
        type=click.Choice(FORMATS),
        default=None,
        expose_value=False,
        callback=_store_override,
        help="Output format.",
    )(f)
    return f


def reports_errors(f):
    """Turn expected failures into a clean ``Error: ...`` line and exit status 1."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except GhReviewError as e:
            logger.debug("Command failed", exc_info=True)
            raise click.ClickException(str(e)) from e

    return wrapper


def build_renderer(output_format: str, stream: TextIO) -> Renderer:
    """Instantiate the renderer for ``output_format``, writing to ``stream``."""
    if output_format == "table":
        from ghreview_output.table import TableRenderer

        return TableRenderer(stream)
    if output_format == "plain":
        from ghreview_output.plain import PlainRenderer

        return PlainRenderer(stream)
    if output_format == "json":
        from ghreview_output.json_doc import JSONRenderer

        return JSONRenderer(stream)
    raise UnsupportedFormat(f"unsupported format: {output_format!r}")


def get_client(ctx: click.Context) -> ReviewClient:
    config = config_of(ctx)
    token = config.get("github_token")
    if not token:
        raise click.UsageError("No GitHub token found. Set GH_TOKEN or GITHUB_TOKEN, or run `gh auth login` first.")
    return ReviewClient(GithubGraphQL(token, api_url=config.get("api_url") or "https://api.github.com"))


def resolve_pr(ctx: click.Context, arg: str) -> PRReference:
    pr = resolve_reference(arg, config_of(ctx).get("repo"))
    logger.debug("Resolved PR reference %s", pr)
    return pr


def emit(ctx: click.Context, result: Result) -> None:
    build_renderer(config_of(ctx).get("format") or "table", sys.stdout).render(result)


def warn_truncated() -> None:
    err_console.print(f"[yellow]{TRUNCATED_WARNING}[/yellow]")
