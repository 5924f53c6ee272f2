"""discard command: throw away your pending review and all its comments."""

from __future__ import annotations

import click

from ghreview_cli.context import emit, get_client, output_options, reports_errors, resolve_pr
from ghreview_output.models import DiscardResult


@click.command("discard")
@click.argument("pr_arg", metavar="PR")
@click.option("--review-id", default="", help="Explicit review ID (GraphQL node ID).")
@output_options
@click.pass_context
@reports_errors
def discard_cmd(ctx, pr_arg: str, review_id: str):
    """Discard your pending review and all its comments.

    This action cannot be undone.

    \b
    Examples:
      gh-review discard 123
      gh-review discard 123 -R owner/repo
    """
    pr = resolve_pr(ctx, pr_arg)

    client = get_client(ctx)
    review_id = review_id.strip() or client.latest_pending_review(pr).id

    client.delete_review(review_id)

    emit(ctx, DiscardResult(review_id=review_id))
