"""edit command: change the body of a draft comment."""

from __future__ import annotations

import click

from ghreview_cli.context import emit, get_client, output_options, reports_errors, resolve_pr
from ghreview_output.models import EditResult


@click.command("edit")
@click.argument("pr_arg", metavar="PR")
@click.option("-c", "--comment", "comment_id", required=True, help="Comment ID (GraphQL node ID).")
@click.option("-b", "--body", required=True, help="New comment body.")
@output_options
@click.pass_context
@reports_errors
def edit_cmd(ctx, pr_arg: str, comment_id: str, body: str):
    """Edit an existing comment in your pending review.

    \b
    Examples:
      gh-review edit 123 -c PRRC_xxx -b "Updated comment body"
      gh-review edit 123 -R owner/repo -c PRRC_xxx -b "Updated"
    """
    resolve_pr(ctx, pr_arg)

    get_client(ctx).update_comment(comment_id, body)

    emit(ctx, EditResult(comment_id=comment_id))
