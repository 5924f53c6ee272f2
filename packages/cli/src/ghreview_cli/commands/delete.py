"""delete command: remove a draft comment."""

from __future__ import annotations

import click

from ghreview_cli.context import emit, get_client, output_options, reports_errors, resolve_pr
from ghreview_output.models import DeleteResult


@click.command("delete")
@click.argument("pr_arg", metavar="PR")
@click.option("-c", "--comment", "comment_id", required=True, help="Comment ID (GraphQL node ID).")
@output_options
@click.pass_context
@reports_errors
def delete_cmd(ctx, pr_arg: str, comment_id: str):
    """Delete a comment from your pending review.

    \b
    Examples:
      gh-review delete 123 -c PRRC_xxx
      gh-review delete 123 -R owner/repo -c PRRC_xxx
    """
    resolve_pr(ctx, pr_arg)

    get_client(ctx).delete_comment(comment_id)

    emit(ctx, DeleteResult(comment_id=comment_id))
