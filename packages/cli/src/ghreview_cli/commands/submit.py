"""submit command: submit your pending review with a verdict."""

from __future__ import annotations

import click

from ghreview_cli.context import emit, get_client, output_options, reports_errors, resolve_pr
from ghreview_output.models import SubmitResult

VERDICTS = ("approve", "comment", "request_changes")


@click.command("submit")
@click.argument("pr_arg", metavar="PR")
@click.option(
    "-v",
    "--verdict",
    required=True,
    type=click.Choice(VERDICTS, case_sensitive=False),
    help="Review verdict.",
)
@click.option("-b", "--body", default="", help="Review body/summary.")
@click.option("--review-id", default="", help="Explicit review ID (GraphQL node ID).")
@output_options
@click.pass_context
@reports_errors
def submit_cmd(ctx, pr_arg: str, verdict: str, body: str, review_id: str):
    """Submit your pending review with a verdict.

    \b
    Available verdicts:
      approve          Approve the pull request
      comment          Submit general feedback
      request_changes  Request changes before merge

    \b
    Examples:
      gh-review submit 123 -v approve
      gh-review submit 123 -R owner/repo -v comment -b "Looks good overall"
      gh-review submit 123 -v request_changes -b "Please fix the issues"
    """
    pr = resolve_pr(ctx, pr_arg)
    event = verdict.strip().upper()

    client = get_client(ctx)
    review_id = review_id.strip() or client.latest_pending_review(pr).id

    client.submit_review(review_id, event, body)

    emit(ctx, SubmitResult(verdict=event.lower()))
