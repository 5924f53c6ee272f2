"""add command: put a draft comment on your pending review."""

from __future__ import annotations

import logging

import click

from ghreview_cli.context import config_of, emit, get_client, output_options, reports_errors, resolve_pr
from ghreview_core.errors import NoPendingReview
from ghreview_core.gh.client import ReviewClient
from ghreview_core.models import PRReference
from ghreview_core.templates import get_template, list_templates
from ghreview_output.models import AddResult

logger = logging.getLogger(__name__)


def _pending_or_new_review(client: ReviewClient, pr: PRReference) -> str:
    """Return the viewer's latest pending review ID, opening a review when there is none.

    Only `add` originates reviews; every other command treats a missing
    pending review as an error.
    """
    try:
        return client.latest_pending_review(pr).id
    except NoPendingReview:
        logger.debug("No pending review on %s; creating one.", pr)

    identity = client.resolve_pr(pr)
    return client.create_review(identity.node_id, identity.head_oid).id


@click.command("add")
@click.argument("pr_arg", metavar="PR")
@click.option("-p", "--path", required=True, help="File path.")
@click.option("-l", "--line", type=click.IntRange(min=1), required=True, help="Line number.")
@click.option("-b", "--body", default="", help="Comment body.")
@click.option("-s", "--side", default="RIGHT", show_default=True, help="Diff side: LEFT or RIGHT.")
@click.option("-t", "--template", "template_name", default=None, help="Use a predefined template as the body.")
@click.option("--start-line", type=int, default=0, help="Start line for a multi-line comment.")
@click.option("--start-side", default="", help="Start side for a multi-line comment.")
@click.option("--review-id", default="", help="Explicit review ID (GraphQL node ID).")
@output_options
@click.pass_context
@reports_errors
def add_cmd(
    ctx,
    pr_arg: str,
    path: str,
    line: int,
    body: str,
    side: str,
    template_name: str | None,
    start_line: int,
    start_side: str,
    review_id: str,
):
    """Add a comment to your pending review.

    Creates a new pending review if none exists.

    \b
    Examples:
      gh-review add 123 -p src/main.py -l 42 -b "Consider error handling"
      gh-review add 123 -R owner/repo -p src/main.py -l 42 -t naming
      gh-review add 123 -p src/main.py -l 50 --start-line 45 -b "Multi-line comment"
    """
    pr = resolve_pr(ctx, pr_arg)

    extra_templates = config_of(ctx).get("templates") or {}
    if template_name:
        body = get_template(template_name, extra_templates)
        if body is None:
            raise click.UsageError(
                f"unknown template {template_name!r} (available: {', '.join(list_templates(extra_templates))})"
            )
    if not body:
        raise click.UsageError("body is required (use -b or -t)")

    client = get_client(ctx)
    review_id = review_id.strip() or _pending_or_new_review(client, pr)

    client.add_thread(
        review_id=review_id,
        path=path,
        line=line,
        body=body,
        side=side,
        start_line=start_line if start_line > 0 else None,
        start_side=start_side or None,
    )

    emit(ctx, AddResult(path=path, line=line))
