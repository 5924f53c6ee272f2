"""view command: show review threads with their comments."""

from __future__ import annotations

import click

from ghreview_cli.context import (
    config_of,
    emit,
    get_client,
    output_options,
    reports_errors,
    resolve_pr,
    warn_truncated,
)
from ghreview_core.filters import split_states
from ghreview_core.models import PRReference, Threads
from ghreview_output.models import ViewResult, ViewThread, ViewThreadComment


def build_view_result(pr: PRReference, threads: Threads, include_ids: bool = False) -> ViewResult:
    return ViewResult(
        pr=str(pr),
        threads=tuple(
            ViewThread(
                id=t.id,
                path=t.path,
                line=t.line,
                resolved=t.is_resolved,
                comments=tuple(ViewThreadComment(id=c.id, author=c.author, body=c.body) for c in t.comments),
            )
            for t in threads.threads
        ),
        include_ids=include_ids,
    )


@click.command("view")
@click.argument("pr_arg", metavar="PR")
@click.option("--unresolved", is_flag=True, help="Show only unresolved threads.")
@click.option("--ids", "include_ids", is_flag=True, help="Include thread/comment IDs in output.")
@click.option("--limit", type=int, default=None, help="Maximum threads to fetch.")
@click.option(
    "--states",
    multiple=True,
    help="Filter by review state: pending, approved, changes_requested, commented (repeatable, comma-separated).",
)
@output_options
@click.pass_context
@reports_errors
def view_cmd(ctx, pr_arg: str, unresolved: bool, include_ids: bool, limit: int | None, states: tuple[str, ...]):
    """View review threads for a pull request.

    Shows threads with their comments in hierarchical structure.

    \b
    Examples:
      gh-review view 123
      gh-review view 123 --unresolved
      gh-review view 123 --states=pending,changes_requested
      gh-review view 123 --ids
    """
    pr = resolve_pr(ctx, pr_arg)
    limit = limit if limit is not None else config_of(ctx).get("limit", 100)

    threads = get_client(ctx).review_threads(
        pr,
        limit=limit,
        unresolved_only=unresolved,
        states=split_states(states),
    )

    emit(ctx, build_view_result(pr, threads, include_ids))

    if threads.truncated:
        warn_truncated()
