"""comments command: list PR comments, filtered and grouped by author."""

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
from ghreview_core.filters import FilterCriteria, filter_comments, group_by_author, split_states, tail
from ghreview_core.models import AllComments, Threads
from ghreview_output.models import Comment, CommentGroup, CommentsResult


def _from_threads(threads: Threads) -> list[Comment]:
    return [
        Comment(
            id=c.id,
            path=thread.path,
            line=thread.line,
            body=c.body,
            state="unresolved",
            author=c.author,
        )
        for thread in threads.threads
        for c in thread.comments
    ]


def _from_reviews(all_comments: AllComments) -> list[Comment]:
    comments = [
        Comment(id=c.id, path=c.path, line=c.line, body=c.body, state=c.state, author=c.author)
        for c in all_comments.review_comments
    ]
    comments.extend(
        Comment(id=c.id, path="", line=0, body=c.body, state="discussion", author=c.author)
        for c in all_comments.discussion_comments
    )
    return comments


def build_comments_result(
    pr: str,
    comments: list[Comment],
    criteria: FilterCriteria,
    tail_count: int = 0,
    flat: bool = False,
    include_ids: bool = False,
) -> CommentsResult:
    """Filter, then tail-limit, then group. Tail always sees the filtered list."""
    selected = tail(filter_comments(comments, criteria), tail_count)
    groups = tuple(
        CommentGroup(author=author, comments=tuple(items)) for author, items in group_by_author(selected, flat)
    )
    return CommentsResult(pr=pr, groups=groups, include_ids=include_ids)


@click.command("comments")
@click.argument("pr_arg", metavar="PR")
@click.option(
    "--states",
    multiple=True,
    help="Filter by review state: pending, approved, changes_requested, commented (repeatable, comma-separated).",
)
@click.option("-a", "--author", default="", help="Filter by author username.")
@click.option("--mine", is_flag=True, help="Show only my comments (current authenticated user).")
@click.option("--unresolved", is_flag=True, help="Show only unresolved review threads.")
@click.option("--tail", "tail_count", type=int, default=0, help="Return only the last N comments.")
@click.option("--ids", "include_ids", is_flag=True, help="Include comment IDs in output.")
@click.option("--flat", is_flag=True, help="Disable author grouping (flat list).")
@click.option("--limit", type=int, default=None, help="Maximum reviews, comments or threads to fetch.")
@output_options
@click.pass_context
@reports_errors
def comments_cmd(
    ctx,
    pr_arg: str,
    states: tuple[str, ...],
    author: str,
    mine: bool,
    unresolved: bool,
    tail_count: int,
    include_ids: bool,
    flat: bool,
    limit: int | None,
):
    """List all comments for a pull request.

    Shows review comments grouped by author. Use flags to filter and
    control output.

    \b
    Examples:
      gh-review comments 123
      gh-review comments 123 --mine --states=pending --ids
      gh-review comments 123 --states=changes_requested --tail=10
      gh-review comments 123 --author=octocat
    """
    pr = resolve_pr(ctx, pr_arg)
    limit = limit if limit is not None else config_of(ctx).get("limit", 100)
    wanted_states = split_states(states)

    client = get_client(ctx)
    if mine:
        author = client.viewer_login()

    if unresolved:
        threads = client.review_threads(pr, limit=limit, unresolved_only=True)
        comments, truncated = _from_threads(threads), threads.truncated
    else:
        all_comments = client.all_pr_comments(pr, limit=limit, states=wanted_states)
        comments, truncated = _from_reviews(all_comments), all_comments.truncated

    result = build_comments_result(
        str(pr),
        comments,
        FilterCriteria.build(states=wanted_states, author=author),
        tail_count=tail_count,
        flat=flat,
        include_ids=include_ids,
    )
    emit(ctx, result)

    if truncated:
        warn_truncated()
