"""Result records handed to a renderer.

One record per user-facing operation, carrying only what is displayed.
Decoupled from ghreview_core: the CLI maps client models onto these.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Comment:
    """Uniform comment shape, whatever its origin (review, thread or discussion)."""

    id: str
    path: str
    line: int
    body: str
    state: str  # pending | approved | changes_requested | commented | discussion | unresolved | submitted
    author: str


@dataclass(frozen=True)
class CommentGroup:
    author: str  # "" in flat mode
    comments: tuple[Comment, ...] = ()


@dataclass(frozen=True)
class CommentsResult:
    pr: str
    groups: tuple[CommentGroup, ...] = ()
    include_ids: bool = False


@dataclass(frozen=True)
class ViewThreadComment:
    id: str
    author: str
    body: str


@dataclass(frozen=True)
class ViewThread:
    id: str
    path: str
    line: int
    resolved: bool
    comments: tuple[ViewThreadComment, ...] = ()


@dataclass(frozen=True)
class ViewResult:
    pr: str
    threads: tuple[ViewThread, ...] = ()
    include_ids: bool = False


@dataclass(frozen=True)
class AddResult:
    path: str
    line: int


@dataclass(frozen=True)
class EditResult:
    comment_id: str


@dataclass(frozen=True)
class DeleteResult:
    comment_id: str


@dataclass(frozen=True)
class SubmitResult:
    verdict: str  # approve | comment | request_changes


@dataclass(frozen=True)
class DiscardResult:
    review_id: str


@dataclass(frozen=True)
class NoOpResult:
    message: str


Result = (
    CommentsResult | ViewResult | AddResult | EditResult | DeleteResult | SubmitResult | DiscardResult | NoOpResult
)
