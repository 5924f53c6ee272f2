"""JSONRenderer: one indented JSON document per invocation.

Bodies are emitted verbatim. Optional fields (ids, empty paths, unknown
lines) are omitted rather than written as null.
"""

from __future__ import annotations

import json

from ghreview_output.base import Renderer
from ghreview_output.models import (
    AddResult,
    Comment,
    CommentsResult,
    DeleteResult,
    DiscardResult,
    EditResult,
    NoOpResult,
    SubmitResult,
    ViewResult,
    ViewThread,
)


def _comment_doc(c: Comment, include_ids: bool, with_author: bool) -> dict:
    doc: dict = {}
    if include_ids and c.id:
        doc["id"] = c.id
    doc["state"] = c.state
    if c.path:
        doc["path"] = c.path
    if c.line > 0:
        doc["line"] = c.line
    doc["body"] = c.body
    # Flat mode has no group label, so the author travels with the comment.
    if with_author and c.author:
        doc["author"] = c.author
    return doc


def _thread_doc(t: ViewThread, include_ids: bool) -> dict:
    doc: dict = {}
    if include_ids and t.id:
        doc["id"] = t.id
    doc["path"] = t.path
    if t.line > 0:
        doc["line"] = t.line
    doc["resolved"] = t.resolved
    doc["comments"] = []
    for c in t.comments:
        comment: dict = {"id": c.id} if include_ids and c.id else {}
        comment.update(author=c.author, body=c.body)
        doc["comments"].append(comment)
    return doc


class JSONRenderer(Renderer):
    def _emit(self, doc: dict) -> None:
        self.stream.write(json.dumps(doc, indent=2, ensure_ascii=False) + "\n")

    def render_comments(self, result: CommentsResult) -> None:
        groups = []
        for group in result.groups:
            doc: dict = {"author": group.author} if group.author else {}
            doc["comments"] = [_comment_doc(c, result.include_ids, not group.author) for c in group.comments]
            groups.append(doc)
        self._emit({"pr": result.pr, "groups": groups})

    def render_view(self, result: ViewResult) -> None:
        self._emit({"pr": result.pr, "threads": [_thread_doc(t, result.include_ids) for t in result.threads]})

    def render_add(self, result: AddResult) -> None:
        self._emit({"action": "added", "path": result.path, "line": result.line})

    def render_edit(self, result: EditResult) -> None:
        self._emit({"action": "edited", "comment_id": result.comment_id})

    def render_delete(self, result: DeleteResult) -> None:
        self._emit({"action": "deleted", "comment_id": result.comment_id})

    def render_submit(self, result: SubmitResult) -> None:
        self._emit({"action": "submitted", "verdict": result.verdict})

    def render_discard(self, result: DiscardResult) -> None:
        self._emit({"action": "discarded", "review_id": result.review_id})

    def render_noop(self, result: NoOpResult) -> None:
        self._emit({"action": "noop", "message": result.message})
