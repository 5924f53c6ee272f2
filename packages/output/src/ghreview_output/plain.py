"""PlainRenderer: tab-separated rows for scripts and pipes.

Never truncates. Newlines inside bodies become spaces so every comment
stays on exactly one row.
"""

from __future__ import annotations

from ghreview_output.base import Renderer, location, one_line
from ghreview_output.models import (
    AddResult,
    CommentsResult,
    DeleteResult,
    DiscardResult,
    EditResult,
    NoOpResult,
    SubmitResult,
    ViewResult,
)


class PlainRenderer(Renderer):
    def _row(self, *fields: str, indent: bool = False) -> None:
        self.stream.write(("\t" if indent else "") + "\t".join(fields) + "\n")

    def render_comments(self, result: CommentsResult) -> None:
        for group in result.groups:
            grouped = bool(group.author)
            if grouped:
                self.stream.write(f"@{group.author}\n")
            for c in group.comments:
                fields = [c.state]
                if result.include_ids:
                    fields.append(c.id)
                if c.path:
                    fields.append(location(c.path, c.line))
                fields.append(one_line(c.body))
                if not grouped and c.author:
                    fields.append(c.author)
                self._row(*fields, indent=grouped)

    def render_view(self, result: ViewResult) -> None:
        for t in result.threads:
            status = "resolved" if t.resolved else "unresolved"
            if result.include_ids:
                self._row(t.id, status, location(t.path, t.line))
            else:
                self._row(status, location(t.path, t.line))
            for c in t.comments:
                if result.include_ids:
                    self._row(c.id, c.author, one_line(c.body), indent=True)
                else:
                    self._row(c.author, one_line(c.body), indent=True)

    def render_add(self, result: AddResult) -> None:
        self._row("added", result.path, str(result.line))

    def render_edit(self, result: EditResult) -> None:
        self._row("edited", result.comment_id)

    def render_delete(self, result: DeleteResult) -> None:
        self._row("deleted", result.comment_id)

    def render_submit(self, result: SubmitResult) -> None:
        self._row("submitted", result.verdict)

    def render_discard(self, result: DiscardResult) -> None:
        self._row("discarded", result.review_id)

    def render_noop(self, result: NoOpResult) -> None:
        self._row("noop", result.message)
