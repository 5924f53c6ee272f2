"""TableRenderer: human-oriented output built on rich.

Colours and weights are only emitted when the stream is a terminal (or
FORCE_COLOR is set); otherwise rich degrades to plain text. This is the
only renderer that shortens bodies and paths.
"""

from __future__ import annotations

import os
from typing import TextIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ghreview_output.base import Renderer, location, one_line
from ghreview_output.models import (
    AddResult,
    CommentGroup,
    CommentsResult,
    DeleteResult,
    DiscardResult,
    EditResult,
    NoOpResult,
    SubmitResult,
    ViewResult,
)

_HEADER_STYLE = "bold bright_blue"
_ROW_STYLES = ["grey82", "grey54"]
_BORDER_STYLE = "grey27"
_SUCCESS_STYLE = "bright_green"
_DIM_STYLE = "grey35"
_AUTHOR_STYLE = "bold bright_cyan"

# Non-terminal output is not width-constrained; keep rows on one line.
_PIPE_WIDTH = 200

BODY_PREVIEW = 40
PATH_PREVIEW = 20


def truncate(text: str, max_len: int) -> str:
    text = one_line(text)
    return text[:max_len] + "..." if len(text) > max_len else text


def shorten_path(path: str, max_len: int = PATH_PREVIEW) -> str:
    return "..." + path[-(max_len - 3) :] if len(path) > max_len else path


class TableRenderer(Renderer):
    def __init__(self, stream: TextIO, console: Console | None = None):
        super().__init__(stream)
        if console is None:
            force_terminal = True if os.environ.get("FORCE_COLOR") else None
            console = Console(file=stream, force_terminal=force_terminal, highlight=False, emoji=False)
            if not console.is_terminal:
                console.width = _PIPE_WIDTH
        self.console = console

    def _say(self, message: str, style: str = "") -> None:
        # Text, not markup: bodies and paths may contain square brackets.
        self.console.print(Text(message, style=style), soft_wrap=True)

    def _comment_table(self, group: CommentGroup, include_ids: bool) -> Table:
        table = Table(
            box=box.SQUARE,
            header_style=_HEADER_STYLE,
            border_style=_BORDER_STYLE,
            row_styles=_ROW_STYLES,
        )
        if include_ids:
            table.add_column("ID", no_wrap=True)
        table.add_column("State", no_wrap=True)
        table.add_column("Location", no_wrap=True)
        table.add_column("Body", no_wrap=True)
        flat = not group.author
        if flat:
            table.add_column("Author", no_wrap=True)

        for c in group.comments:
            loc = "(global)"
            if c.path:
                loc = location(shorten_path(c.path), c.line)
            row = [c.state, loc, truncate(c.body, BODY_PREVIEW)]
            if include_ids:
                row.insert(0, c.id)
            if flat:
                row.append(c.author)
            table.add_row(*(Text(cell) for cell in row))
        return table

    def render_comments(self, result: CommentsResult) -> None:
        if not any(g.comments for g in result.groups):
            self._say("No comments found.", _DIM_STYLE)
            return
        for i, group in enumerate(result.groups):
            if i > 0:
                self.console.print()
            # Author header only in grouped mode.
            if group.author:
                self._say(f"@{group.author} ({len(group.comments)} comments)", _AUTHOR_STYLE)
            self.console.print(self._comment_table(group, result.include_ids))

    def render_view(self, result: ViewResult) -> None:
        if not result.threads:
            self._say("No review threads found.", _DIM_STYLE)
            return
        for i, thread in enumerate(result.threads):
            if i > 0:
                self.console.print()

            status = "resolved" if thread.resolved else "unresolved"
            header = f"[{status}] {location(thread.path, thread.line)}"
            if result.include_ids:
                header += f" ({thread.id})"
            self._say(header, _DIM_STYLE if thread.resolved else _AUTHOR_STYLE)

            for c in thread.comments:
                if result.include_ids:
                    self._say(f"  [{c.id}] @{c.author}: {truncate(c.body, 50)}")
                else:
                    self._say(f"  @{c.author}: {truncate(c.body, 60)}")

    def render_add(self, result: AddResult) -> None:
        self._say(f"✓ Added comment at {result.path}:{result.line}", _SUCCESS_STYLE)

    def render_edit(self, result: EditResult) -> None:
        self._say(f"✓ Updated comment {result.comment_id}", _SUCCESS_STYLE)

    def render_delete(self, result: DeleteResult) -> None:
        self._say(f"✓ Deleted comment {result.comment_id}", _SUCCESS_STYLE)

    def render_submit(self, result: SubmitResult) -> None:
        self._say(f"✓ Submitted review ({result.verdict})", _SUCCESS_STYLE)

    def render_discard(self, result: DiscardResult) -> None:
        self._say(f"✓ Discarded pending review {result.review_id}", _SUCCESS_STYLE)

    def render_noop(self, result: NoOpResult) -> None:
        self._say(result.message, _DIM_STYLE)
