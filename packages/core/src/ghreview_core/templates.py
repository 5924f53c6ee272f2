"""Canned comment bodies selectable with ``gh-review add --template``.

Teams can add their own under ``templates:`` in .ghreview.yml; those win
over the built-ins on a name clash.
"""

from __future__ import annotations

BUILTIN_TEMPLATES: dict[str, str] = {
    "naming": (
        "**Naming Convention**\n\n"
        "Consider using a more descriptive name that follows the project's naming conventions."
    ),
    "security": (
        "**Security Concern**\n\n"
        "This code may have security implications. Please review for potential vulnerabilities."
    ),
    "perf": (
        "**Performance**\n\n"
        "This implementation may have performance implications at scale. Consider optimizing."
    ),
    "style": (
        "**Style Guide**\n\n"
        "This code doesn't follow the project's style guide. Please update to match conventions."
    ),
}


def _merged(extra: dict[str, str] | None) -> dict[str, str]:
    return {**BUILTIN_TEMPLATES, **{str(k): str(v) for k, v in (extra or {}).items()}}


def get_template(name: str, extra: dict[str, str] | None = None) -> str | None:
    return _merged(extra).get(name)


def list_templates(extra: dict[str, str] | None = None) -> list[str]:
    return sorted(_merged(extra))
