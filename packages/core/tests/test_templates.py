"""Tests for canned comment templates."""

import pytest

from ghreview_core.templates import BUILTIN_TEMPLATES, get_template, list_templates


@pytest.mark.parametrize(
    "name, heading",
    [
        ("naming", "Naming Convention"),
        ("security", "Security Concern"),
        ("perf", "Performance"),
        ("style", "Style Guide"),
    ],
)
def test_builtin_templates(name, heading):
    assert f"**{heading}**" in get_template(name)


def test_unknown_template_returns_none():
    assert get_template("nope") is None


def test_list_is_sorted_and_complete():
    names = list_templates()
    assert names == sorted(BUILTIN_TEMPLATES)
    assert all(get_template(n) for n in names)


def test_extra_templates_merged_and_override():
    extra = {"nit": "Nit.", "perf": "Custom perf note."}
    assert get_template("nit", extra) == "Nit."
    assert get_template("perf", extra) == "Custom perf note."
    assert "nit" in list_templates(extra)
    # Built-ins are not mutated by the merge.
    assert "nit" not in BUILTIN_TEMPLATES
