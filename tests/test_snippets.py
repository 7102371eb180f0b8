"""Tests for snippet tag and search helpers."""

from datetime import datetime, timedelta, timezone

from snippet_sphere.snippets import Snippet, filter_snippets, merge_tags, parse_tag_input


def _snippet(title, created_offset, **kw) -> Snippet:
    created = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(days=created_offset)
    return Snippet(title=title, code=kw.pop("code", "pass"), created_at=created, **kw)


def test_parse_tag_input() -> None:
    assert parse_tag_input("javascript, fetch ,, api ") == ["javascript", "fetch", "api"]
    assert parse_tag_input("") == []
    assert parse_tag_input(None) == []


def test_merge_tags_is_a_deduplicated_union() -> None:
    merged = merge_tags(["javascript", "fetch"], ["fetch", "API-client", "api-client"])
    assert merged == ["javascript", "fetch", "API-client"]


def test_filter_matches_any_field_case_insensitively() -> None:
    snippets = [
        _snippet("Fetch helper", 0, tags=["javascript"]),
        _snippet("List comprehension", 1, language="Python"),
        _snippet("Center a div", 2, description="Flexbox trick"),
    ]
    assert [s.title for s in filter_snippets(snippets, "PYTHON")] == ["List comprehension"]
    assert [s.title for s in filter_snippets(snippets, "flexbox")] == ["Center a div"]
    assert [s.title for s in filter_snippets(snippets, "java")] == ["Fetch helper"]
    assert filter_snippets(snippets, "nothing-like-this") == []


def test_filter_without_term_returns_newest_first() -> None:
    snippets = [_snippet("old", 0), _snippet("new", 5), _snippet("mid", 2)]
    assert [s.title for s in filter_snippets(snippets, "  ")] == ["new", "mid", "old"]
