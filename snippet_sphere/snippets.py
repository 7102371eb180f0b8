"""Snippet model plus the tag and search helpers the AI flows' callers rely on."""

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Snippet(BaseModel):
    """A saved code snippet."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str
    description: str = ""
    code: str
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="createdAt")
    language: Optional[str] = None


def parse_tag_input(raw: Optional[str]) -> List[str]:
    """Split a comma-separated tag field: ``"a, b ,,c"`` -> ``["a", "b", "c"]``."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def merge_tags(existing: Iterable[str], suggested: Iterable[str]) -> List[str]:
    """Union of both lists without duplicates; existing tags keep their place first."""
    merged: List[str] = []
    seen = set()
    for tag in [*existing, *suggested]:
        key = tag.strip().lower()
        if key and key not in seen:
            seen.add(key)
            merged.append(tag.strip())
    return merged


def matches(snippet: Snippet, term: str) -> bool:
    term = term.lower()
    fields = [snippet.title, snippet.description, snippet.code, snippet.language or "", *snippet.tags]
    return any(term in value.lower() for value in fields)


def filter_snippets(snippets: Iterable[Snippet], term: Optional[str]) -> List[Snippet]:
    """Case-insensitive search across title, description, code, tags and language.

    Results are newest first.
    """
    if term and term.strip():
        snippets = [s for s in snippets if matches(s, term.strip())]
    return sorted(snippets, key=lambda s: s.created_at, reverse=True)
