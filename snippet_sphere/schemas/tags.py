"""Pydantic models for the tag suggestion flow."""

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_SUGGESTED_TAGS = 5

_SEPARATORS = re.compile(r"[\s_]+")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def normalize_tag(tag: str) -> str:
	"""Lowercase a tag and hyphenate multi-word concepts ("React Hook" -> "react-hook")."""
	tag = tag.strip().lstrip("#").lower()
	tag = _SEPARATORS.sub("-", tag)
	return _REPEATED_HYPHENS.sub("-", tag).strip("-")


class TagRequest(BaseModel):
	"""Snippet metadata used to suggest tags."""
	model_config = ConfigDict(populate_by_name=True)

	title: str = Field(..., description="The title of the code snippet.")
	description: Optional[str] = Field(None, description="The description of the code snippet.")
	code: str = Field(..., description="The code snippet itself.")
	existing_tags: Optional[List[str]] = Field(
		None,
		alias="existingTags",
		description="Any tags already provided by the user.",
	)


class TagResponse(BaseModel):
	"""Structured output the model must return.

	Tags are normalised on the way in: lowercased, hyphenated, de-duplicated
	and capped at five.
	"""
	model_config = ConfigDict(populate_by_name=True)

	suggested_tags: List[str] = Field(
		...,
		alias="suggestedTags",
		description=(
			'An array of 3-5 relevant tags for the snippet. Tags should be lowercase and single words '
			'or hyphenated where appropriate (e.g., "react-hook"). '
			'Do not suggest tags that are already in existingTags.'
		),
	)

	@field_validator("suggested_tags")
	@classmethod
	def normalize_tags(cls, tags: List[str]) -> List[str]:
		cleaned: List[str] = []
		for tag in tags:
			tag = normalize_tag(tag)
			if tag and tag not in cleaned:
				cleaned.append(tag)
		return cleaned[:MAX_SUGGESTED_TAGS]
