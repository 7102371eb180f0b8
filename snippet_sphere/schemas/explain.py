"""Pydantic models for the code explanation flow."""

from typing import Optional

from pydantic import BaseModel, Field


class ExplainRequest(BaseModel):
	"""Snippet to explain."""
	code: str = Field(..., min_length=1, description="The code snippet to explain.")
	language: Optional[str] = Field(
		None, description="The programming language of the snippet (e.g., javascript, python)."
	)


class ExplainResponse(BaseModel):
	"""Structured output the model must return."""
	explanation: str = Field(..., description="A clear and concise explanation of the code snippet.")
