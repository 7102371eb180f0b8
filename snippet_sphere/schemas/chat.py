"""Pydantic models for chat request/response payloads."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatRole(str, Enum):
	USER = "user"
	ASSISTANT = "assistant"


class ChatTurn(BaseModel):
	"""Single chat message in history."""
	role: ChatRole
	text: str


class ChatRequest(BaseModel):
	"""Payload for a chat request.

	History is owned by the caller, oldest first, and is not capped here:
	windowing a long conversation is the caller's job.
	"""
	question: str = Field(..., description="The user question to the chatbot.")
	history: Optional[List[ChatTurn]] = Field(None, description="The history of the conversation.")


class ChatResponse(BaseModel):
	"""Structured output the model must return."""
	answer: str = Field(..., description="The chatbot answer to the question.")
