"""API routes for the Snippet Sphere AI flows.

Bodies are validated by the flows themselves so a bad request reports every
violated field at once. The request models are still published in the
OpenAPI document through ``openapi_extra``.
"""

from typing import Any, Dict, Type

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel
from .dependencies import get_chat_flow, get_explain_flow, get_tags_flow
from snippet_sphere.schemas.chat import ChatRequest, ChatResponse
from snippet_sphere.schemas.explain import ExplainRequest, ExplainResponse
from snippet_sphere.schemas.tags import TagRequest, TagResponse

SCHEMA_REF_TEMPLATE = "#/components/schemas/{model}"
REQUEST_MODELS = (ExplainRequest, TagRequest, ChatRequest)

router = APIRouter(prefix="/ai", tags=["ai"])


def request_body(model: Type[BaseModel]) -> Dict[str, Any]:
	"""OpenAPI requestBody pointing at a model registered in components."""
	ref = SCHEMA_REF_TEMPLATE.format(model=model.__name__)
	return {"requestBody": {"required": True, "content": {"application/json": {"schema": {"$ref": ref}}}}}


@router.post("/explain", response_model=ExplainResponse, openapi_extra=request_body(ExplainRequest))
async def explain(payload: Any = Body(...), flow = Depends(get_explain_flow)) -> ExplainResponse:
	"""Explain a code snippet."""
	return await flow(payload)


@router.post("/suggest-tags", response_model=TagResponse, openapi_extra=request_body(TagRequest))
async def suggest_tags(payload: Any = Body(...), flow = Depends(get_tags_flow)) -> TagResponse:
	"""Suggest 3-5 tags for a snippet, skipping the ones it already has."""
	return await flow(payload)


@router.post("/chat", response_model=ChatResponse, openapi_extra=request_body(ChatRequest))
async def chat(payload: Any = Body(...), flow = Depends(get_chat_flow)) -> ChatResponse:
	"""Answer a question; the client sends the prior turns with every request."""
	return await flow(payload)
