"""Explain a code snippet in plain language."""

from functools import lru_cache
from typing import Optional

from snippet_sphere.flows.base import Flow
from snippet_sphere.llm.model_client import GenerationFailure, GenerationRequest
from snippet_sphere.prompts.templates import render_prompt
from snippet_sphere.schemas.explain import ExplainRequest, ExplainResponse

EXPLAIN_FALLBACK = "Could not generate an explanation at this time."


class ExplainCodeFlow(Flow[ExplainResponse]):
    name = "explain_code"
    component = "explainer"
    request_model = ExplainRequest
    response_model = ExplainResponse

    def build_request(self, request: ExplainRequest) -> GenerationRequest:
        prompt = render_prompt("explain_code", {"code": request.code, "language": request.language})
        return GenerationRequest(prompt=prompt, output_schema=ExplainResponse)

    def postprocess(self, request: ExplainRequest, response: ExplainResponse) -> ExplainResponse:
        if not response.explanation.strip():
            raise GenerationFailure(GenerationFailure.DECLINED, "empty explanation")
        return response

    def fallback(self) -> ExplainResponse:
        return ExplainResponse(explanation=EXPLAIN_FALLBACK)


@lru_cache(maxsize=1)
def default_flow() -> ExplainCodeFlow:
    return ExplainCodeFlow()


async def explain_code(code: str, language: Optional[str] = None, flow: Optional[ExplainCodeFlow] = None) -> ExplainResponse:
    """Return an explanation for ``code``, or the fixed apology if the model fails."""
    flow = flow or default_flow()
    return await flow({"code": code, "language": language})
