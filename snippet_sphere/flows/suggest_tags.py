"""Suggest 3-5 tags for a snippet."""

import logging
from functools import lru_cache
from typing import List, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from snippet_sphere.config_manager import DEFAULT_CONFIG_PATH
from snippet_sphere.flows.base import Flow
from snippet_sphere.llm.model_client import GenerationRequest
from snippet_sphere.prompts.templates import render_prompt
from snippet_sphere.schemas.tags import TagRequest, TagResponse, normalize_tag

logger = logging.getLogger(__name__)


class SuggestTagsFlow(Flow[TagResponse]):
    """
    The prompt asks the model to skip the user's existing tags. Unless
    ``exclude_existing`` is turned off, the flow also removes them locally
    (case-insensitive), since the model does not always comply.
    """

    name = "suggest_tags"
    component = "tagger"
    request_model = TagRequest
    response_model = TagResponse

    def __init__(
        self,
        config_path: str = DEFAULT_CONFIG_PATH,
        llm: Optional[BaseChatModel] = None,
        exclude_existing: Optional[bool] = None,
    ):
        super().__init__(config_path=config_path, llm=llm)
        if exclude_existing is None:
            exclude_existing = self.options.get("exclude_existing", True)
        self.exclude_existing = exclude_existing

    def build_request(self, request: TagRequest) -> GenerationRequest:
        prompt = render_prompt("suggest_tags", {
            "title": request.title,
            "description": request.description,
            "code": request.code,
            "existing_tags": request.existing_tags or [],
        })
        return GenerationRequest(prompt=prompt, output_schema=TagResponse)

    def postprocess(self, request: TagRequest, response: TagResponse) -> TagResponse:
        if not self.exclude_existing or not request.existing_tags:
            return response

        existing = {normalize_tag(tag) for tag in request.existing_tags}
        kept: List[str] = [tag for tag in response.suggested_tags if tag not in existing]
        if len(kept) != len(response.suggested_tags):
            logger.debug(f"Dropped {len(response.suggested_tags) - len(kept)} suggestion(s) already present")
        return TagResponse(suggested_tags=kept)

    def fallback(self) -> TagResponse:
        return TagResponse(suggested_tags=[])


@lru_cache(maxsize=1)
def default_flow() -> SuggestTagsFlow:
    return SuggestTagsFlow()


async def suggest_tags(
    title: str,
    code: str,
    description: Optional[str] = None,
    existing_tags: Optional[List[str]] = None,
    flow: Optional[SuggestTagsFlow] = None,
) -> TagResponse:
    """Return suggested tags for a snippet; an empty list if the model fails."""
    flow = flow or default_flow()
    return await flow({
        "title": title,
        "code": code,
        "description": description,
        "existingTags": existing_tags,
    })
