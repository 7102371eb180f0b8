import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Type, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel
from langchain_core.language_models.chat_models import BaseChatModel

from snippet_sphere.config_manager import ConfigManager, DEFAULT_CONFIG_PATH
from snippet_sphere.llm.model_client import GenerationFailure, GenerationRequest, ModelClient
from snippet_sphere.schemas.validation import validate_payload
from snippet_sphere.utils.llm_factory import LLMFactory

logger = logging.getLogger("Flow")

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class Outcome(str, Enum):
    SUCCESS = "success"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FlowResult(Generic[ResponseT]):
    response: ResponseT
    outcome: Outcome

    @property
    def is_fallback(self) -> bool:
        return self.outcome is Outcome.FALLBACK


class Flow(ABC, Generic[ResponseT]):
    """
    One stateless request/response transaction against the model.

    Subclasses declare the request/response shapes and fill in three hooks:
    ``build_request`` (render the prompt), ``postprocess`` (coerce a successful
    response, raising GenerationFailure if it is unusable) and ``fallback``.
    The instance only holds the model client and read-only options, so one
    flow can serve any number of concurrent calls.
    """

    name: str = "flow"
    component: str = "default"
    request_model: Type[BaseModel]
    response_model: Type[ResponseT]

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, llm: Optional[BaseChatModel] = None):
        """Initialize the flow and its LLM backend.

        Args:
            config_path: Path to configuration file.
            llm: Optional pre-instantiated chat model (for dependency injection/testing).
        """
        load_dotenv()

        config_manager = ConfigManager()
        config_manager.load(config_path)
        llm_config = config_manager.get_llm_config(self.component)
        self.options = config_manager.get_flow_config(self.name)

        if llm is None:
            provider = llm_config.get("provider", "google")
            llm = LLMFactory.create_llm(llm_config, provider=provider)
        self.client = ModelClient(llm)

    @abstractmethod
    def build_request(self, request: Any) -> GenerationRequest:
        """Render the prompt for a validated request."""

    def postprocess(self, request: Any, response: ResponseT) -> ResponseT:
        return response

    @abstractmethod
    def fallback(self) -> ResponseT:
        """The fixed response returned when generation fails."""

    async def run(self, payload: Any) -> FlowResult[ResponseT]:
        """Validate, render, call the model and degrade to the fallback on failure.

        Raises:
            ValidationError: before any model call when the payload is malformed.
        """
        request = validate_payload(self.request_model, payload)
        generation = self.build_request(request)

        try:
            response = await self.client.generate(generation)
            response = self.postprocess(request, response)
        except GenerationFailure as e:
            logger.warning(f"⚠️ {self.name}: generation failed ({e.reason}), returning fallback")
            return FlowResult(self.fallback(), Outcome.FALLBACK)

        logger.info(f"✅ {self.name}: generated {self.response_model.__name__}")
        return FlowResult(response, Outcome.SUCCESS)

    async def __call__(self, payload: Any) -> ResponseT:
        result = await self.run(payload)
        return result.response
