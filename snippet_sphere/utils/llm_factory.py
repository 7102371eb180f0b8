import os
import logging
from typing import Any, Dict
from enum import Enum

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI
from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)


class LLMProvider(Enum):
    """
    Enumeration of supported LLM providers.
    """
    GOOGLE = "google"
    OPENAI = "openai"


class LLMFactory:
    """
    Factory class to create and configure LangChain Chat Model instances.

    Every flow asks the factory for its model so the provider can be switched
    per component (explainer, tagger, chat) from configuration alone.
    """

    @staticmethod
    def create_llm(
        config: Dict[str, Any],
        provider: str = "google"
    ) -> BaseChatModel:
        """
        Creates and returns a configured LangChain Chat Model.

        Args:
            config (Dict[str, Any]): Model settings (model_name, temperature, max_retries).
            provider (str): The provider name (default: "google").

        Returns:
            BaseChatModel: An initialized LangChain chat model.

        Raises:
            ValueError: If the provider is not supported or API keys are missing.
        """
        try:
            provider_enum = LLMProvider(provider.lower())
        except ValueError:
            valid_options = [p.value for p in LLMProvider]
            raise ValueError(f"Unsupported provider '{provider}'. Valid options: {valid_options}")

        model_hint = config.get("model_name") or config.get("model")
        logger.info(f"Initializing LLM with provider: {provider_enum.value} | Model: {model_hint}")

        if provider_enum == LLMProvider.GOOGLE:
            return LLMFactory._create_google_model(config)

        elif provider_enum == LLMProvider.OPENAI:
            return LLMFactory._create_openai_model(config)

        raise ValueError(f"Provider '{provider}' is technically valid but not implemented.")

    @staticmethod
    def _create_google_model(config: Dict[str, Any]) -> ChatGoogleGenerativeAI:
        """Internal helper to create a Google Gemini Chat model."""
        api_key = os.getenv("GOOGLE_API_KEY")
        if not api_key:
            logger.error("GOOGLE_API_KEY not found in environment variables.")
            raise ValueError("GOOGLE_API_KEY is missing. Please set it in your .env file.")

        model_name = config.get("model_name") or config.get("model") or "gemini-2.0-flash"

        # Flows make a single attempt per request, so retries default to off
        return ChatGoogleGenerativeAI(
            model=model_name,
            temperature=config.get("temperature", 0.0),
            max_retries=config.get("max_retries", 0),
            google_api_key=api_key,
        )

    @staticmethod
    def _create_openai_model(config: Dict[str, Any]) -> ChatOpenAI:
        """Internal helper to create an OpenAI Chat model."""
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            logger.error("OPENAI_API_KEY not found in environment variables.")
            raise ValueError("OPENAI_API_KEY is missing. Please set it in your .env file.")

        model_name = config.get("model_name") or config.get("model") or "gpt-4o-mini"

        return ChatOpenAI(
            model=model_name,
            temperature=config.get("temperature", 0.0),
            max_retries=config.get("max_retries", 0),
            api_key=api_key
        )
