"""Dependency wiring for FastAPI routes.

Provide shared singletons for the three AI flows.
"""

from functools import lru_cache
from snippet_sphere.flows.explain_code import ExplainCodeFlow
from snippet_sphere.flows.general_chat import GeneralChatFlow
from snippet_sphere.flows.suggest_tags import SuggestTagsFlow


@lru_cache(maxsize=1)
def get_explain_flow() -> ExplainCodeFlow:
	"""Return a cached `ExplainCodeFlow` singleton instance."""
	return ExplainCodeFlow()


@lru_cache(maxsize=1)
def get_tags_flow() -> SuggestTagsFlow:
	"""Return a cached `SuggestTagsFlow` singleton instance."""
	return SuggestTagsFlow()


@lru_cache(maxsize=1)
def get_chat_flow() -> GeneralChatFlow:
	"""Return a cached `GeneralChatFlow` singleton instance."""
	return GeneralChatFlow()
