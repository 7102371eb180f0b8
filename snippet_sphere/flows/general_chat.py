"""General purpose chatbot. The caller owns the conversation history."""

from functools import lru_cache
from typing import List, Optional, Sequence, Union

from langchain_core.language_models.chat_models import BaseChatModel

from snippet_sphere.config_manager import ConfigManager, DEFAULT_CONFIG_PATH
from snippet_sphere.flows.base import Flow
from snippet_sphere.llm.model_client import GenerationFailure, GenerationRequest
from snippet_sphere.prompts.templates import CHAT_SYSTEM_PROMPT, render_prompt
from snippet_sphere.schemas.chat import ChatRequest, ChatResponse, ChatTurn

CHAT_FALLBACK = "I'm sorry, I couldn't generate a response right now."


class GeneralChatFlow(Flow[ChatResponse]):
    name = "general_chat"
    component = "chat"
    request_model = ChatRequest
    response_model = ChatResponse

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, llm: Optional[BaseChatModel] = None):
        super().__init__(config_path=config_path, llm=llm)
        self.system_instruction = ConfigManager.get_prompt("chat_system", default=CHAT_SYSTEM_PROMPT)

    def build_request(self, request: ChatRequest) -> GenerationRequest:
        # Unbounded: every turn the caller sends goes to the model
        return GenerationRequest(
            prompt=render_prompt("general_chat", {"question": request.question}),
            output_schema=ChatResponse,
            system_instruction=self.system_instruction,
            history=tuple(request.history or ()),
        )

    def postprocess(self, request: ChatRequest, response: ChatResponse) -> ChatResponse:
        if not response.answer.strip():
            raise GenerationFailure(GenerationFailure.DECLINED, "empty answer")
        return response

    def fallback(self) -> ChatResponse:
        return ChatResponse(answer=CHAT_FALLBACK)


@lru_cache(maxsize=1)
def default_flow() -> GeneralChatFlow:
    return GeneralChatFlow()


async def ask_chatbot(
    question: str,
    history: Optional[Sequence[Union[ChatTurn, dict]]] = None,
    flow: Optional[GeneralChatFlow] = None,
) -> ChatResponse:
    """Answer ``question`` in the context of ``history`` (oldest turn first)."""
    flow = flow or default_flow()
    turns: Optional[List[dict]] = None
    if history is not None:
        turns = [t.model_dump(mode="json") if isinstance(t, ChatTurn) else t for t in history]
    return await flow({"question": question, "history": turns})
