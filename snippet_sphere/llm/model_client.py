import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Type

from pydantic import BaseModel
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from snippet_sphere.schemas.chat import ChatRole, ChatTurn
from snippet_sphere.schemas.validation import ValidationError, validate_payload

logger = logging.getLogger("ModelClient")


class GenerationFailure(Exception):
    """The model call produced no usable structured output.

    ``reason`` is one of ``transport`` (SDK/network error or timeout),
    ``declined`` (no output) or ``invalid_output`` (output failed the schema).
    """

    TRANSPORT = "transport"
    DECLINED = "declined"
    INVALID_OUTPUT = "invalid_output"

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


@dataclass(frozen=True)
class GenerationRequest:
    """Everything one model call needs."""
    prompt: str
    output_schema: Type[BaseModel]
    system_instruction: Optional[str] = None
    history: Sequence[ChatTurn] = ()


class ModelClient:
    """
    Thin adapter over a LangChain chat model that always asks for structured output.

    One attempt per call: retries are not performed here, and the history is
    forwarded exactly as given (no reordering, dedup or truncation).
    """

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    @staticmethod
    def build_messages(request: GenerationRequest) -> List[BaseMessage]:
        """System instruction first, then history oldest-first, then the prompt."""
        messages: List[BaseMessage] = []
        if request.system_instruction:
            messages.append(SystemMessage(content=request.system_instruction))
        for turn in request.history:
            if turn.role == ChatRole.USER:
                messages.append(HumanMessage(content=turn.text))
            else:
                messages.append(AIMessage(content=turn.text))
        messages.append(HumanMessage(content=request.prompt))
        return messages

    async def generate(self, request: GenerationRequest) -> BaseModel:
        """Call the model and return a value that satisfies ``request.output_schema``.

        Raises:
            GenerationFailure: on any transport error, empty output or schema mismatch.
        """
        schema_name = request.output_schema.__name__
        messages = self.build_messages(request)

        try:
            chain = self.llm.with_structured_output(request.output_schema)
            raw = await chain.ainvoke(messages)
        except Exception as e:
            logger.error(f"❌ Model call failed ({schema_name}): {e}")
            raise GenerationFailure(GenerationFailure.TRANSPORT, str(e)) from e

        if raw is None:
            logger.warning(f"⚠️ Model returned no structured output for {schema_name}")
            raise GenerationFailure(GenerationFailure.DECLINED, "model returned no output")

        try:
            return validate_payload(request.output_schema, raw)
        except ValidationError as e:
            logger.warning(f"⚠️ Model output rejected by {schema_name}: {e}")
            raise GenerationFailure(GenerationFailure.INVALID_OUTPUT, str(e)) from e
