"""Shared fixtures: a scripted stand-in for the hosted chat model."""

from pathlib import Path
from typing import Any, List, Tuple

import pytest
from langchain_core.runnables import RunnableLambda

CONFIG_PATH = str(Path(__file__).resolve().parents[1] / "cfg" / "config.json")


class FakeStructuredLLM:
    """Implements the one method ModelClient uses: ``with_structured_output``.

    ``reply`` is either a value to return, an exception to raise, or a
    callable ``(schema, messages) -> value``.
    """

    def __init__(self, reply: Any = None):
        self.reply = reply
        self.calls: List[Tuple[type, list]] = []

    def with_structured_output(self, schema):
        async def respond(messages):
            self.calls.append((schema, list(messages)))
            if isinstance(self.reply, Exception):
                raise self.reply
            if callable(self.reply):
                return self.reply(schema, messages)
            return self.reply

        return RunnableLambda(respond)


@pytest.fixture
def config_path() -> str:
    return CONFIG_PATH


@pytest.fixture
def fake_llm():
    def make(reply: Any = None) -> FakeStructuredLLM:
        return FakeStructuredLLM(reply)
    return make
