"""Tests for the console entrypoint."""

import json
import logging

import pytest

from main import main, run_chat
from snippet_sphere.flows.general_chat import GeneralChatFlow
from snippet_sphere.schemas.validation import FieldViolation, ValidationError


@pytest.fixture
def keep_root_handlers():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def scripted_input(monkeypatch):
    def script(lines):
        it = iter(lines)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(it))
    return script


def test_missing_required_config_key_exits_nonzero(tmp_path, monkeypatch, keep_root_handlers) -> None:
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"llm_settings": {"provider": "google"}}), encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert main(["--config", str(cfg), "chat"]) == 1


def test_missing_config_file_exits_nonzero(tmp_path, monkeypatch, keep_root_handlers) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["--config", str(tmp_path / "absent.json"), "chat"]) == 1


async def test_chat_session_keeps_every_turn(config_path, fake_llm, scripted_input) -> None:
    llm = fake_llm({"answer": "ok"})
    flow = GeneralChatFlow(config_path=config_path, llm=llm)
    questions = [f"question {i}" for i in range(120)]
    scripted_input(questions + ["exit"])

    await run_chat(config_path, flow=flow)

    assert len(llm.calls) == 120
    last_messages = llm.calls[-1][1]
    assert len(last_messages) == 1 + 2 * 119 + 1
    assert last_messages[-1].content == "question 119"


class FlakyChatFlow(GeneralChatFlow):
    """Rejects the first request, then behaves normally."""

    rejected = False

    async def run(self, payload):
        if not self.rejected:
            self.rejected = True
            raise ValidationError("ChatRequest", [FieldViolation("question", "string_type", "bad input")])
        return await super().run(payload)


async def test_rejected_turn_does_not_end_session(config_path, fake_llm, scripted_input) -> None:
    llm = fake_llm({"answer": "ok"})
    flow = FlakyChatFlow(config_path=config_path, llm=llm)
    scripted_input(["first", "second", "quit"])

    await run_chat(config_path, flow=flow)

    assert flow.rejected
    assert len(llm.calls) == 1
    assert llm.calls[0][1][-1].content == "second"
    assert len(llm.calls[0][1]) == 2
