import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from snippet_sphere.utils.logger import setup_logging
from snippet_sphere.config_manager import ConfigManager
from snippet_sphere.flows.explain_code import ExplainCodeFlow
from snippet_sphere.flows.general_chat import GeneralChatFlow
from snippet_sphere.flows.suggest_tags import SuggestTagsFlow
from snippet_sphere.schemas.chat import ChatRole, ChatTurn
from snippet_sphere.schemas.validation import ValidationError
from snippet_sphere.snippets import merge_tags, parse_tag_input

logger = logging.getLogger("CLI")

REQUIRED_CONFIG_KEYS = ["llm_settings.provider", "llm_settings.model_name"]


def _read_code(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


async def run_explain(args, config_path: str) -> None:
    flow = ExplainCodeFlow(config_path=config_path)
    result = await flow.run({"code": _read_code(args.file), "language": args.language})
    print(result.response.explanation)


async def run_tags(args, config_path: str) -> None:
    flow = SuggestTagsFlow(config_path=config_path)
    existing = parse_tag_input(args.existing)
    result = await flow.run({
        "title": args.title,
        "description": args.description,
        "code": _read_code(args.file),
        "existingTags": existing,
    })
    suggested = result.response.suggested_tags
    if not suggested:
        logger.info("No tag suggestions available.")
    print(", ".join(merge_tags(existing, suggested)))


async def run_chat(config_path: str, flow: Optional[GeneralChatFlow] = None) -> None:
    """Interactive console chat. The session history lives here, not in the flow."""
    flow = flow or GeneralChatFlow(config_path=config_path)
    history: List[ChatTurn] = []

    print("\n💬 Ask Snippet Sphere Helper (type 'exit' to quit):")
    while True:
        try:
            question = input("\nYou: ")
        except (KeyboardInterrupt, EOFError):
            print()
            break
        if question.lower() in ["exit", "quit"]:
            break
        if not question.strip():
            continue

        try:
            result = await flow.run({"question": question, "history": [t.model_dump(mode="json") for t in history]})
        except ValidationError as e:
            # One bad turn should not end the session
            logger.error(f"❌ {e}")
            continue
        answer = result.response.answer
        print(f"\n🤖 Helper: {answer}")

        history.append(ChatTurn(role=ChatRole.USER, text=question))
        history.append(ChatTurn(role=ChatRole.ASSISTANT, text=answer))


def main(argv=None) -> int:
    """CLI entrypoint for the three AI flows."""
    parser = argparse.ArgumentParser(description="Snippet Sphere AI helpers")
    parser.add_argument("--config", default="cfg/config.json", help="Path to config.json")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # --- COMMAND: EXPLAIN ---
    parser_explain = subparsers.add_parser("explain", help="Explain a code snippet")
    parser_explain.add_argument("file", help="File containing the snippet ('-' for stdin)")
    parser_explain.add_argument("--language", help="Programming language of the snippet")

    # --- COMMAND: TAGS ---
    parser_tags = subparsers.add_parser("tags", help="Suggest tags for a snippet")
    parser_tags.add_argument("file", help="File containing the snippet ('-' for stdin)")
    parser_tags.add_argument("--title", required=True, help="Snippet title")
    parser_tags.add_argument("--description", help="Snippet description")
    parser_tags.add_argument("--existing", default="", help="Comma-separated tags the snippet already has")

    # --- COMMAND: CHAT ---
    subparsers.add_parser("chat", help="Interactive chat with the assistant")

    args = parser.parse_args(argv)

    setup_logging(args.config)
    try:
        ConfigManager.load(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"❌ {e}")
        return 1
    if not ConfigManager.validate_required_keys(REQUIRED_CONFIG_KEYS):
        return 1

    try:
        if args.command == "explain":
            asyncio.run(run_explain(args, args.config))
        elif args.command == "tags":
            asyncio.run(run_tags(args, args.config))
        elif args.command == "chat":
            asyncio.run(run_chat(args.config))
    except ValidationError as e:
        logger.error(f"❌ {e}")
        return 2
    except (OSError, ValueError) as e:
        logger.error(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
