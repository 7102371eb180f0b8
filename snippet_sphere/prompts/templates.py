"""Prompt templates for the three AI flows.

Each template is an ordered tuple of sections. A section may be guarded by a
field name, in which case it is only emitted when that field is present.
``None``, ``""`` and empty lists count as absent; ``" "`` is present.
Rendering is a plain concatenation: no escaping, no clock, no randomness.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

Producer = Callable[[Mapping[str, Any]], str]

CHAT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant called Snippet Sphere Helper. "
    "You can answer general questions and provide information about software development and code snippets. "
    "Keep your answers concise and friendly. If you don't know the answer to something, say so."
)


class UnknownTemplateError(KeyError):
    """Raised when a template id is not registered."""


@dataclass(frozen=True)
class Section:
    producer: Producer
    guard: Optional[str] = None


def is_present(value: Any) -> bool:
    """Presence rule shared by every guarded section."""
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def join_list(items: Sequence[str]) -> str:
    """Inline a list into prose: ``a, b, c`` in the given order."""
    return ", ".join(str(item) for item in items)


def _text(literal: str) -> Producer:
    return lambda values: literal


def _format(pattern: str) -> Producer:
    # format_map substitutes values once, braces inside the values are left alone
    return lambda values: pattern.format_map(values)


def _listing(pattern: str, field: str) -> Producer:
    return lambda values: pattern.format(items=join_list(values[field]))


EXPLAIN_CODE_TEMPLATE: Tuple[Section, ...] = (
    Section(_text(
        "You are an expert software developer and an excellent communicator. "
        "Your task is to explain the provided code snippet.\n"
        "Focus on:\n"
        "1. The overall purpose of the code.\n"
        "2. Key logic or algorithms used.\n"
        "3. Important functions, classes, or variables and their roles.\n"
        "4. Any non-obvious behavior or potential points of interest.\n"
        "Make the explanation clear, concise, and easy for another developer to understand. "
        "Assume the reader has some programming knowledge but might not be familiar with "
        "this specific snippet or language constructs.\n\n"
    )),
    Section(_format("Programming Language: {language}\n\n"), guard="language"),
    Section(_text("Code Snippet:\n```")),
    Section(_format("{language}"), guard="language"),
    Section(_format("\n{code}\n```\n\nProvide only the explanation text.\n")),
)

SUGGEST_TAGS_TEMPLATE: Tuple[Section, ...] = (
    Section(_text(
        "You are an expert in software development and code organization.\n"
        "Based on the provided code snippet, its title, and description, suggest 3-5 relevant and concise tags.\n"
        "Tags should be lowercase. If a multi-word concept is highly relevant, use a hyphen "
        "(e.g., \"react-hook\", \"api-client\").\n"
        "Avoid overly generic tags unless they are highly specific to the snippet's core functionality.\n\n"
        "Consider the programming language, main libraries or frameworks used, "
        "the purpose of the snippet, and key concepts.\n\n"
    )),
    Section(_format("Title: {title}\n")),
    Section(_format("Description: {description}\n"), guard="description"),
    Section(_format("Code:\n```\n{code}\n```\n")),
    Section(
        _listing("The user has already provided these tags, do not suggest them again: {items}.\n", "existing_tags"),
        guard="existing_tags",
    ),
    Section(_text("\nGenerate an array of 3-5 suggested tags.\n")),
)

GENERAL_CHAT_TEMPLATE: Tuple[Section, ...] = (
    Section(_format("{question}")),
)

TEMPLATES: Dict[str, Tuple[Section, ...]] = {
    "explain_code": EXPLAIN_CODE_TEMPLATE,
    "suggest_tags": SUGGEST_TAGS_TEMPLATE,
    "general_chat": GENERAL_CHAT_TEMPLATE,
}


def render_prompt(template_id: str, values: Mapping[str, Any]) -> str:
    """Render a registered template with the given values.

    Args:
        template_id: One of ``explain_code``, ``suggest_tags``, ``general_chat``.
        values: Field values. Optional fields may be missing, ``None`` or empty.

    Returns:
        The exact prompt text sent to the model.

    Raises:
        UnknownTemplateError: If ``template_id`` is not registered.
    """
    try:
        sections = TEMPLATES[template_id]
    except KeyError:
        raise UnknownTemplateError(template_id) from None

    parts = []
    for section in sections:
        if section.guard is not None and not is_present(values.get(section.guard)):
            continue
        parts.append(section.producer(values))
    return "".join(parts)
