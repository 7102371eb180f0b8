"""Boundary validation for request payloads and structured model output.

Wraps pydantic so callers get one exception type that lists every violated
field, whether the shape came in over HTTP, from the CLI or back from the LLM.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class FieldViolation:
	"""One failed constraint on one field."""
	field: str
	constraint: str
	message: str

	def to_dict(self) -> Dict[str, str]:
		return asdict(self)


class ValidationError(ValueError):
	"""Raised when a payload does not match its declared shape.

	Carries every violation, not just the first one found.
	"""

	def __init__(self, shape: str, violations: List[FieldViolation]):
		self.shape = shape
		self.violations = violations
		summary = "; ".join(f"{v.field}: {v.message}" for v in violations)
		super().__init__(f"Invalid {shape}: {summary}")


def _field_path(loc) -> str:
	path = ".".join(str(part) for part in loc)
	return path or "<root>"


def violations_from_pydantic(exc: PydanticValidationError) -> List[FieldViolation]:
	"""Flatten pydantic's error list into FieldViolation records."""
	return [
		FieldViolation(field=_field_path(err["loc"]), constraint=err["type"], message=err["msg"])
		for err in exc.errors()
	]


def validate_payload(model: Type[ModelT], raw: Any) -> ModelT:
	"""Check an untyped value against a pydantic shape.

	Args:
		model: The declared shape.
		raw: Candidate value (dict, model instance, or anything else).

	Returns:
		A validated instance of ``model``.

	Raises:
		ValidationError: listing every violated field.
	"""
	if isinstance(raw, model):
		return raw
	if isinstance(raw, BaseModel):
		raw = raw.model_dump(by_alias=True)
	if not isinstance(raw, dict):
		raise ValidationError(
			model.__name__,
			[FieldViolation(field="<root>", constraint="dict_type", message=f"Expected an object, got {type(raw).__name__}")],
		)
	try:
		return model.model_validate(raw)
	except PydanticValidationError as e:
		raise ValidationError(model.__name__, violations_from_pydantic(e)) from e

