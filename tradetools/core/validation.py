"""
Argument validation helpers.

Tool arguments come from agents as a loose JSON bag. Failures are reported as
"Invalid or missing <field>: <reason>. <hint>" so the caller can self-correct.
"""

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tradetools.services.base import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

SERVICE_NAME = "validation"


def _describe(error: dict) -> str:
    return error["msg"]


def require_field(value: Any, annotation: Any, field_name: str, hint: str) -> Any:
    """Validate a single field against a type and return the parsed value."""
    try:
        return TypeAdapter(annotation).validate_python(value)
    except PydanticValidationError as e:
        reason = "; ".join(_describe(err) for err in e.errors())
        raise ValidationError(
            SERVICE_NAME,
            f"Invalid or missing {field_name}: {reason}. {hint}",
            details={"field": field_name},
        ) from e


def parse_args(model: Type[ModelT], args: dict, hints: Optional[dict[str, str]] = None) -> ModelT:
    """Validate a whole argument bag against a pydantic model."""
    hints = hints or {}
    try:
        return model.model_validate(args or {})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"]) or "arguments"
        root = str(first["loc"][0]) if first["loc"] else field_name
        hint = hints.get(root, hints.get("*", ""))
        message = f"Invalid or missing {field_name}: {_describe(first)}. {hint}".rstrip()
        raise ValidationError(
            SERVICE_NAME,
            message,
            details={"field": field_name, "errors": len(e.errors())},
        ) from e
