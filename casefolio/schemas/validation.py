"""
Payload validation with exhaustive error reporting.
"""
from typing import Any, Dict, List, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class FieldError(BaseModel):
    """One rejected field: dotted location, human readable message and error code."""

    field: str
    message: str
    type: str


class PayloadValidationError(Exception):
    """Raised when untrusted input does not match a schema; carries every failure."""

    def __init__(self, message: str, errors: List[FieldError]):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "errors": [error.model_dump() for error in self.errors]}


def field_errors(raw_errors: Sequence[Dict[str, Any]]) -> List[FieldError]:
    """
    Convert pydantic/FastAPI error dicts into FieldError values.

    Args:
        raw_errors: Output of ``ValidationError.errors()``

    Returns:
        One FieldError per failure, in the order reported
    """
    errors = []
    for raw in raw_errors:
        location = [str(part) for part in raw.get("loc", ()) if part != "body"]
        errors.append(
            FieldError(
                field=".".join(location) or "body",
                message=raw.get("msg", "Invalid value"),
                type=raw.get("type", "value_error"),
            )
        )
    return errors


def validate_payload(model: Type[ModelT], data: Any, message: str = "Invalid data") -> ModelT:
    """
    Validate ``data`` against ``model``.

    Args:
        model: Schema class
        data: Decoded JSON body
        message: Summary used when validation fails

    Returns:
        Typed model instance

    Raises:
        PayloadValidationError: listing every field that failed
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise PayloadValidationError(message, field_errors(e.errors())) from e
