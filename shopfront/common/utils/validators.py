from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ValidationOutcome(Generic[ModelT]):
    value: Optional[ModelT] = None
    errors: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.errors is None


def _error_message(error: Dict[str, Any]) -> str:
    if error.get("type") == "value_error" and "error" in (error.get("ctx") or {}):
        return str(error["ctx"]["error"])
    return error.get("msg", "Invalid value")


def flatten_errors(exc: ValidationError) -> Dict[str, Any]:
    """Group pydantic errors by dotted field path, e.g. ``variants.0.price``."""
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error.get("loc", ()))
        message = _error_message(error)
        if path:
            field_errors.setdefault(path, []).append(message)
        else:
            form_errors.append(message)
    return {"form_errors": form_errors, "field_errors": field_errors}


def validate_payload(schema: Type[ModelT], payload: Any) -> ValidationOutcome[ModelT]:
    if not isinstance(payload, dict):
        return ValidationOutcome(errors={"form_errors": ["Expected a JSON object"], "field_errors": {}})
    try:
        return ValidationOutcome(value=schema.model_validate(payload))
    except ValidationError as exc:
        return ValidationOutcome(errors=flatten_errors(exc))
