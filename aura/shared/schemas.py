"""
Validation gate for inbound payloads.

Every JSON value coming back from the backend or the data store goes
through parse_payload() before any state is set from it.
"""

from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from .exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)


def _field_path(loc: tuple) -> str:
    """Render a pydantic error location as a dotted path."""
    if not loc:
        return "__root__"
    return ".".join(str(part) for part in loc)


def parse_payload(model: type[M], raw: Any) -> M:
    """
    Validate a decoded JSON value against a declared shape.

    Args:
        model: Pydantic model describing the expected shape
        raw: Decoded JSON (dict, list, scalar or None)

    Returns:
        A validated model instance

    Raises:
        ValidationError: naming the first violated field
    """
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        raise ValidationError(_field_path(first["loc"]), first["msg"]) from e
