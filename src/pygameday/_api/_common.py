"""Shared helpers for endpoint modules.

Every upstream response wraps its payload in a top-level ``data`` key; this
module unwraps and validates it.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pygameday.exceptions import GameDayApiError

TModel = TypeVar("TModel", bound=BaseModel)


def extract_data(response: dict[str, Any], endpoint: str) -> Any:
    """Return ``response["data"]`` or raise :class:`GameDayApiError`."""
    if "data" not in response:
        raise GameDayApiError(f"Response from {endpoint} missing 'data'", endpoint=endpoint)
    return response["data"]


def parse_data(response: dict[str, Any], model: type[TModel], endpoint: str) -> TModel:
    """Validate the ``data`` object of *response* into *model*."""
    data = extract_data(response, endpoint)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise GameDayApiError(f"Unexpected payload from {endpoint}: {exc}", endpoint=endpoint) from exc
