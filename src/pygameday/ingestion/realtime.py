"""Realtime payload validation.

Translates raw decoded event payloads into typed updates. Anything that does
not match the expected shape raises :class:`GameDayPayloadError`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from pygameday._constants import EVENT_ATTENDANCE, EVENT_CONCESSIONS, EVENT_PARKING
from pygameday.exceptions import GameDayPayloadError


class ConcessionsUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    sales: float = Field(...)
    inventory: dict[str, int] = Field(...)


class ParkingUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    available: int = Field(...)
    occupied: int = Field(...)


_ATTENDANCE_ADAPTER: TypeAdapter[int] = TypeAdapter(int)


def parse_attendance(payload: Any) -> int:
    """Attendance events carry a bare integer head-count."""
    if isinstance(payload, bool):
        raise GameDayPayloadError("attendance payload must be an integer", event=EVENT_ATTENDANCE)
    try:
        return _ATTENDANCE_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise GameDayPayloadError(f"invalid attendance payload: {exc}", event=EVENT_ATTENDANCE) from exc


def parse_concessions(payload: Any) -> ConcessionsUpdate:
    try:
        return ConcessionsUpdate.model_validate(payload)
    except ValidationError as exc:
        raise GameDayPayloadError(f"invalid concessions payload: {exc}", event=EVENT_CONCESSIONS) from exc


def parse_parking(payload: Any) -> ParkingUpdate:
    try:
        return ParkingUpdate.model_validate(payload)
    except ValidationError as exc:
        raise GameDayPayloadError(f"invalid parking payload: {exc}", event=EVENT_PARKING) from exc
