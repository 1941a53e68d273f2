"""Base model for pygameday payloads and snapshots.

Every model inherits from :class:`GameDayBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase upstream keys map
  automatically to snake_case fields.
* ``frozen=True`` so a validated value cannot be reassigned after it
  leaves the ingestion boundary.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GameDayBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
