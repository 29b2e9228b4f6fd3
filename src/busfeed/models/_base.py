"""Base model for busfeed records.

Every record model inherits from :class:`BusFeedBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase attribute names used
  by the NextBus feed (``routeTag``, ``secsSinceReport``) map
  automatically to snake_case fields.
* ``frozen=True``: records are created once per cycle and never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BusFeedBaseModel(BaseModel):
    """Base for immutable busfeed records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
