"""Base model and status enum for parkkean lot records.

Every lot model inherits from :class:`ParkBaseModel` which provides:

* ``alias_generator=to_camel`` so snake_case fields serialize to the
  camelCase keys the status API and browser UI use
  (``walk_time`` -> ``walkTime``).
* ``populate_by_name`` so the store can build models from either form.
* Frozen instances; merging always produces a copy.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CanonicalStatus(StrEnum):
    """Normalized occupancy tier of a lot. No ordering is implied."""

    OPEN = "OPEN"
    LIMITED = "LIMITED"
    FULL = "FULL"

    @classmethod
    def parse(cls, value: object) -> CanonicalStatus | None:
        """Return the member for *value*, or ``None`` when it is not a canonical status."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class ParkBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
