"""Base model for forms-service payloads.

Every wire model inherits from :class:`StepsBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase keys map automatically to
  snake_case fields.
* A ``model_validator(mode="before")`` that stashes the original payload
  in ``raw`` (excluded from serialization).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class StepsBaseModel(BaseModel):
    """Base for forms-service models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        # Keep a caller-supplied raw (e.g. model_copy round trips).
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
