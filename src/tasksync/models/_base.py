"""Base model for task service payloads.

Every task service model inherits from :class:`TaskSyncBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase service keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead.

Identifiers use the :data:`TaskId` annotated type: the service may send
ids as numbers or strings, locally they are always opaque strings.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints, model_validator
from pydantic.alias_generators import to_camel


def parse_task_id(value: Any) -> Any:
    """Normalise a service-assigned id to ``str``.

    Integers become their decimal string.  Booleans are left untouched so
    string validation rejects them.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


TaskId = Annotated[str, StringConstraints(min_length=1), BeforeValidator(parse_task_id)]
"""Annotated type for opaque, server-assigned task identifiers."""


class TaskSyncBaseModel(BaseModel):
    """Base for task service payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop explicit ``null`` values sent by the service."""
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}
