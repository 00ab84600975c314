from __future__ import annotations

from typing import ClassVar

from pydantic import VERSION, BaseModel, ConfigDict

__all__ = ["_BaseModel"]

# validate_by_name added in pydantic 2.9, populate_by_name deprecated in 2.11
_PYDANTIC_V2_9 = tuple(int(x) for x in VERSION.split(".")[:2]) >= (2, 9)
_by_name_key = "validate_by_name" if _PYDANTIC_V2_9 else "populate_by_name"


class _BaseModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        validate_default=True,
        **{_by_name_key: True},  # type: ignore[typeddict-item]
    )

    xml_text_field: ClassVar[str | None] = None
    """Name of the field holding the element's text content, if any."""

