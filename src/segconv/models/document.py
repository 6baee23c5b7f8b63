"""Canonical document model shared by every format adapter."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Separators(BaseModel):
    """Element/segment delimiter pair for the flat-text form."""

    model_config = ConfigDict(frozen=True)

    element: str = Field(min_length=1, max_length=1)
    segment: str = Field(min_length=1, max_length=1)

    @model_validator(mode="after")
    def _distinct(self) -> "Separators":
        if self.element == self.segment:
            raise ValueError(
                "element and segment separators must differ"
            )
        return self


class Segment(BaseModel):
    """One record: an identifier followed by its ordered elements.

    Bookkeeping fields found on input (``_order``, ``_originalOrder``) are
    ignored.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    segment_id: str = Field(min_length=1)
    elements: List[str] = Field(default_factory=list)


class Metadata(BaseModel):
    """Side-channel facts about the flat-text source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ends_with_separator: bool = Field(default=False, alias="endsWithSeparator")


class Document(BaseModel):
    """Ordered segments plus metadata.

    Wire shape (``to_dict``)::

        {"segments": [{"segment_id": "ISA", "elements": ["00", ""]}],
         "_metadata": {"endsWithSeparator": true}}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    segments: List[Segment] = Field(default_factory=list)
    metadata: Metadata = Field(default_factory=Metadata, alias="_metadata")

    @field_validator("metadata", mode="before")
    @classmethod
    def _missing_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def ends_with_separator(self) -> bool:
        return self.metadata.ends_with_separator

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire dict, internal ``_metadata`` included."""
        return self.model_dump(by_alias=True)


__all__ = ["Document", "Metadata", "Segment", "Separators"]
