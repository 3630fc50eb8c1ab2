"""Pydantic models for API requests.

Field names are snake_case in Python and camelCase on the wire
(``ageRange``, ``isPublic``); either spelling is accepted on input.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, model_validator
from pydantic.alias_generators import to_camel

from ...core.types import TITLE_MAX_LENGTH
from .enums import AgeRange, Topic


class CamelModel(BaseModel):
    """Base model with camelCase aliases and whitespace trimming."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class GenerateTaleRequest(CamelModel):
    """Request body for asking the narrative generator for a tale."""

    age_range: AgeRange = Field(..., description="Reader age band", examples=["5-7"])
    topic: Topic = Field(..., description="Tale topic", examples=["animals"])
    main_character: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Name of the main character",
        examples=["Pip the hedgehog"],
    )
    setting: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Where the tale takes place",
        examples=["a snowy forest"],
    )
    additional_details: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Anything else the tale should include",
    )


class CreateTaleRequest(CamelModel):
    """Request body for saving a new tale."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1)
    age_range: AgeRange
    topic: Topic
    is_public: StrictBool = False


class UpdateTaleRequest(CamelModel):
    """Partial update of a tale. Only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: Optional[str] = Field(default=None, min_length=1)
    age_range: Optional[AgeRange] = None
    topic: Optional[Topic] = None
    is_public: Optional[StrictBool] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "UpdateTaleRequest":
        """Fields may be omitted but not cleared."""
        cleared = sorted(
            name for name in self.model_fields_set if getattr(self, name) is None
        )
        if cleared:
            raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        return self
