"""
Pydantic schemas for the styles catalog.

The create schema enforces the public form limits; the update schema
accepts any subset of the same fields but at least one of them.
"""

from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator

NAME_MAX_LENGTH = 80
DESCRIPTION_MAX_LENGTH = 500
IMAGE_URL_MAX_LENGTH = 300


def _check_image_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("imageUrl must be an absolute http(s) URL")
    return value


class StyleCreate(BaseModel):
    """Payload for adding a style to the catalog."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: StrictStr = Field("", max_length=DESCRIPTION_MAX_LENGTH)
    imageUrl: StrictStr = Field("", max_length=IMAGE_URL_MAX_LENGTH)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        return _check_image_url(v)


class StyleUpdate(BaseModel):
    """Partial update; only the fields actually sent are applied."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[StrictStr] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    imageUrl: Optional[StrictStr] = Field(None, max_length=IMAGE_URL_MAX_LENGTH)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_image_url(v)

    @model_validator(mode="after")
    def require_one_field(self) -> "StyleUpdate":
        if not self.model_fields_set:
            raise ValueError("at_least_one_field_required")
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(include=self.model_fields_set)
