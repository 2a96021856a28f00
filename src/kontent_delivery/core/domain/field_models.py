"""Value objects carried by fields."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class AssetModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="File name of the asset.")
    type: str = Field(default="", description="MIME type of the asset.")
    size: int = Field(default=0, ge=0, description="Size in bytes.")
    description: str | None = Field(default=None, description="Description in the item's language.")
    url: str = Field(..., min_length=1, description="Absolute URL of the asset.")


class MultipleChoiceOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    codename: str


class TaxonomyTerm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    codename: str


class RichTextImage(BaseModel):
    """Entry of a rich text element's `images` map."""

    model_config = ConfigDict(extra="ignore")

    image_id: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    description: str | None = None
    width: int | None = None
    height: int | None = None


class RichTextLink(BaseModel):
    """Entry of a rich text element's `links` map (keyed by item id)."""

    model_config = ConfigDict(extra="ignore")

    item_id: str = Field(..., min_length=1)
    codename: str = Field(..., min_length=1)
    type: str | None = Field(default=None, description="Content type of the linked item.")
    url_slug: str | None = None
