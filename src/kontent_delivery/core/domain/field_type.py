"""Element types returned by the Delivery API."""

from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    """Closed set of field kinds a content item element can map to."""

    TEXT = "text"
    NUMBER = "number"
    DATE_TIME = "date_time"
    MULTIPLE_CHOICE = "multiple_choice"
    ASSET = "asset"
    TAXONOMY = "taxonomy"
    URL_SLUG = "url_slug"
    RICH_TEXT = "rich_text"
    LINKED_ITEMS = "modular_content"

    @classmethod
    def from_api(cls, value: str) -> "FieldType | None":
        """Return the matching member or `None` for element types the SDK does not know."""

        try:
            return cls(value)
        except ValueError:
            return None
