"""Non-fatal issues recorded while resolving fields."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class WarningKind(str, Enum):
    MISSING_ITEM = "missing_item"
    MISSING_TYPE_RESOLVER = "missing_type_resolver"
    MISSING_RICH_TEXT_RESOLVER = "missing_rich_text_resolver"
    RESOLVER_ERROR = "resolver_error"
    MISSING_LINK_RESOLVER = "missing_link_resolver"
    EMPTY_URL = "empty_url"
    MISSING_ASSET = "missing_asset"
    CIRCULAR_REFERENCE = "circular_reference"
    PARSING = "parsing"


class ResolutionWarning(BaseModel):
    """A single issue, in the order it was encountered."""

    model_config = ConfigDict(frozen=True)

    kind: WarningKind = Field(..., description="Category of the issue.")
    message: str = Field(..., min_length=1, description="Human readable description.")
    field_name: str | None = Field(
        default=None,
        description="Field whose resolution produced the issue.",
    )
    codename: str | None = Field(
        default=None,
        description="Codename, id or content type the issue is about.",
    )

    def __str__(self) -> str:
        return self.message


class WarningCollector:
    """Ordered warnings of one field, optionally mirrored to a logger."""

    def __init__(
        self,
        *,
        field_name: str | None,
        enable_advanced_logging: bool,
        logger: logging.Logger,
    ) -> None:
        self.field_name = field_name
        self.enable_advanced_logging = enable_advanced_logging
        self._logger = logger
        self.items: list[ResolutionWarning] = []

    def add(self, kind: WarningKind, message: str, *, codename: str | None = None) -> ResolutionWarning:
        warning = ResolutionWarning(
            kind=kind,
            message=message,
            field_name=self.field_name,
            codename=codename,
        )
        self.items.append(warning)
        if self.enable_advanced_logging:
            self._logger.warning(message)
        return warning
