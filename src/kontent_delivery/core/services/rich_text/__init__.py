"""Rich text resolution pipeline."""

from kontent_delivery.core.services.rich_text.context import (
    ImageResolver,
    ResolutionPass,
    RichTextContext,
)
from kontent_delivery.core.services.rich_text.references import (
    Reference,
    ReferenceKind,
    extract_references,
)
from kontent_delivery.core.services.rich_text.resolver import (
    ResolutionResult,
    RichTextResolver,
    resolve_rich_text,
)

__all__ = [
    "ImageResolver",
    "Reference",
    "ReferenceKind",
    "ResolutionPass",
    "ResolutionResult",
    "RichTextContext",
    "RichTextResolver",
    "extract_references",
    "resolve_rich_text",
]
