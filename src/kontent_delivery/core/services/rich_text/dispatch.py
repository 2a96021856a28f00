"""Resolution of linked items, components and assets.

Every function returns `True` when it mutated the document. Failures are
recorded as warnings and leave the element exactly as it was.
"""

from __future__ import annotations

from kontent_delivery.core.domain.models import find_type_resolver
from kontent_delivery.core.domain.warnings import WarningKind
from kontent_delivery.core.services.rich_text.context import ResolutionPass
from kontent_delivery.core.services.rich_text.references import Reference, ReferenceKind


def resolve_item_reference(reference: Reference, state: ResolutionPass) -> bool:
    label = "component" if reference.kind is ReferenceKind.COMPONENT else "linked item"
    key = reference.key

    item = state.context.linked_items.get(key)
    if item is None:
        state.collector.add(
            WarningKind.MISSING_ITEM,
            f"Cannot resolve {label} '{key}' in '{state.field_name}' field because it is not "
            "present in the response. Try increasing the 'depth' parameter.",
            codename=key,
        )
        return False

    content_type = item.system.type if item.system else ""
    resolver = find_type_resolver(state.context.type_resolvers, content_type)
    if resolver is None:
        state.collector.add(
            WarningKind.MISSING_TYPE_RESOLVER,
            f"Cannot resolve {label} '{key}' in '{state.field_name}' field because no type "
            f"resolver is registered for '{content_type}' type.",
            codename=content_type,
        )
        return False

    if resolver.rich_text_resolver is None:
        state.collector.add(
            WarningKind.MISSING_RICH_TEXT_RESOLVER,
            f"Cannot resolve {label} '{key}' in '{state.field_name}' field because the type "
            f"resolver of '{content_type}' type has no rich text resolver.",
            codename=content_type,
        )
        return False

    try:
        markup = resolver.rich_text_resolver(item, state.context.linked_items)
    except Exception as exc:
        state.collector.add(
            WarningKind.RESOLVER_ERROR,
            f"Rich text resolver of '{content_type}' type failed for {label} '{key}' in "
            f"'{state.field_name}' field ({exc!r}). Element: "
            f"{state.parser.outer_html(state.document, reference.element)}",
            codename=key,
        )
        return False

    if not isinstance(markup, str):
        state.collector.add(
            WarningKind.RESOLVER_ERROR,
            f"Rich text resolver of '{content_type}' type returned {type(markup).__name__} "
            f"instead of a string for {label} '{key}' in '{state.field_name}' field.",
            codename=key,
        )
        return False

    state.parser.replace_with(state.document, reference.element, markup)
    return True


def resolve_asset_reference(reference: Reference, state: ResolutionPass) -> bool:
    image = state.images.get(reference.key)
    if image is None:
        state.collector.add(
            WarningKind.MISSING_ASSET,
            f"Cannot resolve asset '{reference.key}' in '{state.field_name}' field because it "
            "is not listed in the field's images.",
            codename=reference.key,
        )
        return False

    image_resolver = state.context.image_resolver
    if image_resolver is None:
        if reference.tag != "img":
            return False
        if state.parser.get_attribute(reference.element, "src") == image.url:
            return False
        state.parser.set_attribute(state.document, reference.element, "src", image.url)
        return True

    try:
        markup = image_resolver(image)
    except Exception as exc:
        state.collector.add(
            WarningKind.RESOLVER_ERROR,
            f"Image resolver failed for asset '{reference.key}' in '{state.field_name}' field "
            f"({exc!r}). Element: {state.parser.outer_html(state.document, reference.element)}",
            codename=reference.key,
        )
        return False

    if not isinstance(markup, str):
        state.collector.add(
            WarningKind.RESOLVER_ERROR,
            f"Image resolver returned {type(markup).__name__} instead of a string for asset "
            f"'{reference.key}' in '{state.field_name}' field.",
            codename=reference.key,
        )
        return False

    state.parser.replace_with(state.document, reference.element, markup)
    return True
