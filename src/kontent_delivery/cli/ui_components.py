"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables and panels are reused by several commands.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from kontent_delivery.core.domain.fields import (
    AssetField,
    BaseField,
    LinkedItemsField,
    MultipleChoiceField,
    RichTextField,
    TaxonomyField,
)
from kontent_delivery.core.domain.models import ContentItem, ContentType, TaxonomyGroup, TaxonomyTermNode
from kontent_delivery.core.domain.warnings import ResolutionWarning

_PREVIEW_LENGTH = 60


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Why here:
    - Avoids circular imports (main <-> doctor).
    - Commands meant for pipelines can skip it.
    """

    title = Text("kontent-delivery", style="bold cyan")
    subtitle = Text("Delivery API • Content items • Rich text", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _preview(field: BaseField) -> str:
    if isinstance(field, AssetField):
        text = ", ".join(asset.name or asset.url for asset in field.assets)
    elif isinstance(field, TaxonomyField):
        text = ", ".join(term.codename for term in field.taxonomy_terms)
    elif isinstance(field, MultipleChoiceField):
        text = ", ".join(option.codename for option in field.options)
    elif isinstance(field, LinkedItemsField):
        text = ", ".join(str(codename) for codename in field.value or [])
    elif field.value is None:
        text = ""
    else:
        text = str(field.value)

    text = " ".join(text.split())
    if len(text) > _PREVIEW_LENGTH:
        return text[: _PREVIEW_LENGTH - 1] + "…"
    return text


def build_items_table(items: Iterable[ContentItem], title: str = "Content items") -> Table:
    table = Table(title=title)
    table.add_column("Codename", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Type", style="magenta")
    table.add_column("Language", style="dim")
    table.add_column("Last modified", style="dim")
    for item in items:
        system = item.system
        if system is None:
            continue
        table.add_row(
            system.codename,
            system.name,
            system.type,
            system.language or "",
            system.last_modified.isoformat() if system.last_modified else "",
        )
    return table


def build_item_table(item: ContentItem) -> Table:
    """Elements of a single item."""

    table = Table(title=f"{item.system.name} ({item.codename})" if item.system else "Content item")
    table.add_column("Element", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Value", style="white")
    for name, field in item.elements.items():
        kind = field.type.value
        if isinstance(field, RichTextField) and field.linked_codenames:
            kind = f"{kind} (+{len(field.linked_codenames)})"
        table.add_row(name, kind, Text(_preview(field)))
    return table


def build_types_table(types: Sequence[ContentType]) -> Table:
    table = Table(title="Content types")
    table.add_column("Codename", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Elements", style="magenta")
    for content_type in types:
        table.add_row(
            content_type.system.codename,
            content_type.system.name,
            ", ".join(content_type.elements),
        )
    return table


def _add_terms(node: Tree, terms: Sequence[TaxonomyTermNode]) -> None:
    for term in terms:
        child = node.add(f"{escape(term.name)} [dim]({escape(term.codename)})[/dim]")
        _add_terms(child, term.terms)


def build_taxonomies_tree(taxonomies: Sequence[TaxonomyGroup]) -> Tree:
    root = Tree("[bold]Taxonomies[/bold]")
    for group in taxonomies:
        branch = root.add(f"[cyan]{escape(group.system.name)}[/cyan] [dim]({escape(group.system.codename)})[/dim]")
        _add_terms(branch, group.terms)
    return root


def build_warnings_panel(warnings: Sequence[ResolutionWarning]) -> Panel:
    body = Text()
    for warning in warnings:
        body.append(f"[{warning.kind.value}] ", style="bold yellow")
        body.append(f"{warning.message}\n")
    return Panel(body, title=Text("Resolution warnings", style="bold yellow"), border_style="yellow")
