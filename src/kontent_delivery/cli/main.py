"""Typer application.

Commands read the configuration from the environment (`KONTENT_DELIVERY_*`
variables or the `.env` written by `setup`) and render results with Rich.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Awaitable, Optional, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from kontent_delivery.cli import doctor
from kontent_delivery.cli.ui_components import (
    build_item_table,
    build_items_table,
    build_taxonomies_tree,
    build_types_table,
    build_warnings_panel,
    print_banner,
)
from kontent_delivery.client import DeliveryClient
from kontent_delivery.core.config import DeliveryClientConfig, DeliverySettings
from kontent_delivery.core.domain.fields import RichTextField
from kontent_delivery.core.errors import DeliveryError

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Query the Delivery API from the terminal.")
app.add_typer(doctor.app, name="doctor")
app.command(name="setup")(doctor.setup)

_console = Console()


def _build_client() -> DeliveryClient:
    return DeliveryClient(DeliveryClientConfig(settings=DeliverySettings()))


def _execute(awaitable: Awaitable[T]) -> T:
    try:
        return asyncio.run(awaitable)
    except DeliveryError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _client_or_exit() -> DeliveryClient:
    try:
        return _build_client()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output of the SDK."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before the output."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if banner:
        print_banner(_console)


@app.command()
def item(
    codename: str = typer.Argument(..., help="Codename of the content item."),
    html: Optional[str] = typer.Option(None, "--html", help="Print the resolved HTML of this rich text element."),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language codename."),
    depth: Optional[int] = typer.Option(None, "--depth", min=0, help="Depth of linked items in the response."),
) -> None:
    """Show one content item."""

    client = _client_or_exit()
    try:
        query = client.item(codename)
        if language:
            query.language(language)
        if depth is not None:
            query.depth(depth)
    except DeliveryError as exc:
        raise typer.BadParameter(str(exc)) from exc

    response = _execute(query.get())

    if html is None:
        _console.print(build_item_table(response.item))
        return

    field = response.item.elements.get(html)
    if not isinstance(field, RichTextField):
        _console.print(f"[red]Error:[/red] '{html}' is not a rich text element of '{codename}'")
        raise typer.Exit(code=1)

    _console.print(field.get_html(), markup=False, highlight=False, soft_wrap=True)
    if field.warnings:
        _console.print(build_warnings_panel(field.warnings))


@app.command()
def items(
    type_: Optional[str] = typer.Option(None, "--type", "-t", help="Only items of this content type."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Maximum number of items."),
    skip: Optional[int] = typer.Option(None, "--skip", min=0, help="Number of items to skip."),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language codename."),
) -> None:
    """List content items."""

    client = _client_or_exit()
    try:
        query = client.items()
        if type_:
            query.type(type_)
        if limit is not None:
            query.limit(limit)
        if skip is not None:
            query.skip(skip)
        if language:
            query.language(language)
    except DeliveryError as exc:
        raise typer.BadParameter(str(exc)) from exc

    response = _execute(query.get())
    _console.print(build_items_table(response.items))
    if response.pagination.has_next_page:
        _console.print(f"[dim]More items available: {response.pagination.next_page}[/dim]")


@app.command()
def types() -> None:
    """List content types."""

    response = _execute(_client_or_exit().types().get())
    _console.print(build_types_table(response.types))


@app.command()
def taxonomies() -> None:
    """List taxonomy groups with their terms."""

    response = _execute(_client_or_exit().taxonomies().get())
    _console.print(build_taxonomies_tree(response.taxonomies))


def run() -> None:
    # Rich output contains non cp1252 characters (banner, tree guides).
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()


if __name__ == "__main__":
    run()
