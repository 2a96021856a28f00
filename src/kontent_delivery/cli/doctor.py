"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kontent_delivery.client import DeliveryClient
from kontent_delivery.core.config import DeliveryClientConfig, DeliverySettings, write_user_env_vars
from kontent_delivery.core.errors import DeliveryError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _build_client(settings: DeliverySettings) -> DeliveryClient:
    return DeliveryClient(DeliveryClientConfig(settings=settings))


async def _check_api(client: DeliveryClient) -> tuple[bool, str]:
    try:
        response = await client.items().limit(1).get()
    except DeliveryError as exc:
        return False, escape(str(exc))
    return True, f"HTTP {response.debug.raw_response.status_code}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = DeliverySettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title="kontent-delivery Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.project_id:
        table.add_row("Project id", "OK", settings.project_id)
    else:
        table.add_row("Project id", "FAIL", "Set KONTENT_DELIVERY_PROJECT_ID or run `kontent-delivery setup`")
    if settings.enable_preview_mode:
        table.add_row("Mode", "OK", f"preview ({settings.preview_base_url})")
    elif settings.enable_secured_mode:
        table.add_row("Mode", "OK", f"secured ({settings.base_url})")
    else:
        table.add_row("Mode", "OK", f"public ({settings.base_url})")
    table.add_row("Default language", "OK", settings.default_language or "project default")

    # Connectivity
    ok_api = False
    if settings.project_id:
        ok_api, detail_api = asyncio.run(_check_api(_build_client(settings)))
        table.add_row("Delivery API", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("Delivery API", "SKIPPED", "No project id")

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)


def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    project_id = typer.prompt("Project id").strip()
    if not project_id:
        raise typer.BadParameter("project id is required")

    mode = typer.prompt("Mode (public, preview, secured)", default="public", show_default=True).strip().lower()
    if mode not in ("public", "preview", "secured"):
        raise typer.BadParameter("mode must be one of: public, preview, secured")

    values: dict[str, str | None] = {
        "KONTENT_DELIVERY_PROJECT_ID": project_id,
        "KONTENT_DELIVERY_ENABLE_PREVIEW_MODE": "true" if mode == "preview" else "false",
        "KONTENT_DELIVERY_ENABLE_SECURED_MODE": "true" if mode == "secured" else "false",
    }
    if mode == "preview":
        values["KONTENT_DELIVERY_PREVIEW_API_KEY"] = typer.prompt("Preview API key", hide_input=True).strip()
    elif mode == "secured":
        values["KONTENT_DELIVERY_SECURED_API_KEY"] = typer.prompt("Secured API key", hide_input=True).strip()

    language = typer.prompt("Default language (empty for project default)", default="", show_default=False).strip()
    if language:
        values["KONTENT_DELIVERY_DEFAULT_LANGUAGE"] = language

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
