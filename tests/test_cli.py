from __future__ import annotations

import httpx
import pytest
from typer.testing import CliRunner

from kontent_delivery.cli import doctor
from kontent_delivery.cli import main as cli_main
from kontent_delivery.core.config import write_user_env_vars
from kontent_delivery.core.domain.models import TypeResolver
from tests.factories import (
    PROJECT_ID,
    json_response,
    linked_object,
    make_client,
    make_item,
    rich_text_element,
    settings,
    text_element,
)

runner = CliRunner()


def _items_payload() -> dict:
    return {
        "items": [make_item("espresso", "coffee"), make_item("latte", "coffee")],
        "modular_content": {},
        "pagination": {"skip": 0, "limit": 2, "count": 2, "next_page": ""},
    }


@pytest.fixture
def requests(monkeypatch) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        path = request.url.path
        if path.endswith("/items"):
            return json_response(_items_payload())
        if path.endswith("/items/missing"):
            return json_response({"message": "Not found", "request_id": "r"}, status_code=404)
        if path.endswith("/types"):
            return json_response(
                {
                    "types": [{"system": {"id": "t", "name": "Coffee", "codename": "coffee"}, "elements": {}}],
                    "pagination": {},
                }
            )
        if path.endswith("/taxonomies"):
            return json_response(
                {
                    "taxonomies": [
                        {
                            "system": {"id": "x", "name": "Personas", "codename": "personas"},
                            "terms": [{"name": "Barista", "codename": "barista", "terms": []}],
                        }
                    ],
                    "pagination": {},
                }
            )
        return json_response(
            {
                "item": make_item(
                    "on_roasts",
                    "article",
                    {
                        "title": text_element("On Roasts"),
                        "body": rich_text_element("<p>Hi</p>" + linked_object("t1")),
                    },
                ),
                "modular_content": {"t1": make_item("t1", "tweet")},
            }
        )

    client = make_client(
        handler,
        type_resolvers=[TypeResolver("tweet", rich_text_resolver=lambda item, linked: "<blockquote/>")],
    )
    monkeypatch.setattr(cli_main, "_build_client", lambda: client)
    return seen


def test_items_command_lists_items(requests):
    result = runner.invoke(cli_main.app, ["items", "--type", "coffee", "--limit", "2"])

    assert result.exit_code == 0, result.output
    assert "espresso" in result.output
    assert "latte" in result.output
    [request] = requests
    assert request.url.params["system.type"] == "coffee"
    assert request.url.params["limit"] == "2"


def test_item_command_shows_elements(requests):
    result = runner.invoke(cli_main.app, ["item", "on_roasts"])

    assert result.exit_code == 0, result.output
    assert "title" in result.output
    assert "On Roasts" in result.output


def test_item_command_prints_resolved_rich_text(requests):
    result = runner.invoke(cli_main.app, ["item", "on_roasts", "--html", "body"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "<p>Hi</p><blockquote/>"


def test_item_command_rejects_non_rich_text_elements(requests):
    result = runner.invoke(cli_main.app, ["item", "on_roasts", "--html", "title"])

    assert result.exit_code == 1
    assert "not a rich text element" in result.output


def test_api_errors_exit_with_status_one(requests):
    result = runner.invoke(cli_main.app, ["item", "missing"])

    assert result.exit_code == 1
    assert "404" in result.output


def test_types_and_taxonomies_commands(requests):
    types_result = runner.invoke(cli_main.app, ["types"])
    taxonomies_result = runner.invoke(cli_main.app, ["taxonomies"])

    assert types_result.exit_code == 0, types_result.output
    assert "coffee" in types_result.output
    assert taxonomies_result.exit_code == 0, taxonomies_result.output
    assert "barista" in taxonomies_result.output


def test_doctor_reports_connectivity(monkeypatch):
    monkeypatch.setenv("KONTENT_DELIVERY_PROJECT_ID", PROJECT_ID)
    client = make_client(lambda request: json_response(_items_payload()))
    monkeypatch.setattr(doctor, "_build_client", lambda current: client)

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert PROJECT_ID in result.output
    assert "HTTP 200" in result.output


def test_doctor_fails_without_project_id(monkeypatch):
    monkeypatch.setattr(doctor, "DeliverySettings", lambda: settings(project_id=""))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "SKIPPED" in result.output


def test_setup_writes_user_env(monkeypatch, tmp_path):
    env_path = tmp_path / "user.env"
    monkeypatch.setattr(doctor, "write_user_env_vars", lambda values: write_user_env_vars(values, env_path=env_path))

    result = runner.invoke(cli_main.app, ["setup"], input="p-9\npreview\nsecret\nes-ES\n")

    assert result.exit_code == 0, result.output
    content = env_path.read_text(encoding="utf-8")
    assert "KONTENT_DELIVERY_PROJECT_ID=p-9" in content
    assert "KONTENT_DELIVERY_ENABLE_PREVIEW_MODE=true" in content
    assert "KONTENT_DELIVERY_PREVIEW_API_KEY=secret" in content
    assert "KONTENT_DELIVERY_DEFAULT_LANGUAGE=es-ES" in content
