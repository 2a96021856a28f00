from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in (
        "KONTENT_DELIVERY_PROJECT_ID",
        "KONTENT_DELIVERY_PREVIEW_API_KEY",
        "KONTENT_DELIVERY_SECURED_API_KEY",
        "KONTENT_DELIVERY_ENABLE_PREVIEW_MODE",
        "KONTENT_DELIVERY_ENABLE_SECURED_MODE",
        "KONTENT_DELIVERY_DEFAULT_LANGUAGE",
        "KONTENT_DELIVERY_ENABLE_ADVANCED_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
