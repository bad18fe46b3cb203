from __future__ import annotations

from typing import List

import pytest

from helpers import CONFIG_TEXT, FakeGateway


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    """Record sleeps instead of waiting."""
    delays: List[float] = []
    monkeypatch.setattr("pool_bootstrap.orchestrator.time.sleep", delays.append)
    return delays


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.ts"
    path.write_text(CONFIG_TEXT, encoding="utf-8")
    return path
