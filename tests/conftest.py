from __future__ import annotations

import os

import pytest

from epigraph.pneuma.abi import load_abi
from epigraph.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep EPIGRAPH_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("EPIGRAPH_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def abi() -> list[dict]:
    return load_abi("MessageStore")
