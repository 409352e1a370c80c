"""Shared pytest configuration for the engine test suite."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Generator

import pytest
import structlog


# Ensure the repository root (which contains the ``finance_engine`` package) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Isolate every test from the environment, the .env file and logging setup."""
    from finance_engine.config import get_settings

    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("FINANCE_ENGINE_"):
            monkeypatch.delenv(name)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    logging.getLogger("finance_engine").setLevel(logging.NOTSET)
