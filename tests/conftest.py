"""Shared test fixtures for stratlens."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run with no STRATLENS_* variables and no .env file in the cwd."""
    monkeypatch.chdir(tmp_path)
    env = {k: v for k, v in os.environ.items() if not k.startswith("STRATLENS_")}
    with patch.dict(os.environ, env, clear=True):
        yield
