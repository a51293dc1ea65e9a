"""Integration test fixtures.

Provides a fully wired AppState around a real ``httpx.AsyncClient`` (mocked
per test with respx), and an isolated environment for server subprocesses.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from troubledocs.config import Settings
from troubledocs.server import build_state

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

    from troubledocs.state import AppState


@pytest.fixture()
async def app_state() -> AsyncIterator[AppState]:
    async with httpx.AsyncClient(follow_redirects=False) as client:
        yield build_state(Settings(), client)


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Environment for ``python -m troubledocs.server`` that ignores any user config."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("TROUBLEDOCS__")}
    env["HOME"] = str(tmp_path)
    return env
