"""Pytest configuration ensuring project root is importable.

Adds repository root to sys.path explicitly to avoid interpreter/path quirks.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch):  # noqa: D401
    """Ensure global config/env/metrics side effects do not leak.

    - Point config at the repo's configs/ dir (independent of cwd)
    - Drop REDUXMOD__* overrides from the outer environment
    - Clear aggregated config cache and metrics between tests
    """
    from reduxmod import metrics
    from reduxmod.config import clear_config_cache  # local import

    monkeypatch.setenv("REDUXMOD_CONFIG_DIR", str(ROOT / "configs"))
    for key in list(os.environ):
        if key.startswith("REDUXMOD__"):
            monkeypatch.delenv(key)
    clear_config_cache()
    metrics.reset_for_tests()
    try:
        yield
    finally:
        clear_config_cache()
