"""Pytest configuration for agentstamp tests."""

import logging

import pytest

try:
    import instrukt_ai_logging

    def _noop_configure_logging(*_args, **_kwargs):  # type: ignore[no-untyped-def]
        return None

    instrukt_ai_logging.configure_logging = _noop_configure_logging  # type: ignore[assignment]
    logging.getLogger("agentstamp").handlers.clear()
    logging.getLogger().handlers.clear()
except Exception:
    pass


@pytest.fixture(autouse=True)
def _clean_agentstamp_env(monkeypatch):
    """Keep the developer's own agentstamp environment out of tests."""
    for name in ("AGENTSTAMP_CONFIG", "AGENTSTAMP_TOOL_BINARY", "AGENTSTAMP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def pytest_collection_modifyitems(config, items):
    """Per-directory timeouts: unit=1s, integration=5s (real child processes)."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))
