"""Shared fixtures for the Markdown rendering tests."""

import pytest

from renderers import RenderOptions, normalize_options
from renderers.registry import get_renderer_registry, register_renderer, unregister_renderer

HELLO_WORLD = b"# Hello\n\nWorld\n"

LOCAL_DRIVERS = ["pm", "mi"]


@pytest.fixture
def default_options() -> RenderOptions:
    return normalize_options()


@pytest.fixture
def restore_registry():
    """Undo any renderer registrations made by a test."""
    snapshot = get_renderer_registry()
    yield
    for driver_id in list(get_renderer_registry()):
        if driver_id not in snapshot:
            unregister_renderer(driver_id)
    for renderer in snapshot.values():
        register_renderer(renderer, replace=True)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's environment out of settings-driven tests."""
    for name in ("MDRENDER_DRIVER", "MDRENDER_LOG_LEVEL", "GITHUB_API_URL", "GITHUB_TOKEN", "GITHUB_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
