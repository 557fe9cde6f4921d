"""Registry of available Markdown renderers."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from .base import BaseRenderer, RendererDescriptor
from .github import GithubRenderer
from .markdownit import MarkdownItRenderer
from .options import DEFAULT_DRIVER
from .python_markdown import PythonMarkdownRenderer

logger = logging.getLogger(__name__)

# Unknown driver ids render with this backend instead of failing.
FALLBACK_DRIVER = DEFAULT_DRIVER

_BUILTIN_RENDERERS = (
    PythonMarkdownRenderer,
    MarkdownItRenderer,
    GithubRenderer,
)

_registry: Dict[str, BaseRenderer] = {}
_registry_lock = threading.Lock()


def _ensure_builtins() -> None:
    if _registry:
        return
    for renderer_cls in _BUILTIN_RENDERERS:
        renderer = renderer_cls()
        _registry[renderer.driver_id] = renderer


def get_renderer_registry() -> Dict[str, BaseRenderer]:
    """Return a snapshot of the driver_id → renderer mapping."""

    with _registry_lock:
        _ensure_builtins()
        return dict(_registry)


def register_renderer(renderer: BaseRenderer, *, replace: bool = False) -> None:
    """Make a renderer selectable by its ``driver_id``."""

    with _registry_lock:
        _ensure_builtins()
        if renderer.driver_id in _registry and not replace:
            raise ValueError(f"Renderer '{renderer.driver_id}' is already registered.")
        _registry[renderer.driver_id] = renderer
    logger.debug("Registered renderer %s (%s)", renderer.driver_id, renderer.display_name)


def unregister_renderer(driver_id: str) -> None:
    if driver_id == FALLBACK_DRIVER:
        raise ValueError(f"The fallback renderer '{driver_id}' cannot be removed.")
    with _registry_lock:
        _ensure_builtins()
        _registry.pop(driver_id, None)


def resolve_driver(driver_id: Optional[str]) -> str:
    registry = get_renderer_registry()
    if driver_id and driver_id in registry:
        return driver_id
    if driver_id:
        logger.warning(
            "Unknown renderer '%s', falling back to '%s'.", driver_id, FALLBACK_DRIVER
        )
    return FALLBACK_DRIVER


def get_renderer(driver_id: Optional[str]) -> BaseRenderer:
    return get_renderer_registry()[resolve_driver(driver_id)]


def driver_display_name(driver_id: Optional[str]) -> str:
    return get_renderer(driver_id).display_name


def list_renderer_descriptors() -> List[RendererDescriptor]:
    return [renderer.describe() for renderer in get_renderer_registry().values()]
