"""Renderer registry and shared interfaces for Markdown → HTML pipelines."""

from .base import (
    BaseRenderer,
    ConversionError,
    ParseError,
    RenderedOutput,
    RendererDescriptor,
    UnsupportedOperationError,
)
from .options import DEFAULT_DRIVER, RenderOptions, normalize_options
from .registry import (
    FALLBACK_DRIVER,
    driver_display_name,
    get_renderer,
    get_renderer_registry,
    list_renderer_descriptors,
    register_renderer,
    resolve_driver,
    unregister_renderer,
)
from .title import sniff_title

__all__ = [
    "BaseRenderer",
    "ConversionError",
    "DEFAULT_DRIVER",
    "FALLBACK_DRIVER",
    "ParseError",
    "RenderOptions",
    "RenderedOutput",
    "RendererDescriptor",
    "UnsupportedOperationError",
    "driver_display_name",
    "get_renderer",
    "get_renderer_registry",
    "list_renderer_descriptors",
    "normalize_options",
    "register_renderer",
    "resolve_driver",
    "sniff_title",
    "unregister_renderer",
]
