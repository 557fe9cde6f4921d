"""Service layer exports."""

from .markdown_conversion import (
    ConversionRequest,
    DocumentOutcome,
    SourceDocument,
    build_request,
    convert_documents,
    convert_markdown,
    list_available_drivers,
    render_markdown,
)
from .output import (
    OutputCreationError,
    OutputError,
    OutputWriteError,
    open_destination,
    write_output,
)
from .settings import ServiceSettings, configure_renderers, load_settings

__all__ = [
    "ConversionRequest",
    "DocumentOutcome",
    "OutputCreationError",
    "OutputError",
    "OutputWriteError",
    "ServiceSettings",
    "SourceDocument",
    "build_request",
    "configure_renderers",
    "convert_documents",
    "convert_markdown",
    "list_available_drivers",
    "load_settings",
    "open_destination",
    "render_markdown",
    "write_output",
]
