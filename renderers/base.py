"""Base types for Markdown → HTML rendering backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict

from .options import RenderOptions
from .page import render_page
from .title import sniff_title

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Base exception for every failure surfaced by the conversion pipeline."""


class UnsupportedOperationError(ConversionError):
    """Raised when a backend is asked for output it cannot produce (e.g. LaTeX)."""


class ParseError(ConversionError):
    """Raised when a backend fails to turn the input into a rendered document."""


@dataclass(frozen=True)
class RenderedOutput:
    """Bytes produced by a backend together with the backend that produced them."""

    content: bytes
    driver: str
    display_name: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "driver": self.driver,
            "display_name": self.display_name,
            "html": self.content.decode("utf-8"),
        }


@dataclass(frozen=True)
class RendererDescriptor:
    """Metadata describing a registered rendering backend."""

    driver_id: str
    display_name: str
    description: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.driver_id,
            "name": self.display_name,
            "description": self.description,
        }


def decode_source(source: bytes) -> str:
    """Decode raw Markdown bytes, tolerating a UTF-8 byte-order mark."""

    try:
        return source.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Markdown input is not valid UTF-8: {exc}") from exc


class BaseRenderer(ABC):
    """Abstract base class for interchangeable Markdown renderers.

    Subclasses only produce the HTML fragment; LaTeX rejection, decoding, error
    wrapping and the standalone page shell are shared here so every backend
    honours the same option semantics.
    """

    driver_id: str
    display_name: str
    description: str = ""

    def __init__(self) -> None:
        if not getattr(self, "driver_id", None):
            raise ValueError("Renderer must define 'driver_id'.")
        if not getattr(self, "display_name", None):
            raise ValueError("Renderer must define 'display_name'.")

    def render(self, source: bytes, options: RenderOptions) -> RenderedOutput:
        """Render Markdown bytes according to already-normalized options."""

        if options.render_latex:
            raise UnsupportedOperationError(
                f"LaTeX output is not supported by the {self.display_name} renderer."
            )

        text = decode_source(source)

        try:
            html = self.render_html(text, options)
        except ConversionError:
            raise
        except Exception as exc:  # pragma: no cover - parser libraries may raise anything
            raise ParseError(f"Renderer '{self.driver_id}' failed: {exc}") from exc

        if options.standalone_page:
            title = options.title or sniff_title(source)
            logger.debug("Wrapping %s output in page shell (title=%r)", self.driver_id, title)
            html = render_page(html, title=title, css=options.css)

        return RenderedOutput(
            content=html.encode("utf-8"),
            driver=self.driver_id,
            display_name=self.display_name,
        )

    def describe(self) -> RendererDescriptor:
        return RendererDescriptor(
            driver_id=self.driver_id,
            display_name=self.display_name,
            description=self.description,
        )

    @abstractmethod
    def render_html(self, text: str, options: RenderOptions) -> str:
        """Return the HTML fragment (TOC and/or body) for decoded Markdown text."""
