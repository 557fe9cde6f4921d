"""Service layer orchestrating Markdown → HTML conversion."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence, Union

from renderers import (
    ConversionError,
    RenderedOutput,
    RenderOptions,
    get_renderer,
    list_renderer_descriptors,
    normalize_options,
)

from .output import STDOUT_NAME, write_output

logger = logging.getLogger(__name__)

OptionsLike = Union[RenderOptions, Mapping[str, object], None]


@dataclass(frozen=True)
class ConversionRequest:
    """One source document paired with its normalized options."""

    source: bytes
    options: RenderOptions

    @property
    def driver(self) -> str:
        return self.options.driver


@dataclass(frozen=True)
class SourceDocument:
    name: str
    content: bytes
    output: Optional[str] = None


@dataclass
class DocumentOutcome:
    name: str
    output: str
    driver: Optional[str] = None
    display_name: Optional[str] = None
    error: Optional[ConversionError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "output": self.output,
            "driver": self.driver,
            "display_name": self.display_name,
            "error": str(self.error) if self.error else None,
        }


def list_available_drivers() -> List[Dict[str, object]]:
    """Return metadata about all registered renderers."""

    return [descriptor.as_dict() for descriptor in list_renderer_descriptors()]


def build_request(source: bytes, options: OptionsLike = None) -> ConversionRequest:
    return ConversionRequest(source=bytes(source), options=normalize_options(options))


def _render_request(request: ConversionRequest) -> RenderedOutput:
    renderer = get_renderer(request.driver)
    logger.debug(
        "Rendering %d bytes with %s (%s)",
        len(request.source),
        renderer.driver_id,
        renderer.display_name,
    )
    return renderer.render(request.source, request.options)


def render_markdown(source: bytes, options: OptionsLike = None) -> RenderedOutput:
    """Render Markdown bytes to HTML without writing anything."""

    return _render_request(build_request(source, options))


def convert_markdown(source: bytes, options: OptionsLike = None) -> RenderedOutput:
    """Render Markdown bytes and write the result to ``options.output``."""

    request = build_request(source, options)
    rendered = _render_request(request)
    write_output(rendered.content, request.options.output)
    return rendered


def _convert_document(document: SourceDocument, options: RenderOptions) -> DocumentOutcome:
    output = document.output if document.output is not None else options.output
    outcome = DocumentOutcome(name=document.name, output=output or STDOUT_NAME)
    try:
        rendered = convert_markdown(document.content, replace(options, output=output))
    except ConversionError as exc:
        outcome.error = exc
        return outcome
    outcome.driver = rendered.driver
    outcome.display_name = rendered.display_name
    return outcome


def convert_documents(
    documents: Sequence[SourceDocument],
    options: OptionsLike = None,
    *,
    fail_fast: bool = False,
    max_workers: Optional[int] = None,
) -> List[DocumentOutcome]:
    """Convert several documents independently.

    A failing document is recorded in its outcome and its siblings still run,
    unless ``fail_fast`` is set: then the first error in input order is raised.
    With ``max_workers`` above one the documents are converted on a thread
    pool; outcomes keep the input order either way.
    """

    effective = normalize_options(options)
    outcomes: List[DocumentOutcome] = []

    if max_workers and max_workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(
                executor.map(lambda doc: _convert_document(doc, effective), documents)
            )
        if fail_fast:
            for outcome in outcomes:
                if outcome.error is not None:
                    raise outcome.error
        return outcomes

    for document in documents:
        outcome = _convert_document(document, effective)
        if fail_fast and outcome.error is not None:
            raise outcome.error
        outcomes.append(outcome)
    return outcomes
