#!/usr/bin/env python3
"""
Markdown Render API
A FastAPI wrapper around the Markdown → HTML conversion pipeline with selectable renderers.
"""

import logging
import os
import socket
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field
import uvicorn

from renderers import (
    DEFAULT_DRIVER,
    ParseError,
    RenderedOutput,
    UnsupportedOperationError,
)
from services import configure_renderers, list_available_drivers, load_settings, render_markdown

settings = load_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

configure_renderers(settings)

app = FastAPI(
    title="Markdown Render API",
    description="Convert Markdown documents to HTML",
    version="1.0.0"
)

# Enable CORS for cross-origin usage (e.g., accessing API from other devices)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RenderPayload(BaseModel):
    markdown: str
    toc: bool = False
    toc_only: bool = False
    page: bool = False
    latex: bool = False
    smartypants: bool = True
    latexdashes: bool = True
    fractions: bool = True
    html_simple: bool = True
    css: str = ""
    title: str = ""
    driver: Optional[str] = Field(default=None, description="Renderer id, e.g. 'pm' or 'mi'")

    def options(self) -> dict:
        options = self.model_dump(exclude={"markdown"})
        options["driver"] = self.driver or settings.default_driver
        return options


def run_render(source: bytes, options: dict) -> RenderedOutput:
    """
    Render Markdown and translate pipeline errors into HTTP errors.

    Args:
        source: Raw Markdown bytes
        options: Option mapping understood by the normalizer

    Returns:
        RenderedOutput: rendered HTML and the renderer that produced it
    """
    # Output destinations are a command line concern; the API always returns the body.
    options = {**options, "output": ""}
    try:
        rendered = render_markdown(source, options)
    except UnsupportedOperationError as exc:
        raise HTTPException(status_code=501, detail=str(exc)) from exc
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Unexpected error during rendering")
        raise HTTPException(status_code=500, detail="Unexpected error during rendering") from exc

    logger.info(
        "Rendered %d bytes with %s (%d bytes out)",
        len(source),
        rendered.display_name,
        len(rendered.content)
    )
    return rendered


@app.get("/drivers")
async def get_drivers():
    """List all available renderers."""
    return {
        "drivers": list_available_drivers(),
        "default": settings.default_driver or DEFAULT_DRIVER,
    }


@app.post("/render", response_class=HTMLResponse)
def render_document(
    file: UploadFile = File(...),
    toc: bool = Form(False),
    toc_only: bool = Form(False),
    page: bool = Form(False),
    latex: bool = Form(False),
    smartypants: bool = Form(True),
    latexdashes: bool = Form(True),
    fractions: bool = Form(True),
    html_simple: bool = Form(True),
    css: str = Form(""),
    title: str = Form(""),
    driver: Optional[str] = Form(None)
):
    """
    Render an uploaded Markdown file to HTML.

    Returns:
        HTML response with the rendered document
    """
    try:
        content = file.file.read()
    except Exception as exc:
        raise HTTPException(status_code=400, detail="Failed to read uploaded file") from exc

    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    rendered = run_render(content, {
        "toc": toc,
        "toc_only": toc_only,
        "page": page,
        "latex": latex,
        "smartypants": smartypants,
        "latexdashes": latexdashes,
        "fractions": fractions,
        "html_simple": html_simple,
        "css": css,
        "title": title,
        "driver": driver or settings.default_driver,
    })
    return HTMLResponse(
        content=rendered.content.decode("utf-8"),
        headers={"X-Renderer": rendered.driver}
    )


@app.post("/render/json")
def render_json(payload: RenderPayload):
    """Render Markdown posted as JSON and return the HTML in a JSON envelope."""
    rendered = run_render(payload.markdown.encode("utf-8"), payload.options())
    return rendered.as_dict()


if __name__ == "__main__":
    host = os.environ.get("HOST", "0.0.0.0")
    try:
        port = int(os.environ.get("PORT", "8000"))
    except ValueError:
        port = 8000

    def get_local_ip() -> str:
        try:
            s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                s.connect(("8.8.8.8", 80))
                ip_addr = s.getsockname()[0]
            finally:
                s.close()
            return ip_addr
        except OSError:
            return "127.0.0.1"

    print("="*60)
    print("Markdown Render Server")
    print("="*60)
    print(f"Default Renderer: {settings.default_driver}")
    print("="*60)
    local_ip = get_local_ip()
    print(f"\nStarting server on http://{host}:{port}")
    print(f"Local access:   http://127.0.0.1:{port}")
    print(f"LAN access:     http://{local_ip}:{port}")
    print("="*60 + "\n")

    uvicorn.run(app, host=host, port=port)
