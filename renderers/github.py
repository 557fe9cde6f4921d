"""Renderer delegating to GitHub's Markdown API."""

from __future__ import annotations

from typing import Dict, Optional

import requests

from .base import BaseRenderer, ParseError, UnsupportedOperationError
from .options import RenderOptions

GITHUB_MARKDOWN_URL = "https://api.github.com/markdown/raw"
DEFAULT_TIMEOUT = 30.0


class GithubRenderer(BaseRenderer):
    """Render through ``POST /markdown/raw``.

    GitHub applies its own extensions, so the typography and simple-HTML
    options have no effect here. A table of contents cannot be requested.
    """

    driver_id = "gh"
    display_name = "github-api"
    description = "GitHub REST API Markdown rendering (requires network access)."

    def __init__(
        self,
        api_url: str = GITHUB_MARKDOWN_URL,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url
        self.token = token
        self.timeout = timeout
        self._session = session
        super().__init__()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "text/plain; charset=utf-8"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def render_html(self, text: str, options: RenderOptions) -> str:
        if options.generate_toc:
            raise UnsupportedOperationError(
                f"Table of contents generation is not supported by the {self.display_name} renderer."
            )

        poster = self._session.post if self._session is not None else requests.post
        try:
            response = poster(
                self.api_url,
                data=text.encode("utf-8"),
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ParseError(f"GitHub Markdown API request failed: {exc}") from exc

        return response.text
