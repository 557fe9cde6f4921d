"""Environment-driven settings for the command line and HTTP front ends."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from renderers import DEFAULT_DRIVER, register_renderer
from renderers.github import DEFAULT_TIMEOUT, GITHUB_MARKDOWN_URL, GithubRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceSettings:
    """Runtime configuration read once by an entry point."""

    default_driver: str
    log_level: str
    github_api_url: str
    github_token: Optional[str]
    github_timeout: float


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default


def load_settings() -> ServiceSettings:
    return ServiceSettings(
        default_driver=os.getenv("MDRENDER_DRIVER", DEFAULT_DRIVER),
        log_level=os.getenv("MDRENDER_LOG_LEVEL", "INFO").upper(),
        github_api_url=os.getenv("GITHUB_API_URL", GITHUB_MARKDOWN_URL),
        github_token=os.getenv("GITHUB_TOKEN") or None,
        github_timeout=_float_env("GITHUB_TIMEOUT", DEFAULT_TIMEOUT),
    )


def configure_renderers(settings: ServiceSettings) -> None:
    """Re-register backends whose construction depends on settings."""

    register_renderer(
        GithubRenderer(
            api_url=settings.github_api_url,
            token=settings.github_token,
            timeout=settings.github_timeout,
        ),
        replace=True,
    )
