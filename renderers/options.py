"""Rendering options and the normalizer that resolves their implications."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_DRIVER = "pm"

# Option names understood by the command line and HTTP surfaces, mapped onto
# RenderOptions fields. Field names themselves are accepted as well.
_OPTION_ALIASES: Dict[str, str] = {
    "toc": "generate_toc",
    "tocOnly": "toc_only",
    "toconly": "toc_only",
    "page": "standalone_page",
    "latex": "render_latex",
    "latexdashes": "latex_dashes",
    "htmlSimple": "html_simple",
    "html-simple": "html_simple",
}

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


def _as_bool(value: object) -> Optional[bool]:
    """Interpret flags coming from forms, query strings or environment variables."""

    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        return None
    if isinstance(value, (bool, int)):
        return bool(value)
    return None


@dataclass(frozen=True)
class RenderOptions:
    """Effective configuration for a single conversion."""

    generate_toc: bool = False
    toc_only: bool = False
    standalone_page: bool = False
    render_latex: bool = False
    smartypants: bool = True
    latex_dashes: bool = True
    fractions: bool = True
    html_simple: bool = True
    css: str = ""
    output: str = ""
    driver: str = DEFAULT_DRIVER
    title: str = ""

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "RenderOptions":
        """Build options from a mapping of option names; unknown keys are ignored."""

        known = {field.name: field for field in fields(cls)}
        values: Dict[str, object] = {}
        for key, value in raw.items():
            name = _OPTION_ALIASES.get(key, key)
            field = known.get(name)
            if field is None:
                logger.debug("Ignoring unknown render option %r", key)
                continue
            if value is None:
                continue
            if isinstance(field.default, bool):
                flag = _as_bool(value)
                if flag is None:
                    logger.warning("Ignoring render option %r: %r is not a boolean", key, value)
                    continue
                values[name] = flag
            else:
                values[name] = str(value)
        return cls(**values)

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def normalize_options(
    raw: Union[RenderOptions, Mapping[str, object], None] = None,
) -> RenderOptions:
    """Resolve implied and conflicting options into one consistent configuration.

    The implications are applied once, in order:

    * ``toc_only`` turns on ``generate_toc``
    * a ``css`` link turns on ``standalone_page``
    * ``standalone_page`` turns off ``render_latex``
    * ``generate_toc`` turns off ``render_latex``
    * an empty ``driver`` becomes :data:`DEFAULT_DRIVER`

    The result is a fixed point: normalizing it again returns an equal value.
    """

    if isinstance(raw, RenderOptions):
        options = raw
    else:
        options = RenderOptions.from_mapping(raw or {})

    generate_toc = options.generate_toc or options.toc_only
    standalone_page = options.standalone_page or bool(options.css)
    render_latex = options.render_latex
    if standalone_page:
        render_latex = False
    if generate_toc:
        render_latex = False

    return replace(
        options,
        generate_toc=generate_toc,
        standalone_page=standalone_page,
        render_latex=render_latex,
        driver=options.driver or DEFAULT_DRIVER,
    )
