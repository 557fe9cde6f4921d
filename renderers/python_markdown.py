"""Renderer backed by Python-Markdown."""

from __future__ import annotations

import re
from typing import Dict, List, Tuple, Union

import markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor

from .base import BaseRenderer
from .dashes import EM_DASH_RE, EN_DASH_RE
from .fractions import FRACTION_RE, fraction_html
from .options import RenderOptions

_BASE_EXTENSIONS = ("tables", "fenced_code", "sane_lists")

# Opening tags of a stashed fenced code block, e.g. <pre><code class="language-py">.
_FENCED_OPENING_RE = re.compile(r"^<pre[^>]*><code[^>]*>")


class FractionInlineProcessor(InlineProcessor):
    """Replace ``n/d`` text with fraction entities or sup/sub markup."""

    def __init__(self, pattern, md=None, generic: bool = True) -> None:
        super().__init__(pattern, md)
        self.generic = generic

    def handleMatch(self, m, data):
        html = fraction_html(m.group(1), m.group(2), generic=self.generic)
        if html is None:
            return None, None, None
        return self.md.htmlStash.store(html), m.start(0), m.end(0)


class FractionsExtension(Extension):
    def __init__(self, **kwargs) -> None:
        self.config = {
            "generic": [True, "Render any n/d as sup/sub markup, not just 1/2, 1/4 and 3/4"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            FractionInlineProcessor(FRACTION_RE.pattern, md, generic=self.getConfig("generic")),
            "fractions",
            15,
        )


class EntityInlineProcessor(InlineProcessor):
    """Replace every match with a fixed HTML entity."""

    def __init__(self, pattern, md=None, entity: str = "") -> None:
        super().__init__(pattern, md)
        self.entity = entity

    def handleMatch(self, m, data):
        return self.md.htmlStash.store(self.entity), m.start(0), m.end(0)


class PlainDashesExtension(Extension):
    """Non-LaTeX dashes: ``--`` is an em dash and a spaced hyphen an en dash."""

    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            EntityInlineProcessor(EM_DASH_RE.pattern, md, entity="&mdash;"), "em_dash", 14
        )
        md.inlinePatterns.register(
            EntityInlineProcessor(EN_DASH_RE.pattern, md, entity="&ndash;"), "en_dash", 13
        )


class SimpleHtmlTreeprocessor(Treeprocessor):
    """Drop presentational attributes from the element tree.

    Fenced code is already stashed as raw HTML by the time this runs, so its
    opening tags are rewritten in the stash as well.
    """

    def __init__(self, md=None, keep_ids: bool = False) -> None:
        super().__init__(md)
        self.names = ("class", "style") if keep_ids else ("class", "style", "id")

    def run(self, root):
        for element in root.iter():
            for name in self.names:
                element.attrib.pop(name, None)

        blocks = self.md.htmlStash.rawHtmlBlocks
        for index, block in enumerate(blocks):
            if isinstance(block, str):
                blocks[index] = _FENCED_OPENING_RE.sub("<pre><code>", block, count=1)


class SimpleHtmlExtension(Extension):
    def __init__(self, **kwargs) -> None:
        self.config = {
            "keep_ids": [False, "Keep id attributes (needed by TOC links)"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # Raw HTML is treated as text and escaped.
        md.preprocessors.deregister("html_block", strict=False)
        md.inlinePatterns.deregister("html", strict=False)
        # After toc (5) has assigned heading ids.
        md.treeprocessors.register(
            SimpleHtmlTreeprocessor(md, keep_ids=self.getConfig("keep_ids")),
            "simple_html",
            1,
        )


class PythonMarkdownRenderer(BaseRenderer):
    """Default backend: Python-Markdown with smarty, toc and table extensions."""

    driver_id = "pm"
    display_name = "python-markdown"
    description = "Python-Markdown with tables, fenced code, smarty and toc extensions."

    def build_extensions(
        self, options: RenderOptions
    ) -> Tuple[List[Union[str, Extension]], Dict[str, Dict[str, object]]]:
        extensions: List[Union[str, Extension]] = list(_BASE_EXTENSIONS)
        configs: Dict[str, Dict[str, object]] = {}

        if options.smartypants:
            extensions.append("smarty")
            configs["smarty"] = {
                "smart_dashes": options.latex_dashes,
                "smart_quotes": True,
                "smart_ellipses": True,
                "smart_angled_quotes": False,
            }
            if not options.latex_dashes:
                extensions.append(PlainDashesExtension())
            extensions.append(FractionsExtension(generic=options.fractions))

        if options.generate_toc or not options.html_simple:
            extensions.append("toc")
            configs["toc"] = {"toc_depth": "1-6"}

        if options.html_simple:
            extensions.append(SimpleHtmlExtension(keep_ids=options.generate_toc))
        else:
            extensions.append("attr_list")

        return extensions, configs

    def render_html(self, text: str, options: RenderOptions) -> str:
        extensions, configs = self.build_extensions(options)
        md = markdown.Markdown(
            extensions=extensions,
            extension_configs=configs,
            output_format="html",
        )
        body = md.convert(text)

        parts = []
        if options.generate_toc:
            parts.append(getattr(md, "toc", "").strip())
        if not options.toc_only:
            parts.append(body.strip())
        return "\n".join(part for part in parts if part) + "\n"
