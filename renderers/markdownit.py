"""Renderer backed by markdown-it-py."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Set, Tuple

from markdown.extensions.toc import nest_toc_tokens, slugify, unique
from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from .base import BaseRenderer
from .dashes import EM_DASH_RE, EN_DASH_RE
from .fractions import FRACTION_RE, fraction_html
from .options import RenderOptions

Heading = Tuple[int, str, str]


def make_fractions_rule(generic: bool = True) -> Callable[[StateCore], None]:
    """Build a core rule splitting ``n/d`` text tokens around inline fraction markup."""

    def fractions_rule(state: StateCore) -> None:
        for block in state.tokens:
            if block.type != "inline" or not block.children:
                continue
            children: List[Token] = []
            for token in block.children:
                if token.type != "text" or not FRACTION_RE.search(token.content):
                    children.append(token)
                    continue
                position = 0
                for match in FRACTION_RE.finditer(token.content):
                    markup = fraction_html(match.group(1), match.group(2), generic=generic)
                    if markup is None:
                        continue
                    if match.start() > position:
                        children.append(_text_token(token.content[position:match.start()]))
                    html = Token("html_inline", "", 0)
                    html.content = markup
                    children.append(html)
                    position = match.end()
                if position < len(token.content):
                    children.append(_text_token(token.content[position:]))
            block.children = children

    return fractions_rule


def plain_dashes_rule(state: StateCore) -> None:
    """Non-LaTeX dashes: ``--`` becomes an em dash and a spaced hyphen an en dash."""

    for block in state.tokens:
        if block.type != "inline" or not block.children:
            continue
        for token in block.children:
            if token.type == "text":
                content = EM_DASH_RE.sub("—", token.content)
                token.content = EN_DASH_RE.sub("–", content)


def _text_token(content: str) -> Token:
    token = Token("text", "", 0)
    token.content = content
    return token


def _heading_text(inline: Token) -> str:
    return "".join(
        child.content
        for child in inline.children or []
        if child.type in ("text", "code_inline")
    )


def assign_heading_ids(tokens: Sequence[Token]) -> List[Heading]:
    """Give every heading a unique slug id and return (level, id, text) tuples."""

    used: Set[str] = set()
    headings: List[Heading] = []
    for index, token in enumerate(tokens):
        if token.type != "heading_open":
            continue
        text = _heading_text(tokens[index + 1])
        anchor = unique(slugify(text, "-") or "section", used)
        token.attrSet("id", anchor)
        headings.append((int(token.tag[1]), anchor, text))
    return headings


def render_toc(headings: Sequence[Heading]) -> str:
    """Render headings as a nested list of links, nested the way Python-Markdown's toc does."""

    tokens = nest_toc_tokens(
        [{"level": level, "id": anchor, "name": text} for level, anchor, text in headings]
    )
    return f'<div class="toc">\n{_toc_list(tokens)}</div>'


def _toc_list(tokens: List[Dict]) -> str:
    items = []
    for token in tokens:
        nested = _toc_list(token["children"]) if token["children"] else ""
        items.append(f'<li><a href="#{token["id"]}">{escapeHtml(token["name"])}</a>{nested}</li>\n')
    return "<ul>\n" + "".join(items) + "</ul>\n"


def strip_attributes(tokens: Sequence[Token], *, keep_ids: bool) -> None:
    names = ("class", "style") if keep_ids else ("class", "style", "id")
    for token in tokens:
        for name in names:
            token.attrs.pop(name, None)
        if token.type == "fence":
            token.info = ""
        if token.children:
            strip_attributes(token.children, keep_ids=keep_ids)


class MarkdownItRenderer(BaseRenderer):
    """CommonMark backend built on markdown-it-py's token stream."""

    driver_id = "mi"
    display_name = "markdown-it-py"
    description = "markdown-it-py CommonMark parser with tables, strikethrough and typographer rules."

    def build_parser(self, options: RenderOptions) -> MarkdownIt:
        md = MarkdownIt(
            "commonmark",
            {"typographer": options.smartypants, "html": not options.html_simple},
        )
        md.enable(["table", "strikethrough"])
        if options.smartypants:
            md.enable(["smartquotes", "replacements"])
            if not options.latex_dashes:
                # Ahead of the LaTeX-style "--" rule in replacements.
                md.core.ruler.before("replacements", "plain_dashes", plain_dashes_rule)
            md.core.ruler.push("fractions", make_fractions_rule(generic=options.fractions))
        return md

    def render_html(self, text: str, options: RenderOptions) -> str:
        md = self.build_parser(options)
        env: dict = {}
        tokens = md.parse(text, env)

        headings: List[Heading] = []
        if options.generate_toc or not options.html_simple:
            headings = assign_heading_ids(tokens)
        if options.html_simple:
            strip_attributes(tokens, keep_ids=options.generate_toc)

        parts = []
        if options.generate_toc:
            parts.append(render_toc(headings))
        if not options.toc_only:
            parts.append(md.renderer.render(tokens, md.options, env).strip())
        return "\n".join(part for part in parts if part) + "\n"
