"""Tests for the local rendering backends."""

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from renderers import (
    ParseError,
    UnsupportedOperationError,
    get_renderer,
    normalize_options,
)

from .conftest import HELLO_WORLD, LOCAL_DRIVERS

TOC_SOURCE = b"# One\n\n## Two\n\nBody text.\n\n# Three\n"


def render(driver, source, **raw):
    options = normalize_options({"driver": driver, **raw})
    return get_renderer(driver).render(source, options).content.decode("utf-8")


@pytest.mark.parametrize("driver", LOCAL_DRIVERS)
class TestHtmlOutput:
    """Plain HTML rendering shared by both local backends."""

    def test_heading_and_paragraph(self, driver):
        html = render(driver, HELLO_WORLD)

        assert "<h1>Hello</h1>" in html
        assert "<p>World</p>" in html
        assert "<html" not in html

    def test_rendered_output_metadata(self, driver):
        rendered = get_renderer(driver).render(HELLO_WORLD, normalize_options({"driver": driver}))

        assert rendered.driver == driver
        assert rendered.display_name
        assert isinstance(rendered.content, bytes)

    def test_deterministic(self, driver):
        source = b"# Title\n\nSome *emphasis*, \"quotes\" -- and 1/2 a table:\n\n| a | b |\n|---|--:|\n| 1 | 2 |\n"

        assert render(driver, source, toc=True) == render(driver, source, toc=True)

    def test_tables_are_enabled(self, driver):
        html = render(driver, b"| a | b |\n|---|---|\n| 1 | 2 |\n")

        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_undecodable_input_is_a_parse_error(self, driver):
        with pytest.raises(ParseError):
            render(driver, b"# Bad \xff\xfe bytes\n")


@pytest.mark.parametrize("driver", LOCAL_DRIVERS + ["gh"])
def test_latex_is_unsupported(driver):
    options = normalize_options({"driver": driver, "latex": True})

    with pytest.raises(UnsupportedOperationError):
        get_renderer(driver).render(HELLO_WORLD, options)


@pytest.mark.parametrize("driver", LOCAL_DRIVERS)
class TestStandalonePage:
    """Complete page shell."""

    def test_page_with_css(self, driver):
        html = render(driver, HELLO_WORLD, page=True, css="style.css")

        assert html.startswith("<!DOCTYPE html>")
        assert '<link rel="stylesheet" type="text/css" href="style.css">' in html
        assert "<title>Hello</title>" in html
        assert "<body>" in html and "</html>" in html
        assert "<h1>Hello</h1>" in html

    def test_css_alone_implies_page(self, driver):
        assert "<!DOCTYPE html>" in render(driver, HELLO_WORLD, css="style.css")

    def test_page_without_css_has_no_stylesheet(self, driver):
        html = render(driver, HELLO_WORLD, page=True)

        assert "stylesheet" not in html

    def test_explicit_title_wins(self, driver):
        html = render(driver, HELLO_WORLD, page=True, title="Custom")

        assert "<title>Custom</title>" in html

    def test_setext_title(self, driver):
        html = render(driver, b"Greetings\n=========\n\nBody\n", page=True)

        assert "<title>Greetings</title>" in html

    def test_title_is_escaped(self, driver):
        html = render(driver, b"# Fish & Chips <3\n", page=True)

        assert "<title>Fish &amp; Chips &lt;3</title>" in html


@pytest.mark.parametrize("driver", LOCAL_DRIVERS)
class TestTableOfContents:
    """TOC generation and TOC-only output."""

    def test_toc_links_to_heading_ids(self, driver):
        html = render(driver, TOC_SOURCE, toc=True)

        assert '<a href="#one">One</a>' in html
        assert '<a href="#two">Two</a>' in html
        assert '<a href="#three">Three</a>' in html
        assert '<h1 id="one">One</h1>' in html
        assert '<h2 id="two">Two</h2>' in html
        assert "<p>Body text.</p>" in html
        assert html.index('href="#one"') < html.index('<h1 id="one">')

    def test_toc_nests_subheadings(self, driver):
        html = render(driver, TOC_SOURCE, toc=True)
        toc = html[: html.index("<h1")]

        assert toc.count("<ul>") == 2

    def test_skipped_levels_nest_under_nearest_parent(self, driver):
        html = render(driver, b"# A\n\n### B\n\n## C\n", toc=True)
        toc = re.sub(r">\s+<", "><", html[: html.index("<h1")])

        assert toc.count("<ul>") == 2
        assert '<a href="#b">B</a></li><li><a href="#c">C</a></li></ul></li></ul>' in toc

    def test_toc_only_omits_body(self, driver):
        html = render(driver, TOC_SOURCE, tocOnly=True)

        assert '<a href="#two">Two</a>' in html
        assert "Body text." not in html
        assert "<h1" not in html

    def test_duplicate_headings_get_unique_ids(self, driver):
        html = render(driver, b"# Intro\n\n# Intro\n", toc=True)

        assert 'id="intro"' in html
        assert 'id="intro_1"' in html


@pytest.mark.parametrize("driver", LOCAL_DRIVERS)
class TestSimpleHtml:
    """Attribute stripping controlled by html_simple."""

    FENCED = b"# Code\n\n```python\nx = 1\n```\n"

    def test_simple_html_strips_classes_and_ids(self, driver):
        html = render(driver, self.FENCED)

        assert "class=" not in html
        assert "id=" not in html
        assert "x = 1" in html

    def test_simple_html_strips_table_alignment(self, driver):
        html = render(driver, b"| a |\n|--:|\n| 1 |\n")

        assert "style=" not in html

    def test_attribute_like_text_survives(self, driver):
        source = b'    <div id="main" style="x">\n\nand `a class="b"` inline.\n\nSet the class="big" attribute.\n'
        html = render(driver, source, smartypants=False).replace("&quot;", '"')

        assert '&lt;div id="main" style="x"&gt;' in html
        assert '<code>a class="b"</code>' in html
        assert 'Set the class="big" attribute.' in html

    def test_raw_html_is_escaped(self, driver):
        html = render(driver, b"<b>bold</b> text\n\n<div>block</div>\n")

        assert "&lt;b&gt;bold&lt;/b&gt; text" in html
        assert "&lt;div&gt;block&lt;/div&gt;" in html
        assert "<b>" not in html and "<div>" not in html

    def test_full_html_passes_raw_html_through(self, driver):
        html = render(driver, b"<b>bold</b> text\n", htmlSimple=False)

        assert "<b>bold</b> text" in html

    def test_full_html_keeps_language_class_and_heading_ids(self, driver):
        html = render(driver, self.FENCED, htmlSimple=False)

        assert 'class="language-python"' in html
        assert '<h1 id="code">Code</h1>' in html


@pytest.mark.parametrize("driver", LOCAL_DRIVERS)
class TestSmartypants:
    """Typographic substitutions."""

    def test_smart_quotes(self, driver):
        html = render(driver, b'He said "hello".\n')

        assert "&ldquo;" in html or "“" in html

    def test_smart_quotes_disabled(self, driver):
        html = render(driver, b'He said "hello".\n', smartypants=False)

        assert "&ldquo;" not in html and "“" not in html

    def test_latex_dashes(self, driver):
        html = render(driver, b"pages 1 -- 3 --- done\n")

        assert "&ndash;" in html or "–" in html
        assert "&mdash;" in html or "—" in html

    def test_plain_dashes(self, driver):
        html = render(driver, b"wait -- what\n", latexdashes=False)

        assert "&mdash;" in html or "—" in html
        assert "&ndash;" not in html and "–" not in html
        assert "--" not in html

    def test_plain_dashes_spaced_hyphen(self, driver):
        html = render(driver, b"pages 1 - 3\n", latexdashes=False)

        assert "&ndash;" in html or "–" in html

    def test_dashes_need_smartypants(self, driver):
        html = render(driver, b"wait -- what\n", smartypants=False, latexdashes=False)

        assert "wait -- what" in html

    def test_fractions(self, driver):
        html = render(driver, b"Add 1/2 cup and 3/8 spoon.\n")

        assert "&frac12;" in html
        assert "<sup>3</sup>&frasl;<sub>8</sub>" in html

    def test_dates_are_not_fractions(self, driver):
        html = render(driver, b"Due 1/2/2024.\n")

        assert "1/2/2024" in html

    def test_fractions_disabled_keeps_common_fractions(self, driver):
        html = render(driver, b"Add 1/2 cup and 3/8 spoon.\n", fractions=False)

        assert "&frac12;" in html
        assert "3/8" in html
        assert "<sup>" not in html

    def test_fractions_need_smartypants(self, driver):
        html = render(driver, b"Add 1/2 cup.\n", smartypants=False)

        assert "&frac12;" not in html

    def test_code_is_left_alone(self, driver):
        html = render(driver, b'Use `"1/2" -- x` here.\n')

        assert "&frac12;" not in html
        assert "&ldquo;" not in html and "“" not in html


@pytest.mark.parametrize("driver", LOCAL_DRIVERS)
def test_concurrent_renders_are_independent(driver):
    sources = [f"# Doc {n}\n\nParagraph {n}\n".encode("utf-8") for n in range(16)]

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda source: render(driver, source, toc=(len(source) % 2 == 0)), sources))

    for n, html in enumerate(results):
        assert f"Doc {n}</h1>" in html
        assert f"<p>Paragraph {n}</p>" in html
