"""Fraction substitutions applied by the smartypants option."""

from __future__ import annotations

import re
from typing import Optional

# Bare n/d not glued to words, other digits or further slashes (dates, paths).
FRACTION_RE = re.compile(r"(?<![\w/])(\d+)/(\d+)(?![\w/])")

_NAMED_FRACTIONS = {
    ("1", "2"): "&frac12;",
    ("1", "4"): "&frac14;",
    ("3", "4"): "&frac34;",
}


def fraction_html(numerator: str, denominator: str, generic: bool = True) -> Optional[str]:
    """Markup for ``numerator/denominator``, or None when it stays plain text.

    The common fractions always map to their entities; any other pair only
    becomes sup/sub markup when ``generic`` is set.
    """

    named = _NAMED_FRACTIONS.get((numerator, denominator))
    if named:
        return named
    if not generic:
        return None
    return f"<sup>{numerator}</sup>&frasl;<sub>{denominator}</sub>"
