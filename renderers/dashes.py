"""Dash substitutions used when LaTeX-style dash rules are turned off."""

from __future__ import annotations

import re

# "--" and "---" both read as an em dash; a hyphen with a space on each side
# reads as an en dash.
EM_DASH_RE = re.compile(r"(?<!-)-{2,3}(?!-)")
EN_DASH_RE = re.compile(r"(?<= )-(?= )")
