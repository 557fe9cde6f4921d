"""Guess a document title from the first heading of a Markdown buffer."""

from __future__ import annotations

DEFAULT_TITLE = ""

_BOM = b"\xef\xbb\xbf"
_LINE_BREAKS = b"\r\n"
_BLANKS = b" \t"


def _skip_line_break(source: bytes, i: int) -> int:
    if i < len(source) and source[i] == ord("\r"):
        i += 1
        if i < len(source) and source[i] == ord("\n"):
            i += 1
    elif i < len(source) and source[i] == ord("\n"):
        i += 1
    return i


def sniff_title(source: bytes, *, require_line_break: bool = True) -> str:
    """Return the text of a leading level-1 heading, or an empty string.

    Both heading forms are recognised on the first non-blank line:

    * ATX: ``# Title``, where ``#`` is followed by a space or a tab;
    * Setext: ``Title`` on one line, a run of ``=`` on the next.

    The ``=`` underline (plus optional trailing blanks) must end with a line
    break. With ``require_line_break=False`` the end of the buffer is accepted
    as well.
    """

    i = len(_BOM) if source.startswith(_BOM) else 0

    while i < len(source) and source[i] in _LINE_BREAKS:
        i += 1
    if i >= len(source):
        return DEFAULT_TITLE

    start = i
    while i < len(source) and source[i] not in _LINE_BREAKS:
        i += 1
    line = source[start:i]
    i = _skip_line_break(source, i)

    if len(line) >= 3 and line[0] == ord("#") and line[1] in _BLANKS:
        return line[2:].decode("utf-8", errors="replace").strip()

    if i >= len(source) or source[i] != ord("="):
        return DEFAULT_TITLE
    while i < len(source) and source[i] == ord("="):
        i += 1
    while i < len(source) and source[i] in _BLANKS:
        i += 1

    if i >= len(source):
        if require_line_break:
            return DEFAULT_TITLE
    elif source[i] not in _LINE_BREAKS:
        return DEFAULT_TITLE

    return line.decode("utf-8", errors="replace").strip()
