"""ANSI colouring of preview rows from Pygments token rows.

Wrapping and width maths run on the plain text; colour is applied to the
character span of each wrapped row afterwards, so escapes never affect layout.
"""

from __future__ import annotations

from functools import lru_cache

from pygments.console import ansiformat
from pygments.formatters.terminal import TERMINAL_COLORS
from pygments.token import Token, _TokenType

from ..preview import TokenRow


@lru_cache(maxsize=256)
def token_color(ttype: _TokenType, dark_background: bool = True) -> str:
    """Return the Pygments console colour name for ``ttype``, or ``""``."""
    current = ttype
    while current is not None:
        colors = TERMINAL_COLORS.get(current)
        if colors is not None:
            return colors[1] if dark_background else colors[0]
        if current is Token:
            break
        current = current.parent
    return ""


def colorize_span(row: TokenRow, start: int, end: int, reset: str = "") -> str:
    """Return characters ``start:end`` of ``row`` with per-token ANSI colour.

    ``reset`` is re-emitted after each coloured token so an enclosing style
    (e.g. the pane's base colour) survives the token's own reset.
    """
    out: list[str] = []
    offset = 0
    for ttype, value in row:
        token_end = offset + len(value)
        if token_end <= start:
            offset = token_end
            continue
        if offset >= end:
            break
        piece = value[max(0, start - offset) : max(0, end - offset)]
        color = token_color(ttype)
        if color and piece.strip():
            out.append(ansiformat(color, piece) + reset)
        else:
            out.append(piece)
        offset = token_end
    return "".join(out)
