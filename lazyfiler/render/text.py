"""Display-width aware text layout primitives.

Every width-sensitive operation in the renderer goes through these helpers.
Width uses an East-Asian heuristic: wide CJK blocks and any multi-byte
character count as two cells, everything else as one.
"""

from __future__ import annotations

import re

ELLIPSIS = "..."
ELLIPSIS_MIN_WIDTH = 3
BREAK_POINT_THRESHOLD = 0.5
SIZE_FIELD_WIDTH = 7

_WIDE_RE = re.compile(r"[\u3000-\u303f\u3040-\u309f\u30a0-\u30ff\u4e00-\u9faf\uff00-\uffef]")
_BREAK_PUNCTUATION = frozenset("、。，．！？")


def char_width(ch: str) -> int:
    """Return the cell width of one character."""
    if _WIDE_RE.match(ch):
        return 2
    if " " <= ch <= "~":
        return 1
    return 2 if len(ch.encode("utf-8", errors="replace")) > 1 else 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies."""
    return sum(char_width(ch) for ch in text)


def _prefix_within(text: str, max_width: int) -> tuple[str, int]:
    """Return the longest prefix of ``text`` whose width fits ``max_width``."""
    used = 0
    for index, ch in enumerate(text):
        width = char_width(ch)
        if used + width > max_width:
            return text[:index], used
        used += width
    return text, used


def truncate_to_width(text: str, max_width: int) -> str:
    """Shorten ``text`` so it occupies at most ``max_width`` cells.

    An ellipsis is used only when the ellipsised form covers at least as many
    cells as the plain cut; a kept prefix never exceeds ``max_width - 3`` when
    an ellipsis follows it.
    """
    if display_width(text) <= max_width:
        return text
    if max_width <= 0:
        return ""
    plain, plain_width = _prefix_within(text, max_width)
    if max_width < ELLIPSIS_MIN_WIDTH:
        return plain
    head, head_width = _prefix_within(text, max_width - ELLIPSIS_MIN_WIDTH)
    if head_width + ELLIPSIS_MIN_WIDTH >= plain_width:
        return head + ELLIPSIS
    return plain


def pad_to_width(text: str, target_width: int) -> str:
    """Right-pad with spaces to exactly ``target_width`` cells, truncating if needed."""
    current = display_width(text)
    if current >= target_width:
        text = truncate_to_width(text, target_width)
        # A wide glyph straddling the edge leaves one cell to fill.
        current = display_width(text)
    return text + " " * max(0, target_width - current)


def tail_to_width(text: str, max_width: int) -> str:
    """Keep the right end of ``text``, prefixed by an ellipsis, within ``max_width``."""
    if display_width(text) <= max_width:
        return text
    if max_width < ELLIPSIS_MIN_WIDTH:
        return truncate_to_width(text, max_width)
    budget = max_width - ELLIPSIS_MIN_WIDTH
    used = 0
    start = len(text)
    while start > 0:
        width = char_width(text[start - 1])
        if used + width > budget:
            break
        used += width
        start -= 1
    return ELLIPSIS + text[start:]


def find_break_point(line: str, max_width: int) -> int:
    """Return the character index at which to wrap ``line`` for ``max_width``.

    Prefers breaking after a space, then after CJK punctuation, once at least
    half the width has been used. Falls back to the widest cut that fits.
    """
    if display_width(line) <= max_width:
        return len(line)

    used = 0
    best = 0
    space_break: int | None = None
    punct_break: int | None = None
    for index, ch in enumerate(line):
        width = char_width(ch)
        if used + width > max_width:
            break
        used += width
        best = index + 1
        if used > max_width * BREAK_POINT_THRESHOLD:
            if ch == " ":
                space_break = index + 1
            elif ch in _BREAK_PUNCTUATION:
                punct_break = index + 1

    if space_break is not None:
        return space_break
    if punct_break is not None:
        return punct_break
    # A single glyph wider than the pane still has to advance.
    return max(best, 1)


def wrap_line_spans(line: str, max_width: int) -> list[tuple[int, int]]:
    """Return ``(start, end)`` character spans for each wrapped row of ``line``."""
    if not line:
        return [(0, 0)]
    spans: list[tuple[int, int]] = []
    start = 0
    while start < len(line):
        cut = find_break_point(line[start:], max(1, max_width))
        spans.append((start, start + cut))
        start += cut
    return spans


def wrap_lines(lines: list[str], max_width: int) -> list[str]:
    """Wrap every line to ``max_width`` cells and flatten the result."""
    out: list[str] = []
    for line in lines:
        out.extend(line[start:end] for start, end in wrap_line_spans(line, max_width))
    return out


def format_size(size_bytes: int) -> str:
    """Return a fixed-width human size label, blank for zero."""
    if size_bytes <= 0:
        label = ""
    elif size_bytes < 1024:
        label = f"{size_bytes}B"
    elif size_bytes < 1024**2:
        label = f"{size_bytes / 1024:.1f}K"
    elif size_bytes < 1024**3:
        label = f"{size_bytes / 1024**2:.1f}M"
    else:
        label = f"{size_bytes / 1024**3:.1f}G"
    return label.rjust(SIZE_FIELD_WIDTH)
