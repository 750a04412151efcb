"""File preview loading, sanitization, and token colouring input.

Reads a bounded prefix of a file, classifies it as text or binary, and
neutralizes terminal control bytes so previews cannot move the cursor or
ring the bell. Text previews also carry Pygments token rows for colouring.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from .errors import PreviewFailure

LOGGER = logging.getLogger(__name__)

MAX_PREVIEW_BYTES = 64 * 1024
MAX_PREVIEW_LINES = 400
BINARY_SNIFF_BYTES = 8 * 1024
TAB_SIZE = 4

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

TokenRow = list[tuple[_TokenType, str]]


class PreviewKind(Enum):
    TEXT = "text"
    BINARY = "binary"
    ERROR = "error"


@dataclass(frozen=True)
class PreviewResult:
    kind: PreviewKind
    lines: tuple[str, ...] = ()
    message: str = ""
    token_rows: tuple[TokenRow, ...] = field(default=(), compare=False)


def decode_text(raw: bytes) -> str:
    """Decode using tolerant encoding fallback order.

    Strips a UTF-8 BOM, tolerates a multi-byte sequence cut off by the
    bounded read, and falls back to latin-1 which accepts every byte.
    """
    if raw.startswith(b"\xef\xbb\xbf"):
        raw = raw[3:]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        if exc.start >= len(raw) - 3 and exc.reason == "unexpected end of data":
            return raw[: exc.start].decode("utf-8")
    return raw.decode("latin-1")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda m: f"\\x{ord(m.group(0)):02x}", source)


def looks_binary(raw: bytes) -> bool:
    return b"\x00" in raw[:BINARY_SNIFF_BYTES]


def read_preview_bytes(path: Path, limit: int = MAX_PREVIEW_BYTES) -> bytes:
    try:
        with path.open("rb") as handle:
            return handle.read(limit)
    except OSError as exc:
        raise PreviewFailure(exc.strerror or str(exc)) from exc


def token_rows_for(path: Path, text: str) -> tuple[TokenRow, ...]:
    """Lex ``text`` and split the token stream into one row per source line."""
    try:
        lexer = get_lexer_for_filename(path.name, stripnl=False, ensurenl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False, ensurenl=False)
    rows: list[TokenRow] = [[]]
    for ttype, value in lexer.get_tokens(text):
        parts = value.split("\n")
        for index, part in enumerate(parts):
            if index > 0:
                rows.append([])
            if part:
                rows[-1].append((ttype, part))
    return tuple(rows)


class FilePreview:
    """Produce a ``PreviewResult`` for a path."""

    def __init__(self, max_lines: int = MAX_PREVIEW_LINES, highlight: bool = True) -> None:
        self.max_lines = max_lines
        self.highlight = highlight

    def preview_file(self, path: Path) -> PreviewResult:
        try:
            raw = read_preview_bytes(path)
        except PreviewFailure as exc:
            LOGGER.debug("preview of %s failed: %s", path, exc)
            return PreviewResult(PreviewKind.ERROR, message=str(exc))
        if looks_binary(raw):
            return PreviewResult(PreviewKind.BINARY)

        text = sanitize_terminal_text(decode_text(raw).replace("\r\n", "\n").replace("\r", "\\x0d"))
        lines = [line.expandtabs(TAB_SIZE) for line in text.split("\n")[: self.max_lines]]
        if lines and lines[-1] == "":
            lines.pop()
        if not self.highlight:
            return PreviewResult(PreviewKind.TEXT, lines=tuple(lines))
        try:
            token_rows = token_rows_for(path, "\n".join(lines))
        except Exception as exc:  # lexer errors
            LOGGER.warning("highlighting %s failed: %s", path, exc)
            token_rows = ()
        return PreviewResult(PreviewKind.TEXT, lines=tuple(lines), token_rows=token_rows)
