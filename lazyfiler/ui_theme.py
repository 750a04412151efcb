"""UI theme definitions and selection helpers.

Themes are ANSI palettes keyed by semantic role (list kinds, chrome,
dialogs). Users may override single roles from the config file with colour
names, 256-colour indices, ``#rrggbb`` values, or raw escape sequences.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
import logging
import re

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    divider: str
    directory: str
    file: str
    executable: str
    size: str
    cursor: str
    marked: str
    status_bar: str
    preview_header: str
    footer: str
    dialog_border: str
    dialog_title: str
    dialog_text: str
    dialog_success: str
    dialog_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    divider="\033[2m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    executable="\033[1;32m",
    size="\033[38;5;109m",
    cursor="\033[7m",
    marked="\033[42m\033[30m",
    status_bar="\033[44m\033[97m",
    preview_header="\033[1;38;5;81m",
    footer="\033[7m",
    dialog_border="\033[38;5;45m",
    dialog_title="\033[1;38;5;45m",
    dialog_text="\033[38;5;252m",
    dialog_success="\033[1;32m",
    dialog_error="\033[1;31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    divider="\033[2;38;5;31m",
    directory="\033[1;38;5;45m",
    file="\033[38;5;153m",
    executable="\033[1;38;5;84m",
    size="\033[38;5;73m",
    cursor="\033[48;5;24m\033[97m",
    marked="\033[48;5;30m\033[30m",
    status_bar="\033[48;5;24m\033[97m",
    preview_header="\033[1;38;5;45m",
    footer="\033[48;5;24m\033[97m",
    dialog_border="\033[38;5;39m",
    dialog_title="\033[1;38;5;39m",
    dialog_text="\033[38;5;153m",
    dialog_success="\033[1;38;5;84m",
    dialog_error="\033[1;38;5;203m",
)

# Reverse video stays on so the cursor row is visible without colour.
PLAIN_THEME = UITheme(
    name="plain",
    reverse="\033[7m",
    reset="\033[0m",
    divider="",
    directory="",
    file="",
    executable="",
    size="",
    cursor="\033[7m",
    marked="",
    status_bar="",
    preview_header="",
    footer="\033[7m",
    dialog_border="",
    dialog_title="",
    dialog_text="",
    dialog_success="",
    dialog_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}

_NAMED_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}
_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")
ROLE_NAMES = tuple(f.name for f in fields(UITheme) if f.name not in {"name", "reset"})


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def color_to_ansi(spec: object, *, background: bool = False) -> str | None:
    """Translate one colour spec into an SGR sequence, or ``None`` if invalid.

    Accepts basic colour names (optionally ``bright_``-prefixed), integers in
    ``0..255``, ``#rrggbb`` strings, and strings already starting with ESC.
    """
    if isinstance(spec, bool):
        return None
    if isinstance(spec, int):
        if 0 <= spec <= 255:
            return f"\033[{48 if background else 38};5;{spec}m"
        return None
    if not isinstance(spec, str):
        return None
    value = spec.strip()
    if value.startswith("\033"):
        return value
    hex_match = _HEX_RE.match(value)
    if hex_match:
        raw = hex_match.group(1)
        red, green, blue = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
        return f"\033[{48 if background else 38};2;{red};{green};{blue}m"
    lowered = value.lower()
    bright = lowered.startswith("bright_")
    base = lowered.removeprefix("bright_")
    if base in _NAMED_COLORS:
        offset = (100 if background else 90) if bright else (40 if background else 30)
        return f"\033[{offset + _NAMED_COLORS[base]}m"
    if lowered.isdigit():
        return color_to_ansi(int(lowered), background=background)
    return None


_BACKGROUND_ROLES = frozenset({"cursor", "marked", "status_bar", "footer"})


def apply_color_overrides(theme: UITheme, overrides: Mapping[str, object]) -> UITheme:
    """Return ``theme`` with valid per-role overrides applied; invalid ones are dropped."""
    changes: dict[str, str] = {}
    for role, spec in overrides.items():
        if role not in ROLE_NAMES:
            LOGGER.debug("ignoring colour override for unknown role %r", role)
            continue
        escape = color_to_ansi(spec, background=role in _BACKGROUND_ROLES)
        if escape is None:
            LOGGER.debug("ignoring invalid colour %r for role %s", spec, role)
            continue
        changes[role] = escape
    return replace(theme, **changes) if changes else theme


def resolve_theme(
    name: str | None,
    *,
    no_color: bool = False,
    overrides: Mapping[str, object] | None = None,
) -> UITheme:
    """Return concrete theme for requested name, colour mode and overrides."""
    if no_color:
        return PLAIN_THEME
    theme = _THEMES.get(normalize_theme_name(name), DEFAULT_THEME)
    if overrides:
        theme = apply_color_overrides(theme, overrides)
    return theme


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "ROLE_NAMES",
    "apply_color_overrides",
    "available_theme_names",
    "color_to_ansi",
    "normalize_theme_name",
    "resolve_theme",
]
