"""Persistent JSON config and the immutable ``AppConfig`` built from it.

The config file lives under the platform user config directory. Malformed or
missing values fall back to defaults field by field.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from platformdirs import user_config_dir

from .messages import DEFAULT_LANGUAGE, LANGUAGE_ENV_VAR, normalize_language

LOGGER = logging.getLogger(__name__)

APP_NAME = "lazyfiler"
CONFIG_FILENAME = "config.json"
BOOKMARKS_FILENAME = "bookmarks.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_BOOKMARKS_PATH = CONFIG_PATH.with_name(BOOKMARKS_FILENAME)

DEFAULT_APPLICATION = "open"
DEFAULT_APPLICATIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("txt", "md", "rb", "py", "js", "html", "css", "json", "xml", "yaml", "yml"), "code"),
)

DEFAULT_KEYBINDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "move_down": ("j",),
        "move_up": ("k",),
        "move_top": ("g",),
        "move_bottom": ("G",),
        "parent": ("h",),
        "enter": ("l", "ENTER"),
        "refresh": ("r",),
        "open_file": ("o",),
        "open_explorer": ("e",),
        "toggle_selection": ("SPACE",),
        "filter": ("s",),
        "clear_filter": ("ESC",),
        "quit": ("q",),
        "name_search": ("/", "f"),
        "content_search": ("F",),
        "create_file": ("a",),
        "create_directory": ("A",),
        "move_selected": ("m",),
        "copy_selected": ("p",),
        "delete_selected": ("x",),
        "bookmark_menu": ("b",),
        "jump_history": ("z",),
    }
)


@dataclass(frozen=True)
class AppConfig:
    """Startup configuration passed by reference to every component."""

    language: str = DEFAULT_LANGUAGE
    applications: tuple[tuple[tuple[str, ...], str], ...] = DEFAULT_APPLICATIONS
    default_application: str = DEFAULT_APPLICATION
    colors: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))
    keybinds: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_KEYBINDS)
    base_directory: Path | None = None
    theme: str | None = None
    no_color: bool = False
    bookmarks_path: Path = DEFAULT_BOOKMARKS_PATH

    def application_for(self, path: Path) -> str:
        """Return the configured application for ``path``'s extension."""
        extension = path.suffix.lstrip(".").lower()
        if extension:
            for extensions, application in self.applications:
                if extension in extensions:
                    return application
        return self.default_application


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        LOGGER.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_applications(value: object) -> tuple[tuple[tuple[str, ...], str], ...]:
    """Parse ``{"txt,md": "code", "default": "open"}`` style mappings.

    The ``default`` key is handled by ``_load_default_application``.
    """
    if not isinstance(value, dict):
        return DEFAULT_APPLICATIONS
    parsed: list[tuple[tuple[str, ...], str]] = []
    for raw_extensions, application in value.items():
        if raw_extensions == "default" or not isinstance(application, str) or not application.strip():
            continue
        extensions = tuple(
            ext.strip().lstrip(".").lower() for ext in str(raw_extensions).split(",") if ext.strip()
        )
        if extensions:
            parsed.append((extensions, application.strip()))
    return tuple(parsed) if parsed else DEFAULT_APPLICATIONS


def _load_default_application(value: object) -> str:
    if isinstance(value, dict):
        candidate = value.get("default")
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return DEFAULT_APPLICATION


def _load_keybinds(value: object) -> Mapping[str, tuple[str, ...]]:
    """Merge user keybinds over defaults; unknown actions and bad values are dropped."""
    merged = dict(DEFAULT_KEYBINDS)
    if isinstance(value, dict):
        for action, keys in value.items():
            if action not in DEFAULT_KEYBINDS:
                LOGGER.debug("ignoring keybind for unknown action %r", action)
                continue
            if isinstance(keys, str):
                keys = [keys]
            if not isinstance(keys, list):
                continue
            cleaned = tuple(key for key in keys if isinstance(key, str) and key)
            if cleaned:
                merged[action] = cleaned
    return MappingProxyType(merged)


def _load_colors(value: object) -> Mapping[str, object]:
    if not isinstance(value, dict):
        return MappingProxyType({})
    return MappingProxyType({str(role): spec for role, spec in value.items()})


def _load_path(value: object) -> Path | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def _load_theme_name(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def build_app_config(
    data: Mapping[str, object],
    start_path: Path,
    *,
    language: str | None = None,
    theme: str | None = None,
    no_color: bool = False,
    base_directory: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Combine file data, CLI overrides and defaults into an ``AppConfig``.

    Precedence is CLI flag, then environment (language only), then the
    config file, then the built-in default. The base directory defaults to
    the directory the browser was started in.
    """
    file_language = data.get("language")
    resolved_language = (
        normalize_language(language)
        or normalize_language((os.environ if environ is None else environ).get(LANGUAGE_ENV_VAR))
        or normalize_language(file_language if isinstance(file_language, str) else None)
        or DEFAULT_LANGUAGE
    )
    base = base_directory or _load_path(data.get("base_directory")) or start_path
    bookmarks_path = _load_path(data.get("bookmarks_file")) or DEFAULT_BOOKMARKS_PATH
    return AppConfig(
        language=resolved_language,
        applications=_load_applications(data.get("applications")),
        default_application=_load_default_application(data.get("applications")),
        colors=_load_colors(data.get("colors")),
        keybinds=_load_keybinds(data.get("keybinds")),
        base_directory=Path(base).expanduser().resolve(),
        theme=theme or _load_theme_name(data.get("theme")),
        no_color=bool(no_color),
        bookmarks_path=bookmarks_path,
    )


def load_app_config(start_path: Path, **overrides) -> AppConfig:
    """Read the config file and build the startup ``AppConfig``."""
    return build_app_config(load_config(), start_path, **overrides)
