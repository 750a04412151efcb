"""Command-line front door for lazyfiler.

Parses CLI options, configures debug logging, resolves the start directory,
and hands off to the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .errors import NavigationFailure
from .runtime import run_browser
from .runtime.config import load_app_config
from .runtime.messages import AVAILABLE_LANGUAGES, MessageKey, Messages
from .ui_theme import available_theme_names

LOGGER = logging.getLogger(__name__)

DEBUG_ENV_VAR = "LAZYFILER_DEBUG"
DEFAULT_DEBUG_LOG = "lazyfiler-debug.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyfiler",
        description="Browse a directory in a two-pane terminal file manager.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument(
        "--lang",
        default=None,
        help=f"Interface language ({', '.join(AVAILABLE_LANGUAGES)}).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colour output.")
    parser.add_argument(
        "--base-dir",
        default=None,
        metavar="PATH",
        help="Destination for bulk move/copy. Defaults to the start directory.",
    )
    parser.add_argument(
        "--debug-log",
        default=None,
        metavar="PATH",
        help=f"Write debug logging to PATH (also enabled by {DEBUG_ENV_VAR}=1).",
    )
    return parser


def configure_logging(debug_log: str | None, environ=None) -> Path | None:
    """Send log records to a file when debugging was requested.

    The terminal belongs to the TUI, so logging never targets a stream.
    Returns the log file path, or ``None`` when logging stays silent.
    """
    environ = os.environ if environ is None else environ
    target = debug_log
    if target is None and environ.get(DEBUG_ENV_VAR, "").strip() not in {"", "0"}:
        target = DEFAULT_DEBUG_LOG
    if target is None:
        return None
    path = Path(target).expanduser()
    logging.basicConfig(filename=str(path), level=logging.DEBUG, format=LOG_FORMAT)
    return path


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch lazyfiler on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    log_path = configure_logging(args.debug_log)
    if log_path is not None:
        LOGGER.info("debug logging to %s", log_path)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    base_dir = Path(args.base_dir).expanduser() if args.base_dir else None
    if base_dir is not None and not base_dir.is_dir():
        raise SystemExit(f"Base directory not found: {base_dir}")

    config = load_app_config(
        path.resolve(),
        language=args.lang,
        theme=args.theme,
        no_color=args.no_color,
        base_directory=base_dir,
    )
    try:
        run_browser(path.resolve(), config)
    except NavigationFailure as exc:
        raise SystemExit(str(exc)) from exc
    except KeyboardInterrupt:
        print(Messages(config.language).get(MessageKey.APP_INTERRUPTED))
        raise SystemExit(130)
