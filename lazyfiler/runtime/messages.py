"""Localized user-facing message catalogue.

Messages are addressed by ``MessageKey`` and interpolate ``%{name}``
placeholders. A key with no translation falls back to English, then to the
key id itself.
"""

from __future__ import annotations

import re
from enum import Enum

DEFAULT_LANGUAGE = "en"
AVAILABLE_LANGUAGES = ("en", "ja")
LANGUAGE_ENV_VAR = "LAZYFILER_LANG"

_PLACEHOLDER_RE = re.compile(r"%\{(\w+)\}")


class MessageKey(str, Enum):
    APP_TERMINATED = "app.terminated"
    APP_INTERRUPTED = "app.interrupted"

    FILE_BINARY = "file.binary_file"
    FILE_CANNOT_PREVIEW = "file.cannot_preview"
    FILE_ERROR_PREFIX = "file.error_prefix"

    NAV_FAILED = "nav.failed"

    SEARCH_TEXT = "keybind.search_text"
    NO_MATCHES = "keybind.no_matches"
    PRESS_ANY_KEY = "keybind.press_any_key"
    TOOL_UNAVAILABLE = "keybind.tool_unavailable"

    INPUT_FILENAME = "keybind.input_filename"
    INPUT_DIRNAME = "keybind.input_dirname"
    INVALID_NAME = "keybind.invalid_name"
    ALREADY_EXISTS = "keybind.already_exists"
    FILE_CREATED = "keybind.file_created"
    DIRECTORY_CREATED = "keybind.directory_created"
    CREATION_ERROR = "keybind.creation_error"
    OPEN_FAILED = "keybind.open_failed"

    CONFIRM_TITLE = "dialog.confirm_title"
    CONFIRM_HINT = "dialog.confirm_hint"
    MOVE_CONFIRM = "bulk.move_confirm"
    COPY_CONFIRM = "bulk.copy_confirm"
    DELETE_TITLE = "bulk.delete_title"
    DELETE_CONFIRM = "bulk.delete_confirm"
    DELETE_WARNING = "bulk.delete_warning"
    NO_BASE_DIRECTORY = "bulk.no_base_directory"
    NO_SELECTION = "bulk.no_selection"
    BULK_RESULT_TITLE = "bulk.result_title"
    BULK_SUMMARY = "bulk.summary"
    BULK_FAILED_SUMMARY = "bulk.failed_summary"
    ACTION_MOVE = "bulk.action_move"
    ACTION_COPY = "bulk.action_copy"
    ACTION_DELETE = "bulk.action_delete"

    BOOKMARK_TITLE = "bookmark.title"
    BOOKMARK_MENU_ADD = "bookmark.menu_add"
    BOOKMARK_MENU_LIST = "bookmark.menu_list"
    BOOKMARK_MENU_REMOVE = "bookmark.menu_remove"
    BOOKMARK_MENU_JUMP = "bookmark.menu_jump"
    BOOKMARK_NAME_PROMPT = "bookmark.name_prompt"
    BOOKMARK_NUMBER_PROMPT = "bookmark.number_prompt"
    BOOKMARK_ADDED = "bookmark.added"
    BOOKMARK_REMOVED = "bookmark.removed"
    BOOKMARK_EMPTY = "bookmark.empty"
    BOOKMARK_EMPTY_NAME = "bookmark.empty_name"
    BOOKMARK_DUPLICATE_NAME = "bookmark.duplicate_name"
    BOOKMARK_DUPLICATE_PATH = "bookmark.duplicate_path"
    BOOKMARK_FULL = "bookmark.full"
    BOOKMARK_NOT_FOUND = "bookmark.not_found"
    BOOKMARK_PATH_MISSING = "bookmark.path_missing"
    BOOKMARK_SAVE_FAILED = "bookmark.save_failed"

    HISTORY_TITLE = "history.title"
    HISTORY_EMPTY = "history.empty"

    STATUS_BASE = "ui.status_base"
    STATUS_SELECTED = "ui.status_selected"
    FILTER_TAG = "ui.filter_tag"

    HELP_FULL = "help.full"
    HELP_SHORT = "help.short"
    HELP_FILTER_EDITING = "help.filter_editing"
    HELP_FILTER_ACTIVE = "help.filter_active"


CATALOGS: dict[str, dict[MessageKey, str]] = {
    "en": {
        MessageKey.APP_TERMINATED: "lazyfiler terminated",
        MessageKey.APP_INTERRUPTED: "lazyfiler interrupted",
        MessageKey.FILE_BINARY: "Binary file",
        MessageKey.FILE_CANNOT_PREVIEW: "Cannot preview",
        MessageKey.FILE_ERROR_PREFIX: "Error",
        MessageKey.NAV_FAILED: "Cannot open %{path}: %{reason}",
        MessageKey.SEARCH_TEXT: "Search text: ",
        MessageKey.NO_MATCHES: "No matches found.",
        MessageKey.PRESS_ANY_KEY: "Press any key to continue...",
        MessageKey.TOOL_UNAVAILABLE: "%{tool} is not installed",
        MessageKey.INPUT_FILENAME: "New file name: ",
        MessageKey.INPUT_DIRNAME: "New directory name: ",
        MessageKey.INVALID_NAME: "Invalid name: path separators are not allowed",
        MessageKey.ALREADY_EXISTS: "Already exists: %{name}",
        MessageKey.FILE_CREATED: "File created: %{name}",
        MessageKey.DIRECTORY_CREATED: "Directory created: %{name}",
        MessageKey.CREATION_ERROR: "Creation error: %{detail}",
        MessageKey.OPEN_FAILED: "Open failed: %{detail}",
        MessageKey.CONFIRM_TITLE: "Confirm",
        MessageKey.CONFIRM_HINT: "[y]es / [n]o",
        MessageKey.MOVE_CONFIRM: "Move %{count} item(s) to %{dest}?",
        MessageKey.COPY_CONFIRM: "Copy %{count} item(s) to %{dest}?",
        MessageKey.DELETE_TITLE: "Delete",
        MessageKey.DELETE_CONFIRM: "Delete %{count} item(s)?",
        MessageKey.DELETE_WARNING: "This cannot be undone.",
        MessageKey.NO_BASE_DIRECTORY: "No base directory configured",
        MessageKey.NO_SELECTION: "Nothing selected",
        MessageKey.BULK_RESULT_TITLE: "Result",
        MessageKey.BULK_SUMMARY: "%{action}: %{count} succeeded",
        MessageKey.BULK_FAILED_SUMMARY: "%{action}: %{count} succeeded, %{failed} failed",
        MessageKey.ACTION_MOVE: "Move",
        MessageKey.ACTION_COPY: "Copy",
        MessageKey.ACTION_DELETE: "Delete",
        MessageKey.BOOKMARK_TITLE: "Bookmarks",
        MessageKey.BOOKMARK_MENU_ADD: "[a] Add current directory",
        MessageKey.BOOKMARK_MENU_LIST: "[l] List bookmarks",
        MessageKey.BOOKMARK_MENU_REMOVE: "[r] Remove bookmark",
        MessageKey.BOOKMARK_MENU_JUMP: "[1-9] Jump to bookmark",
        MessageKey.BOOKMARK_NAME_PROMPT: "Bookmark name: ",
        MessageKey.BOOKMARK_NUMBER_PROMPT: "Bookmark number to remove: ",
        MessageKey.BOOKMARK_ADDED: "Bookmark added: %{name}",
        MessageKey.BOOKMARK_REMOVED: "Bookmark removed: %{name}",
        MessageKey.BOOKMARK_EMPTY: "No bookmarks",
        MessageKey.BOOKMARK_EMPTY_NAME: "Bookmark name must not be empty",
        MessageKey.BOOKMARK_DUPLICATE_NAME: "A bookmark named %{name} already exists",
        MessageKey.BOOKMARK_DUPLICATE_PATH: "This directory is already bookmarked",
        MessageKey.BOOKMARK_FULL: "Bookmark limit reached (%{max})",
        MessageKey.BOOKMARK_NOT_FOUND: "No bookmark in slot %{number}",
        MessageKey.BOOKMARK_PATH_MISSING: "Bookmarked path no longer exists: %{path}",
        MessageKey.BOOKMARK_SAVE_FAILED: "Could not save bookmarks to %{path}",
        MessageKey.HISTORY_TITLE: "Directory history",
        MessageKey.HISTORY_EMPTY: "No directory history",
        MessageKey.STATUS_BASE: "Base: %{path}",
        MessageKey.STATUS_SELECTED: "Selected: %{count}",
        MessageKey.FILTER_TAG: "[Filter: %{query}]",
        MessageKey.HELP_FULL: (
            "j/k:move h:back l:enter o:open Space:select s:filter /:find F:grep "
            "a/A:new m/p/x:move/copy/del b:bookmarks z:history r:refresh q:quit"
        ),
        MessageKey.HELP_SHORT: "j/k:move h:back l:enter o:open q:quit",
        MessageKey.HELP_FILTER_EDITING: (
            "Filter mode: Type to filter, ESC to clear, Enter to apply, Backspace to delete"
        ),
        MessageKey.HELP_FILTER_ACTIVE: "Filtered view active - s:edit filter ESC:clear filter",
    },
    "ja": {
        MessageKey.APP_TERMINATED: "lazyfilerを終了しました",
        MessageKey.APP_INTERRUPTED: "lazyfilerを中断しました",
        MessageKey.FILE_BINARY: "バイナリファイル",
        MessageKey.FILE_CANNOT_PREVIEW: "プレビューできません",
        MessageKey.FILE_ERROR_PREFIX: "エラー",
        MessageKey.NAV_FAILED: "%{path} を開けません: %{reason}",
        MessageKey.SEARCH_TEXT: "検索テキスト: ",
        MessageKey.NO_MATCHES: "マッチするものが見つかりません。",
        MessageKey.PRESS_ANY_KEY: "何かキーを押して続行...",
        MessageKey.TOOL_UNAVAILABLE: "%{tool} がインストールされていません",
        MessageKey.INPUT_FILENAME: "新しいファイル名: ",
        MessageKey.INPUT_DIRNAME: "新しいディレクトリ名: ",
        MessageKey.INVALID_NAME: "無効な名前です: パス区切り文字は使えません",
        MessageKey.ALREADY_EXISTS: "既に存在します: %{name}",
        MessageKey.FILE_CREATED: "ファイルを作成しました: %{name}",
        MessageKey.DIRECTORY_CREATED: "ディレクトリを作成しました: %{name}",
        MessageKey.CREATION_ERROR: "作成エラー: %{detail}",
        MessageKey.OPEN_FAILED: "開けませんでした: %{detail}",
        MessageKey.CONFIRM_TITLE: "確認",
        MessageKey.CONFIRM_HINT: "[y]はい / [n]いいえ",
        MessageKey.MOVE_CONFIRM: "%{count} 件を %{dest} へ移動しますか?",
        MessageKey.COPY_CONFIRM: "%{count} 件を %{dest} へコピーしますか?",
        MessageKey.DELETE_TITLE: "削除",
        MessageKey.DELETE_CONFIRM: "%{count} 件を削除しますか?",
        MessageKey.DELETE_WARNING: "この操作は元に戻せません。",
        MessageKey.NO_BASE_DIRECTORY: "ベースディレクトリが設定されていません",
        MessageKey.NO_SELECTION: "何も選択されていません",
        MessageKey.BULK_RESULT_TITLE: "結果",
        MessageKey.BULK_SUMMARY: "%{action}: %{count} 件成功",
        MessageKey.BULK_FAILED_SUMMARY: "%{action}: %{count} 件成功, %{failed} 件失敗",
        MessageKey.ACTION_MOVE: "移動",
        MessageKey.ACTION_COPY: "コピー",
        MessageKey.ACTION_DELETE: "削除",
        MessageKey.BOOKMARK_TITLE: "ブックマーク",
        MessageKey.BOOKMARK_MENU_ADD: "[a] 現在のディレクトリを追加",
        MessageKey.BOOKMARK_MENU_LIST: "[l] 一覧表示",
        MessageKey.BOOKMARK_MENU_REMOVE: "[r] 削除",
        MessageKey.BOOKMARK_MENU_JUMP: "[1-9] ジャンプ",
        MessageKey.BOOKMARK_NAME_PROMPT: "ブックマーク名: ",
        MessageKey.BOOKMARK_NUMBER_PROMPT: "削除するブックマーク番号: ",
        MessageKey.BOOKMARK_ADDED: "ブックマークを追加しました: %{name}",
        MessageKey.BOOKMARK_REMOVED: "ブックマークを削除しました: %{name}",
        MessageKey.BOOKMARK_EMPTY: "ブックマークはありません",
        MessageKey.BOOKMARK_EMPTY_NAME: "ブックマーク名を入力してください",
        MessageKey.BOOKMARK_DUPLICATE_NAME: "%{name} という名前のブックマークは既にあります",
        MessageKey.BOOKMARK_DUPLICATE_PATH: "このディレクトリは既にブックマークされています",
        MessageKey.BOOKMARK_FULL: "ブックマークの上限に達しました (%{max})",
        MessageKey.BOOKMARK_NOT_FOUND: "%{number} 番のブックマークはありません",
        MessageKey.BOOKMARK_PATH_MISSING: "ブックマーク先が存在しません: %{path}",
        MessageKey.BOOKMARK_SAVE_FAILED: "ブックマークを保存できませんでした: %{path}",
        MessageKey.HISTORY_TITLE: "ディレクトリ履歴",
        MessageKey.HISTORY_EMPTY: "履歴はありません",
        MessageKey.STATUS_BASE: "ベース: %{path}",
        MessageKey.STATUS_SELECTED: "選択: %{count}",
        MessageKey.FILTER_TAG: "[フィルター: %{query}]",
        MessageKey.HELP_FULL: (
            "j/k:移動 h:戻る l:入る o:開く Space:選択 s:絞込 /:検索 F:全文検索 "
            "a/A:新規 m/p/x:移動/複製/削除 b:ブックマーク z:履歴 r:更新 q:終了"
        ),
        MessageKey.HELP_SHORT: "j/k:移動 h:戻る l:入る o:開く q:終了",
        MessageKey.HELP_FILTER_EDITING: (
            "フィルターモード: 入力で絞込 ESC:解除 Enter:確定 Backspace:削除"
        ),
        MessageKey.HELP_FILTER_ACTIVE: "絞込表示中 - s:編集 ESC:解除",
    },
}


def normalize_language(value: str | None) -> str | None:
    """Reduce ``ja_JP.UTF-8``-style values to a supported language code."""
    if not value:
        return None
    code = re.split(r"[_.]", value.strip(), maxsplit=1)[0].lower()
    return code if code in AVAILABLE_LANGUAGES else None


class Messages:
    """Message lookup bound to one language."""

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        self.language = normalize_language(language) or DEFAULT_LANGUAGE

    def get(self, key: MessageKey | str, **values: object) -> str:
        """Return the translated message for ``key`` with placeholders filled."""
        try:
            message_key = MessageKey(key)
        except ValueError:
            return str(key)
        text = CATALOGS[self.language].get(message_key) or CATALOGS[DEFAULT_LANGUAGE].get(message_key)
        if text is None:
            return message_key.value

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            return str(values[name]) if name in values else match.group(0)

        return _PLACEHOLDER_RE.sub(substitute, text)
