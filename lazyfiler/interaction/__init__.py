"""Interaction state, modal dialogs, and key-action orchestration."""

from .actions import ActionDependencies, BrowserActions, action_boundary
from .bulk import COPY, MOVE, BulkResult, run_bulk_delete, run_bulk_transfer
from .filtering import filter_entries
from .modal_runner import ModalRunner
from .modals import (
    CANCELLED,
    ConfirmModal,
    MenuModal,
    Modal,
    ModalResolution,
    NoticeModal,
    PromptModal,
    is_text_input,
)
from .state import EMPTY_FILTER, FilterState, InteractionState

__all__ = [
    "ActionDependencies",
    "BrowserActions",
    "action_boundary",
    "BulkResult",
    "COPY",
    "MOVE",
    "run_bulk_delete",
    "run_bulk_transfer",
    "filter_entries",
    "ModalRunner",
    "CANCELLED",
    "ConfirmModal",
    "MenuModal",
    "Modal",
    "ModalResolution",
    "NoticeModal",
    "PromptModal",
    "is_text_input",
    "EMPTY_FILTER",
    "FilterState",
    "InteractionState",
]
