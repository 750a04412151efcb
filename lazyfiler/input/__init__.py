"""Input-layer public API for key decoding and mode handlers."""

from .dispatch import KeyDispatcher
from .key_filter import handle_filter_key
from .key_normal import build_normal_registry, handle_normal_key
from .key_registry import KeyComboBinding, KeyComboRegistry, normalize_key_token
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "normalize_key_token",
    "KeyDispatcher",
    "build_normal_registry",
    "handle_normal_key",
    "handle_filter_key",
]
