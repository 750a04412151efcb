"""External search tool adapters and their output parsers."""

from .parsing import HistoryEntry, Location, parse_location_line, parse_selected_path, parse_zoxide_scores
from .tools import (
    ExternalToolRunner,
    ToolResult,
    pick_file_by_name,
    pick_location,
    require_tool,
    search_content,
    zoxide_history,
)

__all__ = [
    "ExternalToolRunner",
    "HistoryEntry",
    "Location",
    "ToolResult",
    "parse_location_line",
    "parse_selected_path",
    "parse_zoxide_scores",
    "pick_file_by_name",
    "pick_location",
    "require_tool",
    "search_content",
    "zoxide_history",
]
