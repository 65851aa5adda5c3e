"""Terminal UI module for fredchat.

Provides a Textual-based chat widget bound to ChatViewModel.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message list, input bar, error banner, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: UI constants and log levels
- app.py: Application orchestration (binding the view-model to widgets)
"""

from .app import ChatWidgetApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ErrorBanner

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ChatWidgetApp",
    "DebugPanel",
    "ErrorBanner",
    "LogLevel",
    "run_textual_tui",
]
