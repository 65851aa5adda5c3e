"""Theme definitions for the TUI.

Hides color palette decisions. To add a theme, define it here and
register it in the app.
"""

from textual.theme import Theme

# Nord-inspired dark palette
FRED_NIGHT = Theme(
    name="fred-night",
    primary="#88c0d0",      # Frost - main accent
    secondary="#b48ead",    # Aurora purple - bot messages
    accent="#ebcb8b",       # Aurora yellow - highlights
    foreground="#e5e9f0",   # Snow storm
    background="#242933",
    success="#a3be8c",      # Aurora green - user messages, send button
    warning="#d08770",
    error="#bf616a",
    surface="#2e3440",
    panel="#292e39",
    dark=True,
    variables={
        "block-cursor-foreground": "#242933",
        "block-cursor-background": "#d8dee9",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#e5e9f0",
        "input-cursor-foreground": "#242933",
        "input-selection-background": "#88c0d0 30%",
        "border": "#4c566a",
        "border-blurred": "#3b4252",
        "scrollbar": "#3b4252",
        "scrollbar-hover": "#4c566a",
        "scrollbar-active": "#88c0d0",
        "scrollbar-background": "#292e39",
        "text-muted": "#7b88a1",
        "footer-key-foreground": "#ebcb8b",
        "footer-background": "#242933",
    },
)
