"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes for the Dark, Light, Aurora and Glass themes
- Which themes count as dark for the dark/light toggle

Themes are stored in client storage by display name.
"""

from textual.theme import Theme

from .config import DEFAULT_THEME

DARK = Theme(
    name="mentor-dark",
    primary="#facc15",      # Yellow - main accent
    secondary="#9ca3af",
    accent="#facc15",
    foreground="#f3f4f6",
    background="#111827",   # Gray 900
    success="#4ade80",
    warning="#fbbf24",
    error="#ef4444",
    surface="#1f2937",      # Gray 800 - assistant bubbles
    panel="#030712",        # Gray 950 - sidebar and bars
    dark=True,
    variables={
        "border": "#1f2937",
        "text-muted": "#9ca3af",
        "footer-key-foreground": "#facc15",
        "input-selection-background": "#facc15 30%",
    },
)

LIGHT = Theme(
    name="mentor-light",
    primary="#ca8a04",
    secondary="#6b7280",
    accent="#fde047",
    foreground="#111827",
    background="#f3f4f6",   # Gray 100
    success="#16a34a",
    warning="#d97706",
    error="#dc2626",
    surface="#e5e7eb",
    panel="#ffffff",
    dark=False,
    variables={
        "border": "#e5e7eb",
        "text-muted": "#6b7280",
        "footer-key-foreground": "#ca8a04",
    },
)

AURORA = Theme(
    name="mentor-aurora",
    primary="#34d399",      # Emerald 400
    secondary="#94a3b8",
    accent="#6ee7b7",
    foreground="#f1f5f9",
    background="#0f172a",   # Slate 900
    success="#34d399",
    warning="#fbbf24",
    error="#f87171",
    surface="#1e293b",
    panel="#020617",
    dark=True,
    variables={
        "border": "#1e293b",
        "text-muted": "#94a3b8",
        "footer-key-foreground": "#34d399",
    },
)

GLASS = Theme(
    name="mentor-glass",
    primary="#fde047",
    secondary="#d4d4d8",
    accent="#fef08a",
    foreground="#f4f4f5",
    background="#18181b",   # Zinc 900
    success="#86efac",
    warning="#fcd34d",
    error="#fca5a5",
    surface="#3f3f46",
    panel="#27272a",
    dark=True,
    variables={
        "border": "#52525b",
        "text-muted": "#d4d4d8",
        "footer-key-foreground": "#fde047",
    },
)

THEMES: dict[str, Theme] = {
    "Dark": DARK,
    "Light": LIGHT,
    "Aurora": AURORA,
    "Glass": GLASS,
}


def resolve_theme(name: str | None) -> str:
    """Return ``name`` if it is a known theme, else the default theme name."""
    if name in THEMES:
        return name
    return DEFAULT_THEME


def toggled_theme(name: str) -> str:
    """Theme picked by the dark/light toggle."""
    return "Dark" if name == "Light" else "Light"
