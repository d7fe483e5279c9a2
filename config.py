"""
TapCalc Configuration Settings
"""
import logging
import os

# Application Settings
APP_NAME = "TapCalc"
VERSION = "1.0.0"

# Engine Settings
MAX_DIGIT_COUNT = 12          # digits the display can hold

# Display Settings
WINDOW_WIDTH = 320
WINDOW_HEIGHT = 480
DISPLAY_FONT = ("Consolas", 28, "bold")   # LCD/segmented-style font
HISTORY_FONT = ("Consolas", 11)
BUTTON_FONT = ("Segoe UI", 14)
STATE_FONT = ("Segoe UI", 10, "bold")

# How long a key press keeps its button highlighted
KEY_FEEDBACK_MS = 100

# ── Palettes ───────────────────────────────────────────────────────────────────

NEU_LIGHT = {
    "bg":           "#DDE6ED",   # base surface
    "bg_dark":      "#C8D4DF",   # pressed / inset
    "shadow_dark":  "#B2BFC8",
    "shadow_lite":  "#FFFFFF",
    "display_bg":   "#C8D4DF",
    "display_fg":   "#1A2332",   # LCD dark on light
    "history_fg":   "#6E8090",
    "btn_bg":       "#DDE6ED",
    "btn_fg":       "#2B3A4A",
    "operator_fg":  "#1E7A56",
    "memory_fg":    "#2C5F8A",
    "equals_bg":    "#2E8B57",
    "equals_fg":    "#FFFFFF",
    "danger":       "#B03A2E",
}

NEU_DARK = {
    "bg":           "#1E2530",
    "bg_dark":      "#161C26",
    "shadow_dark":  "#10161E",
    "shadow_lite":  "#283040",
    "display_bg":   "#161C26",
    "display_fg":   "#9ADDB0",   # LCD green on dark
    "history_fg":   "#4E6070",
    "btn_bg":       "#1E2530",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "memory_fg":    "#5E8FC8",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "danger":       "#E55A4E",
}


def get_theme(dark: bool) -> dict:
    """Return the active colour palette."""
    return NEU_DARK if dark else NEU_LIGHT


# Logging settings
LOG_LEVEL = getattr(logging, os.environ.get("TAPCALC_LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_FILE = os.environ.get("TAPCALC_LOG_FILE")

# Web API settings
WEB_HOST = os.environ.get("TAPCALC_WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("TAPCALC_WEB_PORT", 8888))
START_WEB_API = os.environ.get("TAPCALC_START_WEB_API", "1") == "1"
