"""
GUI.components.styles - Theme and style configuration

Dark theme for the screening window: big monospace timecode readout,
card frames, pill buttons and the marker table.
"""

from tkinter import ttk

# =====================================================================
# COLOR PALETTE - Dark
# =====================================================================

DARK_BG = "#000000"           # Window background
DARK_BG_CARD = "#0A0A0A"      # Cards
DARK_SURFACE = "#121212"      # Inputs, table body
DARK_BORDER = "#1F1F1F"

TEXT_PRIMARY = "#FFFFFF"
TEXT_SECONDARY = "#B3B3B3"

PRIMARY = "#3B82F6"           # Play / capture / export
PRIMARY_HOVER = "#2563EB"
DANGER = "#EF4444"            # Reset
DANGER_HOVER = "#DC2626"
SUMMARY_BG = "#0D1B33"


# =====================================================================
# FONT CONFIGURATIONS
# =====================================================================

FONT_FAMILY = "Segoe UI"
FONT_FAMILY_MONO = "Consolas"

FONT_TIMECODE = (FONT_FAMILY_MONO, 44, "bold")
FONT_TITLE = (FONT_FAMILY, 12, "bold")
FONT_BODY = (FONT_FAMILY, 10)
FONT_SMALL = (FONT_FAMILY, 9)
FONT_MONO = (FONT_FAMILY_MONO, 10)


# =====================================================================
# STYLE INITIALIZATION
# =====================================================================

def init_dark_theme(style: ttk.Style = None) -> ttk.Style:
    """
    Configure ttk styles used by the screening window.

    Args:
        style: Optional existing ttk.Style instance

    Returns:
        Configured ttk.Style instance
    """
    if style is None:
        style = ttk.Style()

    if "clam" in style.theme_names():
        style.theme_use("clam")

    # ==================== Frames ====================
    style.configure("TFrame", background=DARK_BG)
    style.configure("Card.TFrame", background=DARK_BG_CARD, relief="flat")

    # ==================== Labels ====================
    style.configure("TLabel", background=DARK_BG_CARD, foreground=TEXT_PRIMARY, font=FONT_BODY)
    style.configure("Title.TLabel", background=DARK_BG_CARD, foreground=TEXT_PRIMARY, font=FONT_TITLE)
    style.configure("Muted.TLabel", background=DARK_BG_CARD, foreground=TEXT_SECONDARY, font=FONT_SMALL)
    style.configure(
        "Timecode.TLabel",
        background=DARK_BG_CARD,
        foreground=TEXT_PRIMARY,
        font=FONT_TIMECODE,
        anchor="center",
    )
    style.configure("Badge.TLabel", background=DARK_BG, foreground=TEXT_SECONDARY, font=FONT_TITLE)

    # ==================== Buttons ====================
    style.configure("TButton", background=DARK_SURFACE, foreground=TEXT_PRIMARY, padding=(10, 6))
    style.map("TButton", background=[("active", "#1C1C1C"), ("disabled", DARK_BG_CARD)])

    style.configure(
        "Primary.TButton",
        background=PRIMARY,
        foreground="#FFFFFF",
        font=(FONT_FAMILY, 10, "bold"),
        padding=(12, 6),
    )
    style.map("Primary.TButton", background=[("active", PRIMARY_HOVER)])

    style.configure(
        "Danger.TButton",
        background=DANGER,
        foreground="#FFFFFF",
        font=(FONT_FAMILY, 10, "bold"),
        padding=(12, 6),
    )
    style.map("Danger.TButton", background=[("active", DANGER_HOVER)])

    # ==================== Radio (fps / sort) ====================
    style.configure("TRadiobutton", background=DARK_BG_CARD, foreground=TEXT_PRIMARY)
    style.map(
        "TRadiobutton",
        background=[("active", DARK_SURFACE)],
        foreground=[("disabled", TEXT_SECONDARY)],
    )

    # ==================== Timecode picker ====================
    style.configure(
        "TSpinbox",
        fieldbackground=DARK_SURFACE,
        foreground=TEXT_PRIMARY,
        insertcolor=PRIMARY,
        arrowcolor=TEXT_PRIMARY,
    )

    # ==================== Marker table ====================
    style.configure(
        "Markers.Treeview",
        background=DARK_SURFACE,
        fieldbackground=DARK_SURFACE,
        foreground=TEXT_PRIMARY,
        rowheight=26,
        font=FONT_MONO,
    )
    style.configure(
        "Markers.Treeview.Heading",
        background=DARK_BG_CARD,
        foreground=TEXT_SECONDARY,
        font=(FONT_FAMILY, 9, "bold"),
    )
    style.map("Markers.Treeview", background=[("selected", PRIMARY_HOVER)])

    style.configure("TScrollbar", background=DARK_SURFACE, troughcolor=DARK_BG_CARD)

    return style


def get_text_config() -> dict:
    """Configuration dict for tk.Text widgets (summary and log panes)."""
    return {
        "bg": DARK_SURFACE,
        "fg": TEXT_PRIMARY,
        "insertbackground": PRIMARY,
        "relief": "flat",
        "bd": 0,
        "wrap": "word",
        "font": FONT_MONO,
    }
