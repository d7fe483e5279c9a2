"""
GUI for TapCalc
Tkinter front end: paints the engine state and turns clicks and keys into commands
"""
import logging
import tkinter as tk

import config
import keymap
from calculator import CalculatorEngine

logger = logging.getLogger(__name__)

# Tk modifier bits for Alt: Mod1 on X11, 0x20000 on Windows
ALT_MASKS = (0x0008, 0x20000)

# (caption, kind, command, arg) in grid order, four per row
BUTTON_LAYOUT = [
    ("MC", "memory", "memory", "MC"),
    ("MR", "memory", "memory", "MR"),
    ("M+", "memory", "memory", "M+"),
    ("M-", "memory", "memory", "M-"),

    ("C", "danger", "clear", None),
    ("√", "operator", "square_root", None),
    ("x²", "operator", "square", None),
    ("÷", "operator", "operator", "÷"),

    ("7", "normal", "digit", "7"),
    ("8", "normal", "digit", "8"),
    ("9", "normal", "digit", "9"),
    ("×", "operator", "operator", "×"),

    ("4", "normal", "digit", "4"),
    ("5", "normal", "digit", "5"),
    ("6", "normal", "digit", "6"),
    ("−", "operator", "operator", "−"),

    ("1", "normal", "digit", "1"),
    ("2", "normal", "digit", "2"),
    ("3", "normal", "digit", "3"),
    ("+", "operator", "operator", "+"),

    ("±", "normal", "sign", None),
    ("0", "normal", "digit", "0"),
    (".", "normal", "point", None),
    ("=", "equals", "operator", "="),
]


class TapCalcGUI:
    def __init__(self, root, engine=None, dark_mode=False):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        self.engine = engine or CalculatorEngine()
        self.dark_mode = dark_mode
        self.T: dict = config.get_theme(self.dark_mode)
        self.buttons = {}

        self.create_widgets()
        self.root.bind('<Key>', self.on_key_press)
        self.root.bind('<F2>', lambda e: self._toggle_dark_mode())
        self.refresh()

    # ── Theme helpers ──────────────────────────────────────────────────────────
    def _toggle_dark_mode(self):
        self.dark_mode = not self.dark_mode
        self.apply_theme()

    def apply_theme(self):
        """Switch palette and rebuild the widgets; engine state is kept"""
        self.T = config.get_theme(self.dark_mode)
        for w in self.root.winfo_children():
            w.destroy()
        self.buttons = {}
        self.create_widgets()
        self.refresh()

    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a flat styled button."""
        T = self.T
        if kind == "equals":
            bg, fg, abg = T["equals_bg"], T["equals_fg"], T["bg_dark"]
        elif kind == "operator":
            bg, fg, abg = T["btn_bg"], T["operator_fg"], T["bg_dark"]
        elif kind == "memory":
            bg, fg, abg = T["bg_dark"], T["memory_fg"], T["shadow_dark"]
        elif kind == "danger":
            bg, fg, abg = T["danger"], "#FFFFFF", T["bg_dark"]
        else:
            bg, fg, abg = T["btn_bg"], T["btn_fg"], T["bg_dark"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=abg, activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            highlightcolor=T["shadow_lite"],
            **kw
        )

    # ── Layout ─────────────────────────────────────────────────────────────────
    def create_widgets(self):
        T = self.T
        self.root.configure(bg=T["bg"])

        # --- Display: history line, memory state, digits ---
        display_frame = tk.Frame(self.root, bg=T["display_bg"])
        display_frame.pack(side=tk.TOP, fill=tk.X, padx=8, pady=(8, 4))

        self.history_label = tk.Label(display_frame, text="", anchor="e",
                                      font=config.HISTORY_FONT,
                                      bg=T["display_bg"], fg=T["history_fg"])
        self.history_label.pack(side=tk.TOP, fill=tk.X, padx=6, pady=(4, 0))

        row = tk.Frame(display_frame, bg=T["display_bg"])
        row.pack(side=tk.TOP, fill=tk.X)
        self.state_label = tk.Label(row, text="", width=2, font=config.STATE_FONT,
                                    bg=T["display_bg"], fg=T["memory_fg"])
        self.state_label.pack(side=tk.LEFT, padx=(6, 0))
        self.display = tk.Label(row, text="0", anchor="e", font=config.DISPLAY_FONT,
                                bg=T["display_bg"], fg=T["display_fg"])
        self.display.pack(side=tk.RIGHT, fill=tk.X, expand=True, padx=6, pady=(0, 4))

        # --- Controls ---
        controls = tk.Frame(self.root, bg=T["bg"])
        controls.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=(4, 8))
        for col in range(4):
            controls.grid_columnconfigure(col, weight=1, uniform="keys")

        for index, (caption, kind, command, arg) in enumerate(BUTTON_LAYOUT):
            r, c = divmod(index, 4)
            controls.grid_rowconfigure(r, weight=1, uniform="keys")
            btn = self._neu_btn(controls, caption, kind=kind,
                                command=lambda cmd=command, a=arg: self.run_command(cmd, a))
            btn.grid(row=r, column=c, sticky="nsew", padx=2, pady=2)
            self.buttons[caption] = btn

    # ── Dispatch ───────────────────────────────────────────────────────────────
    def run_command(self, command, arg=None):
        """Send one command to the engine and repaint"""
        accepted = self.engine.execute(command, arg)
        if not accepted:
            logger.debug(f"Command {command} {arg or ''} ignored")
        self.refresh()

    def refresh(self):
        """Paint the engine observables"""
        self.display.config(text=self.engine.display)
        self.history_label.config(text=self.engine.history)
        self.state_label.config(text="M" if self.engine.memory_active else "")

    def on_key_press(self, event):
        """Handle keyboard input through the static key map"""
        alt = any(event.state & mask for mask in ALT_MASKS)
        binding = keymap.lookup(key=event.char or None, keysym=event.keysym, alt=alt)
        if binding is None:
            return None

        self.run_command(binding.command, binding.arg)
        self._flash(self.buttons.get(binding.label))
        return "break"

    def _flash(self, button):
        """Show a key press on its button for a moment"""
        if button is None:
            return
        normal_bg = button.cget("bg")
        button.config(relief=tk.SUNKEN, bg=self.T["bg_dark"])

        def _release():
            if button.winfo_exists():
                button.config(relief=tk.FLAT, bg=normal_bg)

        self.root.after(config.KEY_FEEDBACK_MS, _release)
