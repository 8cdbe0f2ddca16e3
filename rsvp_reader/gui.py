"""Tkinter desktop reader for RSVP Reader.

WHY: Most readers want a window: open a file or paste text, press space,
and read with the mouse out of the way. The desktop window is the
product's main rendering and control surface.

HOW: A single ReaderApp class builds the window: a canvas that draws the
current word with its focus character pinned to the centre line, a
progress slider, playback buttons, a target-speed slider and preset
buttons. The PlaybackController runs on a TkScheduler, so every advance is
a tkinter ``after`` callback on the main loop. The controller publishes
PlaybackState to ReaderApp._on_state, which redraws.

RULES:
- All widget access happens on the main thread; nothing here starts threads
- Keyboard shortcuts go through KeyboardBindings, except when a text
  entry has focus
- Escape pauses and closes the window
- The progress slider spans [0, total-1] and calls seek_to()
- Preset buttons call apply_preset(); the speed slider calls update_config()
"""

from __future__ import annotations

import logging
import tkinter as tk
import tkinter.font as tkfont
from tkinter import filedialog, messagebox, ttk
from typing import Optional

from rsvp_reader.config import (
    MAX_TARGET_WPM,
    MIN_TARGET_WPM,
    WPM_STEP,
    load_speed_config,
)
from rsvp_reader.core.focus import split_at_focus
from rsvp_reader.core.models import PlaybackState, SpeedConfig
from rsvp_reader.core.timing import SPEED_PRESETS
from rsvp_reader.core.tokenizer import estimate_reading_time
from rsvp_reader.playback.controller import PlaybackController
from rsvp_reader.playback.keyboard import KeyboardBindings
from rsvp_reader.playback.scheduler import TkScheduler
from rsvp_reader.sources import ExtractionError, extract_file

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE = "RSVP Reader"
_WINDOW_MIN_WIDTH = 720
_WINDOW_MIN_HEIGHT = 420
_PAD = 8

_CANVAS_HEIGHT = 160
_WORD_FONT = ("Helvetica", 48)
_WORD_COLOR = "#4a4a4a"
_FOCUS_COLOR = "#e53935"
_GUIDE_COLOR = "#c8c8c8"
_BACKGROUND = "#fbf8f1"

_SHIFT_MASK = 0x0001
_SHORTCUTS_HINT = (
    "Space play/pause | ← → skip 10 (Shift: 50) | "
    "↑ ↓ speed | R reset | Esc close"
)


# ---------------------------------------------------------------------------
# Main GUI Application
# ---------------------------------------------------------------------------

class ReaderApp:
    """Main tkinter application.

    WHY: Provides the visual reader: centred word display plus controls.

    HOW: Builds the widgets, creates a PlaybackController on a TkScheduler
    and registers _on_state as its listener. Widgets only ever issue
    controller commands; the listener is the only place that redraws.

    RULES:
    - Widget callbacks never touch token indices directly
    - Slider updates made by the listener are ignored by the slider
      callbacks (self._syncing guard), so redraws never cause seeks
    """

    def __init__(
        self,
        root: tk.Tk,
        text: str = "",
        config: Optional[SpeedConfig] = None,
    ) -> None:
        self._root = root
        self._root.title(_WINDOW_TITLE)
        self._root.minsize(_WINDOW_MIN_WIDTH, _WINDOW_MIN_HEIGHT)
        self._syncing = False

        self._controller = PlaybackController(
            text,
            config=config if config is not None else load_speed_config(),
            scheduler=TkScheduler(root),
            on_complete=self._on_complete,
        )
        self._bindings = KeyboardBindings(self._controller, on_close=self.close)

        self._word_font = tkfont.Font(family=_WORD_FONT[0], size=_WORD_FONT[1])
        self._focus_font = tkfont.Font(
            family=_WORD_FONT[0], size=_WORD_FONT[1], weight="bold"
        )

        self._build_ui()
        self._controller.add_listener(self._on_state)
        self._root.bind("<KeyPress>", self._on_key)
        self._root.protocol("WM_DELETE_WINDOW", self.close)
        self._on_state(self._controller.state)

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        """Build the main window layout."""
        main = ttk.Frame(self._root, padding=_PAD)
        main.pack(fill=tk.BOTH, expand=True)

        # --- Source ---
        source = ttk.Frame(main)
        source.pack(fill=tk.X)
        ttk.Button(source, text="Open File...", command=self._open_file).pack(side=tk.LEFT)
        ttk.Button(source, text="Paste", command=self._paste_text).pack(side=tk.LEFT, padx=_PAD)
        self._info_var = tk.StringVar()
        ttk.Label(source, textvariable=self._info_var).pack(side=tk.RIGHT)

        # --- Word display ---
        self._canvas = tk.Canvas(
            main, height=_CANVAS_HEIGHT, background=_BACKGROUND, highlightthickness=0
        )
        self._canvas.pack(fill=tk.X, pady=_PAD)
        self._canvas.bind("<Configure>", lambda _e: self._draw_word(self._controller.state))

        # --- Progress ---
        progress = ttk.Frame(main)
        progress.pack(fill=tk.X)
        self._position_var = tk.StringVar()
        ttk.Label(progress, textvariable=self._position_var).pack(side=tk.LEFT)
        self._percent_var = tk.StringVar()
        ttk.Label(progress, textvariable=self._percent_var).pack(side=tk.RIGHT)
        self._progress_scale = ttk.Scale(
            main, from_=0, to=0, orient=tk.HORIZONTAL, command=self._on_progress_slider
        )
        self._progress_scale.pack(fill=tk.X, pady=(0, _PAD))

        # --- Playback buttons ---
        buttons = ttk.Frame(main)
        buttons.pack(pady=_PAD)
        ttk.Button(buttons, text="Reset", command=self._controller.reset).pack(side=tk.LEFT)
        ttk.Button(
            buttons, text="<< 10", command=lambda: self._controller.seek_by(-10)
        ).pack(side=tk.LEFT, padx=_PAD)
        self._play_button = ttk.Button(buttons, text="Play", command=self._controller.toggle)
        self._play_button.pack(side=tk.LEFT)
        ttk.Button(
            buttons, text="10 >>", command=lambda: self._controller.seek_by(10)
        ).pack(side=tk.LEFT, padx=_PAD)

        # --- Speed ---
        speed = ttk.LabelFrame(main, text="Target Speed", padding=_PAD)
        speed.pack(fill=tk.X)
        self._target_var = tk.StringVar()
        ttk.Label(speed, textvariable=self._target_var).pack(anchor=tk.E)
        self._speed_scale = ttk.Scale(
            speed,
            from_=MIN_TARGET_WPM,
            to=MAX_TARGET_WPM,
            orient=tk.HORIZONTAL,
            command=self._on_speed_slider,
        )
        self._speed_scale.pack(fill=tk.X)

        presets = ttk.Frame(speed)
        presets.pack(pady=(_PAD, 0))
        for name in SPEED_PRESETS:
            ttk.Button(
                presets,
                text=name.capitalize(),
                command=lambda n=name: self._apply_preset(n),
            ).pack(side=tk.LEFT, padx=2)

        self._wpm_var = tk.StringVar()
        ttk.Label(main, textvariable=self._wpm_var).pack(pady=(_PAD, 0))
        ttk.Label(main, text=_SHORTCUTS_HINT, foreground="gray").pack(pady=(_PAD, 0))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _draw_word(self, state: PlaybackState) -> None:
        """Draw the word with its focus character on the vertical centre line."""
        canvas = self._canvas
        canvas.delete("all")
        width = canvas.winfo_width() or _WINDOW_MIN_WIDTH
        cx, cy = width // 2, _CANVAS_HEIGHT // 2

        canvas.create_line(cx, 12, cx, 28, fill=_GUIDE_COLOR, width=2)
        canvas.create_line(cx, _CANVAS_HEIGHT - 28, cx, _CANVAS_HEIGHT - 12,
                           fill=_GUIDE_COLOR, width=2)

        if state.current_token is None:
            canvas.create_text(cx, cy, text="Open a file or paste text to start",
                               fill=_GUIDE_COLOR, font=("Helvetica", 16))
            return

        split = split_at_focus(state.current_token.word)
        half = self._focus_font.measure(split.focus) / 2.0
        canvas.create_text(cx - half, cy, text=split.before, anchor=tk.E,
                           fill=_WORD_COLOR, font=self._word_font)
        canvas.create_text(cx, cy, text=split.focus, anchor=tk.CENTER,
                           fill=_FOCUS_COLOR, font=self._focus_font)
        canvas.create_text(cx + half, cy, text=split.after, anchor=tk.W,
                           fill=_WORD_COLOR, font=self._word_font)

    def _on_state(self, state: PlaybackState) -> None:
        """Controller listener: refresh every widget from ``state``."""
        total = self._controller.total
        config = self._controller.config

        self._draw_word(state)
        self._play_button.configure(text="Pause" if state.is_playing else "Play")
        self._position_var.set(
            "Word {} of {}".format(state.current_index + 1 if total else 0, total)
        )
        self._percent_var.set("{}%".format(round(state.progress * 100)))

        ramping = state.current_index < config.ramp_up_words and state.is_playing
        self._wpm_var.set("Current: {} WPM{}".format(
            state.current_wpm, " (ramping up...)" if ramping else ""
        ))
        self._sync_speed()

        self._syncing = True
        try:
            self._progress_scale.configure(to=max(0, total - 1))
            self._progress_scale.set(state.current_index)
        finally:
            self._syncing = False

    def _sync_speed(self) -> None:
        target = self._controller.config.target_wpm
        self._target_var.set("{} WPM".format(target))
        self._syncing = True
        try:
            self._speed_scale.set(target)
        finally:
            self._syncing = False

    def _update_info(self, name: str) -> None:
        tokens = self._controller.tokens
        if not tokens:
            self._info_var.set("")
            return
        minutes = estimate_reading_time(tokens, self._controller.config.target_wpm)
        self._info_var.set("{}: {:,} words, ~{} min".format(name, len(tokens), minutes))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def load_text(self, text: str, name: str = "Text") -> None:
        self._controller.set_text(text)
        self._update_info(name)

    def _open_file(self) -> None:
        path = filedialog.askopenfilename(
            title="Open text",
            filetypes=[("Text files", "*.txt *.md"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            result = extract_file(path)
        except ExtractionError as e:
            messagebox.showerror("Could not open file", str(e))
            return
        self.load_text(result.text, result.source_name)

    def _paste_text(self) -> None:
        try:
            text = self._root.clipboard_get()
        except tk.TclError:
            messagebox.showinfo("Paste", "The clipboard does not contain text.")
            return
        self.load_text(text, "Clipboard")

    def _apply_preset(self, name: str) -> None:
        self._controller.apply_preset(name)
        self._sync_speed()

    def _on_speed_slider(self, value: str) -> None:
        if self._syncing:
            return
        # Snap to the keyboard step so slider and arrow keys agree
        target = int(round(float(value) / WPM_STEP)) * WPM_STEP
        target = max(MIN_TARGET_WPM, min(MAX_TARGET_WPM, target))
        if target != self._controller.config.target_wpm:
            self._controller.update_config(target_wpm=target)
        self._target_var.set("{} WPM".format(target))

    def _on_progress_slider(self, value: str) -> None:
        if self._syncing:
            return
        index = int(round(float(value)))
        if index != self._controller.state.current_index:
            self._controller.seek_to(index)

    def _on_key(self, event: tk.Event) -> Optional[str]:
        if isinstance(event.widget, (tk.Entry, ttk.Entry, tk.Text)):
            return None
        shift = bool(event.state & _SHIFT_MASK)
        if not self._bindings.handle(event.keysym, shift=shift):
            return None
        # Escape has already destroyed the window
        if event.keysym in ("Up", "Down"):
            self._sync_speed()
        return "break"

    def _on_complete(self) -> None:
        logger.info("Finished reading")

    def close(self) -> None:
        self._controller.close()
        self._root.destroy()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(text: str = "") -> None:
    """Launch the Tkinter reader.

    RULES:
    - This function blocks until the window is closed
    - Must be called from the main thread
    """
    root = tk.Tk()
    ReaderApp(root, text=text)
    root.mainloop()


if __name__ == "__main__":
    main()
