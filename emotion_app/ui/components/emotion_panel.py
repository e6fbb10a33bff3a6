"""Status / emotion / confidence cards."""

import tkinter as tk
from tkinter import ttk

from ...core.entities import EmotionState


class EmotionPanel(ttk.Frame):
    """Three cards mirroring the observable pipeline state."""

    def __init__(self, master, **kwargs):
        super().__init__(master, **kwargs)

        self.status_var = tk.StringVar(value=EmotionState().status)
        self.emotion_var = tk.StringVar(value=EmotionState().emotion)
        self.confidence_var = tk.StringVar(value="0.0%")
        self.confidence_value = tk.DoubleVar(value=0.0)

        self._add_card(0, "Status", self.status_var)
        self._add_card(1, "Emotion", self.emotion_var)
        confidence_card = self._add_card(2, "Confidence", self.confidence_var)
        ttk.Progressbar(
            confidence_card,
            variable=self.confidence_value,
            maximum=100.0,
            style='Confidence.Horizontal.TProgressbar',
        ).pack(fill=tk.X, pady=(6, 0))

        for column in range(3):
            self.columnconfigure(column, weight=1, uniform="cards")

    def _add_card(self, column: int, caption: str, variable: tk.StringVar) -> ttk.Frame:
        card = ttk.Frame(self, style='Card.TFrame', padding=12)
        card.grid(row=0, column=column, sticky="nsew", padx=6)
        ttk.Label(card, text=caption, style='CardCaption.TLabel').pack(anchor=tk.W)
        ttk.Label(card, textvariable=variable, style='CardValue.TLabel').pack(anchor=tk.W)
        return card

    def update_state(self, state: EmotionState) -> None:
        """Refresh the cards; must be called on the tkinter thread."""
        percent = min(state.confidence * 100.0, 100.0)
        self.status_var.set(state.status)
        self.emotion_var.set(state.emotion)
        self.confidence_var.set(f"{percent:.1f}%")
        self.confidence_value.set(percent)
