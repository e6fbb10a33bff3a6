"""Theme management for the application."""

import tkinter as tk
from tkinter import ttk

class ThemeManager:
    """Manages application themes."""

    def __init__(self):
        self.current_theme = "light"
        self.themes = {
            "light": {
                "bg": "#f0fdf4",
                "card_bg": "#dcfce7",
                "fg": "#14532d",
                "muted_fg": "#15803d",
                "accent": "#22c55e",
                "title_fg": "#a78bfa",
            }
        }

    def get_theme(self, name: str = None) -> dict:
        """Get theme configuration."""
        if name is None:
            name = self.current_theme
        return self.themes.get(name, self.themes["light"])

    def apply_theme(self, root: tk.Tk, theme_name: str = None) -> dict:
        """Apply theme to root window and return the palette used."""
        theme = self.get_theme(theme_name)

        root.configure(bg=theme["bg"])

        style = ttk.Style()
        style.theme_use('clam')

        style.configure('TFrame', background=theme["bg"])
        style.configure('Card.TFrame', background=theme["card_bg"])
        style.configure('TLabel', background=theme["bg"], foreground=theme["fg"])
        style.configure('Title.TLabel', background=theme["bg"], foreground=theme["title_fg"],
                        font=('TkDefaultFont', 20, 'bold'))
        style.configure('Subtitle.TLabel', background=theme["bg"], foreground=theme["muted_fg"])
        style.configure('CardCaption.TLabel', background=theme["card_bg"], foreground=theme["muted_fg"])
        style.configure('CardValue.TLabel', background=theme["card_bg"], foreground=theme["fg"],
                        font=('TkDefaultFont', 14, 'bold'))
        style.configure('Accent.TButton', background=theme["accent"], foreground="#ffffff",
                        padding=(24, 8))
        style.configure('Confidence.Horizontal.TProgressbar', background=theme["accent"],
                        troughcolor=theme["card_bg"])
        return theme

def apply_theme(root: tk.Tk, theme_name: str = "light") -> dict:
    """Convenience function to apply theme."""
    manager = ThemeManager()
    return manager.apply_theme(root, theme_name)
