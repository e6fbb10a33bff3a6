"""Tkinter presentation layer."""
