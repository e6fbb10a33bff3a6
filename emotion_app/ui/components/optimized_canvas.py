"""Canvas widget that shows the annotated camera frames."""

import tkinter as tk
from PIL import Image, ImageTk
import numpy as np
import cv2
from typing import Optional
import logging

from ...utils.image_utils import resize_to_fit

logger = logging.getLogger(__name__)


class OptimizedCanvas(tk.Canvas):
    """Canvas displaying BGR frames scaled to fit while keeping aspect ratio."""

    def __init__(self, master, **kwargs):
        super().__init__(master, **kwargs)

        self._current_image: Optional[ImageTk.PhotoImage] = None
        self._image_id: Optional[int] = None
        self._last_image_array: Optional[np.ndarray] = None

        self.bind('<Configure>', self._on_resize)

    def display_image(self, image: np.ndarray):
        """Display a BGR image centred on the canvas."""
        if image is None or image.size == 0:
            return

        self._last_image_array = image

        canvas_width = self.winfo_width()
        canvas_height = self.winfo_height()
        if canvas_width <= 1 or canvas_height <= 1:
            # Canvas not yet laid out; the <Configure> handler redraws later
            return

        fitted = resize_to_fit(image, canvas_width, canvas_height)
        image_rgb = cv2.cvtColor(fitted, cv2.COLOR_BGR2RGB)
        photo = ImageTk.PhotoImage(image=Image.fromarray(image_rgb))

        x = (canvas_width - image_rgb.shape[1]) // 2
        y = (canvas_height - image_rgb.shape[0]) // 2

        if self._image_id is None:
            self._image_id = self.create_image(x, y, anchor=tk.NW, image=photo)
        else:
            self.coords(self._image_id, x, y)
            self.itemconfig(self._image_id, image=photo)

        # Keep reference to prevent garbage collection
        self._current_image = photo

    def clear(self):
        if self._image_id is not None:
            self.delete(self._image_id)
            self._image_id = None
        self._current_image = None
        self._last_image_array = None

    def _on_resize(self, event):
        if self._last_image_array is not None:
            self.display_image(self._last_image_array)
