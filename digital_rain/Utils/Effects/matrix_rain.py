# matrix_rain.py
# Description: The "matrix_rain" effect, a RainField drawn onto a terminal text grid.
#
import random
from typing import Any, Optional

from rich.cells import cell_len
from rich.text import Text

from loguru import logger

from ...Rain import RainField, RainSettings, TextGridRenderer
from .base_effect import BaseEffect, register_effect


def glyph_column_width(settings: RainSettings) -> int:
    """Widest terminal cell width of any glyph the settings can produce."""
    first = settings.glyph_first_code_point
    return max(
        1,
        max(cell_len(chr(cp)) for cp in range(first, first + settings.glyph_alphabet_size)),
    )


@register_effect("matrix_rain")
class MatrixRainEffect(BaseEffect):
    """Falling streams of Katakana with a bright head and a fading tail."""

    def __init__(
        self,
        parent_widget: Any,
        width: int = 80,
        height: int = 24,
        settings: Optional[RainSettings] = None,
        rng: Optional[random.Random] = None,
        **kwargs
    ):
        super().__init__(parent_widget, width=width, height=height, **kwargs)
        settings = (settings or RainSettings()).validate()
        self.column_width = glyph_column_width(settings)

        if settings.fit_to_terminal:
            lanes = max(1, width // self.column_width)
            rows = max(1, height)
            settings = settings.with_canvas(lanes * settings.cell_size, rows * settings.cell_size)
            logger.debug(f"Canvas fitted to {width}x{height} terminal: {lanes} lanes, {rows} rows")

        self.settings = settings
        self.field = RainField(settings, rng=rng)
        self.renderer = TextGridRenderer(self.field.canvas, column_width=self.column_width)

    def update(self) -> Text:
        """Advance the rain one frame and return it as styled text."""
        super().update()
        self.field.step(self.renderer)
        return self.renderer.to_text()

