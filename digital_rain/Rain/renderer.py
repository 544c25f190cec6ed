# renderer.py
# Description: Drawing surfaces that consume the rain field's glyph cells.
#
# Coordinates handed to a renderer are pixels; ``y`` is the glyph baseline, so
# a glyph drawn at ``y`` occupies the band ``[y - cell_size, y)``.
#
from typing import Dict, List, Optional, Protocol, Tuple

from rich.cells import cell_len
from rich.color import Color
from rich.style import Style
from rich.text import Text

from .canvas import Canvas
from .colors import BACKGROUND, RGBA

RGB = Tuple[int, int, int]


class Renderer(Protocol):
    """Anything that can paint coloured glyphs at absolute pixel positions."""

    def clear(self, color: RGBA) -> None:
        ...

    def draw_glyph(self, x: int, y: int, glyph: str, color: RGBA) -> None:
        ...


class TextGridRenderer:
    """
    Renders onto a grid of terminal cells and produces a ``rich.text.Text``.

    Every lane maps to ``column_width`` terminal columns so that wide glyphs
    (Katakana take two columns) stay aligned; narrower glyphs are padded.
    Terminals cannot blend per glyph, so colours are pre-composited against
    the background.
    """

    def __init__(self, canvas: Canvas, column_width: int = 2,
                 background: RGBA = BACKGROUND, bold: bool = True):
        if column_width <= 0:
            raise ValueError(f"column_width must be positive, got {column_width}")
        self.canvas = canvas
        self.column_width = column_width
        self.background = background
        self.bold = bold
        self.columns = canvas.lane_count
        self.rows = canvas.row_count
        self._grid: List[List[Optional[Tuple[str, RGB]]]] = []
        self._styles: Dict[Tuple[RGB, RGB], Style] = {}
        self.clear(background)

    def clear(self, color: RGBA) -> None:
        self.background = color
        self._grid = [[None] * self.columns for _ in range(self.rows)]

    def draw_glyph(self, x: int, y: int, glyph: str, color: RGBA) -> None:
        column = x // self.canvas.cell_size
        row = y // self.canvas.cell_size - 1
        if not (0 <= column < self.columns and 0 <= row < self.rows):
            return
        self._grid[row][column] = (glyph, color.composite(self.background))

    def cell(self, column: int, row: int) -> Optional[Tuple[str, RGB]]:
        """Glyph and composited colour at a grid position, if anything was drawn."""
        return self._grid[row][column]

    def _style(self, rgb: RGB) -> Style:
        key = (rgb, self.background.rgb)
        style = self._styles.get(key)
        if style is None:
            style = Style(
                color=Color.from_rgb(*rgb),
                bgcolor=Color.from_rgb(*self.background.rgb),
                bold=self.bold,
            )
            self._styles[key] = style
        return style

    def _pad(self, glyph: str) -> str:
        return glyph + " " * max(0, self.column_width - cell_len(glyph))

    def to_text(self) -> Text:
        """Build the current frame, merging runs that share a colour."""
        text = Text(no_wrap=True, overflow="crop")
        blank = " " * self.column_width
        blank_rgb = self.background.rgb

        for row_number, row in enumerate(self._grid):
            current_rgb = None
            current_text = ""
            for cell in row:
                if cell is None:
                    chunk, rgb = blank, blank_rgb
                else:
                    chunk, rgb = self._pad(cell[0]), cell[1]

                if rgb != current_rgb:
                    if current_text:
                        text.append(current_text, self._style(current_rgb))
                    current_text = chunk
                    current_rgb = rgb
                else:
                    current_text += chunk

            if current_text:
                text.append(current_text, self._style(current_rgb))
            if row_number < self.rows - 1:
                text.append("\n")

        return text
