# canvas.py
# Description: Pixel geometry of the drawing surface and its lanes.
#
import random
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Canvas:
    """
    Fixed-size drawing surface measured in pixels.

    Glyphs sit in square cells of ``cell_size`` pixels. A lane is the x
    coordinate of a column of cells; lanes start at 0 and are spaced one cell
    apart so that every glyph fits inside the canvas width.
    """
    width: int
    height: int
    cell_size: int

    @property
    def lane_count(self) -> int:
        return self.width // self.cell_size

    @property
    def row_count(self) -> int:
        return self.height // self.cell_size

    def lanes(self) -> List[int]:
        return [i * self.cell_size for i in range(self.lane_count)]

    def is_lane(self, x: int) -> bool:
        return 0 <= x < self.lane_count * self.cell_size and x % self.cell_size == 0

    def random_lane(self, rng: random.Random) -> int:
        """Pick a lane uniformly, ignoring occupancy."""
        return rng.randrange(self.lane_count) * self.cell_size
