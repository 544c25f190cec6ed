"""
The rain field: a fixed pool of raindrops advanced one frame at a time.

The field never sleeps or loops on its own. A frame driver calls
``advance_frame()`` (or ``step()``) at its own cadence and then reads the
drawable cells or hands a renderer to ``render()``.
"""

import random
from typing import Iterator, List, NamedTuple, Optional

from loguru import logger

from .canvas import Canvas
from .colors import BACKGROUND, RGBA, color_for
from .glyph_source import GlyphSource
from .lane_allocator import LaneAllocator
from .raindrop import Raindrop, prepare_raindrop
from .renderer import Renderer
from .settings import RainSettings


class GlyphCell(NamedTuple):
    """One glyph to draw: pixel position (baseline y), symbol and colour."""
    x: int
    y: int
    glyph: str
    color: RGBA


class RainField:
    """Owns the raindrop pool and, when lanes are exclusive, the lane allocator."""

    def __init__(self, settings: Optional[RainSettings] = None, rng: Optional[random.Random] = None):
        self.settings = (settings or RainSettings()).validate()
        self.rng = rng if rng is not None else random.Random(self.settings.seed)
        self.canvas = Canvas(
            width=self.settings.screen_width,
            height=self.settings.screen_height,
            cell_size=self.settings.cell_size,
        )
        self.glyph_source = GlyphSource(
            self.settings.max_tail_length,
            rng=self.rng,
            first_code_point=self.settings.glyph_first_code_point,
            alphabet_size=self.settings.glyph_alphabet_size,
        )
        self.dim_threshold = self.settings.dim_threshold

        self.allocator: Optional[LaneAllocator] = None
        if not self.settings.overlap_allowed:
            self.allocator = LaneAllocator(self.rng)
            self.allocator.initialize(self.canvas.width, self.canvas.cell_size)

        pool_size = self.settings.pool_size
        if pool_size != self.settings.max_raindrops:
            logger.info(
                f"Raindrop pool sized to {pool_size} (one per lane) instead of "
                f"max_raindrops={self.settings.max_raindrops}"
            )

        self.raindrops: List[Raindrop] = [Raindrop() for _ in range(pool_size)]
        for raindrop in self.raindrops:
            self._prepare(raindrop)

        self.frame_count = 0
        logger.debug(
            f"RainField ready: canvas={self.canvas.width}x{self.canvas.height}, "
            f"cell={self.canvas.cell_size}, raindrops={pool_size}, "
            f"exclusive_lanes={self.exclusive_lanes}"
        )

    @property
    def exclusive_lanes(self) -> bool:
        return self.allocator is not None

    def __len__(self) -> int:
        return len(self.raindrops)

    def _prepare(self, raindrop: Raindrop) -> None:
        prepare_raindrop(raindrop, self.canvas, self.glyph_source, self.allocator)

    def recycle(self, raindrop: Raindrop) -> None:
        """Send a raindrop back to the top with a new lane and tail."""
        if self.allocator is not None:
            # The vacated lane must be free before the new one is drawn
            self.allocator.release(raindrop.x)
        self._prepare(raindrop)

    def advance_frame(self) -> int:
        """
        Move every raindrop down one cell and recycle those that left the canvas.

        Returns:
            The number of raindrops recycled during this frame.
        """
        cell = self.canvas.cell_size
        recycled = 0
        for raindrop in self.raindrops:
            raindrop.y += cell
            if raindrop.has_exited(self.canvas):
                self.recycle(raindrop)
                recycled += 1

        self.frame_count += 1
        if recycled:
            logger.trace(f"Frame {self.frame_count}: recycled {recycled} raindrops")
        return recycled

    def cells(self, visible_only: bool = True) -> Iterator[GlyphCell]:
        """Yield the glyph cells of the current frame, head first for each raindrop."""
        cell = self.canvas.cell_size
        height = self.canvas.height
        for raindrop in self.raindrops:
            length = raindrop.length
            for i in range(length):
                y = raindrop.y - i * cell
                if visible_only and (y <= 0 or y - cell >= height):
                    continue
                yield GlyphCell(
                    raindrop.x,
                    y,
                    raindrop.glyph_at(i, cell),
                    color_for(i, length, self.dim_threshold),
                )

    def render(self, renderer: Renderer) -> None:
        renderer.clear(BACKGROUND)
        for x, y, glyph, color in self.cells():
            renderer.draw_glyph(x, y, glyph, color)

    def step(self, renderer: Optional[Renderer] = None) -> int:
        """Advance one frame and, if given a renderer, draw it."""
        recycled = self.advance_frame()
        if renderer is not None:
            self.render(renderer)
        return recycled

    def occupied_lanes(self) -> List[int]:
        return [raindrop.x for raindrop in self.raindrops]
