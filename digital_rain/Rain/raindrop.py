# raindrop.py
# Description: A single falling stream of glyphs and the routine that (re)starts it.
#
from dataclasses import dataclass, field
from typing import List, Optional

from .canvas import Canvas
from .glyph_source import GlyphSource
from .lane_allocator import LaneAllocator


@dataclass
class Raindrop:
    """
    One falling stream of glyphs.

    ``y`` is the pixel baseline of the leading glyph; the tail extends upwards
    one cell per glyph. ``x`` is the lane the stream is anchored to.
    """
    x: int = 0
    y: int = 0
    glyphs: List[str] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.glyphs)

    def glyph_index(self, row_index: int, cell_height: int) -> int:
        """
        Index into ``glyphs`` of the symbol drawn at tail slot ``row_index``.

        The index shifts by one every frame, so the symbols churn inside the
        tail while it falls instead of sliding down as a fixed string.
        """
        return abs(row_index - self.y // cell_height) % len(self.glyphs)

    def glyph_at(self, row_index: int, cell_height: int) -> str:
        return self.glyphs[self.glyph_index(row_index, cell_height)]

    def has_exited(self, canvas: Canvas) -> bool:
        """True once the whole tail has scrolled past the bottom edge."""
        return self.y - self.length * canvas.cell_size >= canvas.height


def prepare_raindrop(
    raindrop: Raindrop,
    canvas: Canvas,
    glyph_source: GlyphSource,
    allocator: Optional[LaneAllocator] = None,
) -> Raindrop:
    """
    Initialise or recycle a raindrop in place.

    Resets ``y`` to the top, picks a lane (through the allocator when lanes
    are exclusive, uniformly otherwise) and draws a new tail. Called once per
    raindrop when the pool is built and again every time it exits the canvas.
    If the raindrop currently holds a lane, the caller must release it first.
    """
    raindrop.y = 0
    if allocator is not None:
        raindrop.x = allocator.allocate()
    else:
        raindrop.x = canvas.random_lane(glyph_source.rng)
    raindrop.glyphs = [glyph_source.next_glyph() for _ in range(glyph_source.next_tail_length())]
    return raindrop
