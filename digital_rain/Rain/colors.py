"""
Colour of each glyph in a raindrop's tail.

The leading glyph is a fixed bright highlight. The rest of the tail fades
linearly towards transparent, and tails shorter than the dim threshold use a
darker palette so that they read as more distant streams.
"""

from typing import NamedTuple, Optional, Tuple


class RGBA(NamedTuple):
    red: int
    green: int
    blue: int
    alpha: int = 255

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue

    def composite(self, background: Optional["RGBA"] = None) -> Tuple[int, int, int]:
        """Blend over an opaque background for surfaces without alpha."""
        if background is None:
            background = BLACK
        if self.alpha >= 255:
            return self.rgb
        a = self.alpha
        return tuple(
            (fg * a + bg * (255 - a)) // 255
            for fg, bg in zip(self.rgb, background.rgb)
        )


BLACK = RGBA(0, 0, 0)
BACKGROUND = BLACK

HEAD_COLOR = RGBA(200, 255, 200)
DIM_HEAD_COLOR = RGBA(25, 50, 25)
DIM_TAIL_GREEN = 50


def _scaled(index: int, tail_length: int, top: int) -> int:
    # Same result as truncating integer division of a negative numerator
    return abs((index - tail_length) * top) // tail_length


def color_for(index: int, tail_length: int, dim_threshold: int) -> RGBA:
    """
    Colour of the glyph at ``index`` (0 = leading glyph) of a tail.

    Args:
        index: Position in the tail, 0 for the head.
        tail_length: Number of glyphs in the tail, at least 1.
        dim_threshold: Tails shorter than this use the darker palette.
    """
    short = tail_length < dim_threshold

    if index == 0:
        return DIM_HEAD_COLOR if short else HEAD_COLOR

    fade = _scaled(index, tail_length, 255)
    if short:
        return RGBA(0, DIM_TAIL_GREEN, 0, fade)
    dim = _scaled(index, tail_length, 100)
    return RGBA(dim, fade, dim, fade)
