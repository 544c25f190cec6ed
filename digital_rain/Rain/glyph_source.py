# glyph_source.py
# Description: Random glyphs and tail lengths for raindrops.
#
import random
from typing import Optional

from .exceptions import RainConfigError
from .settings import KATAKANA_ALPHABET_SIZE, KATAKANA_FIRST_CODE_POINT


class GlyphSource:
    """
    Draws symbols uniformly from a contiguous block of code points.

    The same ``random.Random`` instance is shared with the rest of the field
    so that a single seed reproduces a whole run.
    """

    def __init__(
        self,
        max_tail_length: int,
        rng: Optional[random.Random] = None,
        first_code_point: int = KATAKANA_FIRST_CODE_POINT,
        alphabet_size: int = KATAKANA_ALPHABET_SIZE,
    ):
        if max_tail_length <= 0:
            raise RainConfigError(f"max_tail_length must be positive, got {max_tail_length}")
        if alphabet_size <= 0:
            raise RainConfigError(f"alphabet_size must be positive, got {alphabet_size}")
        self.max_tail_length = max_tail_length
        self.rng = rng if rng is not None else random.Random()
        self.first_code_point = first_code_point
        self.alphabet_size = alphabet_size

    def next_glyph(self) -> str:
        return chr(self.first_code_point + self.rng.randrange(self.alphabet_size))

    def next_tail_length(self) -> int:
        return self.rng.randint(1, self.max_tail_length)
