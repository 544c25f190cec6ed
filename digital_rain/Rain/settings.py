"""
Startup parameters for the rain simulation.

These values are fixed for the lifetime of a RainField. They are usually built
by ``digital_rain.config.load_settings`` from the user's TOML file, but can be
constructed directly (tests do this with small canvases).
"""

import sys
from dataclasses import dataclass, replace
from typing import Optional

from .exceptions import RainConfigError

# Katakana block, 96 code points starting at U+30A0
KATAKANA_FIRST_CODE_POINT = 0x30A0
KATAKANA_ALPHABET_SIZE = 96

# Shorter raindrops are drawn darker. The default threshold is this fraction
# of the maximum tail length.
DEFAULT_LENGTH_COLOR_FRACTION = 0.5


@dataclass(frozen=True)
class RainSettings:
    """Fixed startup parameters of the digital rain."""
    screen_width: int = 1400
    screen_height: int = 700
    cell_size: int = 14
    frame_delay: int = 30  # milliseconds
    max_tail_length: int = 62
    overlap_allowed: bool = False
    max_raindrops: int = 200
    # With overlap disallowed, size the pool to exactly one raindrop per lane
    force_lane_sizing: bool = True
    length_color_ratio: Optional[int] = None
    glyph_first_code_point: int = KATAKANA_FIRST_CODE_POINT
    glyph_alphabet_size: int = KATAKANA_ALPHABET_SIZE
    fit_to_terminal: bool = True
    seed: Optional[int] = None

    @property
    def lane_count(self) -> int:
        return self.screen_width // self.cell_size

    @property
    def dim_threshold(self) -> int:
        """Tail length below which a raindrop uses the darker palette."""
        if self.length_color_ratio is not None:
            return self.length_color_ratio
        return int(self.max_tail_length * DEFAULT_LENGTH_COLOR_FRACTION)

    @property
    def pool_size(self) -> int:
        """Number of raindrops the field will hold."""
        if not self.overlap_allowed and self.force_lane_sizing:
            return self.lane_count
        return self.max_raindrops

    def with_canvas(self, screen_width: int, screen_height: int) -> "RainSettings":
        """Return a copy using a different canvas size."""
        return replace(self, screen_width=screen_width, screen_height=screen_height)

    def validate(self) -> "RainSettings":
        """
        Reject parameter combinations the simulation cannot honour.

        Raises:
            RainConfigError: If any parameter is out of range.
        """
        if self.max_tail_length <= 0:
            raise RainConfigError(f"max_tail_length must be positive, got {self.max_tail_length}")
        if self.cell_size <= 0:
            raise RainConfigError(f"cell_size must be positive, got {self.cell_size}")
        if self.screen_width < self.cell_size or self.screen_height < self.cell_size:
            raise RainConfigError(
                f"Canvas {self.screen_width}x{self.screen_height} is smaller than one "
                f"{self.cell_size}px cell"
            )
        if self.frame_delay < 0:
            raise RainConfigError(f"frame_delay cannot be negative, got {self.frame_delay}")
        if self.glyph_alphabet_size <= 0:
            raise RainConfigError(
                f"glyph_alphabet_size must be positive, got {self.glyph_alphabet_size}"
            )
        last_code_point = self.glyph_first_code_point + self.glyph_alphabet_size - 1
        if self.glyph_first_code_point < 0 or last_code_point > sys.maxunicode:
            raise RainConfigError(
                f"Glyph block U+{self.glyph_first_code_point:04X}..U+{last_code_point:04X} "
                f"is outside the Unicode range"
            )
        if self.length_color_ratio is not None and self.length_color_ratio < 0:
            raise RainConfigError(
                f"length_color_ratio cannot be negative, got {self.length_color_ratio}"
            )
        if self.pool_size <= 0:
            raise RainConfigError(f"max_raindrops must be positive, got {self.max_raindrops}")
        if not self.overlap_allowed and self.max_raindrops * self.cell_size > self.screen_width \
                and not self.force_lane_sizing:
            raise RainConfigError(
                f"{self.max_raindrops} raindrops cannot each hold one of "
                f"{self.lane_count} lanes; allow overlap or enable force_lane_sizing"
            )
        return self
