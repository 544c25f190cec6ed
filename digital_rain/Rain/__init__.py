"""
Digital rain simulation core.

Raindrops fall one cell per frame through a fixed-size canvas, each drawing a
fading tail of random glyphs, and are recycled at the top once they leave the
bottom edge. Nothing here touches a terminal or a clock; see
``digital_rain.Widgets.rain_view`` for the frame driver.
"""

from .canvas import Canvas
from .colors import BACKGROUND, BLACK, DIM_HEAD_COLOR, HEAD_COLOR, RGBA, color_for
from .exceptions import LaneExhaustedError, RainConfigError, RainError
from .glyph_source import GlyphSource
from .lane_allocator import LaneAllocator
from .rain_field import GlyphCell, RainField
from .raindrop import Raindrop, prepare_raindrop
from .renderer import Renderer, TextGridRenderer
from .settings import RainSettings

__all__ = [
    # Geometry and parameters
    'Canvas',
    'RainSettings',

    # Simulation
    'GlyphSource',
    'LaneAllocator',
    'Raindrop',
    'prepare_raindrop',
    'RainField',
    'GlyphCell',

    # Colour
    'RGBA',
    'BLACK',
    'BACKGROUND',
    'HEAD_COLOR',
    'DIM_HEAD_COLOR',
    'color_for',

    # Rendering
    'Renderer',
    'TextGridRenderer',

    # Errors
    'RainError',
    'RainConfigError',
    'LaneExhaustedError',
]
