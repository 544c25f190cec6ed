"""
digital_rain - Matrix-style digital rain for the terminal

Vertical streams of random Katakana fall down a fixed-size canvas, fading
from a bright leading glyph to a dim tail, and recycle to the top once they
leave the bottom edge. The simulation lives in ``digital_rain.Rain``; the
Textual application in ``digital_rain.app`` drives it frame by frame.
"""

__version__ = "0.1.0"
__license__ = "AGPLv3+"

__all__ = [
    "__version__",
    "__license__",
]
