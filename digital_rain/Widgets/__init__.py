"""Textual widgets for digital_rain."""

from .rain_view import RainView

__all__ = ["RainView"]
