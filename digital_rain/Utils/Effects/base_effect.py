"""
Base class and registration system for animated effects.

An effect is constructed once with the size of the area it draws into and is
then asked for a new frame on every tick of the frame driver.
"""

from typing import Any, Dict, List, Optional, Union

from rich.text import Text

from loguru import logger


class BaseEffect:
    """Base class for animation effects."""

    def __init__(self, parent_widget: Any, width: int = 80, height: int = 24, **kwargs):
        self.parent = parent_widget
        self.width = width
        self.height = height
        self.frame_count = 0

    def update(self) -> Optional[Union[str, Text]]:
        """Update and return the next frame of animation."""
        self.frame_count += 1
        return None


# Effect registration system
EFFECTS_REGISTRY: Dict[str, type] = {}


def register_effect(name: str):
    """
    Decorator to register an effect class.

    Usage:
        @register_effect("matrix_rain")
        class MatrixRainEffect(BaseEffect):
            ...
    """
    def decorator(cls):
        if name in EFFECTS_REGISTRY:
            logger.warning(f"Effect '{name}' is already registered, overwriting...")
        EFFECTS_REGISTRY[name] = cls
        cls._effect_name = name  # Store the registration name on the class
        logger.debug(f"Registered effect: {name} -> {cls.__name__}")
        return cls
    return decorator


def get_effect_class(name: str) -> Optional[type]:
    """Get an effect class by its registered name."""
    return EFFECTS_REGISTRY.get(name)


def list_available_effects() -> List[str]:
    """Get a list of all registered effect names."""
    return sorted(EFFECTS_REGISTRY.keys())
