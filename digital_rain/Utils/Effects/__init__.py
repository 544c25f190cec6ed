"""
Animated effects with auto-discovery.

Every module in this package is imported on first use so that effects
registered with ``@register_effect`` become available by name.
"""

import importlib
import pkgutil
from pathlib import Path

from loguru import logger

from .base_effect import BaseEffect, register_effect, EFFECTS_REGISTRY, get_effect_class, list_available_effects


# Export the main components
__all__ = [
    'BaseEffect',
    'register_effect',
    'EFFECTS_REGISTRY',
    'get_effect_class',
    'list_available_effects',
    'load_all_effects',
]


def load_all_effects() -> int:
    """
    Import every effect module in this package.

    Modules register their effects with the @register_effect decorator as a
    side effect of being imported. Returns the number of modules loaded.
    """
    package_dir = Path(__file__).parent
    loaded_count = 0

    for module_info in pkgutil.iter_modules([str(package_dir)]):
        if module_info.name.startswith('_') or module_info.name == 'base_effect':
            continue

        full_module_name = f"{__package__}.{module_info.name}"
        try:
            logger.debug(f"Loading effect module: {full_module_name}")
            importlib.import_module(full_module_name)
            loaded_count += 1
        except ImportError as e:
            logger.error(f"Failed to load effect module '{full_module_name}': {e}")

    logger.info(f"Loaded {loaded_count} effect modules, {len(EFFECTS_REGISTRY)} effects registered")
    return loaded_count
