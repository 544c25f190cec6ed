"""
Root conftest.py for shared test fixtures and configuration.
This file provides common fixtures used across the test suite.
"""

import random
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to Python path for consistent imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from digital_rain.Rain import RainSettings
from digital_rain.config import clear_config_cache


# ========== Path and File System Fixtures ==========

@pytest.fixture
def isolated_temp_dir():
    """Create an isolated temporary directory that's always cleaned up."""
    temp_dir = tempfile.mkdtemp(prefix="digital_rain_test_")
    temp_path = Path(temp_dir)
    yield temp_path
    # Ensure cleanup even if test fails
    if temp_path.exists():
        shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def temp_file(isolated_temp_dir):
    """Create a temporary file within an isolated directory."""
    def _create_temp_file(name="test_file", suffix=".txt", content=""):
        file_path = isolated_temp_dir / f"{name}{suffix}"
        file_path.write_text(content)
        return file_path
    return _create_temp_file


# ========== Configuration Fixtures ==========

@pytest.fixture(autouse=True)
def fresh_config_cache(monkeypatch):
    """Make every test read its own config file instead of a cached one."""
    monkeypatch.delenv("DIGITAL_RAIN_CONFIG", raising=False)
    monkeypatch.delenv("DIGITAL_RAIN_LOG_LEVEL", raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


# ========== Simulation Fixtures ==========

@pytest.fixture
def rng():
    """Seeded random generator so failures are reproducible."""
    return random.Random(1234)


@pytest.fixture
def small_settings():
    """Ten lanes of 14px on a 700px tall canvas, exclusive lanes."""
    return RainSettings(
        screen_width=140,
        screen_height=700,
        cell_size=14,
        max_tail_length=62,
        fit_to_terminal=False,
    )


@pytest.fixture
def overlapping_settings():
    """Twenty-five raindrops sharing ten lanes."""
    return RainSettings(
        screen_width=140,
        screen_height=700,
        cell_size=14,
        max_tail_length=20,
        overlap_allowed=True,
        max_raindrops=25,
        fit_to_terminal=False,
    )
