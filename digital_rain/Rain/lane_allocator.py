"""
Lane occupancy tracking for rain without overlapping streams.

Free lanes are kept in a list with a reverse index so that both granting a
random free lane and releasing one are O(1).
"""

import random
from typing import Dict, List, Optional

from loguru import logger

from .exceptions import LaneExhaustedError


class LaneAllocator:
    """Grants and releases lane coordinates so no two raindrops share one."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self._lanes: List[int] = []
        self._free: List[int] = []
        self._free_index: Dict[int, int] = {}
        self._cell_width = 1
        self._initialized = False

    def initialize(self, canvas_width: int, cell_width: int) -> None:
        """Mark every lane of the canvas as free. May only be called once."""
        if self._initialized:
            raise RuntimeError("LaneAllocator.initialize() called twice")
        if cell_width <= 0:
            raise ValueError(f"cell_width must be positive, got {cell_width}")
        self._cell_width = cell_width
        self._lanes = [i * cell_width for i in range(canvas_width // cell_width)]
        self._free = list(self._lanes)
        self._free_index = {lane: pos for pos, lane in enumerate(self._free)}
        self._initialized = True
        logger.debug(f"Lane allocator initialized with {len(self._lanes)} lanes")

    @property
    def lanes(self) -> List[int]:
        return list(self._lanes)

    @property
    def free_count(self) -> int:
        return len(self._free)

    def __len__(self) -> int:
        return len(self._lanes)

    def is_free(self, lane: int) -> bool:
        return lane in self._free_index

    def allocate(self) -> int:
        """
        Take a uniformly random free lane and mark it occupied.

        Raises:
            LaneExhaustedError: If every lane is occupied (or none exist yet).
        """
        if not self._free:
            raise LaneExhaustedError(len(self._lanes))

        pos = self.rng.randrange(len(self._free))
        lane = self._free[pos]
        last = self._free.pop()
        if last != lane:
            self._free[pos] = last
            self._free_index[last] = pos
        del self._free_index[lane]
        return lane

    def release(self, lane: int) -> None:
        """Mark a lane free again. Releasing a free lane does nothing."""
        if lane in self._free_index:
            return
        if not self._is_lane(lane):
            raise ValueError(f"{lane} is not a lane coordinate")
        self._free_index[lane] = len(self._free)
        self._free.append(lane)

    def _is_lane(self, lane: int) -> bool:
        return 0 <= lane < len(self._lanes) * self._cell_width and lane % self._cell_width == 0
