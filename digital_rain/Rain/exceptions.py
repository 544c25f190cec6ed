# exceptions.py
# Description: Exception types raised by the rain simulation core.
#


class RainError(Exception):
    """Base exception for the rain simulation."""
    pass


class RainConfigError(RainError):
    """Raised at startup when the rain parameters cannot be satisfied."""
    pass


class LaneExhaustedError(RainError):
    """Raised when a lane is requested but every lane is occupied."""

    def __init__(self, lane_count: int):
        self.lane_count = lane_count
        super().__init__(f"No free lane left out of {lane_count}")
