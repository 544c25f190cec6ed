# rain_view.py
# Frame driver for the digital rain: a Textual container that owns the canvas
# and asks the configured effect for a new frame on a fixed interval.

import random
from typing import Any, Optional, Tuple

from textual.app import ComposeResult
from textual.containers import Container
from textual.message import Message
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Static

from loguru import logger

from ..Rain import RainError, RainSettings
# Import the registration system and load all effects
from ..Utils.Effects import get_effect_class, load_all_effects

# Load all effects on module import
load_all_effects()


class RainView(Container):
    """Full-size widget that plays an effect frame by frame."""

    DEFAULT_CLASSES = "rain-view"

    DEFAULT_CSS = """
    RainView {
        width: 100%;
        height: 100%;
        background: black;
    }
    RainView > #rain-display {
        width: 100%;
        height: 100%;
    }
    """

    # Reactive attributes
    is_running: reactive[bool] = reactive(False)
    current_frame: reactive[int] = reactive(0)

    def __init__(
        self,
        settings: Optional[RainSettings] = None,
        *,
        effect_name: str = "matrix_rain",
        rng: Optional[random.Random] = None,
        **kwargs
    ) -> None:
        """Initialize the rain view.

        Args:
            settings: Validated startup parameters (defaults if None)
            effect_name: Registered effect to play
            rng: Random generator handed to the effect, for reproducible runs
        """
        if 'classes' not in kwargs:
            kwargs['classes'] = self.DEFAULT_CLASSES
        super().__init__(**kwargs)

        self.settings = settings or RainSettings()
        self.effect_name = effect_name
        self.rng = rng

        # Animation state
        self.animation_timer: Optional[Timer] = None
        self.effect_handler: Optional[Any] = None

    def compose(self) -> ComposeResult:
        yield Static("", id="rain-display", classes="rain-display")

    def on_mount(self) -> None:
        """Handle mount event."""
        logger.info(f"Rain view mounted - effect: {self.effect_name}, frame delay: {self.settings.frame_delay}ms")
        # Size is only known once layout has run
        self.call_after_refresh(self._start_animation)

    def on_unmount(self) -> None:
        self._stop_timer()

    def _start_animation(self) -> None:
        """Create the effect and start the frame timer."""
        effect_class = get_effect_class(self.effect_name)
        if effect_class is None:
            self._fail(f"Unknown effect: {self.effect_name}")
            return

        width, height = self._get_terminal_size()
        logger.debug(f"Terminal size: {width}x{height}")

        try:
            self.effect_handler = effect_class(
                self,
                width=width,
                height=height,
                settings=self.settings,
                rng=self.rng,
            )
        except RainError as e:
            self._fail(f"Failed to create effect {self.effect_name}: {e}")
            return

        delay_seconds = max(self.settings.frame_delay, 1) / 1000
        self.animation_timer = self.set_interval(delay_seconds, self._update_animation)
        self.is_running = True
        logger.debug(f"Animation started successfully for {self.effect_name}")

    def _get_terminal_size(self) -> Tuple[int, int]:
        """Get the size available for drawing."""
        display = self.query_one("#rain-display", Static)
        width, height = display.size.width, display.size.height
        if width > 0 and height > 0:
            return width, height

        if self.app is not None:
            width = self.app.size.width
            height = self.app.size.height
            if width > 0 and height > 0:
                return width, height

        # Fallback to defaults
        return 80, 24

    def _update_animation(self) -> None:
        """Advance the effect one frame and show it."""
        if self.effect_handler is None:
            return
        try:
            frame_content = self.effect_handler.update()
        except Exception as e:
            logger.exception(f"Error updating animation frame {self.current_frame}: {e}")
            self._fail(f"Animation stopped: {e}")
            return

        if frame_content is not None:
            display = self.query_one("#rain-display", Static)
            display.update(frame_content)
        self.current_frame += 1

    def _stop_timer(self) -> None:
        if self.animation_timer:
            self.animation_timer.stop()
            self.animation_timer = None
        self.is_running = False

    def _fail(self, reason: str) -> None:
        logger.error(reason)
        self._stop_timer()
        self.query_one("#rain-display", Static).update(reason)
        self.post_message(self.Failed(reason))

    class Failed(Message):
        """Posted when the effect cannot be created or a frame fails."""

        def __init__(self, reason: str) -> None:
            super().__init__()
            self.reason = reason
