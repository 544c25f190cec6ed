# digital_rain/app.py
# Description: Textual application hosting the digital rain, and its command line entry point.
#
# Imports
import argparse
import random
import sys
from typing import List, Optional
#
# Third-Party Imports
from loguru import logger
from textual.app import App, ComposeResult
#
# Local Imports
from .Rain import RainError, RainSettings
from .Utils.Effects import list_available_effects
from .Utils.logging_config import configure_logging
from .Widgets.rain_view import RainView
from .config import ensure_config_exists, get_effect_name, get_logging_settings, load_settings
#
#######################################################################################################################
#
# Classes:

class DigitalRainApp(App):
    """Single-screen app that plays the rain until it is closed."""

    TITLE = "Matrix digital rain"

    CSS = """
    Screen {
        background: black;
    }
    """

    def __init__(
        self,
        settings: Optional[RainSettings] = None,
        effect_name: str = "matrix_rain",
        rng: Optional[random.Random] = None,
        **kwargs
    ):
        super().__init__(**kwargs)
        self.settings = settings or RainSettings()
        self.effect_name = effect_name
        self.rng = rng

    def compose(self) -> ComposeResult:
        yield RainView(self.settings, effect_name=self.effect_name, rng=self.rng, id="rain-view")

    def on_rain_view_failed(self, message: RainView.Failed) -> None:
        logger.error(f"Rain view failed: {message.reason}")
        self.exit(return_code=2, message=message.reason)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Matrix-style digital rain in the terminal",
        prog="digital-rain"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to the TOML config file (default: ~/.config/digital_rain/config.toml)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the random generator for a reproducible run"
    )
    parser.add_argument(
        "--effect",
        type=str,
        help="Registered effect to play (default: from config, matrix_rain)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (TRACE, DEBUG, INFO, WARNING, ERROR)"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write logs to this file"
    )
    parser.add_argument(
        "--write-default-config",
        action="store_true",
        help="Write the default config file if it does not exist, then exit"
    )
    parser.add_argument(
        "--list-effects",
        action="store_true",
        help="List the available effects and exit"
    )
    return parser


def _report_startup_error(message: str) -> None:
    # The TUI has not taken over the terminal yet, so errors can go to stderr
    logger.add(sys.stderr, level="ERROR", format="<red>{message}</red>", colorize=True)
    logger.error(message)


def main_cli_runner(argv: Optional[List[str]] = None) -> int:
    """Entry point for the digital-rain command.

    Initializes logging, validates the startup parameters and runs the app.
    Returns the process exit status.
    """
    args = _build_parser().parse_args(argv)

    logging_settings = get_logging_settings(args.config)
    configure_logging(
        level=args.log_level or logging_settings["level"],
        log_file=args.log_file or logging_settings.get("log_file"),
        rotation=logging_settings["rotation"],
        retention=logging_settings["retention"],
    )

    if args.write_default_config:
        config_path = ensure_config_exists(args.config)
        print(config_path)
        return 0

    if args.list_effects:
        for name in list_available_effects():
            print(name)
        return 0

    try:
        settings = load_settings(args.config, seed=args.seed)
    except RainError as e:
        _report_startup_error(f"Invalid configuration: {e}")
        return 2

    effect_name = args.effect or get_effect_name(args.config)
    if effect_name not in list_available_effects():
        _report_startup_error(
            f"Unknown effect '{effect_name}'. Available: {', '.join(list_available_effects())}"
        )
        return 2

    logger.info(f"Starting digital rain: effect={effect_name}, settings={settings}")
    app = DigitalRainApp(settings, effect_name=effect_name)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main_cli_runner())

#
# End of app.py
#######################################################################################################################
