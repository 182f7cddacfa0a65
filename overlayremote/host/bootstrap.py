"""Host bootstrap helpers for config, logging, deferred start, and wiring."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable

from overlayremote.capture.evdev_capture import DeviceRegistry, PointerState, PressCapturer
from overlayremote.common.config import Config, ConfigLoader
from overlayremote.common.settings import settings
from overlayremote.core.dispatcher import ActionDispatcher
from overlayremote.core.engine import RemoteEngine
from overlayremote.core.resolver import LayoutResolver
from overlayremote.sinks.backend import MediaKeySink, OverlayLifecycle, VolumeControl

logger = logging.getLogger(__name__)


def configWithSettings_load(args: argparse.Namespace) -> Config:
    """
    Load config with CLI overrides and initialize settings.

    Args:
        args: Parsed CLI args.

    Returns:
        Loaded config.
    """
    config_path: Path | None = Path(args.config) if getattr(args, "config", None) else None
    try:
        config: Config = ConfigLoader.configWithOverrides_load(
            file_path=config_path,
            tolerance_px=getattr(args, "tolerance", None),
            devices=getattr(args, "device", None),
            grab=getattr(args, "grab", False),
            backend=getattr(args, "backend", None),
            volume_method=getattr(args, "volume_method", None),
            start_delay=getattr(args, "start_delay", None),
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Create a config.yml file or specify path with --config", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)
    settings.initialize(config)
    return config


def loggingWithConfig_setup(args: argparse.Namespace, config: Config, logging_setup_func) -> None:
    """
    Setup logging from config and optional CLI override.

    Args:
        args: Parsed CLI args.
        config: Loaded config.
        logging_setup_func: Logging setup callback.
    """
    log_level: str = getattr(args, "log_level", None) or config.logging.level
    logging_setup_func(log_level, config.logging.format, config.logging.file)


def startupDelay_wait(
    delay_seconds: float, sleep_func: Callable[[float], None] = time.sleep
) -> None:
    """
    Deferred start before the overlay becomes active.

    Args:
        delay_seconds: Seconds to wait; zero or negative skips the wait.
        sleep_func: Sleep callback.
    """
    if delay_seconds <= 0:
        return
    logger.info("Overlay starts in %.1f seconds", delay_seconds)
    sleep_func(delay_seconds)


def capturer_create(config: Config) -> PressCapturer:
    """
    Open input devices and build the press capturer.

    Args:
        config: Loaded config.

    Returns:
        Press capturer.

    Raises:
        RuntimeError: If no pointer or touch device could be opened.
    """
    registry = DeviceRegistry(config.input.devices)
    if not registry.devices_all():
        raise RuntimeError(
            "No pointer or touch input devices found (check /dev/input permissions or --device)"
        )
    pointer_state = PointerState(
        width=config.input.screen_width, height=config.input.screen_height
    )
    return PressCapturer(registry, pointer_state, grab=config.input.grab)


def engine_create(
    config: Config,
    volume_control: VolumeControl,
    media_key_sink: MediaKeySink,
    overlay_lifecycle: OverlayLifecycle,
) -> RemoteEngine:
    """
    Build resolver, dispatcher, and engine from config and sinks.

    Args:
        config: Loaded config.
        volume_control: Volume sink.
        media_key_sink: Media-key sink.
        overlay_lifecycle: Overlay lifecycle sink.

    Returns:
        Ready engine.
    """
    resolver = LayoutResolver(
        layout=config.layout.buttonLayout_build(),
        tolerance=config.layout.toleranceWindow_build(),
    )
    for button in resolver.layout:
        logger.debug(
            "Button %s at (%s, %s) -> %s", button.name, button.x, button.y, button.action.name
        )
    dispatcher = ActionDispatcher(
        volume_control=volume_control,
        media_key_sink=media_key_sink,
        overlay_lifecycle=overlay_lifecycle,
        show_volume_ui=config.output.show_volume_ui,
    )
    return RemoteEngine(resolver=resolver, dispatcher=dispatcher)
