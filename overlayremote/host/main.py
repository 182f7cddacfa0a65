"""overlayremote host entry point"""

import argparse
import logging

from overlayremote import __version__
from overlayremote.common.logging_setup import logging_setup
from overlayremote.common.settings import settings
from overlayremote.host.bootstrap import (
    capturer_create,
    configWithSettings_load,
    engine_create,
    loggingWithConfig_setup,
    startupDelay_wait,
)
from overlayremote.host.runtime import SessionLifecycle, eventLoop_run
from overlayremote.sinks.factory import sinks_create

logger = logging.getLogger(__name__)


def host_run(args: argparse.Namespace) -> None:
    """
    Load config, wait for the deferred start, and run until closed.

    Args:
        args: Parsed CLI args.
    """
    config = configWithSettings_load(args)
    loggingWithConfig_setup(args, config, logging_setup)
    logger.info("overlayremote v%s", __version__)

    lifecycle = SessionLifecycle()
    volume_control, media_key_sink, sinks_close = sinks_create(
        backend_name=config.output.backend,
        volume_method=config.output.volume_method,
        volume_step_percent=config.output.volume_step_percent,
        uinput_node=settings.UINPUT_DEVICE_NODE,
        uinput_name=settings.UINPUT_DEVICE_NAME,
    )
    try:
        engine = engine_create(config, volume_control, media_key_sink, lifecycle)

        startupDelay_wait(config.startup.delay_seconds)

        capturer = capturer_create(config)
        try:
            capturer.devices_grab()
            logger.info(
                "Listening for remote button presses (%d buttons, tolerance %spx). Press Ctrl+C to stop.",
                len(config.layout.buttons),
                config.layout.tolerance_px,
            )
            actions = eventLoop_run(
                source=capturer,
                engine=engine,
                lifecycle=lifecycle,
                poll_timeout=settings.EVENT_SELECT_TIMEOUT_SEC,
            )
            logger.info("Overlay stopped after %d actions", actions)
        finally:
            capturer.close()
    finally:
        sinks_close()
