"""
Logging policy.

overlayremote reports remote presses, dispatch results, device discovery and
overlay lifecycle through the standard logging tree. This module configures
that tree once per run and stamps the package version next to each timestamp
so field logs can be matched to a build.
"""

from __future__ import annotations

import logging

from overlayremote import __version__

__all__ = ["logging_setup"]


def logging_setup(level: str, log_format: str, log_file: str | None) -> None:
    """
    Configure root handlers for the overlay session.

    Replaces any handlers already installed, so a second call (for example
    after a CLI level override) takes effect.

    Args:
        level:
            Log level name from config.yml `logging.level` or a CLI flag.
        log_format:
            Base format string; `%(asctime)s` gains a `[vX.Y.Z]` suffix.
        log_file:
            Optional log-file path, written alongside stderr.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    versioned_format: str = log_format.replace("%(asctime)s", f"%(asctime)s [v{__version__}]")
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=versioned_format,
        handlers=handlers,
        force=True,
    )
