"""Volume control through the PulseAudio / PipeWire `pactl` command."""

from __future__ import annotations

import logging
import subprocess

from overlayremote.common.types import VolumeDirection

logger = logging.getLogger(__name__)


class PactlVolumeControl:
    """VolumeControl that shells out to `pactl set-sink-volume`."""

    def __init__(self, step_percent: int = 5, command: str = "pactl", timeout: float = 2.0) -> None:
        """
        Initialize pactl volume control.

        Args:
            step_percent: Volume change per adjustment.
            command: pactl executable name or path.
            timeout: Subprocess timeout in seconds.
        """
        if step_percent <= 0:
            raise ValueError(f"Volume step must be positive, got {step_percent}")
        self._step_percent: int = step_percent
        self._command: str = command
        self._timeout: float = timeout

    def command_build(self, direction: VolumeDirection) -> list[str]:
        """
        Build pactl argv for one adjustment.

        Args:
            direction: Raise or lower.

        Returns:
            Command argument list.
        """
        sign = "+" if direction == VolumeDirection.RAISE else "-"
        return [self._command, "set-sink-volume", "@DEFAULT_SINK@", f"{sign}{self._step_percent}%"]

    def volume_adjust(self, direction: VolumeDirection, show_ui: bool) -> None:
        """
        Run pactl to change the default sink volume.

        Args:
            direction: Raise or lower.
            show_ui: pactl has no on-screen indicator; logged only.

        Raises:
            PermissionError: If pactl cannot be executed.
            RuntimeError: If pactl exits non-zero.
        """
        argv = self.command_build(direction)
        logger.debug("Running %s (show_ui=%s)", " ".join(argv), show_ui)
        result = subprocess.run(argv, capture_output=True, text=True, timeout=self._timeout)
        if result.returncode != 0:
            raise RuntimeError(
                f"pactl exited with {result.returncode}: {result.stderr.strip()}"
            )
