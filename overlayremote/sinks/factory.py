"""Sink factory functions."""

from __future__ import annotations

from typing import Callable

from overlayremote.sinks.backend import MediaKeySink, VolumeControl


def _noop_close() -> None:
    """Nothing to release."""


def sinks_create(
    backend_name: str,
    volume_method: str,
    volume_step_percent: int,
    uinput_node: str,
    uinput_name: str = "overlayremote-virtual-keyboard",
) -> tuple[VolumeControl, MediaKeySink, Callable[[], None]]:
    """
    Create output sink components.

    Args:
        backend_name: Output backend identifier ("uinput" or "dryrun")
        volume_method: Volume implementation ("keys" or "pactl")
        volume_step_percent: Step for pactl volume changes
        uinput_node: uinput device node
        uinput_name: Name for the virtual keyboard

    Returns:
        Tuple of (VolumeControl, MediaKeySink, close callback)
    """
    backend = backend_name.lower()
    method = volume_method.lower()
    if method not in ("keys", "pactl"):
        raise ValueError(f"Unsupported volume method '{volume_method}'. Supported: keys, pactl.")

    if backend == "dryrun":
        from overlayremote.sinks.dryrun import DryRunMediaKeySink, DryRunVolumeControl

        return DryRunVolumeControl(), DryRunMediaKeySink(), _noop_close

    if backend == "uinput":
        from overlayremote.sinks.uinput import (
            UInputKeyboard,
            UInputMediaKeySink,
            UInputVolumeControl,
        )

        keyboard = UInputKeyboard(device_node=uinput_node, name=uinput_name)
        volume_control: VolumeControl
        if method == "pactl":
            from overlayremote.sinks.pactl import PactlVolumeControl

            volume_control = PactlVolumeControl(step_percent=volume_step_percent)
        else:
            volume_control = UInputVolumeControl(keyboard)
        return volume_control, UInputMediaKeySink(keyboard), keyboard.close

    raise ValueError(f"Unsupported backend '{backend_name}'. Supported: uinput, dryrun.")
