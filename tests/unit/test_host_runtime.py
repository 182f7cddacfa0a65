"""Unit tests for host event loop, result reporting, and bootstrap helpers."""

from __future__ import annotations

import logging
from argparse import Namespace

import pytest

from overlayremote.capture.evdev_capture import PressCapturer
from overlayremote.common.settings import settings
from overlayremote.common.types import (
    DispatchResult,
    PressEvent,
    PressPhase,
    RemoteAction,
    SourceKind,
)
from overlayremote.host import bootstrap
from overlayremote.host import main as host_main
from overlayremote.host.bootstrap import (
    capturer_create,
    configWithSettings_load,
    engine_create,
    startupDelay_wait,
)
from overlayremote.host.main import host_run
from overlayremote.host.runtime import SessionLifecycle, dispatchResult_report, eventLoop_run
from overlayremote.sinks.dryrun import DryRunMediaKeySink, DryRunVolumeControl


class _ScriptedSource:
    """Fake event source returning pre-scripted batches."""

    def __init__(self, batches: list[list[PressEvent]]) -> None:
        """Initialize with event batches."""
        self._batches = list(batches)
        self.reads: int = 0

    def events_read(self, timeout: float) -> list[PressEvent]:
        """Return next batch, or nothing once exhausted."""
        self.reads += 1
        if not self._batches:
            raise AssertionError("event loop kept reading after the script ended")
        return self._batches.pop(0)


class _FakeRegistry:
    """Fake device registry holding pre-opened devices."""

    def __init__(self, devices: list) -> None:
        self._devices = devices

    @classmethod
    def empty(cls, device_paths) -> "_FakeRegistry":
        return cls([])

    def devices_all(self) -> list:
        return self._devices


class _FakeCapturer:
    """Fake capturer recording lifecycle calls into a shared log."""

    def __init__(self, calls: list[str], batches: list[list[PressEvent]], error: Exception | None = None) -> None:
        self._calls = calls
        self._batches = list(batches)
        self._error = error

    def devices_grab(self) -> None:
        self._calls.append("grab")

    def events_read(self, timeout: float) -> list[PressEvent]:
        self._calls.append("read")
        if self._error is not None:
            raise self._error
        return self._batches.pop(0)

    def close(self) -> None:
        self._calls.append("close")


class TestSessionLifecycle:
    """Tests for the stop flag."""

    def test_stop_request(self) -> None:
        lifecycle = SessionLifecycle()
        assert lifecycle.stop_isRequested() is False
        lifecycle.stop_request()
        assert lifecycle.stop_isRequested() is True


class TestDispatchResultReport:
    """Tests for user-facing result logging."""

    def test_permission_denied_logged_as_error(self, caplog) -> None:
        dispatchResult_report(DispatchResult.permissionDenied(RemoteAction.VOLUME_UP, "denied"))
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert "Volume permission denied" in record.getMessage()

    def test_dispatch_failed_logged_as_error(self, caplog) -> None:
        dispatchResult_report(DispatchResult.dispatchFailed(RemoteAction.REWIND, "io"))
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert "REWIND" in record.getMessage()

    def test_no_action_logged_as_debug(self, caplog) -> None:
        dispatchResult_report(DispatchResult.noAction())
        assert caplog.records[-1].levelno == logging.DEBUG


class TestEventLoop:
    """Tests for the host event loop."""

    def _engine(self, sample_config, lifecycle):
        volume = DryRunVolumeControl()
        keys = DryRunMediaKeySink()
        engine = engine_create(sample_config, volume, keys, lifecycle)
        return engine, volume, keys

    def test_runs_until_close(self, sample_config) -> None:
        lifecycle = SessionLifecycle()
        engine, volume, keys = self._engine(sample_config, lifecycle)
        source = _ScriptedSource(
            [
                [],
                [PressEvent(x=185, y=605), PressEvent(x=185, y=605, phase=PressPhase.RELEASE)],
                [PressEvent(x=480, y=56, source=SourceKind.TOUCH)],
                [PressEvent(x=478, y=58)],
                [PressEvent(x=510, y=836), PressEvent(x=120, y=840)],
            ]
        )

        actions = eventLoop_run(source, engine, lifecycle, poll_timeout=0.01)

        assert lifecycle.stop_isRequested() is True
        assert actions == 3
        assert len(volume.requests) == 1
        # touch press at the ok button is ignored; the rewind after close is never handled
        assert keys.key_codes == [164]
        assert source.reads == 5

    def test_unmapped_presses_not_counted(self, sample_config, caplog) -> None:
        lifecycle = SessionLifecycle()
        engine, volume, keys = self._engine(sample_config, lifecycle)
        source = _ScriptedSource(
            [[PressEvent(x=5, y=5), PressEvent(x=900, y=400), PressEvent(x=510, y=836)]]
        )

        actions = eventLoop_run(source, engine, lifecycle, poll_timeout=0.01)

        assert actions == 1
        assert any(r.getMessage() == "No action for press" for r in caplog.records)


class TestBootstrap:
    """Tests for bootstrap helpers."""

    def test_startup_delay_waits(self) -> None:
        slept: list[float] = []
        startupDelay_wait(10.0, sleep_func=slept.append)
        assert slept == [10.0]

    def test_startup_delay_skipped_when_zero(self) -> None:
        slept: list[float] = []
        startupDelay_wait(0, sleep_func=slept.append)
        startupDelay_wait(-1, sleep_func=slept.append)
        assert slept == []

    def test_config_with_settings_load(self, reset_settings, tmp_path) -> None:
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            """
layout:
  buttons:
    - {name: ok, x: 480, y: 56, action: play_pause}
logging:
  level: INFO
  format: "%(message)s"
"""
        )
        args = Namespace(
            config=str(config_file),
            tolerance=12,
            device=None,
            grab=False,
            backend="dryrun",
            volume_method=None,
            start_delay=0,
        )
        config = configWithSettings_load(args)
        assert settings.config is config
        assert config.layout.tolerance_px == 12.0
        assert config.output.backend == "dryrun"

    def test_config_with_settings_load_exits_on_missing_file(self, tmp_path) -> None:
        args = Namespace(config=str(tmp_path / "missing.yml"))
        with pytest.raises(SystemExit) as excinfo:
            configWithSettings_load(args)
        assert excinfo.value.code == 1

    def test_capturer_create_without_devices_raises(self, sample_config, monkeypatch) -> None:
        monkeypatch.setattr(bootstrap, "DeviceRegistry", _FakeRegistry.empty)
        with pytest.raises(RuntimeError, match="No pointer or touch input devices"):
            capturer_create(sample_config)

    def test_capturer_create_uses_config(self, sample_config, monkeypatch) -> None:
        seen: list[list[str] | None] = []

        def registry_build(device_paths):
            seen.append(device_paths)
            return _FakeRegistry([object()])

        monkeypatch.setattr(bootstrap, "DeviceRegistry", registry_build)
        sample_config.input.devices = ["/dev/input/event7"]

        capturer = capturer_create(sample_config)

        assert isinstance(capturer, PressCapturer)
        assert seen == [["/dev/input/event7"]]


class TestHostRun:
    """Tests for host_run wiring and cleanup."""

    def _host_patch(self, monkeypatch, sample_config, capturer: _FakeCapturer, calls: list[str]) -> None:
        sample_config.output.backend = "dryrun"

        def sinks_build(**kwargs):
            calls.append("sinks_create")
            return DryRunVolumeControl(), DryRunMediaKeySink(), lambda: calls.append("sinks_close")

        def capturer_build(config):
            calls.append("capturer_create")
            return capturer

        monkeypatch.setattr(host_main, "configWithSettings_load", lambda args: sample_config)
        monkeypatch.setattr(host_main, "loggingWithConfig_setup", lambda *args: None)
        monkeypatch.setattr(host_main, "sinks_create", sinks_build)
        monkeypatch.setattr(
            host_main, "startupDelay_wait", lambda delay: calls.append(f"delay {delay:g}")
        )
        monkeypatch.setattr(host_main, "capturer_create", capturer_build)

    def test_runs_in_order_and_releases_on_close(self, sample_config, monkeypatch) -> None:
        calls: list[str] = []
        capturer = _FakeCapturer(calls, [[], [PressEvent(x=510, y=836)]])
        self._host_patch(monkeypatch, sample_config, capturer, calls)

        host_run(Namespace())

        assert calls == [
            "sinks_create",
            "delay 10",
            "capturer_create",
            "grab",
            "read",
            "read",
            "close",
            "sinks_close",
        ]

    def test_releases_devices_when_loop_fails(self, sample_config, monkeypatch) -> None:
        calls: list[str] = []
        capturer = _FakeCapturer(calls, [], error=RuntimeError("No pointer or touch input devices available"))
        self._host_patch(monkeypatch, sample_config, capturer, calls)

        with pytest.raises(RuntimeError, match="No pointer or touch input devices"):
            host_run(Namespace())

        assert calls[-2:] == ["close", "sinks_close"]

    def test_sinks_closed_when_capture_setup_fails(self, sample_config, monkeypatch) -> None:
        calls: list[str] = []
        self._host_patch(monkeypatch, sample_config, _FakeCapturer(calls, []), calls)

        def capturer_fail(config):
            raise RuntimeError("No pointer or touch input devices found")

        monkeypatch.setattr(host_main, "capturer_create", capturer_fail)

        with pytest.raises(RuntimeError):
            host_run(Namespace())

        assert calls[-1] == "sinks_close"
