"""Unit tests for CLI parsing and log-level override behavior."""

from __future__ import annotations

from argparse import Namespace

import pytest

from overlayremote import cli
from overlayremote.cli import arguments_parse, logLevelOverride_get


class TestLogLevelOverride:
    """Tests for CLI log-level precedence."""

    def test_info_overrides_debug_when_both_set(self) -> None:
        args = Namespace(debug=True, info=True, warning=False, error=False, critical=False)
        assert logLevelOverride_get(args) == "INFO"

    def test_critical_wins(self) -> None:
        args = Namespace(debug=True, info=True, warning=True, error=True, critical=True)
        assert logLevelOverride_get(args) == "CRITICAL"

    def test_no_flags(self) -> None:
        args = Namespace(debug=False, info=False, warning=False, error=False, critical=False)
        assert logLevelOverride_get(args) is None


class TestArgumentsParse:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = arguments_parse([])
        assert args.config is None
        assert args.backend is None
        assert args.device is None
        assert args.tolerance is None
        assert args.start_delay is None
        assert args.grab is False

    def test_repeatable_device_and_overrides(self) -> None:
        args = arguments_parse(
            [
                "--device", "/dev/input/event3",
                "--device", "/dev/input/event4",
                "--backend", "dryrun",
                "--volume-method", "pactl",
                "--tolerance", "40",
                "--start-delay", "0",
                "--grab",
            ]
        )
        assert args.device == ["/dev/input/event3", "/dev/input/event4"]
        assert args.backend == "dryrun"
        assert args.volume_method == "pactl"
        assert args.tolerance == 40.0
        assert args.start_delay == 0.0
        assert args.grab is True

    def test_invalid_backend_exits(self) -> None:
        with pytest.raises(SystemExit):
            arguments_parse(["--backend", "x11"])


class TestMain:
    """Tests for main() exit handling."""

    def test_error_exits_with_status_one(self, monkeypatch, capsys) -> None:
        def _failing_run(_args) -> None:
            raise RuntimeError("No pointer or touch input devices found")

        monkeypatch.setattr(cli, "arguments_parse", lambda: arguments_parse(["--error"]))
        monkeypatch.setattr("overlayremote.host.main.host_run", _failing_run)

        with pytest.raises(SystemExit) as excinfo:
            cli.main()

        assert excinfo.value.code == 1
        assert "No pointer or touch input devices found" in capsys.readouterr().err

    def test_keyboard_interrupt_exits_cleanly(self, monkeypatch) -> None:
        seen = {}

        def _interrupted_run(args) -> None:
            seen["log_level"] = getattr(args, "log_level", None)
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "arguments_parse", lambda: arguments_parse(["--debug"]))
        monkeypatch.setattr("overlayremote.host.main.host_run", _interrupted_run)

        with pytest.raises(SystemExit) as excinfo:
            cli.main()

        assert excinfo.value.code == 0
        assert seen["log_level"] == "DEBUG"
