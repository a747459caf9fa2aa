"""
Integration tests for the tracker command-line interface.
"""

import io
import pytest
from datetime import timedelta
from unittest.mock import Mock

from click.testing import CliRunner

from game_log_analyze import cli as cli_module
from game_log_analyze.analyzer.live import AnalyzerSnapshot, LiveDamageAnalyzer
from game_log_analyze.analyzer.displays import DisplayBuilder
from game_log_analyze.cli import cli, run_tracker
from game_log_analyze.config.settings import TrackerSettings
from game_log_analyze.parser.tokenizer import LineTokenizer
from game_log_analyze.streaming.source import LogTailer


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner isolated from any config files on the machine."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return CliRunner()


@pytest.fixture
def log_file(tmp_path, sample_log_lines):
    path = tmp_path / "combat.log"
    path.write_text("\n".join(sample_log_lines) + "\n")
    return path


class TestRunTracker:
    """Test the tick-and-redraw loop."""

    def test_feeds_analyzer_and_throttles_redraw(
        self, monkeypatch, sample_log_lines, clock, log_date
    ):
        """Test every poll is ticked and redraws respect the refresh interval."""
        fake_console = Mock()
        monkeypatch.setattr(cli_module, "console", fake_console)

        stream = io.StringIO("\n".join(sample_log_lines) + "\n")
        tailer = LogTailer(stream, LineTokenizer(today=lambda: log_date))
        analyzer = LiveDamageAnalyzer(clock=clock)
        settings = TrackerSettings(refresh_interval=1.0, poll_interval=0.25)

        times = iter([0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5])
        sleep = Mock()

        ticks = run_tracker(
            tailer, analyzer, settings, max_ticks=8, sleep=sleep, monotonic=lambda: next(times)
        )

        assert ticks == 8
        assert analyzer.total_damage == 375 + 120 + 410
        assert analyzer.maximum_hit == 410
        assert analyzer.snapshot().heartbeats_seen == 5
        # redraws at t=0, 1.5 and 3.0
        assert fake_console.print.call_count == 3
        assert sleep.call_count == 5
        sleep.assert_called_with(0.25)

    def test_no_sleep_when_interval_is_zero(self, monkeypatch, clock):
        monkeypatch.setattr(cli_module, "console", Mock())
        tailer = LogTailer(io.StringIO(""))
        settings = TrackerSettings(poll_interval=0)
        sleep = Mock()

        run_tracker(tailer, LiveDamageAnalyzer(clock=clock), settings, max_ticks=3, sleep=sleep)

        sleep.assert_not_called()


class TestTrackCommand:
    """Test the track command end to end."""

    def test_track_renders_stats(self, runner, log_file):
        """Test the command skips existing lines and renders the stats panel."""
        result = runner.invoke(
            cli, ["track", str(log_file), "--max-ticks", "3", "--poll-interval", "0"]
        )

        assert result.exit_code == 0, result.output
        assert "Game Log Analyzer" in result.output
        assert "Stats from log" in result.output
        assert "AverageHit" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["track", str(tmp_path / "nope.log")])
        assert result.exit_code == 2

    def test_invalid_window(self, runner, log_file):
        """Test invalid settings are reported as a CLI error."""
        result = runner.invoke(cli, ["track", str(log_file), "--window", "0"])
        assert result.exit_code == 1
        assert "Window must be positive" in result.output

    def test_invalid_trim_policy(self, runner, log_file):
        result = runner.invoke(cli, ["track", str(log_file), "--trim-policy", "sometimes"])
        assert result.exit_code == 2

    def test_options_reach_analyzer(self, runner, log_file, monkeypatch):
        """Test CLI options override settings used to build the analyzer."""
        captured = {}

        def fake_run(tailer, analyzer, settings, max_ticks=None):
            captured["analyzer"] = analyzer
            captured["settings"] = settings
            return 0

        monkeypatch.setattr(cli_module, "run_tracker", fake_run)

        result = runner.invoke(
            cli,
            ["track", str(log_file), "--window", "20", "--trim-policy", "exhaustive"],
        )

        assert result.exit_code == 0, result.output
        assert captured["analyzer"].retention == timedelta(seconds=20)
        assert captured["settings"].trim_policy == "exhaustive"

    def test_config_file(self, runner, log_file, tmp_path, monkeypatch):
        """Test a YAML config passed with --config is applied."""
        config_file = tmp_path / "tracker.yaml"
        config_file.write_text("window_seconds: 42\n")
        captured = {}

        def fake_run(tailer, analyzer, settings, max_ticks=None):
            captured["settings"] = settings
            return 0

        monkeypatch.setattr(cli_module, "run_tracker", fake_run)

        result = runner.invoke(cli, ["--config", str(config_file), "track", str(log_file)])

        assert result.exit_code == 0, result.output
        assert captured["settings"].window_seconds == 42.0

    def test_malformed_env_setting(self, runner, log_file, monkeypatch):
        """Test an unparseable environment setting is reported as a CLI error."""
        monkeypatch.setenv("GLA_WINDOW_SECONDS", "ten")

        result = runner.invoke(cli, ["track", str(log_file)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_missing_config_file(self, runner, log_file, tmp_path):
        """Test a mistyped --config path is rejected instead of ignored."""
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "missing.yaml"), "track", str(log_file)]
        )
        assert result.exit_code == 2

    def test_interrupt_exits_cleanly(self, runner, log_file, monkeypatch):
        """Test Ctrl-C ends tracking without an error."""

        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli_module, "run_tracker", interrupted)

        result = runner.invoke(cli, ["track", str(log_file)])

        assert result.exit_code == 0


class TestDisplayBuilder:
    """Test rendering of the statistics panel."""

    def test_stats_table_rounds_values(self):
        from rich.console import Console

        console = Console(file=io.StringIO(), width=100)
        snapshot = AnalyzerSnapshot(
            dps=12.3456, total_damage=905, average_hit=301.6667, minimum_hit=120, maximum_hit=410
        )

        console.print(DisplayBuilder.create_tracker_view(snapshot))
        output = console.file.getvalue()

        assert "12.35" in output
        assert "301.67" in output
        assert "905" in output
        assert "MaxHit" in output
