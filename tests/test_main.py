"""Tests for tep_monitor.__main__ - CLI entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tep_monitor.__main__ import _SAMPLE_CONFIG, _cmd_init_config, _cmd_list_sensors, main
from tep_monitor.config import load_yaml_config

# -----------------------------------------------------------------------
# main() dispatch
# -----------------------------------------------------------------------


class TestMainDispatch:
    """CLI argument parsing and sub-command dispatch."""

    def test_no_args_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        main([])
        out = capsys.readouterr().out
        assert "usage" in out.lower() or "commands" in out.lower()

    def test_help_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_list_sensors(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["list-sensors"])
        out = capsys.readouterr().out
        assert "XMEAS_1 " in out
        assert "XMEAS_52" in out
        assert "composition" in out
        assert "TOTAL" in out

    def test_init_config_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["init-config"])
        out = capsys.readouterr().out
        assert "dashboard:" in out
        assert "views:" in out

    def test_init_config_to_file(self, tmp_path: Path) -> None:
        outfile = tmp_path / "nested" / "dash.yaml"
        main(["init-config", "--output", str(outfile)])
        assert outfile.exists()
        assert "dashboard:" in outfile.read_text()

    def test_backward_compat_injects_run(self) -> None:
        """When first arg is a flag (not a subcommand), 'run' is injected."""
        with patch("tep_monitor.__main__._cmd_run") as mock_run:
            main(["--duration", "0.1"])
            mock_run.assert_called_once()
            assert mock_run.call_args.args[0].duration == 0.1

    def test_run_subcommand_dispatches(self) -> None:
        with patch("tep_monitor.__main__._cmd_run") as mock_run:
            main(["run", "--seed", "3", "--format", "json"])
            args = mock_run.call_args.args[0]
            assert args.seed == 3
            assert args.format == "json"

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(SystemExit):
            main(["run", "--format", "xml"])

    @pytest.mark.parametrize("period", ["0", "-1", "abc"])
    def test_non_positive_period_rejected(self, period: str, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("tep_monitor.__main__._cmd_run") as mock_run, pytest.raises(SystemExit) as exc_info:
            main(["run", "--period", period])
        assert exc_info.value.code == 2
        mock_run.assert_not_called()
        assert "--period" in capsys.readouterr().err

    def test_config_help_mentions_views(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["run", "--help"])
        assert "ignored when the file declares views" in " ".join(capsys.readouterr().out.split())


# -----------------------------------------------------------------------
# run command
# -----------------------------------------------------------------------


class TestRunCommand:
    """_cmd_run builds a Dashboard and hands it the duration."""

    def test_quick_run_uses_console_view(self) -> None:
        with patch("tep_monitor.dashboard.Dashboard.run", autospec=True) as mock_run:
            main(["run", "--duration", "2", "--seed", "5", "--period", "0.5"])
        dashboard = mock_run.call_args.args[0]
        assert mock_run.call_args.kwargs == {"duration_s": 2.0}
        assert dashboard.config.dashboard.seed == 5
        assert dashboard.config.dashboard.update_period_s == 0.5
        assert [v.name for v in dashboard.views] == ["ConsoleView"]

    def test_run_from_config(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "dash.yaml"
        cfg_file.write_text("""\
dashboard:
  duration_s: 12
views:
  - type: console
    fmt: json
  - type: console
""")
        with patch("tep_monitor.dashboard.Dashboard.run", autospec=True) as mock_run:
            main(["run", "--config", str(cfg_file)])
        dashboard = mock_run.call_args.args[0]
        assert mock_run.call_args.kwargs == {"duration_s": 12.0}
        assert len(dashboard.views) == 2

    def test_flags_override_config_values(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "dash.yaml"
        cfg_file.write_text("dashboard:\n  update_period_s: 2.0\n  seed: 1\n  duration_s: 5\n")
        with patch("tep_monitor.dashboard.Dashboard.run", autospec=True) as mock_run:
            main(["run", "--config", str(cfg_file), "--period", "0.25", "--format", "json"])
        dashboard = mock_run.call_args.args[0]
        assert dashboard.config.dashboard.update_period_s == 0.25
        assert dashboard.config.dashboard.seed == 1
        assert dashboard.config.dashboard.duration_s == 5.0
        assert dashboard.views[0]._fmt == "json"

    def test_end_to_end_short_run(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["run", "--duration", "0.3", "--period", "0.05", "--format", "json", "--seed", "1"])
        out = capsys.readouterr().out
        assert '"selection":[1,2,3]' in out


# -----------------------------------------------------------------------
# Direct command helpers
# -----------------------------------------------------------------------


class TestCommandHelpers:
    def test_list_sensors_direct(self, capsys: pytest.CaptureFixture[str]) -> None:
        _cmd_list_sensors()
        lines = [line for line in capsys.readouterr().out.splitlines() if "XMEAS_" in line]
        assert len(lines) == 52

    def test_sample_config_is_loadable(self, tmp_path: Path) -> None:
        outfile = tmp_path / "sample.yaml"
        _cmd_init_config(str(outfile))
        cfg = load_yaml_config(outfile)
        assert cfg.view_configs[0]["type"] == "console"
        assert cfg.selection.initial == [1, 2, 3]

    def test_sample_config_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        _cmd_init_config(None)
        assert capsys.readouterr().out.strip() == _SAMPLE_CONFIG.strip()
