from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from casy.cli import CliSettings, _configure_logging, app
from casy.config.loader import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()

_YAML = """\
root:
  all_non_push_emitters_topic: pull
emitters:
  - id: app.sync.Accounts
    topics: [accounts]
    groups: [startup]
  - id: app.sync.Balances
    triggered_by: [app.sync.Accounts]
  - id: app.sync.Statements
    syncs_after: [app.sync.Balances]
    groups: [startup]
  - id: app.sync.Rates
    topics: [rates]
"""

_CYCLE_YAML = """\
emitters:
  - id: E
    triggered_by: [F]
  - id: F
    triggered_by: [E]
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "casy.yaml"
    path.write_text(_YAML)
    return path


def _invoke(*args: str):
    return runner.invoke(app, [*args, "--no-color"])


class TestVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "casy" in result.stdout

    def test_short_version_flag(self) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "casy" in result.stdout


class TestHelp:
    def test_describes_tiers(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "sync tiers" in result.stdout
        for command in ("tiers", "topics", "group", "non-push", "validate"):
            assert command in result.stdout


class TestTiersCommand:
    def test_lists_tiers(self, config_file: Path) -> None:
        result = _invoke("tiers", "--config", str(config_file))
        assert result.exit_code == 0
        out = result.stdout
        assert out.index("Tier 1") < out.index("app.sync.Accounts") < out.index("Tier 2")
        assert out.index("Tier 2") < out.index("app.sync.Balances") < out.index("Tier 3")
        assert "4 emitters in 3 tiers." in out

    def test_no_emitters(self, tmp_path: Path) -> None:
        path = tmp_path / "casy.yaml"
        path.write_text("emitters: []\n")
        result = _invoke("tiers", "-c", str(path))
        assert result.exit_code == 0
        assert "No emitters declared." in result.stdout

    def test_cycle_exits_1(self, tmp_path: Path) -> None:
        path = tmp_path / "casy.yaml"
        path.write_text(_CYCLE_YAML)
        result = _invoke("tiers", "-c", str(path))
        assert result.exit_code == 1
        assert "Dependency cycle" in result.output
        assert "E -> F -> E" in result.output

    def test_missing_file_exits_1(self, tmp_path: Path) -> None:
        result = _invoke("tiers", "-c", str(tmp_path / "missing.yaml"))
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    @patch("casy.config.load")
    def test_config_error_exits_1(self, mock_load) -> None:
        mock_load.side_effect = ConfigError("bad config")
        result = _invoke("tiers")
        assert result.exit_code == 1
        assert "Configuration error: bad config" in result.output


class TestTopicsCommand:
    def test_trigger_closure(self, config_file: Path) -> None:
        result = _invoke("topics", "accounts", "-c", str(config_file))
        assert result.exit_code == 0
        assert "app.sync.Accounts" in result.stdout
        assert "app.sync.Balances" in result.stdout
        assert "app.sync.Statements" not in result.stdout
        assert "2 emitters in 2 tiers." in result.stdout

    def test_several_topics(self, config_file: Path) -> None:
        result = _invoke("topics", "accounts", "rates", "-c", str(config_file))
        assert result.exit_code == 0
        assert "3 emitters in 2 tiers." in result.stdout

    def test_non_push_topic(self, config_file: Path) -> None:
        result = _invoke("topics", "pull", "-c", str(config_file))
        assert result.exit_code == 0
        assert "app.sync.Statements" in result.stdout

    def test_unknown_topic(self, config_file: Path) -> None:
        result = _invoke("topics", "nope", "-c", str(config_file))
        assert result.exit_code == 0
        assert "No emitters for topic(s): nope" in result.stdout


class TestGroupCommand:
    def test_group_members(self, config_file: Path) -> None:
        result = _invoke("group", "startup", "-c", str(config_file))
        assert result.exit_code == 0
        assert "app.sync.Statements" in result.stdout
        assert "app.sync.Rates" not in result.stdout
        assert "2 emitters in 2 tiers." in result.stdout

    def test_empty_group(self, config_file: Path) -> None:
        result = _invoke("group", "later", "-c", str(config_file))
        assert result.exit_code == 0
        assert "No emitters in group later." in result.stdout


class TestNonPushCommand:
    def test_lists_non_push(self, config_file: Path) -> None:
        result = _invoke("non-push", "-c", str(config_file))
        assert result.exit_code == 0
        assert "app.sync.Balances" in result.stdout
        assert "app.sync.Rates" not in result.stdout


class TestValidateCommand:
    def test_valid(self, config_file: Path) -> None:
        result = _invoke("validate", "-c", str(config_file))
        assert result.exit_code == 0
        assert "Declarations are valid: 4 emitters, 3 tiers." in result.stdout

    def test_unknown_reference(self, tmp_path: Path) -> None:
        path = tmp_path / "casy.yaml"
        path.write_text("emitters:\n  - id: a\n    syncs_after: [ghost]\n")
        result = _invoke("validate", "-c", str(path))
        assert result.exit_code == 1
        assert "Unknown reference" in result.output
        assert "ghost" in result.output


class TestLogging:
    @pytest.fixture(autouse=True)
    def _reset_casy_logger(self):
        logger = logging.getLogger("casy")
        level = logger.level
        yield
        logger.setLevel(level)

    def test_verbose_sets_debug(self) -> None:
        _configure_logging(2)
        assert logging.getLogger("casy").level == logging.DEBUG

    def test_single_verbose_sets_info(self) -> None:
        _configure_logging(1)
        assert logging.getLogger("casy").level == logging.INFO

    def test_env_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASY_LOG", "warning")
        _configure_logging(0)
        assert logging.getLogger("casy").level == logging.WARNING

    def test_env_level_beats_verbose_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASY_LOG", "error")
        _configure_logging(2)
        assert logging.getLogger("casy").level == logging.ERROR

    def test_invalid_env_level_warns_and_uses_info(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("CASY_LOG", "chatty")
        _configure_logging(0)
        assert logging.getLogger("casy").level == logging.INFO
        assert "invalid CASY_LOG level" in capsys.readouterr().err

    def test_no_flag_leaves_logging_alone(self) -> None:
        logging.getLogger("casy").setLevel(logging.NOTSET)
        _configure_logging(0)
        assert logging.getLogger("casy").level == logging.NOTSET


class TestCliSettings:
    def test_reads_prefixed_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASY_LOG", " debug ")
        assert CliSettings().log == "DEBUG"

    def test_blank_means_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASY_LOG", "")
        assert CliSettings().log is None

    def test_ignores_root_settings_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASY_TOPIC_CLOSURE", "precedes")
        assert CliSettings().log is None

    def test_unknown_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASY_LOG", "verbose")
        with pytest.raises(ValidationError):
            CliSettings()
