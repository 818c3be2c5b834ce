"""
Tests for CLI commands — resolve, tasks, reconcile, config check.
"""

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from abisync.main import cli


@pytest.fixture(autouse=True)
def _isolate_cwd(tmp_path: Path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "armeabi" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_property(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["-P", "novalue", "resolve"])
        assert result.exit_code == 2
        assert "key=value" in result.output


class TestResolveCommand:
    def test_defaults(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve"])
        assert result.exit_code == 0
        assert "arm64-v8a, armeabi-v7a" in result.output
        assert "armeabi strategy: none" in result.output

    def test_json(self):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-P", "support-armeabi=1", "resolve", "--build-type", "debug", "--json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["settings"]["strategy"] == "copy"
        assert data["abi_filter"] == ["arm64-v8a", "armeabi", "armeabi-v7a", "x86"]

    def test_invalid_platform(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["-P", "target-platform=android-mips", "resolve"])
        assert result.exit_code == 1
        assert "Invalid platform: android-mips." in result.output

    def test_split_per_abi(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["-P", "split-per-abi=true", "resolve"])
        assert result.exit_code == 0
        assert "Split per ABI" in result.output


class TestReconcileCommand:
    def test_reconcile_gradle_build(self, gradle_build: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-P", "support-armeabi=2", "reconcile", "--build-dir", str(gradle_build)],
        )
        assert result.exit_code == 0
        assert "✓ release" in result.output
        assert "armeabi-v7a removed" in result.output

    def test_reconcile_json(self, gradle_build: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["-P", "support-armeabi=1", "reconcile", "-b", str(gradle_build), "--variant", "release", "--json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["reconciled"] == 1
        assert data["results"][0]["variant"] == "release"

    def test_nothing_to_reconcile(self, gradle_build: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["reconcile", "--build-dir", str(gradle_build)])
        assert result.exit_code == 0
        assert "Nothing to reconcile" in result.output

    def test_dry_run(self, gradle_build: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-P", "support-armeabi=3", "reconcile", "-b", str(gradle_build), "--dry-run"],
        )
        assert result.exit_code == 0
        assert "[dry-run]" in result.output
        lib = gradle_build / "intermediates/transforms/stripDebugSymbol/debug/0/lib"
        assert (lib / "armeabi-v7a").exists()

    def test_wiring_error(self, gradle_build: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["-P", "support-armeabi=1", "reconcile", "-b", str(gradle_build), "--variant", "staging"],
        )
        assert result.exit_code == 1
        assert "Can not find Task:transformNativeLibsWithStripDebugSymbolForStaging" in result.output


class TestTasksCommand:
    def test_lists_tasks(self, gradle_build: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-P", "support-armeabi=1", "tasks", "-b", str(gradle_build)])
        assert result.exit_code == 0
        assert "supportArmeabiForDebug" in result.output
        assert "after transformNativeLibsWithStripDebugSymbolForRelease" in result.output

    def test_no_tasks(self, gradle_build: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["tasks", "-b", str(gradle_build)])
        assert result.exit_code == 0
        assert "No reconciliation tasks" in result.output


class TestConfigCheckCommand:
    def _make_config(self, tmp_path: Path) -> Path:
        content = textwrap.dedent("""\
            properties:
              target-platform: android-arm
            ext:
              supportArmeabi: 1
            variants:
              - name: release
                task_output: out
        """)
        config = tmp_path / "abisync.yml"
        config.write_text(content)
        (tmp_path / "out").mkdir()
        return config

    def test_valid(self, tmp_path: Path):
        config = self._make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "Strategy: copy" in result.output

    def test_json(self, tmp_path: Path):
        config = self._make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["variant_count"] == 1

    def test_missing_config(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check"])
        assert result.exit_code == 1
        assert "No abisync.yml found." in result.output
