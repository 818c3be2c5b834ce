"""
Tests for use cases — resolve, reconcile runs, config check.
"""

import textwrap
from pathlib import Path

import pytest

from abisync.adapters import StaticLocator
from abisync.core.models import VariantRef
from abisync.core.use_cases.config_check import check_config
from abisync.core.use_cases.reconcile import run_reconcile, select_locator
from abisync.core.use_cases.resolve import resolve_build


@pytest.fixture(autouse=True)
def _isolate_cwd(tmp_path: Path, monkeypatch):
    # keep config auto-detection away from the real working tree
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


def _write_config(directory: Path, body: str) -> Path:
    path = directory / "abisync.yml"
    path.write_text(textwrap.dedent(body))
    return path


class TestResolveBuild:
    def test_without_config(self):
        result = resolve_build(properties={"target-platform": "android-x64"})
        assert result.error is None
        assert result.config_path is None
        assert result.settings.abis == {"x86_64"}

    def test_debug_filter(self):
        result = resolve_build(build_type="debug")
        assert result.abi_filter == {"armeabi-v7a", "arm64-v8a", "x86"}

    def test_error_captured(self):
        result = resolve_build(properties={"target-platform": "android-mips"})
        assert result.error == "Invalid platform: android-mips."
        assert result.to_dict() == {"error": "Invalid platform: android-mips."}

    def test_to_dict(self, tmp_path: Path):
        config = _write_config(tmp_path, """\
            properties:
              split-per-abi: true
        """)
        data = resolve_build(config_path=config).to_dict()
        assert data["settings"]["split_per_abi"] is True
        assert data["abi_filter"] is None


class TestRunReconcile:
    def test_gradle_build(self, gradle_build: Path, libfoo_bytes: bytes):
        result = run_reconcile(properties={"support-armeabi": "2"}, build_dir=gradle_build)

        assert result.ok
        assert result.reconciled == 2
        for variant in ("debug", "release"):
            lib = gradle_build / "intermediates/transforms/stripDebugSymbol" / variant / "0/lib"
            assert (lib / "armeabi" / "libfoo.so").read_bytes() == libfoo_bytes
            assert not (lib / "armeabi" / "README.txt").exists()
            assert not (lib / "armeabi-v7a").exists()
            assert (lib / "arm64-v8a" / "libfoo.so").exists()

    def test_strategy_none_touches_nothing(self, gradle_build: Path):
        result = run_reconcile(build_dir=gradle_build)
        assert result.ok
        assert result.plan.total == 0
        assert result.results == []
        lib = gradle_build / "intermediates/transforms/stripDebugSymbol/release/0/lib"
        assert not (lib / "armeabi").exists()

    def test_dry_run(self, gradle_build: Path):
        result = run_reconcile(properties={"support-armeabi": "3"}, build_dir=gradle_build, dry_run=True)
        assert result.plan.total == 2
        assert result.results == []
        lib = gradle_build / "intermediates/transforms/stripDebugSymbol/release/0/lib"
        assert (lib / "armeabi-v7a").exists()

    def test_missing_variant_is_wiring_error(self, gradle_build: Path):
        result = run_reconcile(
            properties={"support-armeabi": "1"},
            build_dir=gradle_build,
            variants=["release", "staging"],
        )
        assert not result.ok
        assert "transformNativeLibsWithStripDebugSymbolForStaging" in result.error
        lib = gradle_build / "intermediates/transforms/stripDebugSymbol/release/0/lib"
        assert not (lib / "armeabi").exists()

    def test_config_declared_variants(self, tmp_path: Path, lib_root: Path):
        config = _write_config(tmp_path, """\
            ext:
              supportArmeabi: 1
            variants:
              - name: release
                task_output: out
        """)
        result = run_reconcile(config_path=config)
        assert result.reconciled == 1
        assert (lib_root / "armeabi" / "libfoo.so").exists()
        assert (lib_root / "armeabi-v7a" / "libfoo.so").exists()

    def test_invalid_strategy_reported(self):
        result = run_reconcile(properties={"support-armeabi": "all"})
        assert result.error is not None
        assert "support-armeabi" in result.error
        assert result.settings is None

    def test_io_failure_stops_run(self, tmp_path: Path, write_libs):
        first = tmp_path / "a"
        second = tmp_path / "b"
        write_libs(first / "0/lib/armeabi-v7a", {"libfoo.so": b"a"})
        write_libs(second / "0/lib/armeabi-v7a", {"libfoo.so": b"b"})
        # a plain file where the legacy directory should go
        (first / "0/lib/armeabi").write_bytes(b"not a dir")

        locator = StaticLocator([
            VariantRef(name="first", task_output=first),
            VariantRef(name="second", task_output=second),
        ])
        result = run_reconcile(properties={"support-armeabi": "1"}, locator=locator)

        assert not result.ok
        assert result.failed == 1
        assert [r.variant for r in result.results] == ["first"]
        assert "supportArmeabiForFirst" in result.error
        assert not (second / "0/lib/armeabi").exists()

    def test_to_dict(self, gradle_build: Path):
        data = run_reconcile(properties={"support-armeabi": "1"}, build_dir=gradle_build).to_dict()
        assert data["reconciled"] == 2
        assert data["settings"]["strategy"] == "copy"
        assert data["tasks"][0]["name"] == "supportArmeabiForDebug"
        assert data["results"][0]["copied"] == ["libfoo.so"]


class TestSelectLocator:
    def test_build_dir_wins(self, gradle_build: Path):
        assert select_locator(None, gradle_build).name == "gradle"

    def test_undeclared_variant(self):
        locator = select_locator(None, variants=["release"])
        assert locator.list_variants() == [VariantRef(name="release")]


class TestCheckConfig:
    def test_no_config(self):
        result = check_config()
        assert not result.valid
        assert "No abisync.yml found." in result.errors

    def test_valid_with_warnings(self, tmp_path: Path):
        config = _write_config(tmp_path, """\
            properties:
              split-per-abi: "true"
            ext:
              supportArmeabi: 2
            variants:
              - name: release
                task_output: missing
              - name: debug
        """)
        result = check_config(config)
        assert result.valid
        assert any("does not exist" in w for w in result.warnings)
        assert any("declares no task_output" in w for w in result.warnings)
        assert any("ext.supportArmeabi is ignored" in w for w in result.warnings)

    def test_duplicate_variants(self, tmp_path: Path):
        config = _write_config(tmp_path, """\
            variants:
              - name: release
              - name: release
        """)
        result = check_config(config)
        assert not result.valid
        assert "Duplicate variant names: release" in result.errors

    def test_invalid_platform(self, tmp_path: Path):
        config = _write_config(tmp_path, """\
            properties:
              target-platform: android-arm,linux
        """)
        result = check_config(config)
        assert not result.valid
        assert result.errors == ["Invalid platform: linux."]
