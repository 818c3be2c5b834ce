"""
Shared test fixtures and configuration.
"""

from pathlib import Path
from typing import Callable

import pytest

LIBFOO_BYTES = b"\x7fELF v7a libfoo"


def _write_libs(abi_dir: Path, files: dict[str, bytes]) -> Path:
    abi_dir.mkdir(parents=True, exist_ok=True)
    for name, data in files.items():
        (abi_dir / name).write_bytes(data)
    return abi_dir


def _snapshot(directory: Path) -> dict[str, bytes]:
    return {p.name: p.read_bytes() for p in sorted(directory.iterdir()) if p.is_file()}


@pytest.fixture
def write_libs() -> Callable[[Path, dict[str, bytes]], Path]:
    """Create an ABI directory holding the given files."""
    return _write_libs


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes]]:
    """Map file name → bytes for every file in a directory."""
    return _snapshot


@pytest.fixture
def libfoo_bytes() -> bytes:
    return LIBFOO_BYTES


@pytest.fixture
def lib_root(tmp_path: Path) -> Path:
    """An output tree root with armeabi-v7a/libfoo.so and no armeabi."""
    root = tmp_path / "out" / "0" / "lib"
    _write_libs(root / "armeabi-v7a", {"libfoo.so": LIBFOO_BYTES})
    return root


@pytest.fixture
def gradle_build(tmp_path: Path) -> Path:
    """A Gradle build dir with release and debug strip-debug-symbol outputs."""
    build_dir = tmp_path / "build"
    transforms = build_dir / "intermediates" / "transforms" / "stripDebugSymbol"
    for variant in ("release", "debug"):
        lib = transforms / variant / "0" / "lib"
        _write_libs(lib / "armeabi-v7a", {"libfoo.so": LIBFOO_BYTES, "README.txt": b"x"})
        _write_libs(lib / "arm64-v8a", {"libfoo.so": b"arm64"})
    return build_dir
