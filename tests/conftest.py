import platform
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import toycc


def _toolchain_available():
    return platform.machine() in ("x86_64", "AMD64") and shutil.which("cc") is not None


requires_toolchain = pytest.mark.skipif(
    not _toolchain_available(), reason="needs an x86-64 host with a C toolchain"
)


@pytest.fixture
def build(tmp_path):
    """Return a helper that compiles a program with toycc and links it with cc."""

    def _build(src: str) -> Path:
        s_file = tmp_path / "test.s"
        out_bin = tmp_path / "test_bin"

        rc = toycc.main(["toycc", "-o", str(s_file), src])
        assert rc == 0, f"toycc compilation failed (rc={rc})"

        subprocess.run(["cc", "-o", str(out_bin), str(s_file)], check=True)
        return out_bin

    return _build


@pytest.fixture
def compile_and_run_rc(build):
    """Compile, link and run a program; return its exit status."""

    def _run(src: str) -> int:
        out_bin = build(src)
        result = subprocess.run(
            [str(out_bin)],
            capture_output=True,
            text=True,
            timeout=10,
        )
        return result.returncode

    return _run
