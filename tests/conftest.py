import io
import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the CLI module for tests to avoid module-level import."""
    return importlib.import_module("base32768_cli")


@pytest.fixture()
def no_logging_setup(monkeypatch, m):
    """Keep the CLI from replacing the root logger's handlers during tests."""
    calls = []

    def _stub(verbose: bool):
        calls.append(verbose)

    monkeypatch.setattr(m, "_setup_logging", _stub)
    return calls


@pytest.fixture()
def stdio(monkeypatch):
    """Replace stdin/stdout with in-memory binary-backed text wrappers.

    Returns a callable that installs ``data`` as stdin and gives back the
    stdout wrapper, whose ``.buffer.getvalue()`` holds written bytes.
    """
    def install(data: bytes = b""):
        fake_in = io.TextIOWrapper(io.BytesIO(data))
        fake_out = io.TextIOWrapper(io.BytesIO())
        monkeypatch.setattr(sys, "stdin", fake_in)
        monkeypatch.setattr(sys, "stdout", fake_out)
        return fake_out

    return install


@pytest.fixture()
def sample_payloads():
    """Byte strings covering every residue of the 15-bit chunk boundary."""
    payloads = [bytes(range(n)) for n in range(0, 40)]
    payloads.append(b"\xff" * 31)
    payloads.append(b"The quick brown fox jumps over the lazy dog. " * 3)
    return payloads
