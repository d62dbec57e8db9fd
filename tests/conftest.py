import sys
import textwrap

import pytest


@pytest.fixture()
def stub_script(tmp_path):
    """Write a small Python program to *tmp_path* and return its path."""
    def _make(body: str, name: str = "stub_printer.py") -> str:
        path = tmp_path / name
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return str(path)
    return _make


@pytest.fixture()
def python_exe() -> str:
    return sys.executable
