"""Pytest configuration for tests.

No sys.path hacks - tests import from the installed schemaguard package.
"""

import textwrap
from pathlib import Path

import pytest


def sdl(text: str) -> str:
    """Dedent an inline SDL document."""
    return textwrap.dedent(text).strip() + "\n"


@pytest.fixture
def write_schema(tmp_path):
    """Write SDL to ``tmp_path/<name>`` and return the path."""
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(sdl(text), encoding="utf-8")
        return path
    return _write
