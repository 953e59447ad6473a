from pathlib import Path
from typing import Callable

import pytest


SAMPLE_MANIFEST = """\
name: widget
version: 1.4.0
supports: [linux, darwin]
requires:
  python: "3.11"
  numpy: 1.26.4
loadRequires:
  openssl: 3
recipes:
  build:
    requires:
      cmake: 3.28
    steps:
      - cmake -S . -B build
      - cmake --build build
    contributors: [alice]
flavours:
  - name: debug
    buildRequires:
      gdb: 14
  - name: "build-{{row.os}}-{{row.arch}}"
    matrix:
      os: [linux, darwin]
      arch: [amd64, arm64]
  - name: docs
    recipes:
      html:
        steps: [make html]
exports:
  tools: [widget, widget-admin]
  libs: [libwidget]
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # Settings come from the environment; keep tests independent of the caller's shell
    monkeypatch.delenv("MANIPARSE_MANIFEST", raising=False)
    monkeypatch.delenv("MANIPARSE_LOG_LEVEL", raising=False)


@pytest.fixture()
def sample_manifest_text() -> str:
    return SAMPLE_MANIFEST


@pytest.fixture()
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Write manifest text to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "manifest.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
