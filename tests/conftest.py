import textwrap

import pytest


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML document to a temp file and return its path."""

    def _write(content: str, name: str = "config.yaml") -> str:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.delenv("HTTPS_PROXY", raising=False)
    monkeypatch.delenv("KWATCH_LOG_LEVEL", raising=False)
