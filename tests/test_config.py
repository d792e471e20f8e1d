from __future__ import annotations

from pathlib import Path

import pytest

from jobfeed.config import DEFAULT_API_URL, ROOT_DIR, load_config

_ENV_KEYS = (
    "JOBFEED_API_URL", "JOBFEED_TIMEOUT", "JOBFEED_SOURCE",
    "JOBFEED_STORAGE", "JOBFEED_DATA_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_when_file_missing(tmp_path):
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg.api_url == DEFAULT_API_URL
    assert cfg.storage_backend == "auto"
    assert cfg.sqlite_path.name == "jobs.db"
    assert cfg.json_path.name == "bookmarked_jobs.json"


def test_yaml_values(tmp_path):
    path = tmp_path / "feed.yaml"
    path.write_text(
        "api:\n  url: http://localhost:9000/jobs\n  timeout_sec: 3\n"
        "storage:\n  backend: JSON\n  data_dir: " + str(tmp_path / "d") + "\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.api_url == "http://localhost:9000/jobs"
    assert cfg.timeout_sec == 3.0
    assert cfg.storage_backend == "json"
    assert cfg.data_dir == tmp_path / "d"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "feed.yaml"
    path.write_text("storage:\n  backend: json\n", encoding="utf-8")
    monkeypatch.setenv("JOBFEED_STORAGE", "sqlite")
    monkeypatch.setenv("JOBFEED_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JOBFEED_API_URL", " http://example.test/jobs ")

    cfg = load_config(path)
    assert cfg.storage_backend == "sqlite"
    assert cfg.data_dir == Path(tmp_path)
    assert cfg.api_url == "http://example.test/jobs"


def test_unknown_backend_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("JOBFEED_STORAGE", "redis")
    with pytest.raises(ValueError, match="redis"):
        load_config(tmp_path / "missing.yaml")


def test_static_source_setting(tmp_path, monkeypatch):
    path = tmp_path / "feed.yaml"
    path.write_text("api:\n  source: static\n  sample_pages: config/sample_pages.json\n", encoding="utf-8")

    cfg = load_config(path)
    assert cfg.source == "static"
    assert cfg.sample_pages == ROOT_DIR / "config" / "sample_pages.json"

    monkeypatch.setenv("JOBFEED_SOURCE", "LOKAL")
    assert load_config(path).source == "lokal"


def test_unknown_source_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("JOBFEED_SOURCE", "ftp")
    with pytest.raises(ValueError, match="ftp"):
        load_config(tmp_path / "missing.yaml")
