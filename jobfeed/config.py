"""Load feed configuration from config/feed.yaml and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobfeed.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
CONFIG_PATH: Path = CONFIG_DIR / "feed.yaml"
DATA_DIR: Path = ROOT_DIR / "data"

DEFAULT_API_URL = "https://testapi.getlokalapp.com/common/jobs"
STORAGE_BACKENDS: tuple[str, ...] = ("auto", "sqlite", "json")
SOURCES: tuple[str, ...] = ("lokal", "static")
SAMPLE_PAGES_PATH: Path = CONFIG_DIR / "sample_pages.json"


@dataclass
class FeedConfig:
    api_url: str = DEFAULT_API_URL
    timeout_sec: float = 15.0
    source: str = "lokal"
    sample_pages: Path = field(default_factory=lambda: SAMPLE_PAGES_PATH)
    storage_backend: str = "auto"
    data_dir: Path = field(default_factory=lambda: DATA_DIR)
    sqlite_filename: str = "jobs.db"
    json_filename: str = "bookmarked_jobs.json"

    @property
    def sqlite_path(self) -> Path:
        return self.data_dir / self.sqlite_filename

    @property
    def json_path(self) -> Path:
        return self.data_dir / self.json_filename


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a mapping at top level")
    return data


def load_config(path: Path | None = None) -> FeedConfig:
    """Build a FeedConfig from the YAML file, then apply env overrides."""
    data = _read_yaml(path or CONFIG_PATH)
    api = data.get("api") or {}
    storage = data.get("storage") or {}

    cfg = FeedConfig(
        api_url=str(api.get("url", DEFAULT_API_URL)),
        timeout_sec=float(api.get("timeout_sec", 15.0)),
        source=str(api.get("source", "lokal")).lower(),
        storage_backend=str(storage.get("backend", "auto")).lower(),
        sqlite_filename=str(storage.get("sqlite_file", "jobs.db")),
        json_filename=str(storage.get("json_file", "bookmarked_jobs.json")),
    )
    if storage.get("data_dir"):
        cfg.data_dir = Path(storage["data_dir"]).expanduser()
    if api.get("sample_pages"):
        sample = Path(api["sample_pages"]).expanduser()
        cfg.sample_pages = sample if sample.is_absolute() else ROOT_DIR / sample

    if get_env("JOBFEED_API_URL"):
        cfg.api_url = get_env("JOBFEED_API_URL")
    if get_env("JOBFEED_TIMEOUT"):
        cfg.timeout_sec = float(get_env("JOBFEED_TIMEOUT"))
    if get_env("JOBFEED_SOURCE"):
        cfg.source = get_env("JOBFEED_SOURCE").lower()
    if get_env("JOBFEED_STORAGE"):
        cfg.storage_backend = get_env("JOBFEED_STORAGE").lower()
    if get_env("JOBFEED_DATA_DIR"):
        cfg.data_dir = Path(get_env("JOBFEED_DATA_DIR")).expanduser()

    if cfg.storage_backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown storage backend {cfg.storage_backend!r}; "
            f"expected one of {', '.join(STORAGE_BACKENDS)}"
        )
    if cfg.source not in SOURCES:
        raise ValueError(
            f"Unknown job source {cfg.source!r}; expected one of {', '.join(SOURCES)}"
        )
    log.debug("Config: source=%s api=%s storage=%s data_dir=%s", cfg.source, cfg.api_url, cfg.storage_backend, cfg.data_dir)
    return cfg


def ensure_dirs(cfg: FeedConfig) -> None:
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
