from .base import JobPageSource, SourceError
from .lokal import LokalSource
from .static import StaticSource

from jobfeed.config import FeedConfig
from jobfeed.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobPageSource", "SourceError", "LokalSource", "StaticSource",
    "get_source",
]


def get_source(config: FeedConfig) -> JobPageSource:
    if config.source == "static":
        log.info("Registered source: static pages (%s)", config.sample_pages)
        return StaticSource.from_file(config.sample_pages)

    log.info("Registered source: Lokal (%s)", config.api_url)
    return LokalSource(config.api_url, timeout_sec=config.timeout_sec)
