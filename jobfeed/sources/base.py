from abc import ABC, abstractmethod
from typing import Any


class SourceError(RuntimeError):
    """Transport or decoding failure while fetching a page."""


class JobPageSource(ABC):
    @abstractmethod
    def fetch_page(self, page: int) -> Any:
        """Decoded JSON document for ``page``; raises SourceError on failure."""
        pass
