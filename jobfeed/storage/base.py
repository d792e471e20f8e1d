from abc import ABC, abstractmethod

from jobfeed.models import Job


class BookmarkStore(ABC):
    """Durable id -> Job map of bookmarked jobs.

    Implementations never raise from these methods: failures are logged,
    ``load_all`` returns an empty list and the mutators return False.
    """

    name: str = "store"

    @abstractmethod
    def load_all(self) -> list[Job]:
        pass

    @abstractmethod
    def upsert(self, job: Job) -> bool:
        pass

    @abstractmethod
    def delete(self, job_id: str) -> bool:
        pass

    def close(self) -> None:
        pass
