from abc import ABC, abstractmethod

from skillmatch.models import Candidate


class PoolSource(ABC):
    @abstractmethod
    def load(self, room_id: str | None = None, available_only: bool = False) -> list[Candidate]:
        pass
