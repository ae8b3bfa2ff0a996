from abc import ABC, abstractmethod

from ..domain import PrescriptionRangeRecord


class PrescriptionRangesRepository(ABC):
    @abstractmethod
    async def find_all(self) -> list[PrescriptionRangeRecord]:
        """All ranges ordered by code."""
