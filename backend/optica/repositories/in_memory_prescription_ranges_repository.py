from typing import Optional

from ..domain import PrescriptionRangeRecord
from .prescription_ranges_repository import PrescriptionRangesRepository


class InMemoryPrescriptionRangesRepository(PrescriptionRangesRepository):
    def __init__(self, ranges: Optional[list[PrescriptionRangeRecord]] = None) -> None:
        # Sharing the list with an InMemoryLensesRepository keeps both views in sync
        self.prescription_ranges = ranges if ranges is not None else []

    async def find_all(self) -> list[PrescriptionRangeRecord]:
        return sorted(self.prescription_ranges, key=lambda r: r.code)
