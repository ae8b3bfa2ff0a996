from ..core.observability import EventLogger
from ..repositories.prescription_ranges_repository import PrescriptionRangesRepository
from ..schemas.prescription_ranges import PrescriptionRangeResponse, PrescriptionRangesResponse


class PrescriptionRangesService:
    def __init__(
        self, prescription_ranges_repository: PrescriptionRangesRepository, logger: EventLogger
    ) -> None:
        self.prescription_ranges_repository = prescription_ranges_repository
        self.logger = logger

    async def find_all_ranges(self) -> PrescriptionRangesResponse:
        """Every pricing range, ordered by code."""
        self.logger.info(
            "PrescriptionRangesService: find_all_ranges started", operation="find_all_ranges"
        )
        try:
            records = await self.prescription_ranges_repository.find_all()
        except Exception as exc:
            self.logger.error(
                "PrescriptionRangesService: find_all_ranges failed",
                operation="find_all_ranges",
                error=str(exc),
            )
            raise

        self.logger.info(
            "PrescriptionRangesService: find_all_ranges completed",
            operation="find_all_ranges",
            result={"count": len(records)},
        )
        return PrescriptionRangesResponse(
            ranges=[PrescriptionRangeResponse.from_record(r) for r in records]
        )
