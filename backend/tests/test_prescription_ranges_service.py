import asyncio
import logging

from optica.core.observability import RecordingEventLogger
from optica.repositories.in_memory_lenses_repository import InMemoryLensesRepository
from optica.repositories.in_memory_prescription_ranges_repository import (
    InMemoryPrescriptionRangesRepository,
)
from optica.services.prescription_ranges_service import PrescriptionRangesService


def test_find_all_ranges_ordered_by_code():
    lenses_repo = InMemoryLensesRepository()
    for code in ("ODI-44", "42-44", "42-42"):
        lenses_repo.add_prescription_range(
            code=code,
            description=code,
            min_eye_max_sphere=4.0,
            min_eye_max_cylinder=2.0,
            max_eye_max_sphere=4.0,
            max_eye_max_cylinder=4.0,
        )
    logger = RecordingEventLogger()
    service = PrescriptionRangesService(
        InMemoryPrescriptionRangesRepository(lenses_repo.prescription_ranges), logger
    )

    result = asyncio.run(service.find_all_ranges())

    assert [r.code for r in result.ranges] == ["42-42", "42-44", "ODI-44"]
    payload = result.model_dump(by_alias=True)["ranges"][0]
    assert payload["minEyeMaxSphere"] == 4.0
    assert payload["maxEyeMaxCylinder"] == 4.0
    assert payload["createdAt"].endswith("+00:00")
    assert logger.messages(logging.INFO)[-1] == "PrescriptionRangesService: find_all_ranges completed"


def test_find_all_ranges_empty():
    service = PrescriptionRangesService(InMemoryPrescriptionRangesRepository(), RecordingEventLogger())

    assert asyncio.run(service.find_all_ranges()).ranges == []
