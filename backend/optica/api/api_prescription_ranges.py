from fastapi import APIRouter, Depends

from ..schemas.prescription_ranges import PrescriptionRangesResponse
from ..services.prescription_ranges_service import PrescriptionRangesService
from .dependencies import make_prescription_ranges_service

router = APIRouter(tags=["prescription-ranges"])


@router.get("/prescription-ranges", response_model=PrescriptionRangesResponse)
async def list_prescription_ranges(
    service: PrescriptionRangesService = Depends(make_prescription_ranges_service),
):
    """Every pricing range, ordered by code."""
    return await service.find_all_ranges()
