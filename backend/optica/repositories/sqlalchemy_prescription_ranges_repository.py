from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ..domain import PrescriptionRangeRecord
from ..models import PrescriptionRange
from .prescription_ranges_repository import PrescriptionRangesRepository


def to_range_record(row: PrescriptionRange) -> PrescriptionRangeRecord:
    return PrescriptionRangeRecord(
        id=row.id,
        code=row.code,
        description=row.description,
        min_eye_max_sphere=row.min_eye_max_sphere,
        min_eye_max_cylinder=row.min_eye_max_cylinder,
        max_eye_max_sphere=row.max_eye_max_sphere,
        max_eye_max_cylinder=row.max_eye_max_cylinder,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyPrescriptionRangesRepository(PrescriptionRangesRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    async def find_all(self) -> list[PrescriptionRangeRecord]:
        return await run_in_threadpool(self._find_all)

    def _find_all(self) -> list[PrescriptionRangeRecord]:
        rows = self.db.query(PrescriptionRange).order_by(PrescriptionRange.code.asc()).all()
        return [to_range_record(r) for r in rows]
