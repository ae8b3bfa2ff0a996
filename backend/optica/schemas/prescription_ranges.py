from pydantic import BaseModel

from ..domain import PrescriptionRangeRecord
from .common import CamelModel, to_iso


class PrescriptionRangeResponse(CamelModel):
    id: str
    code: str
    description: str
    min_eye_max_sphere: float
    min_eye_max_cylinder: float
    max_eye_max_sphere: float
    max_eye_max_cylinder: float
    created_at: str
    updated_at: str

    @classmethod
    def from_record(cls, record: PrescriptionRangeRecord) -> "PrescriptionRangeResponse":
        return cls(
            id=record.id,
            code=record.code,
            description=record.description,
            min_eye_max_sphere=record.min_eye_max_sphere,
            min_eye_max_cylinder=record.min_eye_max_cylinder,
            max_eye_max_sphere=record.max_eye_max_sphere,
            max_eye_max_cylinder=record.max_eye_max_cylinder,
            created_at=to_iso(record.created_at),
            updated_at=to_iso(record.updated_at),
        )


class PrescriptionRangesResponse(BaseModel):
    ranges: list[PrescriptionRangeResponse]
