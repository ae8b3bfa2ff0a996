"""Plain value types shared by the quoting engine and its repositories.

These carry no validation metadata; the HTTP schemas validate input and
convert it into these before any service sees it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Optional


class LensMaterial(str, enum.Enum):
    ORGANICO = "organico"
    POLICARBONATO = "policarbonato"
    MINERAL = "mineral"
    ADELGAZADO = "adelgazado"


class LensType(str, enum.Enum):
    MONOFOCAL = "monofocal"
    BIFOCAL = "bifocal"
    MULTIFOCAL = "multifocal"


class FrameType(str, enum.Enum):
    CERRADO = "cerrado"
    SEMICERRADO = "semicerrado"
    AL_AIRE = "al_aire"


@dataclass(frozen=True)
class EyeMeasurement:
    sphere: float
    cylinder: float


@dataclass(frozen=True)
class Prescription:
    od: EyeMeasurement  # right eye
    oi: EyeMeasurement  # left eye


@dataclass(frozen=True)
class OrientedPrescription:
    """Unsigned magnitudes of the less and the more complex eye."""

    min_eye: EyeMeasurement
    max_eye: EyeMeasurement


@dataclass(frozen=True)
class QuoteFilters:
    frame_type: FrameType
    material: Optional[LensMaterial] = None
    tipo: Optional[LensType] = None
    has_blue_filter: Optional[bool] = None
    is_photochromic: Optional[bool] = None
    has_anti_reflective: Optional[bool] = None
    is_polarized: Optional[bool] = None

    def constraints(self) -> dict[str, Any]:
        """Product attribute -> required value, for every filter that is set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class PrescriptionRangeRecord:
    id: str
    code: str
    description: str
    min_eye_max_sphere: float
    min_eye_max_cylinder: float
    max_eye_max_sphere: float
    max_eye_max_cylinder: float
    created_at: datetime
    updated_at: datetime

    def bounds(self) -> tuple[float, float, float, float]:
        return (
            self.min_eye_max_sphere,
            self.min_eye_max_cylinder,
            self.max_eye_max_sphere,
            self.max_eye_max_cylinder,
        )

    def covers(
        self,
        min_eye_sphere: float,
        min_eye_cylinder: float,
        max_eye_sphere: float,
        max_eye_cylinder: float,
    ) -> bool:
        return (
            self.min_eye_max_sphere >= min_eye_sphere
            and self.min_eye_max_cylinder >= min_eye_cylinder
            and self.max_eye_max_sphere >= max_eye_sphere
            and self.max_eye_max_cylinder >= max_eye_cylinder
        )


@dataclass(frozen=True)
class LensProductRecord:
    id: str
    sku: str
    name: str
    material: LensMaterial
    tipo: LensType
    frame_type: FrameType
    has_anti_reflective: bool
    has_blue_filter: bool
    is_photochromic: bool
    has_uv_protection: bool
    is_polarized: bool
    is_mirrored: bool
    cost_price: Optional[float]
    base_price: float
    final_price: float
    delivery_days: int
    observations: Optional[str]
    available: bool
    prescription_range_id: str
    created_at: datetime
    updated_at: datetime
    prescription_range: Optional[PrescriptionRangeRecord] = None

    def matches(self, prescription_range_id: str, filters: QuoteFilters) -> bool:
        if self.prescription_range_id != prescription_range_id or not self.available:
            return False
        return all(getattr(self, name) == value for name, value in filters.constraints().items())


@dataclass(frozen=True)
class UserRecord:
    id: str
    name: str
    email: str
    password: str  # bcrypt hash
    created_at: datetime
    updated_at: datetime
