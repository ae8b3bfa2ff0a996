from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from ..domain import (
    EyeMeasurement,
    FrameType,
    LensMaterial,
    LensProductRecord,
    LensType,
    Prescription,
    QuoteFilters,
)
from .common import CamelModel, Diopter, to_iso
from .prescription_ranges import PrescriptionRangeResponse


class EyePrescriptionIn(CamelModel):
    sphere: Diopter
    cylinder: Diopter

    def to_domain(self) -> EyeMeasurement:
        return EyeMeasurement(sphere=self.sphere, cylinder=self.cylinder)

    @classmethod
    def from_domain(cls, eye: EyeMeasurement) -> "EyePrescriptionIn":
        return cls(sphere=eye.sphere, cylinder=eye.cylinder)


class PrescriptionIn(CamelModel):
    od: EyePrescriptionIn  # Ojo derecho
    oi: EyePrescriptionIn  # Ojo izquierdo

    def to_domain(self) -> Prescription:
        return Prescription(od=self.od.to_domain(), oi=self.oi.to_domain())

    @classmethod
    def from_domain(cls, prescription: Prescription) -> "PrescriptionIn":
        return cls(
            od=EyePrescriptionIn.from_domain(prescription.od),
            oi=EyePrescriptionIn.from_domain(prescription.oi),
        )


class QuoteFiltersIn(CamelModel):
    frame_type: FrameType
    material: Optional[LensMaterial] = None
    tipo: Optional[LensType] = None
    has_blue_filter: Optional[bool] = None
    is_photochromic: Optional[bool] = None
    has_anti_reflective: Optional[bool] = None
    is_polarized: Optional[bool] = None

    def to_domain(self) -> QuoteFilters:
        return QuoteFilters(**self.model_dump())

    @classmethod
    def applied(cls, filters: QuoteFilters) -> dict[str, Any]:
        """camelCase echo of the filters that were actually set."""
        return cls(**filters.constraints()).model_dump(
            by_alias=True, exclude_none=True, mode="json"
        )


class QuoteLensesRequest(CamelModel):
    prescription: PrescriptionIn
    filters: QuoteFiltersIn


class LensFeatures(CamelModel):
    has_anti_reflective: bool
    has_blue_filter: bool
    is_photochromic: bool
    has_uv_protection: bool = Field(alias="hasUVProtection")
    is_polarized: bool
    is_mirrored: bool


class LensPricing(CamelModel):
    base_price: float
    final_price: float


class LensProductResponse(CamelModel):
    """Public view of a lens product; the cost price is deliberately absent."""

    id: str
    sku: str
    name: str
    material: LensMaterial
    tipo: LensType
    frame_type: FrameType
    features: LensFeatures
    pricing: LensPricing
    delivery_days: int
    observations: Optional[str] = None
    available: bool
    prescription_range_id: str
    created_at: str
    updated_at: str

    @classmethod
    def from_record(cls, product: LensProductRecord) -> "LensProductResponse":
        return cls(**_view_fields(product))


class LensProductWithRangeResponse(LensProductResponse):
    prescription_range: Optional[PrescriptionRangeResponse] = None

    @classmethod
    def from_record(cls, product: LensProductRecord) -> "LensProductWithRangeResponse":
        prescription_range = None
        if product.prescription_range is not None:
            prescription_range = PrescriptionRangeResponse.from_record(product.prescription_range)
        return cls(**_view_fields(product), prescription_range=prescription_range)


def _view_fields(product: LensProductRecord) -> dict[str, Any]:
    return {
        "id": product.id,
        "sku": product.sku,
        "name": product.name,
        "material": product.material,
        "tipo": product.tipo,
        "frame_type": product.frame_type,
        "features": LensFeatures(
            has_anti_reflective=product.has_anti_reflective,
            has_blue_filter=product.has_blue_filter,
            is_photochromic=product.is_photochromic,
            has_uv_protection=product.has_uv_protection,
            is_polarized=product.is_polarized,
            is_mirrored=product.is_mirrored,
        ),
        "pricing": LensPricing(base_price=product.base_price, final_price=product.final_price),
        "delivery_days": product.delivery_days,
        "observations": product.observations,
        "available": product.available,
        "prescription_range_id": product.prescription_range_id,
        "created_at": to_iso(product.created_at),
        "updated_at": to_iso(product.updated_at),
    }


class LensProductsResponse(BaseModel):
    products: list[LensProductWithRangeResponse]


class PrescriptionRangeUsed(CamelModel):
    code: str
    description: str


class QuoteMeta(CamelModel):
    original_prescription: PrescriptionIn
    normalized_prescription: PrescriptionIn
    prescription_range_used: PrescriptionRangeUsed
    total_results: int
    filters_applied: dict[str, Any]


class QuoteLensesResponse(CamelModel):
    results: list[LensProductResponse]
    meta: QuoteMeta


class LensProductCreate(CamelModel):
    sku: str = Field(min_length=1)
    name: str = Field(min_length=1)
    material: LensMaterial
    tipo: LensType
    frame_type: FrameType
    has_anti_reflective: bool
    has_blue_filter: bool
    is_photochromic: bool
    has_uv_protection: bool = Field(alias="hasUVProtection")
    is_polarized: bool
    is_mirrored: bool
    cost_price: Optional[float] = Field(default=None, ge=0)
    base_price: float = Field(ge=0)
    final_price: float = Field(ge=0)
    delivery_days: int = Field(ge=0)
    observations: Optional[str] = None
    available: bool = True
    prescription_range_id: str


class LensProductUpdate(CamelModel):
    sku: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    material: Optional[LensMaterial] = None
    tipo: Optional[LensType] = None
    frame_type: Optional[FrameType] = None
    has_anti_reflective: Optional[bool] = None
    has_blue_filter: Optional[bool] = None
    is_photochromic: Optional[bool] = None
    has_uv_protection: Optional[bool] = Field(default=None, alias="hasUVProtection")
    is_polarized: Optional[bool] = None
    is_mirrored: Optional[bool] = None
    cost_price: Optional[float] = Field(default=None, ge=0)
    base_price: Optional[float] = Field(default=None, ge=0)
    final_price: Optional[float] = Field(default=None, ge=0)
    delivery_days: Optional[int] = Field(default=None, ge=0)
    observations: Optional[str] = None
    available: Optional[bool] = None
    prescription_range_id: Optional[str] = None

    def changes(self) -> dict[str, Any]:
        """Only the fields the client sent; an explicit null clears nullable ones."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field in _NULLABLE_FIELDS
        }


_NULLABLE_FIELDS = frozenset({"cost_price", "observations"})
