from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..domain import FrameType, LensMaterial, LensType
from .base import BaseModel
from .types import LowercaseEnum


class LensProduct(BaseModel):
    __tablename__ = "lens_products"

    sku        = Column(String, unique=True, index=True, nullable=False)
    name       = Column(String, nullable=False)
    material   = Column(LowercaseEnum(LensMaterial, name="lensmaterial"), nullable=False)
    tipo       = Column(LowercaseEnum(LensType, name="lenstype"), nullable=False)
    frame_type = Column(LowercaseEnum(FrameType, name="frametype"), nullable=False, index=True)

    has_anti_reflective = Column(Boolean, nullable=False, default=False)
    has_blue_filter     = Column(Boolean, nullable=False, default=False)
    is_photochromic     = Column(Boolean, nullable=False, default=False)
    has_uv_protection   = Column(Boolean, nullable=False, default=False)
    is_polarized        = Column(Boolean, nullable=False, default=False)
    is_mirrored         = Column(Boolean, nullable=False, default=False)

    # Internal purchase cost; never leaves the service layer
    cost_price    = Column(Float, nullable=True)
    base_price    = Column(Float, nullable=False)
    final_price   = Column(Float, nullable=False, index=True)
    delivery_days = Column(Integer, nullable=False)
    observations  = Column(String, nullable=True)
    available     = Column(Boolean, nullable=False, default=True)

    prescription_range_id = Column(
        String(36), ForeignKey("prescription_ranges.id"), nullable=False, index=True
    )
    prescription_range = relationship("PrescriptionRange", back_populates="products")
