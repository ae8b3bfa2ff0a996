from sqlalchemy import Column, Float, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class PrescriptionRange(BaseModel):
    """A pricing tier: one bound for the less complex eye, one for the other.

    All four bounds apply to absolute values, so they are never negative.
    """

    __tablename__ = "prescription_ranges"

    code                 = Column(String, unique=True, index=True, nullable=False)
    description          = Column(String, nullable=False)
    min_eye_max_sphere   = Column(Float, nullable=False)
    min_eye_max_cylinder = Column(Float, nullable=False)
    max_eye_max_sphere   = Column(Float, nullable=False)
    max_eye_max_cylinder = Column(Float, nullable=False)

    products = relationship("LensProduct", back_populates="prescription_range")
