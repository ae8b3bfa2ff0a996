from .user import User
from .prescription_range import PrescriptionRange
from .lens_product import LensProduct

__all__ = [
    "User",
    "PrescriptionRange",
    "LensProduct",
]
