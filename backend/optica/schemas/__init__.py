from .common import CamelModel, to_iso
from .health import HealthResponse
from .prescription_ranges import PrescriptionRangeResponse, PrescriptionRangesResponse
from .lenses import (
    EyePrescriptionIn,
    PrescriptionIn,
    QuoteFiltersIn,
    QuoteLensesRequest,
    QuoteLensesResponse,
    QuoteMeta,
    PrescriptionRangeUsed,
    LensFeatures,
    LensPricing,
    LensProductResponse,
    LensProductWithRangeResponse,
    LensProductsResponse,
    LensProductCreate,
    LensProductUpdate,
)
from .users import UserCreate, UserUpdate, UserResponse, Pagination, PaginatedUsers, UsersResponse
