from .errors import (
    AppError,
    BadRequestError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    PrescriptionRangeNotFoundError,
    error_envelope,
)
from .auth import get_password_hash, make_pwd_context, normalize_email, verify_password
