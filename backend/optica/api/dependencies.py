from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..core.observability import EventLogger, StdlibEventLogger
from ..database import get_db
from ..repositories.sqlalchemy_lenses_repository import SQLAlchemyLensesRepository
from ..repositories.sqlalchemy_prescription_ranges_repository import (
    SQLAlchemyPrescriptionRangesRepository,
)
from ..repositories.sqlalchemy_users_repository import SQLAlchemyUsersRepository
from ..services.lenses_service import LensesService
from ..services.prescription_ranges_service import PrescriptionRangesService
from ..services.users_service import UsersService


def get_event_logger() -> EventLogger:
    return StdlibEventLogger("optica.services")


def make_lenses_service(
    db: Session = Depends(get_db), logger: EventLogger = Depends(get_event_logger)
) -> LensesService:
    return LensesService(SQLAlchemyLensesRepository(db), logger)


def make_prescription_ranges_service(
    db: Session = Depends(get_db), logger: EventLogger = Depends(get_event_logger)
) -> PrescriptionRangesService:
    return PrescriptionRangesService(SQLAlchemyPrescriptionRangesRepository(db), logger)


def make_users_service(
    request: Request,
    db: Session = Depends(get_db),
    logger: EventLogger = Depends(get_event_logger),
) -> UsersService:
    return UsersService(SQLAlchemyUsersRepository(db), logger, request.app.state.pwd_context)
