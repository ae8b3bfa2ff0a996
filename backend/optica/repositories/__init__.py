from .lenses_repository import LensesRepository
from .prescription_ranges_repository import PrescriptionRangesRepository
from .users_repository import UsersRepository
from .in_memory_lenses_repository import InMemoryLensesRepository
from .in_memory_prescription_ranges_repository import InMemoryPrescriptionRangesRepository
from .in_memory_users_repository import InMemoryUsersRepository
from .sqlalchemy_lenses_repository import SQLAlchemyLensesRepository
from .sqlalchemy_prescription_ranges_repository import SQLAlchemyPrescriptionRangesRepository
from .sqlalchemy_users_repository import SQLAlchemyUsersRepository
