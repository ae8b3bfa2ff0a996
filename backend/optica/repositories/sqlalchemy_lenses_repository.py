from typing import Any, Mapping, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..domain import LensProductRecord, PrescriptionRangeRecord, QuoteFilters
from ..models import LensProduct, PrescriptionRange
from .lenses_repository import LensesRepository
from .sqlalchemy_prescription_ranges_repository import to_range_record


def to_product_record(row: LensProduct, include_range: bool = False) -> LensProductRecord:
    prescription_range = None
    if include_range and row.prescription_range is not None:
        prescription_range = to_range_record(row.prescription_range)
    return LensProductRecord(
        id=row.id,
        sku=row.sku,
        name=row.name,
        material=row.material,
        tipo=row.tipo,
        frame_type=row.frame_type,
        has_anti_reflective=row.has_anti_reflective,
        has_blue_filter=row.has_blue_filter,
        is_photochromic=row.is_photochromic,
        has_uv_protection=row.has_uv_protection,
        is_polarized=row.is_polarized,
        is_mirrored=row.is_mirrored,
        cost_price=row.cost_price,
        base_price=row.base_price,
        final_price=row.final_price,
        delivery_days=row.delivery_days,
        observations=row.observations,
        available=row.available,
        prescription_range_id=row.prescription_range_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        prescription_range=prescription_range,
    )


class SQLAlchemyLensesRepository(LensesRepository):
    """Lens catalog backed by a SQLAlchemy session.

    Each public coroutine runs its blocking query in the threadpool.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    async def find_prescription_range(
        self,
        min_eye_sphere: float,
        min_eye_cylinder: float,
        max_eye_sphere: float,
        max_eye_cylinder: float,
    ) -> Optional[PrescriptionRangeRecord]:
        return await run_in_threadpool(
            self._find_prescription_range,
            min_eye_sphere,
            min_eye_cylinder,
            max_eye_sphere,
            max_eye_cylinder,
        )

    def _find_prescription_range(
        self,
        min_eye_sphere: float,
        min_eye_cylinder: float,
        max_eye_sphere: float,
        max_eye_cylinder: float,
    ) -> Optional[PrescriptionRangeRecord]:
        row = (
            self.db.query(PrescriptionRange)
            .filter(
                PrescriptionRange.min_eye_max_sphere >= min_eye_sphere,
                PrescriptionRange.min_eye_max_cylinder >= min_eye_cylinder,
                PrescriptionRange.max_eye_max_sphere >= max_eye_sphere,
                PrescriptionRange.max_eye_max_cylinder >= max_eye_cylinder,
            )
            .order_by(
                PrescriptionRange.min_eye_max_sphere.asc(),
                PrescriptionRange.min_eye_max_cylinder.asc(),
                PrescriptionRange.max_eye_max_sphere.asc(),
                PrescriptionRange.max_eye_max_cylinder.asc(),
            )
            .first()
        )
        return to_range_record(row) if row is not None else None

    async def find_products_by_range(
        self, prescription_range_id: str, filters: QuoteFilters
    ) -> list[LensProductRecord]:
        return await run_in_threadpool(self._find_products_by_range, prescription_range_id, filters)

    def _find_products_by_range(
        self, prescription_range_id: str, filters: QuoteFilters
    ) -> list[LensProductRecord]:
        rows = (
            self.db.query(LensProduct)
            .filter(
                LensProduct.prescription_range_id == prescription_range_id,
                LensProduct.available.is_(True),
            )
            .filter_by(**filters.constraints())
            .order_by(LensProduct.final_price.asc(), LensProduct.created_at.asc())
            .all()
        )
        return [to_product_record(r) for r in rows]

    async def prescription_range_exists(self, prescription_range_id: str) -> bool:
        return await run_in_threadpool(self._prescription_range_exists, prescription_range_id)

    def _prescription_range_exists(self, prescription_range_id: str) -> bool:
        return self.db.get(PrescriptionRange, prescription_range_id) is not None

    async def create(self, values: Mapping[str, Any]) -> LensProductRecord:
        return await run_in_threadpool(self._create, dict(values))

    def _create(self, values: dict[str, Any]) -> LensProductRecord:
        db_product = LensProduct(**values)
        self.db.add(db_product)
        self._commit()
        self.db.refresh(db_product)
        return to_product_record(db_product)

    async def find_by_id(self, product_id: str) -> Optional[LensProductRecord]:
        return await run_in_threadpool(self._find_one, LensProduct.id == product_id)

    async def find_by_sku(self, sku: str) -> Optional[LensProductRecord]:
        return await run_in_threadpool(self._find_one, LensProduct.sku == sku)

    def _find_one(self, criterion) -> Optional[LensProductRecord]:
        row = self.db.query(LensProduct).filter(criterion).first()
        return to_product_record(row) if row is not None else None

    async def find_all(self, include_range: bool = False) -> list[LensProductRecord]:
        return await run_in_threadpool(self._find_all, include_range)

    def _find_all(self, include_range: bool) -> list[LensProductRecord]:
        query = self.db.query(LensProduct)
        if include_range:
            query = query.options(joinedload(LensProduct.prescription_range))
        rows = query.order_by(LensProduct.created_at.desc()).all()
        return [to_product_record(r, include_range=include_range) for r in rows]

    async def update(self, product_id: str, values: Mapping[str, Any]) -> LensProductRecord:
        return await run_in_threadpool(self._update, product_id, dict(values))

    def _update(self, product_id: str, values: dict[str, Any]) -> LensProductRecord:
        db_product = self.db.get(LensProduct, product_id)
        if db_product is None:
            raise LookupError(f"Product with id {product_id} not found")
        for field, value in values.items():
            setattr(db_product, field, value)
        self._commit()
        self.db.refresh(db_product)
        return to_product_record(db_product)

    async def delete(self, product_id: str) -> None:
        await run_in_threadpool(self._delete, product_id)

    def _delete(self, product_id: str) -> None:
        db_product = self.db.get(LensProduct, product_id)
        if db_product is None:
            raise LookupError(f"Product with id {product_id} not found")
        self.db.delete(db_product)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
