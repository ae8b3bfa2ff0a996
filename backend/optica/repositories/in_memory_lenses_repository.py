from dataclasses import replace
from typing import Any, Mapping, Optional

from ..domain import LensProductRecord, PrescriptionRangeRecord, QuoteFilters
from ..models.base import new_id, utcnow
from .lenses_repository import LensesRepository


class InMemoryLensesRepository(LensesRepository):
    def __init__(self) -> None:
        self.prescription_ranges: list[PrescriptionRangeRecord] = []
        self.lens_products: list[LensProductRecord] = []

    async def find_prescription_range(
        self,
        min_eye_sphere: float,
        min_eye_cylinder: float,
        max_eye_sphere: float,
        max_eye_cylinder: float,
    ) -> Optional[PrescriptionRangeRecord]:
        covering = [
            r
            for r in self.prescription_ranges
            if r.covers(min_eye_sphere, min_eye_cylinder, max_eye_sphere, max_eye_cylinder)
        ]
        if not covering:
            return None
        # sorted() is stable, so identical bound tuples keep insertion order
        return sorted(covering, key=PrescriptionRangeRecord.bounds)[0]

    async def find_products_by_range(
        self, prescription_range_id: str, filters: QuoteFilters
    ) -> list[LensProductRecord]:
        matching = [p for p in self.lens_products if p.matches(prescription_range_id, filters)]
        return sorted(matching, key=lambda p: p.final_price)

    async def prescription_range_exists(self, prescription_range_id: str) -> bool:
        return any(r.id == prescription_range_id for r in self.prescription_ranges)

    def add_prescription_range(self, **values: Any) -> PrescriptionRangeRecord:
        now = utcnow()
        record = PrescriptionRangeRecord(id=new_id(), created_at=now, updated_at=now, **values)
        self.prescription_ranges.append(record)
        return record

    def add_lens_product(self, **values: Any) -> LensProductRecord:
        now = utcnow()
        values.setdefault("cost_price", None)
        values.setdefault("observations", None)
        values.setdefault("available", True)
        record = LensProductRecord(id=new_id(), created_at=now, updated_at=now, **values)
        self.lens_products.append(record)
        return record

    async def create(self, values: Mapping[str, Any]) -> LensProductRecord:
        return self.add_lens_product(**dict(values))

    async def find_by_id(self, product_id: str) -> Optional[LensProductRecord]:
        return next((p for p in self.lens_products if p.id == product_id), None)

    async def find_by_sku(self, sku: str) -> Optional[LensProductRecord]:
        return next((p for p in self.lens_products if p.sku == sku), None)

    async def find_all(self, include_range: bool = False) -> list[LensProductRecord]:
        products = sorted(reversed(self.lens_products), key=lambda p: p.created_at, reverse=True)
        if not include_range:
            return products
        ranges = {r.id: r for r in self.prescription_ranges}
        return [replace(p, prescription_range=ranges.get(p.prescription_range_id)) for p in products]

    async def update(self, product_id: str, values: Mapping[str, Any]) -> LensProductRecord:
        index = self._index_of(product_id)
        updated = replace(self.lens_products[index], **dict(values), updated_at=utcnow())
        self.lens_products[index] = updated
        return updated

    async def delete(self, product_id: str) -> None:
        del self.lens_products[self._index_of(product_id)]

    def _index_of(self, product_id: str) -> int:
        for index, product in enumerate(self.lens_products):
            if product.id == product_id:
                return index
        raise LookupError(f"Product with id {product_id} not found")
