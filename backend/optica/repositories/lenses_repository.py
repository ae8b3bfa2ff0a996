"""
Port for lens catalog and prescription-range lookups used by LensesService.

Two adapters implement it: ``SQLAlchemyLensesRepository`` (relational store)
and ``InMemoryLensesRepository`` (tests, demos). The service depends on this
interface only.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ..domain import LensProductRecord, PrescriptionRangeRecord, QuoteFilters


class LensesRepository(ABC):
    @abstractmethod
    async def find_prescription_range(
        self,
        min_eye_sphere: float,
        min_eye_cylinder: float,
        max_eye_sphere: float,
        max_eye_cylinder: float,
    ) -> Optional[PrescriptionRangeRecord]:
        """Tightest range whose four bounds are all >= the given magnitudes.

        Covering ranges are ordered by (min-eye sphere bound, min-eye cylinder
        bound, max-eye sphere bound, max-eye cylinder bound) ascending and the
        first one wins. ``None`` when nothing covers the values.
        """

    @abstractmethod
    async def find_products_by_range(
        self, prescription_range_id: str, filters: QuoteFilters
    ) -> list[LensProductRecord]:
        """Available products of the range matching every set filter, cheapest first."""

    @abstractmethod
    async def prescription_range_exists(self, prescription_range_id: str) -> bool: ...

    @abstractmethod
    async def create(self, values: Mapping[str, Any]) -> LensProductRecord: ...

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Optional[LensProductRecord]: ...

    @abstractmethod
    async def find_by_sku(self, sku: str) -> Optional[LensProductRecord]: ...

    @abstractmethod
    async def find_all(self, include_range: bool = False) -> list[LensProductRecord]:
        """Every product, newest first; ``include_range`` attaches its range."""

    @abstractmethod
    async def update(self, product_id: str, values: Mapping[str, Any]) -> LensProductRecord: ...

    @abstractmethod
    async def delete(self, product_id: str) -> None: ...
