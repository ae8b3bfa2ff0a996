from __future__ import annotations

from ..core.observability import EventLogger
from ..domain import Prescription, QuoteFilters
from ..repositories.lenses_repository import LensesRepository
from ..schemas.lenses import (
    LensProductCreate,
    LensProductResponse,
    LensProductsResponse,
    LensProductUpdate,
    LensProductWithRangeResponse,
    PrescriptionIn,
    PrescriptionRangeUsed,
    QuoteFiltersIn,
    QuoteLensesResponse,
    QuoteMeta,
)
from ..utils.errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    PrescriptionRangeNotFoundError,
)
from .lens_quote import normalize_prescription, sort_eyes_by_complexity


class LensesService:
    """Lens quoting plus the lens product catalog."""

    def __init__(self, lenses_repository: LensesRepository, logger: EventLogger) -> None:
        self.lenses_repository = lenses_repository
        self.logger = logger

    async def quote_lenses(
        self, prescription: Prescription, filters: QuoteFilters
    ) -> QuoteLensesResponse:
        """Resolve the pricing range for ``prescription`` and list matching products.

        Raises ``PrescriptionRangeNotFoundError`` carrying the normalized
        prescription when no range covers it.
        """
        self.logger.info(
            "LensesService: quote_lenses started",
            operation="quote_lenses",
            input={"frame_type": filters.frame_type.value},
        )
        try:
            normalized = normalize_prescription(prescription)
            oriented = sort_eyes_by_complexity(normalized)

            prescription_range = await self.lenses_repository.find_prescription_range(
                oriented.min_eye.sphere,
                oriented.min_eye.cylinder,
                oriented.max_eye.sphere,
                oriented.max_eye.cylinder,
            )
            if prescription_range is None:
                raise PrescriptionRangeNotFoundError(
                    PrescriptionIn.from_domain(normalized).model_dump()
                )

            products = await self.lenses_repository.find_products_by_range(
                prescription_range.id, filters
            )
            results = [LensProductResponse.from_record(p) for p in products]

            response = QuoteLensesResponse(
                results=results,
                meta=QuoteMeta(
                    original_prescription=PrescriptionIn.from_domain(prescription),
                    normalized_prescription=PrescriptionIn.from_domain(normalized),
                    prescription_range_used=PrescriptionRangeUsed(
                        code=prescription_range.code,
                        description=prescription_range.description,
                    ),
                    total_results=len(results),
                    filters_applied=QuoteFiltersIn.applied(filters),
                ),
            )
        except Exception as exc:
            self.logger.error(
                "LensesService: quote_lenses failed", operation="quote_lenses", error=str(exc)
            )
            raise

        self.logger.info(
            "LensesService: quote_lenses completed",
            operation="quote_lenses",
            result={"range": prescription_range.code, "total_results": len(results)},
        )
        return response

    async def create_lens_product(self, payload: LensProductCreate) -> LensProductResponse:
        self.logger.info(
            "LensesService: create_lens_product started",
            operation="create_lens_product",
            input={"sku": payload.sku, "name": payload.name},
        )
        try:
            existing = await self.lenses_repository.find_by_sku(payload.sku)
            self.logger.debug(
                "LensesService: create_lens_product existing sku check",
                sku=payload.sku,
                existing_product=existing.id if existing else None,
            )
            if existing is not None:
                raise ConflictError("SKU already exists", {"sku": payload.sku, "field": "sku"})
            await self._ensure_range_exists(payload.prescription_range_id)

            record = await self.lenses_repository.create(payload.model_dump())
        except Exception as exc:
            self.logger.error(
                "LensesService: create_lens_product failed",
                operation="create_lens_product",
                error=str(exc),
            )
            raise

        self.logger.info(
            "LensesService: create_lens_product completed",
            operation="create_lens_product",
            result={"product_id": record.id, "sku": record.sku},
        )
        return LensProductResponse.from_record(record)

    async def find_lens_product_by_id(self, product_id: str) -> LensProductResponse:
        self.logger.info(
            "LensesService: find_lens_product_by_id started",
            operation="find_lens_product_by_id",
            input={"id": product_id},
        )
        record = await self.lenses_repository.find_by_id(product_id)
        if record is None:
            self.logger.error(
                "LensesService: find_lens_product_by_id failed",
                operation="find_lens_product_by_id",
                error="not found",
            )
            raise NotFoundError("Lens product", product_id)

        self.logger.info(
            "LensesService: find_lens_product_by_id completed",
            operation="find_lens_product_by_id",
            result={"product_id": record.id, "sku": record.sku},
        )
        return LensProductResponse.from_record(record)

    async def find_all_lens_products(self) -> LensProductsResponse:
        self.logger.info(
            "LensesService: find_all_lens_products started", operation="find_all_lens_products"
        )
        records = await self.lenses_repository.find_all(include_range=True)
        self.logger.info(
            "LensesService: find_all_lens_products completed",
            operation="find_all_lens_products",
            result={"count": len(records)},
        )
        return LensProductsResponse(
            products=[LensProductWithRangeResponse.from_record(r) for r in records]
        )

    async def update_lens_product(
        self, product_id: str, payload: LensProductUpdate
    ) -> LensProductResponse:
        changes = payload.changes()
        self.logger.info(
            "LensesService: update_lens_product started",
            operation="update_lens_product",
            input={"id": product_id, "fields": sorted(changes)},
        )
        try:
            if await self.lenses_repository.find_by_id(product_id) is None:
                raise NotFoundError("Lens product", product_id)

            if "sku" in changes:
                owner = await self.lenses_repository.find_by_sku(changes["sku"])
                if owner is not None and owner.id != product_id:
                    raise ConflictError(
                        "SKU already taken", {"sku": changes["sku"], "field": "sku"}
                    )
            if "prescription_range_id" in changes:
                await self._ensure_range_exists(changes["prescription_range_id"])

            record = await self.lenses_repository.update(product_id, changes)
        except Exception as exc:
            self.logger.error(
                "LensesService: update_lens_product failed",
                operation="update_lens_product",
                error=str(exc),
            )
            raise

        self.logger.info(
            "LensesService: update_lens_product completed",
            operation="update_lens_product",
            result={"product_id": record.id, "sku": record.sku},
        )
        return LensProductResponse.from_record(record)

    async def delete_lens_product(self, product_id: str) -> None:
        self.logger.info(
            "LensesService: delete_lens_product started",
            operation="delete_lens_product",
            input={"id": product_id},
        )
        try:
            if await self.lenses_repository.find_by_id(product_id) is None:
                raise NotFoundError("Lens product", product_id)
            await self.lenses_repository.delete(product_id)
        except Exception as exc:
            self.logger.error(
                "LensesService: delete_lens_product failed",
                operation="delete_lens_product",
                error=str(exc),
            )
            raise

        self.logger.info(
            "LensesService: delete_lens_product completed",
            operation="delete_lens_product",
            result={"product_id": product_id},
        )

    async def _ensure_range_exists(self, prescription_range_id: str) -> None:
        if not await self.lenses_repository.prescription_range_exists(prescription_range_id):
            raise BadRequestError(
                "Prescription range not found",
                {"prescriptionRangeId": prescription_range_id, "field": "prescriptionRangeId"},
            )
