from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ..schemas.lenses import (
    LensProductCreate,
    LensProductResponse,
    LensProductsResponse,
    LensProductUpdate,
    QuoteLensesRequest,
    QuoteLensesResponse,
)
from ..services.lenses_service import LensesService
from .dependencies import make_lenses_service

router = APIRouter(prefix="/lenses", tags=["lenses"])


@router.post("/quote", response_model=QuoteLensesResponse)
async def quote_lenses(
    payload: QuoteLensesRequest,
    service: LensesService = Depends(make_lenses_service),
):
    """Price a prescription: resolve its range and list the matching lenses."""
    return await service.quote_lenses(
        payload.prescription.to_domain(), payload.filters.to_domain()
    )


@router.post(
    "/products",
    response_model=LensProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_lens_product(
    payload: LensProductCreate,
    service: LensesService = Depends(make_lenses_service),
):
    return await service.create_lens_product(payload)


@router.get("/products", response_model=LensProductsResponse)
async def list_lens_products(service: LensesService = Depends(make_lenses_service)):
    return await service.find_all_lens_products()


@router.get("/products/{id}", response_model=LensProductResponse)
async def get_lens_product(id: UUID, service: LensesService = Depends(make_lenses_service)):
    return await service.find_lens_product_by_id(str(id))


@router.put("/products/{id}", response_model=LensProductResponse)
async def update_lens_product(
    id: UUID,
    payload: LensProductUpdate,
    service: LensesService = Depends(make_lenses_service),
):
    return await service.update_lens_product(str(id), payload)


@router.delete("/products/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lens_product(id: UUID, service: LensesService = Depends(make_lenses_service)):
    await service.delete_lens_product(str(id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
