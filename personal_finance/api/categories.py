"""Category API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from personal_finance.api.deps import get_category_service, get_current_user
from personal_finance.models import Category, User
from personal_finance.models.enums import CategoryType
from personal_finance.schemas.category import CategoryCreate, CategoryResponse
from personal_finance.schemas.common import SumResponse
from personal_finance.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    type: CategoryType | None = Query(None),
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> list[Category]:
    return await category_service.list_categories(current_user.id, type)


@router.get("/total-current-period-sum", response_model=SumResponse)
async def get_total_current_period_sum(
    type: CategoryType = Query(...),
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> SumResponse:
    total = await category_service.total_current_period_sum(current_user.id, type)
    return SumResponse(sum=total)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> Category:
    return await category_service.create(current_user.id, data)


@router.post(
    "/create-example-categories",
    response_model=list[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_example_categories(
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> list[Category]:
    return await category_service.create_examples(current_user.id)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> Category:
    return await category_service.get(current_user.id, category_id)


@router.get("/{category_id}/added-sum", response_model=SumResponse)
async def get_added_sum(
    category_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> SumResponse:
    total = await category_service.added_sum(current_user.id, category_id, start_date, end_date)
    return SumResponse(sum=total)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> Category:
    return await category_service.update(current_user.id, category_id, data)


@router.patch("/{category_id}/limit", response_model=CategoryResponse)
async def update_limit(
    category_id: UUID,
    limit: str | None = Query(None, max_length=255),
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> Category:
    """Set or clear (no ``limit`` parameter) the category's limit."""
    return await category_service.update_limit(current_user.id, category_id, limit)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> None:
    await category_service.delete(current_user.id, category_id)
