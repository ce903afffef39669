"""Transaction API endpoints.

The ``type`` filter accepted by listing and sum endpoints is one of
``income``, ``expense`` or ``transfer`` (case-insensitive).
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from personal_finance.api.deps import get_current_user, get_transaction_service
from personal_finance.models import Transaction, User
from personal_finance.models.enums import EntityType
from personal_finance.schemas.common import Page, SumResponse
from personal_finance.schemas.transaction import TransactionCreate, TransactionResponse
from personal_finance.services.transaction import TransactionService, parse_transaction_type

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=Page[TransactionResponse])
async def list_transactions(
    type: str | None = Query(None, description="income, expense or transfer"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> Page[TransactionResponse]:
    kind = parse_transaction_type(type)
    transactions, total = await transaction_service.list_transactions(
        current_user.id, page=page, page_size=page_size, kind=kind
    )
    return Page[TransactionResponse].build(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/total-sum", response_model=SumResponse)
async def get_total_sum(
    type: str | None = Query(None),
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> SumResponse:
    kind = parse_transaction_type(type)
    return SumResponse(sum=await transaction_service.total_sum(current_user.id, kind))


@router.get("/between-dates", response_model=list[TransactionResponse])
async def list_between_dates(
    start_date: date = Query(...),
    end_date: date = Query(...),
    type: str | None = Query(None),
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> list[Transaction]:
    kind = parse_transaction_type(type)
    return await transaction_service.list_between_dates(
        current_user.id, start_date, end_date, kind
    )


@router.get("/total-sum-between-dates", response_model=SumResponse)
async def get_total_sum_between_dates(
    start_date: date = Query(...),
    end_date: date = Query(...),
    type: str | None = Query(None),
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> SumResponse:
    kind = parse_transaction_type(type)
    total = await transaction_service.total_sum_between_dates(
        current_user.id, start_date, end_date, kind
    )
    return SumResponse(sum=total)


@router.get("/by-from-data", response_model=list[TransactionResponse])
async def list_by_from_data(
    from_id: UUID = Query(...),
    from_type: EntityType = Query(...),
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> list[Transaction]:
    return await transaction_service.list_by_from(current_user.id, from_id, from_type)


@router.get("/by-to-data", response_model=list[TransactionResponse])
async def list_by_to_data(
    to_id: UUID = Query(...),
    to_type: EntityType = Query(...),
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> list[Transaction]:
    return await transaction_service.list_by_to(current_user.id, to_id, to_type)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> Transaction:
    return await transaction_service.get(current_user.id, transaction_id)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> Transaction:
    """Record a transaction and apply it to the affected balances."""
    return await transaction_service.create(current_user.id, data)


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: UUID,
    data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> Transaction:
    return await transaction_service.update(current_user.id, transaction_id, data)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> None:
    """Delete a transaction and reverse its effect on balances."""
    await transaction_service.delete(current_user.id, transaction_id)
