"""Account API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from personal_finance.api.deps import get_account_service, get_current_user
from personal_finance.models import Account, User
from personal_finance.models.enums import AccountType
from personal_finance.schemas.account import AccountCreate, AccountResponse, AccountUpdate
from personal_finance.schemas.common import SumResponse
from personal_finance.services.account import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    type: AccountType | None = Query(None, description="Only accounts of this type"),
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> list[Account]:
    """List accounts. Deleted accounts are hidden unless asked for by type."""
    return await account_service.list_accounts(current_user.id, type)


@router.get("/balance-sum", response_model=SumResponse)
async def get_balance_sum(
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> SumResponse:
    """Total balance over activated accounts."""
    return SumResponse(sum=await account_service.balance_sum(current_user.id))


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    data: AccountCreate,
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    return await account_service.create(current_user.id, data)


@router.post(
    "/create-example-accounts",
    response_model=list[AccountResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_example_accounts(
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> list[Account]:
    """Create the starter accounts the user does not have yet."""
    return await account_service.create_examples(current_user.id)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: UUID,
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    return await account_service.get(current_user.id, account_id)


@router.get("/{account_id}/income-sum", response_model=SumResponse)
async def get_income_sum(
    account_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> SumResponse:
    """Incomes and incoming transfers of the account between the dates."""
    total = await account_service.income_sum(current_user.id, account_id, start_date, end_date)
    return SumResponse(sum=total)


@router.get("/{account_id}/expense-sum", response_model=SumResponse)
async def get_expense_sum(
    account_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> SumResponse:
    """Expenses and outgoing transfers of the account between the dates."""
    total = await account_service.expense_sum(current_user.id, account_id, start_date, end_date)
    return SumResponse(sum=total)


@router.put("/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: UUID,
    data: AccountUpdate,
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    return await account_service.update(current_user.id, account_id, data)


@router.patch("/{account_id}/deactivate", response_model=AccountResponse)
async def deactivate_account(
    account_id: UUID,
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    return await account_service.deactivate(current_user.id, account_id)


@router.patch("/{account_id}/activate", response_model=AccountResponse)
async def activate_account(
    account_id: UUID,
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    return await account_service.activate(current_user.id, account_id)


@router.patch("/{account_id}/goal", response_model=AccountResponse)
async def update_goal(
    account_id: UUID,
    goal: float = Query(...),
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    return await account_service.update_goal(current_user.id, account_id, goal)


@router.patch("/{account_id}/balance", response_model=AccountResponse)
async def sync_balance(
    account_id: UUID,
    balance: float = Query(...),
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    """Set the balance, booking the difference as an income or expense."""
    return await account_service.sync_balance(current_user.id, account_id, balance)


@router.delete("/{account_id}", response_model=AccountResponse)
async def delete_account(
    account_id: UUID,
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    """Soft-delete an account with a zero balance."""
    return await account_service.delete(current_user.id, account_id)
