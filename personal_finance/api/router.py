"""Personal Finance API Router - aggregates all API routes."""

from fastapi import APIRouter

from personal_finance.api import (
    accounts,
    categories,
    profile,
    reporting_periods,
    transactions,
    users,
)

# Main API router - all routes will be prefixed with /api
api_router = APIRouter(prefix="/api")

api_router.include_router(users.router)
api_router.include_router(profile.router)
api_router.include_router(accounts.router)
api_router.include_router(categories.router)
api_router.include_router(reporting_periods.router)
api_router.include_router(transactions.router)
