# API Routers
from personal_finance.api.router import api_router

__all__ = ["api_router"]
