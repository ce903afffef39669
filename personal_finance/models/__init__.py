# Personal Finance Models
from personal_finance.models.account import Account
from personal_finance.models.base import BaseModel
from personal_finance.models.category import Category
from personal_finance.models.reporting_period import ReportingPeriod
from personal_finance.models.transaction import Transaction
from personal_finance.models.user import User
from personal_finance.models.user_setting import UserSetting

__all__ = [
    "Account",
    "BaseModel",
    "Category",
    "ReportingPeriod",
    "Transaction",
    "User",
    "UserSetting",
]
