"""Enumerations stored in model columns and accepted by the API."""

import enum


class Gender(enum.StrEnum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class FamilyStatus(enum.StrEnum):
    SINGLE = "SINGLE"
    MARRIED = "MARRIED"
    COHABITATION = "COHABITATION"
    WIDOW_OR_WIDOWER = "WIDOW_OR_WIDOWER"
    OTHER = "OTHER"


class AccountType(enum.StrEnum):
    ACTIVATED = "ACTIVATED"
    DEACTIVATED = "DEACTIVATED"
    DELETED = "DELETED"


class CategoryType(enum.StrEnum):
    INCOME = "INCOME"
    EXPENSES = "EXPENSES"


class EntityType(enum.StrEnum):
    """Kind of entity at either end of a transaction."""

    CATEGORY = "CATEGORY"
    ACCOUNT = "ACCOUNT"


class Recurring(enum.StrEnum):
    NO = "NO"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class TransactionType(enum.StrEnum):
    """Kind of a transaction, derived from its from/to entity types."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


class UserSettingKey(enum.StrEnum):
    HAS_LOGGED_IN_BEFORE = "HAS_LOGGED_IN_BEFORE"
