"""Initial schema with users, accounts, categories and transactions.

Revision ID: 0001
Revises:
Create Date: 2026-10-18 10:00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_ENUMS = {
    "gender": ("MALE", "FEMALE"),
    "family_status": ("SINGLE", "MARRIED", "COHABITATION", "WIDOW_OR_WIDOWER", "OTHER"),
    "account_type": ("ACTIVATED", "DEACTIVATED", "DELETED"),
    "category_type": ("INCOME", "EXPENSES"),
    "entity_type": ("CATEGORY", "ACCOUNT"),
    "recurring": ("NO", "DAILY", "WEEKLY", "MONTHLY", "YEARLY"),
    "user_setting_key": ("HAS_LOGGED_IN_BEFORE",),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*_ENUMS[name], name=name, create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    ]


def _owner_column() -> sa.Column:
    return sa.Column(
        "owner_id",
        sa.UUID(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    for name in _ENUMS:
        _enum(name).create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("gender", _enum("gender"), nullable=False),
        sa.Column("family_status", _enum("family_status"), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("education", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "accounts",
        sa.Column("id", sa.UUID(), primary_key=True),
        *_timestamps(),
        _owner_column(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("balance", sa.Float(), nullable=False, server_default="0"),
        sa.Column("goal", sa.Float(), nullable=True),
        sa.Column("type", _enum("account_type"), nullable=False),
    )
    op.create_index("ix_accounts_owner_id", "accounts", ["owner_id"])

    op.create_table(
        "categories",
        sa.Column("id", sa.UUID(), primary_key=True),
        *_timestamps(),
        _owner_column(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", _enum("category_type"), nullable=False),
        sa.Column("current_period_sum", sa.Float(), nullable=False, server_default="0"),
        sa.Column("spending_limit", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_categories_owner_id", "categories", ["owner_id"])

    op.create_table(
        "reporting_periods",
        sa.Column("id", sa.UUID(), primary_key=True),
        *_timestamps(),
        _owner_column(),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("end_sum", sa.Float(), nullable=False),
    )
    op.create_index("ix_reporting_periods_owner_id", "reporting_periods", ["owner_id"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.UUID(), primary_key=True),
        *_timestamps(),
        _owner_column(),
        sa.Column("date_of_completion", sa.Date(), nullable=False),
        sa.Column("from_id", sa.UUID(), nullable=False),
        sa.Column("from_type", _enum("entity_type"), nullable=False),
        sa.Column("to_id", sa.UUID(), nullable=False),
        sa.Column("to_type", _enum("entity_type"), nullable=False),
        sa.Column("sum", sa.Float(), nullable=False),
        sa.Column("recurring", _enum("recurring"), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column(
            "should_be_automatically_executed",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
    )
    op.create_index("ix_transactions_owner_id", "transactions", ["owner_id"])
    op.create_index(
        "ix_transactions_date_of_completion", "transactions", ["date_of_completion"]
    )

    op.create_table(
        "user_settings",
        sa.Column("id", sa.UUID(), primary_key=True),
        *_timestamps(),
        _owner_column(),
        sa.Column("key", _enum("user_setting_key"), nullable=False),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("owner_id", "key", name="uq_user_settings_owner_key"),
    )
    op.create_index("ix_user_settings_owner_id", "user_settings", ["owner_id"])


def downgrade() -> None:
    for table in (
        "user_settings",
        "transactions",
        "reporting_periods",
        "categories",
        "accounts",
        "users",
    ):
        op.drop_table(table)

    for name in reversed(list(_ENUMS)):
        _enum(name).drop(op.get_bind(), checkfirst=True)
