"""User model - owners of all finance data."""

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from personal_finance.models.base import BaseModel
from personal_finance.models.enums import FamilyStatus, Gender


class User(BaseModel):
    """Registered user.

    The email doubles as the login username and as the JWT subject.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[Gender] = mapped_column(Enum(Gender, name="gender"), nullable=False)
    family_status: Mapped[FamilyStatus] = mapped_column(
        Enum(FamilyStatus, name="family_status"), nullable=False
    )
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    education: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.email}>"
