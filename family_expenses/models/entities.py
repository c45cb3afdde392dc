import uuid
from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import (
    Date,
    DateTime,
    Enum as SqlEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from family_expenses.models.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InvitationStatusEnum(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class UserProfile(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    family_id: Mapped[str | None] = mapped_column(ForeignKey("families.id"), index=True)
    monthly_limit: Mapped[float | None] = mapped_column(Float)
    warning_percentage: Mapped[int | None] = mapped_column(Integer)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}


class Family(Base):
    __tablename__ = "families"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    monthly_limit: Mapped[float | None] = mapped_column(Float)
    warning_percentage: Mapped[int | None] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}


class FamilyMember(Base):
    __tablename__ = "family_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    family_id: Mapped[str] = mapped_column(ForeignKey("families.id"), nullable=False, index=True)
    # One family per user.
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    family_id: Mapped[str] = mapped_column(ForeignKey("families.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(String(32), nullable=False)

    __table_args__ = (Index("ix_categories_family_user", "family_id", "user_id"),)


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    family_id: Mapped[str] = mapped_column(ForeignKey("families.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    user_name: Mapped[str | None] = mapped_column(String(255))
    # Not a foreign key: a moved expense may keep pointing at a category that
    # stayed behind in its previous family.
    category_id: Mapped[str | None] = mapped_column(String(32))
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="EUR")
    spent_on: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    __table_args__ = (Index("ix_expenses_family_user", "family_id", "user_id"),)


invitation_status_sql_enum = SqlEnum(
    InvitationStatusEnum,
    name="invitationstatusenum",
    values_callable=lambda enum_cls: [item.value for item in enum_cls],
)


class Invitation(Base):
    __tablename__ = "invitations"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    from_user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    from_user_name: Mapped[str | None] = mapped_column(String(255))
    to_user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    to_user_name: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[InvitationStatusEnum] = mapped_column(
        invitation_status_sql_enum, nullable=False, default=InvitationStatusEnum.pending
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}
