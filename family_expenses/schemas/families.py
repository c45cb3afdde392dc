from pydantic import EmailStr, Field, field_serializer

from family_expenses.schemas.categories import CategoryResponse
from family_expenses.schemas.common import CamelModel, display_or_unknown
from family_expenses.schemas.expenses import ExpenseResponse


class FamilyMemberResponse(CamelModel):
    id: str
    name: str | None = None
    email: str | None = None

    @field_serializer("name", "email")
    def _display(self, value: str | None) -> str:
        return display_or_unknown(value)


class FamilyMemberListResponse(CamelModel):
    items: list[FamilyMemberResponse]


class FamilyMemberUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None


class FamilyResponse(CamelModel):
    id: str
    members: list[FamilyMemberResponse]
    expenses: list[ExpenseResponse]
    categories: list[CategoryResponse]
    monthly_limit: float | None
    warning_percentage: int | None
