from datetime import date

from pydantic import Field, field_serializer

from family_expenses.schemas.common import CamelModel, display_or_unknown


class ExpenseCreate(CamelModel):
    amount: float = Field(gt=0)
    category_id: str | None = None
    spent_on: date = Field(alias="date")
    currency: str | None = Field(default=None, min_length=3, max_length=8)


class ExpenseUpdate(CamelModel):
    amount: float | None = Field(default=None, gt=0)
    category_id: str | None = None
    spent_on: date | None = Field(default=None, alias="date")
    currency: str | None = Field(default=None, min_length=3, max_length=8)


class ExpenseResponse(CamelModel):
    id: str
    amount: float
    category_id: str | None
    spent_on: date = Field(alias="date")
    currency: str
    user_id: str
    user_name: str | None = None

    @field_serializer("user_name")
    def _display(self, value: str | None) -> str:
        return display_or_unknown(value)


class ExpenseListResponse(CamelModel):
    items: list[ExpenseResponse]
