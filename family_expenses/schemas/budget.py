from datetime import date

from pydantic import Field

from family_expenses.schemas.common import CamelModel


class BudgetLimitUpdate(CamelModel):
    monthly_limit: float = Field(gt=0)
    warning_percentage: int = Field(ge=0, le=100)


class BudgetStatusResponse(CamelModel):
    family_id: str
    monthly_limit: float | None
    warning_percentage: int | None
    period_start_date: date
    period_end_date: date
    spent: float
    remaining: float | None
    warning: bool | None
