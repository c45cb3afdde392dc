from pydantic import Field

from family_expenses.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    color: str = Field(min_length=1, max_length=32)


class CategoryResponse(CamelModel):
    id: str
    name: str
    color: str
    user_id: str


class CategoryListResponse(CamelModel):
    items: list[CategoryResponse]
