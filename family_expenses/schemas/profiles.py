from pydantic import Field, field_serializer

from family_expenses.schemas.common import CamelModel, display_or_unknown


class ProfileRegister(CamelModel):
    name: str = Field(min_length=1, max_length=255)


class ProfileResponse(CamelModel):
    id: str
    name: str | None = None
    email: str | None = None
    family_id: str | None
    monthly_limit: float | None
    warning_percentage: int | None

    @field_serializer("name", "email")
    def _display(self, value: str | None) -> str:
        return display_or_unknown(value)


class UserSearchResult(CamelModel):
    id: str
    name: str | None = None
    email: str | None = None

    @field_serializer("name", "email")
    def _display(self, value: str | None) -> str:
        return display_or_unknown(value)


class UserSearchResponse(CamelModel):
    items: list[UserSearchResult]
