from pydantic import Field, field_serializer

from family_expenses.schemas.common import CamelModel, display_or_unknown


class InvitationCreate(CamelModel):
    to_user_id: str = Field(min_length=1, max_length=128)


class InvitationResponse(CamelModel):
    id: str
    from_user_id: str
    from_user_name: str | None = None
    to_user_id: str
    to_user_name: str | None = None
    status: str

    @field_serializer("from_user_name", "to_user_name")
    def _display(self, value: str | None) -> str:
        return display_or_unknown(value)


class InvitationListResponse(CamelModel):
    items: list[InvitationResponse]
