from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from family_expenses.core.config import settings


class CamelModel(BaseModel):
    """Wire models use the camelCase field names of the stored documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def display_or_unknown(value: str | None) -> str:
    return value if value else settings.unknown_display_name
