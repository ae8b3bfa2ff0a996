from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Diopters: any sign, any precision, but always finite
Diopter = Annotated[float, Field(allow_inf_nan=False)]


def to_iso(value: datetime) -> str:
    """ISO-8601 rendering; naive values coming back from SQLite are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
