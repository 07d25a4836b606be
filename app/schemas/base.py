"""Base schema"""
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated


# JSONでは数値として出力する（pydanticのデフォルトは文字列）
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class BaseSchema(BaseModel):
    """Base schema: camelCase on the wire, ORM objects accepted"""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
