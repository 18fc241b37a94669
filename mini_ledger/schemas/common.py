"""
Shared schema pieces: camelCase field naming and the response
envelope every endpoint returns.
"""

from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


CENT = Decimal("0.01")

T = TypeVar("T")


def format_amount(value) -> str:
    """Render a money value with exactly two fractional digits."""
    return str(Decimal(value).quantize(CENT))


class CamelModel(BaseModel):
    """
    Base for every API schema.

    Python code uses snake_case field names; JSON on the wire
    uses camelCase (accountId, accountBalance, toAccount).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {error: false, message, data}."""
    error: bool = False
    message: str
    data: T


class ErrorResponse(BaseModel):
    """Error envelope: {error: true, message}."""
    error: bool = True
    message: str
