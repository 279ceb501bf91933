"""Response envelopes shared by every endpoint."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base schema exchanged as camelCase JSON."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ApiResponse(CamelModel, Generic[DataT]):
    """Standard success envelope."""

    success: bool = True
    message: str | None = None
    data: DataT | None = None


class Pagination(CamelModel):
    """Page position of a list response."""

    page: int
    pages: int
    limit: int


class PaginatedResponse(CamelModel, Generic[DataT]):
    """Envelope for paginated lists."""

    success: bool = True
    count: int
    total: int
    pagination: Pagination
    data: list[DataT]


class ErrorResponse(CamelModel):
    """Envelope for failures."""

    success: bool = False
    message: str
    error: str | None = None
    errors: list[str] | None = None
