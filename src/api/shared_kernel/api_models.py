"""Base Pydantic models shared by the HTTP presentation layers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared_kernel.pagination import Page


class CamelModel(BaseModel):
    """Model whose JSON field names are camelCase.

    Accepts either snake_case or camelCase on input; FastAPI serializes
    responses by alias.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationResponse(CamelModel):
    """Pagination metadata for list endpoints."""

    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Page size")
    total_count: int = Field(..., description="Total matching documents")
    total_pages: int = Field(..., description="Total number of pages")
    has_next: bool = Field(..., description="Whether a later page exists")
    has_prev: bool = Field(..., description="Whether an earlier page exists")

    @classmethod
    def from_page(cls, page: Page[Any]) -> PaginationResponse:
        return cls(
            page=page.page,
            limit=page.limit,
            total_count=page.total_count,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )


class MessageResponse(BaseModel):
    """Plain acknowledgement response."""

    message: str
