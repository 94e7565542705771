"""Shared response pieces."""

import math

from pydantic import BaseModel


class Pagination(BaseModel):
    """Page metadata returned alongside paged listings."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    success: bool = True
    message: str
