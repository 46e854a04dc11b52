"""Pydantic schemas for name lookups."""

from pydantic import BaseModel


class NameRecordResponse(BaseModel):
    """Schema for a resolved handle."""

    address: str
    namespace: str
    handle: str
    target: str
    authority: str


class NameRecordDetailResponse(BaseModel):
    """Schema for single name record response."""

    data: NameRecordResponse
