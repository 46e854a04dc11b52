"""Pydantic schemas for Group API."""

from pydantic import BaseModel, ConfigDict

from api.v1.schemas.common import HexBytes32


class GroupCreate(BaseModel):
    """Schema for creating a group."""

    profile: HexBytes32
    seed: HexBytes32
    name: str


class GroupResponse(BaseModel):
    """Schema for Group response."""

    model_config = ConfigDict(from_attributes=True)

    address: str
    seed: str
    authority: str
    name: str
    post_count: int


class GroupDetailResponse(BaseModel):
    """Schema for single Group response."""

    data: GroupResponse
