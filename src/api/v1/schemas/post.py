"""Pydantic schemas for Post API."""

from pydantic import BaseModel, ConfigDict

from api.v1.schemas.common import HexBytes32


class PostCreate(BaseModel):
    """Schema for creating a root post or a reply."""

    author: HexBytes32
    metadata_uri: str


class PostUpdate(BaseModel):
    """Schema for updating a post."""

    metadata_uri: str


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(from_attributes=True)

    address: str
    group: str
    index: int
    author: str
    parent_post: str | None
    reply_count: int
    metadata_uri: str


class PostDetailResponse(BaseModel):
    """Schema for single Post response."""

    data: PostResponse
