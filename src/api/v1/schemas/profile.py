"""Pydantic schemas for Profile API."""

from pydantic import BaseModel, ConfigDict

from api.v1.schemas.common import HexBytes32


class ProfileCreate(BaseModel):
    """Schema for creating a profile."""

    seed: HexBytes32
    username: str
    display_name: str = ""
    image_uri: str = ""
    metadata_uri: str = ""


class ProfileUpdate(BaseModel):
    """Schema for updating a profile."""

    display_name: str | None = None
    image_uri: str | None = None
    metadata_uri: str | None = None


class UsernameChange(BaseModel):
    """Schema for moving a profile to a new username."""

    username: str


class AuthorityTransfer(BaseModel):
    """Schema for handing a profile to a new key."""

    authority: HexBytes32


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(from_attributes=True)

    address: str
    seed: str
    authority: str
    username: str
    display_name: str
    image_uri: str
    metadata_uri: str


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile response."""

    data: ProfileResponse
