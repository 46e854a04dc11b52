"""Common Pydantic schemas shared across the API."""

from typing import Annotated, Any

from fastapi import Path
from pydantic import BaseModel, Field

ADDRESS_PATTERN = "^[0-9a-fA-F]{64}$"

# 32-byte address, seed or key in hex
HexBytes32 = Annotated[
    str,
    Field(pattern=ADDRESS_PATTERN, description="32 bytes, hex encoded"),
]

AddressPath = Annotated[
    str,
    Path(pattern=ADDRESS_PATTERN, description="Record address, hex encoded"),
]


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error_code: str
    message: str
    details: Any | None = None
