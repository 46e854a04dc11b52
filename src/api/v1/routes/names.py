"""Handle lookup routes."""

from typing import Literal

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_name_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.name import NameRecordDetailResponse, NameRecordResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.constants import Namespace
from domain.services.name_service import NameService

router = APIRouter(prefix="/names", tags=["names"])


@router.get(
    "/{namespace}/{handle}",
    response_model=NameRecordDetailResponse,
    summary="Resolve a handle",
    responses={
        200: {"description": "Name record bound to the handle"},
        404: {"model": ErrorResponse, "description": "Handle not registered"},
        422: {"model": ErrorResponse, "description": "Unknown namespace"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def resolve_handle(
    request: Request,
    namespace: Literal["profile", "post_group"],
    handle: str,
    service: NameService = Depends(get_name_service),
) -> NameRecordDetailResponse:
    """Resolve a username (``profile``) or group name (``post_group``)."""
    record = await service.resolve(Namespace(namespace), handle)
    return NameRecordDetailResponse(
        data=NameRecordResponse(
            address=record.address.hex(),
            namespace=namespace,
            handle=handle,
            target=record.target.hex(),
            authority=record.authority.hex(),
        )
    )
