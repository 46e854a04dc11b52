"""Group API routes."""

from fastapi import APIRouter, Depends, Path, Request, status

from api.dependencies.auth import CurrentKey
from api.v1.dependencies import get_group_service, get_post_service
from api.v1.routes.posts import build_post_response
from api.v1.schemas.common import AddressPath, ErrorResponse
from api.v1.schemas.group import GroupCreate, GroupDetailResponse, GroupResponse
from api.v1.schemas.post import PostCreate, PostDetailResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.address import Address
from domain.constants import U32_MAX
from domain.entities.group import Group
from domain.services.group_service import GroupService
from domain.services.post_service import PostService

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post(
    "",
    response_model=GroupDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses={
        201: {"description": "Group created and name bound"},
        403: {"model": ErrorResponse, "description": "Caller does not control the profile"},
        409: {"model": ErrorResponse, "description": "Name taken or seed already used"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_group(
    request: Request,
    body: GroupCreate,
    caller: CurrentKey,
    service: GroupService = Depends(get_group_service),
) -> GroupDetailResponse:
    """Create a group owned by a profile the caller controls."""
    group = await service.create(
        Address.from_hex(body.profile),
        seed=bytes.fromhex(body.seed),
        name=body.name,
        proven=caller.key,
        payer=caller.key,
    )
    return GroupDetailResponse(data=_build_group_response(group))


@router.get(
    "/{address}",
    response_model=GroupDetailResponse,
    summary="Get a group",
    responses={
        200: {"description": "Group at the address"},
        404: {"model": ErrorResponse, "description": "No record at the address"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_group(
    request: Request,
    address: AddressPath,
    service: GroupService = Depends(get_group_service),
) -> GroupDetailResponse:
    """Get a group by address."""
    group = await service.get(Address.from_hex(address))
    return GroupDetailResponse(data=_build_group_response(group))


# --- Posts within a group ---


@router.post(
    "/{address}/posts",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        201: {"description": "Post created"},
        403: {"model": ErrorResponse, "description": "Caller does not control the author profile"},
        409: {"model": ErrorResponse, "description": "Post sequence exhausted"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    address: AddressPath,
    body: PostCreate,
    caller: CurrentKey,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Publish a root post into the group."""
    post = await service.create_post(
        Address.from_hex(address),
        Address.from_hex(body.author),
        body.metadata_uri,
        proven=caller.key,
        payer=caller.key,
    )
    return PostDetailResponse(data=build_post_response(post))


@router.get(
    "/{address}/posts/{index}",
    response_model=PostDetailResponse,
    summary="Get a post by index",
    responses={
        200: {"description": "Post at the index"},
        404: {"model": ErrorResponse, "description": "No post at the index"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_group_post(
    request: Request,
    address: AddressPath,
    index: int = Path(..., ge=0, le=U32_MAX),
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get the ``index``-th root post of a group."""
    post = await service.get_child(Address.from_hex(address), index)
    return PostDetailResponse(data=build_post_response(post))


def _build_group_response(group: Group) -> GroupResponse:
    """Convert domain entity to response schema."""
    return GroupResponse(
        address=group.address.hex(),
        seed=group.seed.hex(),
        authority=group.authority.hex(),
        name=group.name,
        post_count=group.post_count,
    )
