"""Post API routes."""

from fastapi import APIRouter, Depends, Path, Request, status

from api.dependencies.auth import CurrentKey
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import AddressPath, ErrorResponse
from api.v1.schemas.post import PostCreate, PostDetailResponse, PostResponse, PostUpdate
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.address import Address
from domain.constants import U32_MAX
from domain.entities.post import Post
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get(
    "/{address}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={
        200: {"description": "Post at the address"},
        404: {"model": ErrorResponse, "description": "No record at the address"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    address: AddressPath,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a post or reply by address."""
    post = await service.get(Address.from_hex(address))
    return PostDetailResponse(data=build_post_response(post))


@router.patch(
    "/{address}",
    response_model=PostDetailResponse,
    summary="Update a post",
    responses={
        200: {"description": "Post updated"},
        403: {"model": ErrorResponse, "description": "Caller does not control the author profile"},
        404: {"model": ErrorResponse, "description": "No record at the address"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_post(
    request: Request,
    address: AddressPath,
    body: PostUpdate,
    caller: CurrentKey,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Replace a post's metadata uri. Requires the author's authority."""
    post = await service.update(
        Address.from_hex(address), body.metadata_uri, proven=caller.key
    )
    return PostDetailResponse(data=build_post_response(post))


@router.post(
    "/{address}/replies",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to a post",
    responses={
        201: {"description": "Reply created"},
        403: {"model": ErrorResponse, "description": "Caller does not control the author profile"},
        409: {"model": ErrorResponse, "description": "Reply sequence exhausted"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_reply(
    request: Request,
    address: AddressPath,
    body: PostCreate,
    caller: CurrentKey,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Reply to the post at ``address``."""
    reply = await service.create_reply(
        Address.from_hex(address),
        Address.from_hex(body.author),
        body.metadata_uri,
        proven=caller.key,
        payer=caller.key,
    )
    return PostDetailResponse(data=build_post_response(reply))


@router.get(
    "/{address}/replies/{index}",
    response_model=PostDetailResponse,
    summary="Get a reply by index",
    responses={
        200: {"description": "Reply at the index"},
        404: {"model": ErrorResponse, "description": "No reply at the index"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_reply(
    request: Request,
    address: AddressPath,
    index: int = Path(..., ge=0, le=U32_MAX),
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get the ``index``-th reply to a post."""
    reply = await service.get_child(Address.from_hex(address), index)
    return PostDetailResponse(data=build_post_response(reply))


def build_post_response(post: Post) -> PostResponse:
    """Convert domain entity to response schema."""
    return PostResponse(
        address=post.address.hex(),
        group=post.group.hex(),
        index=post.index,
        author=post.author.hex(),
        parent_post=post.parent_post.hex() if post.parent_post else None,
        reply_count=post.reply_count,
        metadata_uri=post.metadata_uri,
    )
