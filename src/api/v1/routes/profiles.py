"""Profile API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentKey
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import AddressPath, ErrorResponse
from api.v1.schemas.profile import (
    AuthorityTransfer,
    ProfileCreate,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
    UsernameChange,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.address import Address
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
    responses={
        201: {"description": "Profile created and username bound"},
        400: {"model": ErrorResponse, "description": "Invalid username, name or uri"},
        409: {"model": ErrorResponse, "description": "Username taken or seed already used"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    caller: CurrentKey,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create a profile controlled by the caller's key."""
    profile = await service.create(
        seed=bytes.fromhex(body.seed),
        authority=caller.key,
        username=body.username,
        display_name=body.display_name,
        image_uri=body.image_uri,
        metadata_uri=body.metadata_uri,
        payer=caller.key,
    )
    return ProfileDetailResponse(data=build_profile_response(profile))


@router.get(
    "/{address}",
    response_model=ProfileDetailResponse,
    summary="Get a profile",
    responses={
        200: {"description": "Profile at the address"},
        404: {"model": ErrorResponse, "description": "No record at the address"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    address: AddressPath,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a profile by address."""
    profile = await service.get(Address.from_hex(address))
    return ProfileDetailResponse(data=build_profile_response(profile))


@router.patch(
    "/{address}",
    response_model=ProfileDetailResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated"},
        403: {"model": ErrorResponse, "description": "Caller does not control the profile"},
        404: {"model": ErrorResponse, "description": "No record at the address"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    address: AddressPath,
    body: ProfileUpdate,
    caller: CurrentKey,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Update display name and uris. Requires the profile's authority."""
    profile = await service.update(
        Address.from_hex(address),
        proven=caller.key,
        display_name=body.display_name,
        image_uri=body.image_uri,
        metadata_uri=body.metadata_uri,
    )
    return ProfileDetailResponse(data=build_profile_response(profile))


@router.put(
    "/{address}/username",
    response_model=ProfileDetailResponse,
    summary="Change username",
    responses={
        200: {"description": "Username moved"},
        403: {"model": ErrorResponse, "description": "Caller does not control the profile"},
        409: {"model": ErrorResponse, "description": "Username taken"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def change_username(
    request: Request,
    address: AddressPath,
    body: UsernameChange,
    caller: CurrentKey,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Move the profile to a new username, releasing the old one."""
    profile = await service.change_username(
        Address.from_hex(address),
        body.username,
        proven=caller.key,
        payer=caller.key,
    )
    return ProfileDetailResponse(data=build_profile_response(profile))


@router.put(
    "/{address}/authority",
    response_model=ProfileDetailResponse,
    summary="Transfer profile authority",
    responses={
        200: {"description": "Authority transferred"},
        403: {"model": ErrorResponse, "description": "Caller does not control the profile"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def transfer_authority(
    request: Request,
    address: AddressPath,
    body: AuthorityTransfer,
    caller: CurrentKey,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Hand the profile, and everything it owns, to a new key."""
    profile = await service.transfer_authority(
        Address.from_hex(address),
        Address.from_hex(body.authority),
        proven=caller.key,
    )
    return ProfileDetailResponse(data=build_profile_response(profile))


def build_profile_response(profile: Profile) -> ProfileResponse:
    """Convert domain entity to response schema."""
    return ProfileResponse(
        address=profile.address.hex(),
        seed=profile.seed.hex(),
        authority=profile.authority.hex(),
        username=profile.username,
        display_name=profile.display_name,
        image_uri=profile.image_uri,
        metadata_uri=profile.metadata_uri,
    )
