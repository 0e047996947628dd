"""User profile API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_user_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.user import (
    UserCompleteProfile,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from core.rate_limit import limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create or update a user profile",
    responses={
        201: {"description": "Profile created or merged"},
        400: {"model": ErrorResponse, "description": "Invalid body or save failure"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upsert_user(
    request: Request,
    body: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create the profile on first sign-in, merge the sent fields afterwards."""
    user = await service.upsert_profile(
        identity_key=body.identity_key,
        email=body.email,
        name=body.name,
        headline=body.headline,
        bio=body.bio,
        profile_picture=body.profile_picture,
    )
    return UserResponse.from_record(user)


@router.post(
    "/complete-profile",
    response_model=UserResponse,
    summary="Complete onboarding profile",
    responses={
        200: {"description": "Profile completed"},
        400: {"model": ErrorResponse, "description": "A required field is missing"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def complete_profile(
    request: Request,
    body: UserCompleteProfile,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Set name, headline, bio and picture together. All four are required."""
    user = await service.complete_profile(
        identity_key=body.identity_key,
        name=body.name or "",
        headline=body.headline or "",
        bio=body.bio or "",
        profile_picture=body.profile_picture or "",
    )
    return UserResponse.from_record(user)


@router.get(
    "/{identity_key}",
    response_model=UserResponse,
    summary="Get a user profile",
    responses={
        200: {"description": "Profile found"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_user(
    request: Request,
    identity_key: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Look up a profile by identity key."""
    user = await service.get_profile(identity_key)
    return UserResponse.from_record(user)


@router.put(
    "/{identity_key}",
    response_model=UserResponse,
    summary="Update a user profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"model": ErrorResponse, "description": "Invalid fields or save failure"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_user(
    request: Request,
    identity_key: str,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Merge the sent fields into the profile. Unsent fields are kept."""
    user = await service.update_profile(identity_key, body.changes())
    return UserResponse.from_record(user)
