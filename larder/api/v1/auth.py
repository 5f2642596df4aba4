"""Auth endpoints: sign-in, sign-up, refresh-token, me, sign-out."""

from fastapi import APIRouter, status

from larder.api.v1.dependencies import CurrentUser, DbSession
from larder.schemas.auth import (
    RefreshTokenRequest,
    SignInData,
    SignInRequest,
    SignOutRequest,
    SignUpRequest,
    TokenPair,
    UserData,
)
from larder.schemas.common import ApiResponse, MessageResponse
from larder.services import auth as auth_service
from larder.services import tokens as token_service

router = APIRouter()


@router.post("/sign-in", response_model=ApiResponse[SignInData])
def sign_in(body: SignInRequest, db: DbSession) -> ApiResponse[SignInData]:
    """
    Authenticate with email and password; returns the profile and a token pair.
    Send the access token as `Authorization: Bearer <token>`.
    """
    data = auth_service.sign_in(db, body)
    return ApiResponse[SignInData](
        status_code=status.HTTP_200_OK,
        message="Hooray! You have successfully signed in",
        data=data,
    )


@router.post(
    "/sign-up",
    response_model=ApiResponse[UserData],
    status_code=status.HTTP_201_CREATED,
)
def sign_up(body: SignUpRequest, db: DbSession) -> ApiResponse[UserData]:
    """Create an account with the USER role."""
    user = auth_service.sign_up(db, body)
    return ApiResponse[UserData](
        status_code=status.HTTP_201_CREATED,
        message="Hooray! You have successfully signed up",
        data=UserData(user=user),
    )


@router.post("/refresh-token", response_model=ApiResponse[TokenPair])
def refresh_token(body: RefreshTokenRequest, db: DbSession) -> ApiResponse[TokenPair]:
    """Exchange a refresh token for a new pair; the old refresh token stops working."""
    pair = token_service.refresh_token(db, body)
    return ApiResponse[TokenPair](
        status_code=status.HTTP_200_OK,
        message="Hooray! You have successfully refreshed your token",
        data=pair,
    )


@router.get("/me", response_model=ApiResponse[UserData])
def me(current_user: CurrentUser, db: DbSession) -> ApiResponse[UserData]:
    user = auth_service.me(db, current_user.id)
    return ApiResponse[UserData](
        status_code=status.HTTP_200_OK,
        message="Hooray! You have successfully get your profile",
        data=UserData(user=user),
    )


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(body: SignOutRequest, current_user: CurrentUser, db: DbSession) -> MessageResponse:
    """Revoke the caller's access and refresh tokens."""
    auth_service.sign_out(db, current_user.id, body)
    return MessageResponse(
        status_code=status.HTTP_200_OK,
        message="Hooray! You have successfully signed out",
    )
