"""Pydantic request/response schemas."""

from larder.schemas.auth import (
    AuthenticatedUser,
    RefreshTokenRequest,
    RoleOut,
    SignInData,
    SignInRequest,
    SignOutRequest,
    SignUpRequest,
    TokenOut,
    TokenPair,
    UserData,
    UserOut,
)
from larder.schemas.common import ApiResponse, ErrorResponse, FieldError, MessageResponse
from larder.schemas.health import HealthData
from larder.schemas.page import Pagination, PaginationParams
from larder.schemas.tag import (
    CreateTagsRequest,
    DeleteTagsRequest,
    TagData,
    TagOut,
    TagsData,
    TagsPage,
    TagSummary,
    UpdateTagRequest,
    UserRef,
)

__all__ = [
    "ApiResponse",
    "AuthenticatedUser",
    "CreateTagsRequest",
    "DeleteTagsRequest",
    "ErrorResponse",
    "FieldError",
    "HealthData",
    "MessageResponse",
    "Pagination",
    "PaginationParams",
    "RefreshTokenRequest",
    "RoleOut",
    "SignInData",
    "SignInRequest",
    "SignOutRequest",
    "SignUpRequest",
    "TagData",
    "TagOut",
    "TagSummary",
    "TagsData",
    "TagsPage",
    "TokenOut",
    "TokenPair",
    "UpdateTagRequest",
    "UserData",
    "UserOut",
    "UserRef",
]
