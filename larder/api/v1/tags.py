"""Admin tag endpoints (mounted under /admin/tags; ADMIN role required)."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from larder.api.v1.dependencies import AdminUser, DbSession
from larder.schemas.common import ApiResponse, MessageResponse
from larder.schemas.page import PaginationParams
from larder.schemas.tag import (
    CreateTagsRequest,
    DeleteTagsRequest,
    TagData,
    TagsData,
    TagsPage,
    UpdateTagRequest,
)
from larder.services import tags as tag_service

router = APIRouter()


@router.get("", response_model=ApiResponse[TagsPage])
def list_tags(
    params: Annotated[PaginationParams, Query()],
    db: DbSession,
) -> ApiResponse[TagsPage]:
    """
    List tags page by page. order_by: name, slug, meals_count, drinks_count
    (default updated_at); order_dir: asc or desc; search matches name or slug.
    """
    page = tag_service.list_tags(db, params)
    return ApiResponse[TagsPage](
        status_code=status.HTTP_200_OK,
        message="Hooray, successfully get all tags",
        data=page,
    )


@router.post(
    "",
    response_model=ApiResponse[TagsData],
    status_code=status.HTTP_201_CREATED,
)
def create_tags(
    body: CreateTagsRequest, admin: AdminUser, db: DbSession
) -> ApiResponse[TagsData]:
    tags = tag_service.create_tags(db, admin.id, body)
    return ApiResponse[TagsData](
        status_code=status.HTTP_201_CREATED,
        message="Hooray, successfully create tags",
        data=TagsData(tags=tags),
    )


@router.delete("", response_model=MessageResponse)
def delete_tags(body: DeleteTagsRequest, db: DbSession) -> MessageResponse:
    deleted = tag_service.delete_tags(db, body)
    return MessageResponse(
        status_code=status.HTTP_200_OK,
        message=f"Hooray, successfully delete {deleted} tags",
    )


@router.get("/{tag_id}", response_model=ApiResponse[TagData])
def show_tag(tag_id: str, db: DbSession) -> ApiResponse[TagData]:
    tag = tag_service.get_tag(db, tag_service.find_tag_id(db, tag_id))
    return ApiResponse[TagData](
        status_code=status.HTTP_200_OK,
        message="Hooray, successfully get tag",
        data=TagData(tag=tag),
    )


@router.put("/{tag_id}", response_model=ApiResponse[TagData])
def update_tag(
    tag_id: str, body: UpdateTagRequest, admin: AdminUser, db: DbSession
) -> ApiResponse[TagData]:
    tag = tag_service.update_tag(db, tag_service.find_tag_id(db, tag_id), admin.id, body)
    return ApiResponse[TagData](
        status_code=status.HTTP_200_OK,
        message="Hooray, successfully update tag",
        data=TagData(tag=tag),
    )


@router.delete("/{tag_id}", response_model=MessageResponse)
def delete_tag(tag_id: str, db: DbSession) -> MessageResponse:
    tag_service.delete_tag(db, tag_service.find_tag_id(db, tag_id))
    return MessageResponse(
        status_code=status.HTTP_200_OK,
        message="Hooray, successfully delete tag",
    )
