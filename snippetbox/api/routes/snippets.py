"""Snippet API endpoints, including favorites and the tag cloud."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.api.deps import get_current_identity
from snippetbox.core.logging import get_logger
from snippetbox.core.security import Identity
from snippetbox.db import get_db
from snippetbox.schemas.common import ApiResponse, PaginatedResponse, Pagination
from snippetbox.schemas.snippet import (
    BulkDeleteRequest,
    BulkDeleteResult,
    FavoriteStatus,
    FavoriteToggleResult,
    SnippetCreate,
    SnippetDetail,
    SnippetResponse,
    SnippetUpdate,
    TagCount,
)
from snippetbox.services.favorite import FavoriteService
from snippetbox.services.listing import ListingService, SnippetFilters, SortSpec
from snippetbox.services.pagination import PageRequest, SnippetPage
from snippetbox.services.snippet import SnippetService, SnippetView

logger = get_logger(__name__)

router = APIRouter(prefix="/snippets", tags=["snippets"])


def _page_response(page: SnippetPage) -> PaginatedResponse[SnippetResponse]:
    data = [
        SnippetResponse.from_snippet(s, is_favorited=page.is_favorited(s))
        for s in page.items
    ]
    return PaginatedResponse[SnippetResponse](
        count=len(data),
        total=page.total,
        pagination=Pagination(
            page=page.request.page,
            pages=page.pages,
            limit=page.request.limit,
        ),
        data=data,
    )


def _detail(view: SnippetView) -> SnippetDetail:
    return SnippetDetail.from_snippet(
        view.snippet,
        is_favorited=view.is_favorited,
        favorite_count=view.favorite_count,
    )


# =============================================================================
# Collection Endpoints
# =============================================================================


@router.get("", response_model=PaginatedResponse[SnippetResponse])
async def list_snippets(
    search: Optional[str] = Query(None, description="Substring match on title, content and tags"),
    tags: Optional[str] = Query(None, description="Comma-separated list of tags"),
    language: Optional[str] = Query(None, description="Exact language, or 'all'"),
    favorite: Optional[str] = Query(None, description="'true' to list favorites only"),
    page: Optional[str] = Query(None, description="Page number (1-indexed)"),
    limit: Optional[str] = Query(None, description="Items per page"),
    sort: Optional[str] = Query("-createdAt", description="Sort field, '-' prefix for descending"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> PaginatedResponse[SnippetResponse]:
    """List the caller's snippets and public snippets, newest first by default."""
    service = ListingService(db)
    result = await service.list_snippets(
        identity.uid,
        SnippetFilters.from_query(search=search, tags=tags, language=language, favorite=favorite),
        PageRequest.parse(page, limit),
        SortSpec.parse(sort),
    )
    return _page_response(result)


@router.get("/tags", response_model=ApiResponse[list[TagCount]])
async def get_tags(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[list[TagCount]]:
    """Tag cloud of the caller's own snippets."""
    service = SnippetService(db)
    counts = await service.tags_with_counts(identity.uid)
    return ApiResponse[list[TagCount]](
        data=[TagCount(name=name, count=count) for name, count in counts],
    )


@router.get("/favorites", response_model=PaginatedResponse[SnippetResponse])
async def list_favorites(
    page: Optional[str] = Query(None, description="Page number (1-indexed)"),
    limit: Optional[str] = Query(None, description="Items per page"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> PaginatedResponse[SnippetResponse]:
    """The caller's favorites, most recently favorited first."""
    service = FavoriteService(db)
    result = await service.list_favorites(identity.uid, PageRequest.parse(page, limit))
    return _page_response(result)


@router.post(
    "",
    response_model=ApiResponse[SnippetResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_snippet(
    request: SnippetCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[SnippetResponse]:
    """Create a snippet owned by the caller."""
    service = SnippetService(db)
    snippet = await service.create(request, identity)
    return ApiResponse[SnippetResponse](
        message="Snippet created successfully",
        data=SnippetResponse.from_snippet(snippet),
    )


@router.post("/bulk-delete", response_model=ApiResponse[BulkDeleteResult])
async def bulk_delete_snippets(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[BulkDeleteResult]:
    """Delete several of the caller's snippets; ids owned by others are skipped."""
    service = SnippetService(db)
    deleted = await service.delete_many(request.ids, identity.uid)
    return ApiResponse[BulkDeleteResult](
        message=f"{len(deleted)} snippet(s) deleted",
        data=BulkDeleteResult(deleted=len(deleted)),
    )


# =============================================================================
# Single Snippet Endpoints
# =============================================================================


@router.get("/{snippet_id}", response_model=ApiResponse[SnippetDetail])
async def get_snippet(
    snippet_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[SnippetDetail]:
    """Get a snippet the caller owns or that is public."""
    service = SnippetService(db)
    view = await service.get_for_user(snippet_id, identity.uid)
    return ApiResponse[SnippetDetail](data=_detail(view))


@router.put("/{snippet_id}", response_model=ApiResponse[SnippetDetail])
async def update_snippet(
    snippet_id: str,
    request: SnippetUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[SnippetDetail]:
    """Update the fields present in the body; owner only."""
    service = SnippetService(db)
    view = await service.update(snippet_id, request, identity.uid)
    return ApiResponse[SnippetDetail](
        message="Snippet updated successfully",
        data=_detail(view),
    )


@router.delete("/{snippet_id}", response_model=ApiResponse[None])
async def delete_snippet(
    snippet_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[None]:
    """Delete a snippet and every favorite pointing at it; owner only."""
    service = SnippetService(db)
    await service.delete(snippet_id, identity.uid)
    return ApiResponse[None](message="Snippet deleted successfully")


# =============================================================================
# Favorite Endpoints
# =============================================================================


@router.get("/{snippet_id}/favorite", response_model=ApiResponse[FavoriteStatus])
async def check_favorite(
    snippet_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[FavoriteStatus]:
    """Whether the caller has favorited a snippet; false for unknown ids."""
    service = FavoriteService(db)
    is_favorited = await service.is_favorited(snippet_id, identity.uid)
    return ApiResponse[FavoriteStatus](data=FavoriteStatus(is_favorited=is_favorited))


@router.patch("/{snippet_id}/favorite", response_model=ApiResponse[FavoriteToggleResult])
async def toggle_favorite(
    snippet_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ApiResponse[FavoriteToggleResult]:
    """Add or remove the caller's favorite on a snippet they can read."""
    service = FavoriteService(db)
    favorited = await service.toggle(snippet_id, identity.uid)
    action = "added to" if favorited else "removed from"
    return ApiResponse[FavoriteToggleResult](
        message=f"Snippet {action} favorites",
        data=FavoriteToggleResult(favorited=favorited),
    )
