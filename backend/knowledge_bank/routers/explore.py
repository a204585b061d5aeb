"""
Explore Router - Cross-user search.

Example Usage:
    GET /explore/search?mode=topic&q=machine learning
    GET /explore/search?mode=author&q=ana@example.com
    GET /explore/categories - Category chips
    GET /explore/categories/{category} - Documents in a category
"""
from fastapi import APIRouter, Depends, Query, Request

from ..api.dto import CategoriesDTO, SearchResponseDTO
from ..api.mappers import DocumentMapper
from ..core.logging_config import get_logger
from ..domain.entities import UserIdentity
from ..domain.value_objects import SearchMode
from ..gateway.rate_limit import RATE_LIMIT, limiter
from ..services.search_service import SearchService
from .dependencies import get_current_user, get_search_service

logger = get_logger(__name__)

router = APIRouter()


@router.get("/explore/search", response_model=SearchResponseDTO)
@limiter.limit(RATE_LIMIT)
async def search_documents(
    request: Request,
    q: str = Query("", description="Topic text or author email"),
    mode: SearchMode = Query(SearchMode.TOPIC, description="topic or author"),
    user: UserIdentity = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service),
):
    """
    Search all users' documents.

    - topic: AI-suggested keywords plus the literal query terms, matched
      with a full-text OR query
    - author: exact, case-insensitive email match; unknown emails give
      an empty result
    """
    if mode == SearchMode.AUTHOR:
        documents = await search_service.search_by_author(q)
    else:
        documents = await search_service.search_by_topic(q)

    return SearchResponseDTO(
        mode=mode.value,
        query=q,
        total=len(documents),
        results=DocumentMapper.to_dto_list(documents),
    )


@router.get("/explore/categories", response_model=CategoriesDTO)
async def list_categories(
    user: UserIdentity = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service),
):
    categories = await search_service.list_categories()
    return CategoriesDTO(categories=categories)


@router.get("/explore/categories/{category}", response_model=SearchResponseDTO)
@limiter.limit(RATE_LIMIT)
async def documents_by_category(
    request: Request,
    category: str,
    user: UserIdentity = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service),
):
    """Documents with exactly this category, newest first."""
    documents = await search_service.search_by_category(category)
    return SearchResponseDTO(
        mode="category",
        query=category,
        total=len(documents),
        results=DocumentMapper.to_dto_list(documents),
    )
