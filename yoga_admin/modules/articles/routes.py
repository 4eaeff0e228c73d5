from fastapi import APIRouter, Depends
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.core.dependencies import get_authorization_context, get_optional_authorization_context
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.articles.schemas import ArticleCreate, ArticleUpdate, ArticleResponse
from yoga_admin.modules.articles.service import ArticleService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/articles", tags=["articles"])


def get_article_service(supabase: Client = Depends(get_supabase)) -> ArticleService:
    return ArticleService(supabase)


@router.get("", response_model=List[ArticleResponse])
async def list_articles(
    category: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
    ctx: AuthorizationContext = Depends(get_optional_authorization_context),
    service: ArticleService = Depends(get_article_service)
):
    """List articles (public)"""
    return service.list_articles(ctx, category=category, limit=limit, offset=offset)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    ctx: AuthorizationContext = Depends(get_optional_authorization_context),
    service: ArticleService = Depends(get_article_service)
):
    """Get article by ID (public)"""
    return service.get_article(ctx, article_id)


@router.post("", response_model=ArticleResponse, status_code=201)
async def create_article(
    article_data: ArticleCreate,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: ArticleService = Depends(get_article_service)
):
    """Publish an article (mantra_curator or admin)"""
    return service.create_article(ctx, article_data)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    article_data: ArticleUpdate,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: ArticleService = Depends(get_article_service)
):
    """Edit an article (mantra_curator or admin)"""
    return service.update_article(ctx, article_id, article_data)


@router.delete("/{article_id}", status_code=204)
async def delete_article(
    article_id: str,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: ArticleService = Depends(get_article_service)
):
    """Delete an article (mantra_curator or admin)"""
    service.delete_article(ctx, article_id)
    return None
