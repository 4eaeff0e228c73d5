import logging
from datetime import datetime, timezone
from supabase import Client
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.authz.policies import Operation, Resource, enforce
from yoga_admin.core.exceptions import NotFound, StoreUnavailable
from yoga_admin.database.supabase_client import run_query
from yoga_admin.modules.articles.schemas import ArticleCreate, ArticleUpdate, ArticleResponse
from typing import List, Optional

logger = logging.getLogger(__name__)


class ArticleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_articles(
        self,
        ctx: AuthorizationContext,
        category: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[ArticleResponse]:
        enforce(ctx, Resource.CONTENT, Operation.READ)
        query = self.supabase.table("articles").select("*")
        if category:
            query = query.eq("category", category)
        result = run_query(
            query.order("created_at", desc=True).limit(limit).offset(offset),
            "list articles",
        )
        return [ArticleResponse(**article) for article in result.data or []]

    def get_article(self, ctx: AuthorizationContext, article_id: str) -> ArticleResponse:
        enforce(ctx, Resource.CONTENT, Operation.READ)
        result = run_query(
            self.supabase.table("articles").select("*").eq("id", article_id).limit(1),
            "read article",
        )
        if not result.data:
            raise NotFound("Article not found")
        return ArticleResponse(**result.data[0])

    def create_article(self, ctx: AuthorizationContext, article_data: ArticleCreate) -> ArticleResponse:
        enforce(ctx, Resource.CONTENT, Operation.WRITE)
        row = article_data.model_dump()
        row["author_id"] = ctx.identity_id
        result = run_query(self.supabase.table("articles").insert(row), "create article")
        if not result.data:
            raise StoreUnavailable("Article was not created")
        logger.info("Article %s created by %s", result.data[0]["id"], ctx.identity_id)
        return ArticleResponse(**result.data[0])

    def update_article(self, ctx: AuthorizationContext, article_id: str, article_data: ArticleUpdate) -> ArticleResponse:
        enforce(ctx, Resource.CONTENT, Operation.WRITE)
        update_data = article_data.model_dump(exclude_none=True)
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        result = run_query(
            self.supabase.table("articles").update(update_data).eq("id", article_id),
            "update article",
        )
        if not result.data:
            raise NotFound("Article not found")
        return ArticleResponse(**result.data[0])

    def delete_article(self, ctx: AuthorizationContext, article_id: str) -> bool:
        enforce(ctx, Resource.CONTENT, Operation.WRITE)
        result = run_query(
            self.supabase.table("articles").delete().eq("id", article_id),
            "delete article",
        )
        if not result.data:
            raise NotFound("Article not found")
        logger.info("Article %s deleted by %s", article_id, ctx.identity_id)
        return True
