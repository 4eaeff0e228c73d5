from fastapi import APIRouter, Depends
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.core.dependencies import get_authorization_context
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.inquiries.schemas import InquiryResponse, MessageUpdate, QueryUpdate
from yoga_admin.modules.inquiries.service import InquiryService, message_service, query_service
from supabase import Client
from typing import List, Optional

queries_router = APIRouter(prefix="/queries", tags=["queries"])
messages_router = APIRouter(prefix="/messages", tags=["messages"])


def get_query_service(supabase: Client = Depends(get_supabase)) -> InquiryService:
    return query_service(supabase)


def get_message_service(supabase: Client = Depends(get_supabase)) -> InquiryService:
    return message_service(supabase)


@queries_router.get("", response_model=List[InquiryResponse])
async def list_queries(
    status: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: InquiryService = Depends(get_query_service)
):
    """List yoga queries (admin only)"""
    return service.list_inquiries(ctx, status=status, limit=limit, offset=offset)


@queries_router.patch("/{query_id}", response_model=InquiryResponse)
async def update_query(
    query_id: str,
    body: QueryUpdate,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: InquiryService = Depends(get_query_service)
):
    """Respond to or change the status of a yoga query (admin only)"""
    return service.update_inquiry(ctx, query_id, body)


@messages_router.get("", response_model=List[InquiryResponse])
async def list_messages(
    status: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: InquiryService = Depends(get_message_service)
):
    """List contact messages (admin only)"""
    return service.list_inquiries(ctx, status=status, limit=limit, offset=offset)


@messages_router.patch("/{message_id}", response_model=InquiryResponse)
async def update_message(
    message_id: str,
    body: MessageUpdate,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: InquiryService = Depends(get_message_service)
):
    """Change the status of a contact message (admin only)"""
    return service.update_inquiry(ctx, message_id, body)
