import logging
from datetime import datetime, timezone
from supabase import Client
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.authz.policies import Operation, Resource, enforce
from yoga_admin.core.exceptions import NotFound
from yoga_admin.database.supabase_client import run_query
from yoga_admin.modules.inquiries.schemas import InquiryResponse, MessageUpdate
from typing import List, Optional

logger = logging.getLogger(__name__)


class InquiryService:
    """Admin inbox over one inquiry table (yoga_queries or contact_messages)"""

    def __init__(self, supabase: Client, table: str, resource: Resource):
        self.supabase = supabase
        self.table = table
        self.resource = resource

    def list_inquiries(
        self,
        ctx: AuthorizationContext,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[InquiryResponse]:
        enforce(ctx, self.resource, Operation.READ)
        query = self.supabase.table(self.table).select("*")
        if status:
            query = query.eq("status", status)
        result = run_query(
            query.order("created_at", desc=True).limit(limit).offset(offset),
            f"list {self.table}",
        )
        return [InquiryResponse(**row) for row in result.data or []]

    def update_inquiry(self, ctx: AuthorizationContext, inquiry_id: str, data: MessageUpdate) -> InquiryResponse:
        """Apply the fields set in ``data`` (status, and the admin response for queries)"""
        enforce(ctx, self.resource, Operation.WRITE)
        update_data = data.model_dump(exclude_none=True)
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        result = run_query(
            self.supabase.table(self.table).update(update_data).eq("id", inquiry_id),
            f"update {self.table}",
        )
        if not result.data:
            raise NotFound(f"{self.resource.value.capitalize()} not found")
        logger.info("%s %s updated by %s", self.table, inquiry_id, ctx.identity_id)
        return InquiryResponse(**result.data[0])


def query_service(supabase: Client) -> InquiryService:
    return InquiryService(supabase, "yoga_queries", Resource.QUERY)


def message_service(supabase: Client) -> InquiryService:
    return InquiryService(supabase, "contact_messages", Resource.MESSAGE)
