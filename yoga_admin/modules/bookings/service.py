import logging
import re
from datetime import datetime, timezone
from supabase import Client
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.authz.policies import Operation, Resource, enforce
from yoga_admin.core.exceptions import NotFound
from yoga_admin.database.supabase_client import run_query
from yoga_admin.modules.bookings.schemas import BookingResponse, BookingStatus
from typing import List, Optional

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ("first_name", "last_name", "email", "class_name")


def search_filter(term: str, columns=SEARCH_COLUMNS) -> Optional[str]:
    """Build a PostgREST or() filter matching ``term`` in any of ``columns``"""
    # Characters that are structural in PostgREST filter syntax
    cleaned = re.sub(r"[,()*%\\]", " ", term).strip()
    if not cleaned:
        return None
    return ",".join(f"{column}.ilike.%{cleaned}%" for column in columns)


class BookingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch(self, booking_id: str) -> dict:
        result = run_query(
            self.supabase.table("bookings").select("*").eq("id", booking_id).limit(1),
            "read booking",
        )
        if not result.data:
            raise NotFound("Booking not found")
        return result.data[0]

    def list_bookings(
        self,
        ctx: AuthorizationContext,
        status: Optional[BookingStatus] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[BookingResponse]:
        """List bookings, newest first: every booking for admins, the caller's own otherwise"""
        query = self.supabase.table("bookings").select("*")
        if not ctx.is_admin():
            enforce(ctx, Resource.BOOKING, Operation.READ, owner_id=ctx.identity_id)
            query = query.eq("user_id", ctx.identity_id)
        if status:
            query = query.eq("status", BookingStatus(status).value)
        if search:
            condition = search_filter(search)
            if condition:
                query = query.or_(condition)
        result = run_query(
            query.order("created_at", desc=True).limit(limit).offset(offset),
            "list bookings",
        )
        return [BookingResponse(**booking) for booking in result.data or []]

    def get_booking(self, ctx: AuthorizationContext, booking_id: str) -> BookingResponse:
        booking = self._fetch(booking_id)
        enforce(ctx, Resource.BOOKING, Operation.READ, owner_id=booking.get("user_id"))
        return BookingResponse(**booking)

    def update_status(self, ctx: AuthorizationContext, booking_id: str, status: BookingStatus) -> BookingResponse:
        """Change a booking's status (admins only)"""
        enforce(ctx, Resource.BOOKING, Operation.WRITE)
        result = run_query(
            self.supabase.table("bookings")
            .update({
                "status": BookingStatus(status).value,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", booking_id),
            "update booking",
        )
        if not result.data:
            raise NotFound("Booking not found")
        logger.info("Booking %s set to %s by %s", booking_id, BookingStatus(status).value, ctx.identity_id)
        return BookingResponse(**result.data[0])

    def delete_booking(self, ctx: AuthorizationContext, booking_id: str) -> bool:
        enforce(ctx, Resource.BOOKING, Operation.WRITE)
        result = run_query(
            self.supabase.table("bookings").delete().eq("id", booking_id),
            "delete booking",
        )
        if not result.data:
            raise NotFound("Booking not found")
        logger.info("Booking %s deleted by %s", booking_id, ctx.identity_id)
        return True
