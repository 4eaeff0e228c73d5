from fastapi import APIRouter, Depends
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.core.dependencies import get_authorization_context
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.bookings.schemas import BookingResponse, BookingStatus, BookingStatusUpdate
from yoga_admin.modules.bookings.service import BookingService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/bookings", tags=["bookings"])


def get_booking_service(supabase: Client = Depends(get_supabase)) -> BookingService:
    return BookingService(supabase)


@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: BookingService = Depends(get_booking_service)
):
    """List bookings: all for admins, own bookings otherwise"""
    return service.list_bookings(ctx, status=status, search=search, limit=limit, offset=offset)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: BookingService = Depends(get_booking_service)
):
    """Get booking by ID (admin or owner)"""
    return service.get_booking(ctx, booking_id)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    body: BookingStatusUpdate,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: BookingService = Depends(get_booking_service)
):
    """Confirm, complete or cancel a booking (admin only)"""
    return service.update_status(ctx, booking_id, body.status)


@router.delete("/{booking_id}", status_code=204)
async def delete_booking(
    booking_id: str,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: BookingService = Depends(get_booking_service)
):
    """Delete booking (admin only)"""
    service.delete_booking(ctx, booking_id)
    return None
