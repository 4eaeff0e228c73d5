from supabase import Client
from yoga_admin.authz.evaluator import AuthorizationContext, Identity
from yoga_admin.authz.legacy import LegacyAdminDirectory
from yoga_admin.authz.policies import Operation, Resource, enforce
from yoga_admin.database.supabase_client import run_query
from yoga_admin.modules.assignments.service import AssignmentStore
from yoga_admin.modules.users.schemas import DirectoryUserResponse, UserFilter
from typing import Dict, List, Optional


def _matches_search(user: DirectoryUserResponse, term: str) -> bool:
    term = term.lower()
    return term in user.email.lower() or term in (user.full_name or "").lower()


class UserDirectoryService:
    def __init__(self, supabase: Client, legacy_fallback: bool = True):
        self.supabase = supabase
        self.legacy_fallback = legacy_fallback

    def list_users(
        self,
        ctx: AuthorizationContext,
        search: Optional[str] = None,
        filter_by: UserFilter = UserFilter.ALL
    ) -> List[DirectoryUserResponse]:
        """Users derived from bookings and yoga queries, newest first, with evaluated admin status (admin only)"""
        enforce(ctx, Resource.BOOKING, Operation.READ)
        enforce(ctx, Resource.QUERY, Operation.READ)

        bookings = run_query(
            self.supabase.table("bookings")
            .select("user_id, email, first_name, last_name, created_at")
            .order("created_at", desc=True),
            "list booking users",
        ).data or []
        queries = run_query(
            self.supabase.table("yoga_queries")
            .select("email, name, created_at")
            .order("created_at", desc=True),
            "list query users",
        ).data or []

        users: Dict[str, DirectoryUserResponse] = {}
        for booking in bookings:
            email = booking.get("email")
            if not email:
                continue
            user = users.get(email)
            if user is None:
                full_name = f"{booking.get('first_name') or ''} {booking.get('last_name') or ''}".strip()
                user = users[email] = DirectoryUserResponse(
                    id=booking.get("user_id"),
                    email=email,
                    full_name=full_name or None,
                    created_at=booking.get("created_at"),
                )
            elif user.id is None and booking.get("user_id"):
                user.id = booking["user_id"]
            user.bookings_count += 1
        for query in queries:
            email = query.get("email")
            if not email:
                continue
            user = users.get(email)
            if user is None:
                user = users[email] = DirectoryUserResponse(
                    email=email,
                    full_name=query.get("name"),
                    created_at=query.get("created_at"),
                )
            user.queries_count += 1

        assignments = {a.user_id: a.roles for a in AssignmentStore(self.supabase).all_assignments()}
        legacy = {}
        if self.legacy_fallback:
            legacy = {e.email: e for e in LegacyAdminDirectory(self.supabase).list_entries()}

        for user in users.values():
            user.roles = assignments.get(user.id, []) if user.id else []
            user_ctx = AuthorizationContext.for_identity(
                Identity(id=user.id or "", email=user.email),
                user.roles,
                legacy.get(user.email),
            )
            user.is_admin = user_ctx.is_admin()

        result = list(users.values())
        if search:
            result = [u for u in result if _matches_search(u, search)]
        if filter_by == UserFilter.ADMINS:
            result = [u for u in result if u.is_admin]
        elif filter_by == UserFilter.REGULAR:
            result = [u for u in result if not u.is_admin]
        return result
