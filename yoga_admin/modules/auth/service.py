import hashlib
import logging
import time
from supabase import Client
from yoga_admin.config.settings import settings
from fastapi import HTTPException
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class IdentityCache:
    """
    Short-lived token -> identity cache in front of Supabase Auth.

    Holds who the caller is, never what they may do: role assignments are read
    fresh for every request so a revocation takes effect on the next call.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[Dict[str, Any], float]] = {}

    @staticmethod
    def _key(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def get(self, token: str) -> Optional[Dict[str, Any]]:
        key = self._key(token)
        entry = self._entries.get(key)
        if entry is None:
            return None
        user_data, expiry = entry
        if time.monotonic() >= expiry:
            del self._entries[key]
            return None
        return user_data

    def put(self, token: str, user_data: Dict[str, Any]) -> None:
        ttl = settings.auth_cache_ttl_seconds
        if ttl <= 0:
            return
        now = time.monotonic()
        if len(self._entries) >= settings.auth_cache_max_size:
            self._entries = {k: v for k, v in self._entries.items() if v[1] > now}
            if len(self._entries) >= settings.auth_cache_max_size:
                return
        self._entries[self._key(token)] = (user_data, now + ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


identity_cache = IdentityCache()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to the caller's identity via Supabase Auth"""
        cached = identity_cache.get(token)
        if cached is not None:
            return cached
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            logger.warning("Token validation failed: %s", error_msg)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")
        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "created_at": user.created_at,
        }
        identity_cache.put(token, user_data)
        return user_data


def clear_auth_cache():
    identity_cache.clear()
