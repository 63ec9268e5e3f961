import hashlib
import logging
import time
from supabase import Client
from artune.config import settings
from artune.core.enums import Role
from fastapi import HTTPException
from typing import Dict, Any, Optional, Tuple

logger = logging.getLogger(__name__)

# In-memory cache for get_identity to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _identity_dict(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "created_at": user.created_at,
    }


class AuthService:
    """Thin wrapper over Supabase Auth and the profiles table."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def sign_in(self, email: str, password: str) -> Tuple[str, Dict[str, Any]]:
        """Authenticate with email/password. Returns (access_token, identity)."""
        auth_response = self.supabase.auth.sign_in_with_password({
            "email": email,
            "password": password
        })
        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid login credentials")
        return auth_response.session.access_token, _identity_dict(auth_response.user)

    def sign_up(self, email: str, password: str, role: Role) -> Tuple[Optional[str], Dict[str, Any]]:
        """Create the auth identity. Returns (access_token or None, identity).

        The token is None when the project requires email confirmation.
        """
        auth_response = self.supabase.auth.sign_up({
            "email": email,
            "password": password,
            "options": {
                "data": {"role": role.value}
            }
        })
        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to create account")
        token = auth_response.session.access_token if auth_response.session else None
        return token, _identity_dict(auth_response.user)

    def create_profile(self, user_id: str, email: str, role: Role, full_name: Optional[str] = None) -> Dict[str, Any]:
        result = self.supabase.table("profiles").insert({
            "id": user_id,
            "email": email,
            "role": role.value,
            "full_name": full_name,
        }).execute()
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create profile")
        return result.data[0]

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_identity(self, token: str) -> Dict[str, Any]:
        """Get the auth identity for a JWT. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = _token_key(token)
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                identity, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return identity
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            identity = _identity_dict(user_response.user)
            if len(_AUTH_USER_CACHE) < settings.auth_cache_max_size:
                _AUTH_USER_CACHE[cache_key] = (identity, now + settings.auth_cache_ttl_seconds)
            return identity
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def sign_out(self, token: str) -> bool:
        """Revoke the session server-side and forget the cached identity."""
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            # Tokens are stateless JWTs; they still expire on their own
            logger.warning(f"Remote sign out failed: {e}")
            return False
