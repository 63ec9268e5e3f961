"""
Request-scoped authentication context.

An ``AuthContext`` is built per request from the optional bearer token and
passed explicitly to whatever needs the signed-in user. ``load()`` resolves
the session once; ``current_user`` is the auth identity merged with its
``profiles`` row. ``sign_in``/``sign_up`` report failures through
``AuthResult.error`` instead of raising.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException
from supabase import Client

from artune.core.enums import Role
from artune.core.errors import error_message
from artune.modules.auth.schemas import CurrentUser
from artune.modules.auth.service import AuthService

logger = logging.getLogger(__name__)


@dataclass
class AuthError:
    message: str


@dataclass
class AuthResult:
    user: Optional[CurrentUser] = None
    access_token: Optional[str] = None
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AuthContext:
    def __init__(self, supabase: Client, token: Optional[str] = None):
        self.service = AuthService(supabase)
        self.token = token
        self.current_user: Optional[CurrentUser] = None
        self.loading = True

    def load(self) -> Optional[CurrentUser]:
        """Resolve the session for ``token``. Invalid tokens leave the user absent."""
        try:
            if self.token:
                identity = self.service.get_identity(self.token)
                self.current_user = self._merge(identity)
        except HTTPException as e:
            logger.debug("Session not resolved: %s", e.detail)
            self.current_user = None
        except Exception as e:
            # Unreadable profile or unknown role: treat the request as signed out
            logger.warning("Session not resolved: %s", error_message(e, "failed to load user"))
            self.current_user = None
        finally:
            self.loading = False
        return self.current_user

    def _merge(self, identity: dict) -> CurrentUser:
        profile = self.service.get_profile(identity["id"]) or {}
        metadata = identity.get("user_metadata") or {}
        return CurrentUser(
            id=identity["id"],
            email=profile.get("email") or identity.get("email") or "",
            role=profile.get("role") or metadata.get("role"),
            full_name=profile.get("full_name") or metadata.get("full_name"),
            phone=profile.get("phone"),
            user_metadata=metadata,
            created_at=profile.get("created_at") or identity.get("created_at"),
        )

    def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            token, identity = self.service.sign_in(email, password)
            self.token = token
            self.current_user = self._merge(identity)
            logger.info("User %s signed in", identity["id"])
            return AuthResult(user=self.current_user, access_token=token)
        except HTTPException as e:
            return AuthResult(error=AuthError(e.detail))
        except Exception as e:
            logger.info("Sign in failed for %s: %s", email, e)
            return AuthResult(error=AuthError(error_message(e, "Failed to sign in")))

    def sign_up(self, email: str, password: str, role: Role, full_name: Optional[str] = None) -> AuthResult:
        try:
            token, identity = self.service.sign_up(email, password, role)
        except HTTPException as e:
            return AuthResult(error=AuthError(e.detail))
        except Exception as e:
            logger.info("Sign up failed for %s: %s", email, e)
            return AuthResult(error=AuthError(error_message(e, "Failed to create account")))

        try:
            self.service.create_profile(identity["id"], identity.get("email") or email, role, full_name)
        except Exception as e:
            # The auth identity already exists at this point and is not rolled back
            logger.error(f"Profile insert failed for new user {identity['id']}: {e}")
            detail = e.detail if isinstance(e, HTTPException) else error_message(e, "Failed to create profile")
            return AuthResult(error=AuthError(detail))

        self.token = token
        self.current_user = self._merge(identity)
        logger.info("User %s registered as %s", identity["id"], role.value)
        return AuthResult(user=self.current_user, access_token=token)

    def sign_out(self) -> None:
        if self.token:
            self.service.sign_out(self.token)
        if self.current_user:
            logger.info("User %s signed out", self.current_user.id)
        self.token = None
        self.current_user = None
