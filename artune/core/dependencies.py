"""
Core dependencies for route protection
"""

from fastapi import Depends, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from artune.core.enums import Role
from artune.core.errors import PageError
from artune.database.supabase_client import get_supabase
from artune.modules.auth.context import AuthContext
from artune.modules.auth.schemas import CurrentUser
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False: anonymous requests still get an (empty) AuthContext
security = HTTPBearer(auto_error=False)


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    supabase: Client = Depends(get_supabase)
) -> AuthContext:
    """Build the request's AuthContext and resolve its session"""
    token = credentials.credentials if credentials else None
    context = AuthContext(supabase, token)
    context.load()
    return context


def get_anonymous_auth_context(supabase: Client = Depends(get_supabase)) -> AuthContext:
    """AuthContext for register/login: any bearer token on the request is ignored"""
    context = AuthContext(supabase)
    context.load()
    return context


def require_user(context: AuthContext = Depends(get_auth_context)) -> CurrentUser:
    """Signed-in user, or 401 pointing the client at the login page"""
    if context.current_user is None:
        raise PageError(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            redirect_to="/login"
        )
    return context.current_user


def require_artist(user: CurrentUser = Depends(require_user)) -> CurrentUser:
    """Signed-in artist, or 403 sending other roles back to the dashboard"""
    if user.role != Role.ARTIST:
        logger.info("User %s with role %s denied artist-only route", user.id, user.role)
        raise PageError(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only artists can access this page",
            redirect_to="/dashboard"
        )
    return user
