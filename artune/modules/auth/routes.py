from fastapi import APIRouter, Depends, HTTPException
from artune.core.dependencies import get_anonymous_auth_context, get_auth_context, require_user
from artune.core.enums import Role
from artune.modules.auth.context import AuthContext
from artune.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    LogoutResponse, CurrentUser
)

router = APIRouter(prefix="/auth", tags=["auth"])

ONBOARDING_PATH = "/onboarding/artist"
DASHBOARD_PATH = "/dashboard"


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    context: AuthContext = Depends(get_anonymous_auth_context)
):
    """Register a new artist or client account"""
    role = Role(register_data.role)
    result = context.sign_up(
        register_data.email,
        register_data.password,
        role,
        full_name=register_data.full_name
    )
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.error.message or "Failed to create account")

    return RegisterResponse(
        user_id=result.user.id,
        email=result.user.email,
        role=role,
        access_token=result.access_token,
        redirect_to=ONBOARDING_PATH if role == Role.ARTIST else DASHBOARD_PATH
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    context: AuthContext = Depends(get_anonymous_auth_context)
):
    """Login and get access token"""
    result = context.sign_in(login_data.email, login_data.password)
    if not result.ok:
        raise HTTPException(status_code=401, detail=result.error.message or "Failed to sign in")

    return TokenResponse(
        access_token=result.access_token,
        user_id=result.user.id,
        email=result.user.email,
        role=result.user.role,
        redirect_to=DASHBOARD_PATH
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    user: CurrentUser = Depends(require_user),
    context: AuthContext = Depends(get_auth_context)
):
    """Logout and invalidate token"""
    context.sign_out()
    return LogoutResponse()


@router.get("/me", response_model=CurrentUser)
async def get_current_user(user: CurrentUser = Depends(require_user)):
    """Get current authenticated user merged with their profile"""
    return user
