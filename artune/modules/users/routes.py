from fastapi import APIRouter, Depends
from artune.database.supabase_client import get_supabase
from artune.modules.auth.schemas import CurrentUser
from artune.modules.users.schemas import UserUpdate, UserResponse
from artune.modules.users.service import UserService
from artune.core.dependencies import require_user
from supabase import Client

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    user: CurrentUser = Depends(require_user),
    service: UserService = Depends(get_user_service)
):
    """Get the caller's profile row"""
    return service.get_user_by_id(user.id)


@router.put("/me", response_model=UserResponse)
async def update_my_profile(
    user_data: UserUpdate,
    user: CurrentUser = Depends(require_user),
    service: UserService = Depends(get_user_service)
):
    """Update the caller's name and phone"""
    return service.update_user(user.id, user_data)
