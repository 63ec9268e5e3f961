from fastapi import APIRouter, Depends
from artune.core.dependencies import require_user
from artune.modules.auth.schemas import CurrentUser
from artune.modules.dashboard.schemas import DashboardResponse
from artune.modules.dashboard.service import build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(user: CurrentUser = Depends(require_user)):
    """Welcome card plus role-specific shortcuts"""
    return build_dashboard(user)
