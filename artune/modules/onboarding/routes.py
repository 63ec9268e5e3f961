from fastapi import APIRouter, Depends
from artune.database.supabase_client import get_supabase
from artune.core.dependencies import require_artist
from artune.modules.auth.schemas import CurrentUser
from artune.modules.onboarding.schemas import (
    BasicInfoRequest, ProfessionalDetailsRequest, ServiceRequest, OnboardingStateResponse
)
from artune.modules.onboarding.service import OnboardingService
from supabase import Client

router = APIRouter(prefix="/onboarding/artist", tags=["onboarding"])


def get_onboarding_service(supabase: Client = Depends(get_supabase)) -> OnboardingService:
    return OnboardingService(supabase)


@router.get("", response_model=OnboardingStateResponse)
async def get_onboarding_state(
    user: CurrentUser = Depends(require_artist),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Current wizard step and the fields entered so far"""
    return service.get_state(user.id)


@router.post("/basic-info", response_model=OnboardingStateResponse)
async def submit_basic_info(
    data: BasicInfoRequest,
    user: CurrentUser = Depends(require_artist),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Step 1: create or update the artist profile"""
    return service.submit_basic_info(user.id, data)


@router.post("/professional-details", response_model=OnboardingStateResponse)
async def submit_professional_details(
    data: ProfessionalDetailsRequest,
    user: CurrentUser = Depends(require_artist),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Step 2: bio, experience and hourly rate"""
    return service.submit_professional_details(user.id, data)


@router.post("/services", response_model=OnboardingStateResponse)
async def submit_service(
    data: ServiceRequest,
    user: CurrentUser = Depends(require_artist),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Step 3: first service offered; completes onboarding"""
    return service.submit_service(user.id, data)


@router.post("/back", response_model=OnboardingStateResponse)
async def go_back(
    user: CurrentUser = Depends(require_artist),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Return to the previous step, keeping entered fields"""
    return service.go_back(user.id)
