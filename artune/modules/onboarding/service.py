import logging
from datetime import datetime, timezone
from supabase import Client
from artune.core.enums import PriceType, Role
from artune.core.errors import error_message
from artune.modules.onboarding import registry
from artune.modules.onboarding.schemas import (
    BasicInfoRequest, ProfessionalDetailsRequest, ServiceRequest,
    OnboardingStateResponse, StepInfo
)
from artune.modules.onboarding.wizard import (
    OnboardingWizard, OnboardingStep, InvalidTransition, TOTAL_STEPS
)
from typing import Dict, Any
from fastapi import HTTPException

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"

# Stored artist_profiles columns that repopulate the draft when onboarding resumes
RESUME_FIELDS = ("display_name", "location", "bio", "years_experience", "hourly_rate")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def state_response(wizard: OnboardingWizard) -> OnboardingStateResponse:
    return OnboardingStateResponse(
        current_step=int(wizard.step),
        total_steps=TOTAL_STEPS,
        steps=[StepInfo(**s) for s in wizard.steps()],
        draft=dict(wizard.draft),
        complete=wizard.is_complete,
        redirect_to=DASHBOARD_PATH if wizard.is_complete else None,
    )


class OnboardingService:
    """Writes behind the three onboarding steps, driven by the user's OnboardingWizard."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_state(self, user_id: str) -> OnboardingStateResponse:
        return state_response(self._load_wizard(user_id))

    def go_back(self, user_id: str) -> OnboardingStateResponse:
        wizard = self._load_wizard(user_id)
        try:
            wizard.back()
        except InvalidTransition as e:
            raise HTTPException(status_code=409, detail=e.message)
        registry.save(wizard)
        logger.debug(f"Onboarding for {user_id} went back to step {int(wizard.step)}")
        return state_response(wizard)

    def submit_basic_info(self, user_id: str, data: BasicInfoRequest) -> OnboardingStateResponse:
        wizard = self._begin(user_id, OnboardingStep.BASIC_INFO, data.model_dump())
        try:
            self._require_artist_role(user_id)
            self.upsert_artist_profile(user_id, data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving basic info for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=error_message(e, "Failed to save profile"))
        return self._finish(wizard, OnboardingStep.BASIC_INFO)

    def submit_professional_details(self, user_id: str, data: ProfessionalDetailsRequest) -> OnboardingStateResponse:
        wizard = self._begin(user_id, OnboardingStep.PROFESSIONAL_DETAILS, data.model_dump())
        try:
            self.update_professional_details(user_id, data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving professional details for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=error_message(e, "Failed to save details"))
        return self._finish(wizard, OnboardingStep.PROFESSIONAL_DETAILS)

    def submit_service(self, user_id: str, data: ServiceRequest) -> OnboardingStateResponse:
        wizard = self._begin(user_id, OnboardingStep.SERVICES, data.model_dump())
        try:
            self.create_first_service(user_id, data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving service for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=error_message(e, "Failed to save service"))
        state = self._finish(wizard, OnboardingStep.SERVICES)
        registry.discard(user_id)
        logger.info(f"Artist onboarding complete for {user_id}")
        return state

    def upsert_artist_profile(self, user_id: str, data: BasicInfoRequest) -> Dict[str, Any]:
        """Create or update the caller's artist profile in one statement keyed by user_id.

        Only display_name and location are sent, so an existing row keeps its other
        columns and a new row gets the table defaults.
        """
        result = self.supabase.table("artist_profiles").upsert({
            "user_id": user_id,
            "display_name": data.display_name,
            "location": data.location,
            "updated_at": _now(),
        }, on_conflict="user_id").execute()

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save profile")
        return result.data[0]

    def update_professional_details(self, user_id: str, data: ProfessionalDetailsRequest) -> Dict[str, Any]:
        result = self.supabase.table("artist_profiles")\
            .update({
                "bio": data.bio,
                "years_experience": data.years_experience,
                "hourly_rate": data.hourly_rate,
                "updated_at": _now(),
            })\
            .eq("user_id", user_id)\
            .execute()

        if not result.data:
            raise HTTPException(status_code=404, detail="Artist profile not found")
        return result.data[0]

    def create_first_service(self, user_id: str, data: ServiceRequest) -> Dict[str, Any]:
        profile_result = self.supabase.table("artist_profiles")\
            .select("id")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()

        if not profile_result.data:
            raise HTTPException(status_code=404, detail="Artist profile not found")

        result = self.supabase.table("artist_services").insert({
            "artist_id": profile_result.data[0]["id"],
            "category": data.category,
            "title": data.title,
            "description": data.description,
            "price": data.price,
            "price_type": PriceType.FIXED.value,
        }).execute()

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save service")
        return result.data[0]

    def _require_artist_role(self, user_id: str) -> None:
        """Artist profiles may only hang off a profiles row whose role is artist."""
        result = self.supabase.table("profiles")\
            .select("role")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        if not result.data or result.data[0].get("role") != Role.ARTIST.value:
            raise HTTPException(status_code=403, detail="Only artist accounts can have an artist profile")

    def _load_wizard(self, user_id: str) -> OnboardingWizard:
        """Live wizard for the user, rebuilt from the stored artist profile when none is held.

        A stored profile means basic info was already saved, so the rebuilt
        wizard resumes at professional details with the stored values as draft.
        """
        wizard = registry.get(user_id)
        if wizard is not None:
            return wizard

        try:
            result = self.supabase.table("artist_profiles")\
                .select(", ".join(RESUME_FIELDS))\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading onboarding progress for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=error_message(e, "Failed to load onboarding"))

        if result.data:
            draft = {k: v for k, v in result.data[0].items() if k in RESUME_FIELDS and v is not None}
            wizard = OnboardingWizard(user_id, step=OnboardingStep.PROFESSIONAL_DETAILS, draft=draft)
            logger.debug(f"Resumed onboarding for {user_id} from stored profile")
        else:
            wizard = OnboardingWizard(user_id)
        registry.save(wizard)
        return wizard

    def _begin(self, user_id: str, step: OnboardingStep, fields: Dict[str, Any]) -> OnboardingWizard:
        wizard = self._load_wizard(user_id)
        try:
            wizard.ensure_can_submit(step)
        except InvalidTransition as e:
            raise HTTPException(status_code=409, detail=e.message)
        wizard.remember(fields)
        registry.save(wizard)
        return wizard

    def _finish(self, wizard: OnboardingWizard, step: OnboardingStep) -> OnboardingStateResponse:
        try:
            wizard.advance(step)
        except InvalidTransition as e:
            # Another request for this user moved the wizard while we were writing
            raise HTTPException(status_code=409, detail=e.message)
        registry.save(wizard)
        logger.debug(f"Onboarding for {wizard.user_id} advanced to step {int(wizard.step)}")
        return state_response(wizard)
