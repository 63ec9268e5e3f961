"""
Artist onboarding as a finite-state machine.

    BASIC_INFO -> PROFESSIONAL_DETAILS -> SERVICES -> COMPLETE

Steps move forward through ``advance``: any step already reached may be
submitted again, but none can be skipped. ``back`` moves one step back. The
draft keeps every field entered so far, so going back never loses input.
Nothing here talks to Supabase.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List


class OnboardingStep(IntEnum):
    BASIC_INFO = 1
    PROFESSIONAL_DETAILS = 2
    SERVICES = 3
    COMPLETE = 4


STEP_TITLES = {
    OnboardingStep.BASIC_INFO: "Basic Information",
    OnboardingStep.PROFESSIONAL_DETAILS: "Professional Details",
    OnboardingStep.SERVICES: "Services",
}

TOTAL_STEPS = len(STEP_TITLES)


class InvalidTransition(Exception):
    def __init__(self, current: OnboardingStep, message: str):
        super().__init__(message)
        self.current = current
        self.message = message


@dataclass
class OnboardingWizard:
    user_id: str
    step: OnboardingStep = OnboardingStep.BASIC_INFO
    draft: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.step == OnboardingStep.COMPLETE

    def ensure_can_submit(self, step: OnboardingStep) -> None:
        """A step can be submitted once reached; later steps cannot be skipped to."""
        if self.is_complete:
            raise InvalidTransition(self.step, "Onboarding is already complete")
        if step > self.step:
            raise InvalidTransition(
                self.step,
                f"Onboarding is on step {int(self.step)} ({STEP_TITLES[self.step]}), not step {int(step)}"
            )

    def remember(self, fields: Dict[str, Any]) -> None:
        self.draft.update(fields)

    def advance(self, step: OnboardingStep) -> OnboardingStep:
        """Complete ``step``; the wizard never moves behind where it already was."""
        self.ensure_can_submit(step)
        self.step = max(self.step, OnboardingStep(step + 1))
        return self.step

    def back(self) -> OnboardingStep:
        if self.step not in (OnboardingStep.PROFESSIONAL_DETAILS, OnboardingStep.SERVICES):
            raise InvalidTransition(self.step, "Cannot go back from this step")
        self.step = OnboardingStep(self.step - 1)
        return self.step

    def steps(self) -> List[Dict[str, Any]]:
        return [
            {"step": int(step), "title": title, "completed": self.step > step}
            for step, title in STEP_TITLES.items()
        ]
