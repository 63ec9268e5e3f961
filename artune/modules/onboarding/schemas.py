from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Any


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_number(value: Any, label: str, whole: bool) -> Optional[float]:
    """Form fields arrive as text: '' means no value, otherwise parse and check >= 0."""
    value = _blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a number")
    try:
        number = int(str(value).strip()) if whole else float(str(value).strip())
    except ValueError:
        kind = "a whole number" if whole else "a number"
        raise ValueError(f"{label} must be {kind}")
    if number < 0:
        raise ValueError(f"{label} cannot be negative")
    return number


class BasicInfoRequest(BaseModel):
    display_name: str
    location: Optional[str] = None

    @field_validator("display_name")
    @classmethod
    def display_name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Display name is required")
        return v.strip()

    @field_validator("location", mode="before")
    @classmethod
    def empty_location(cls, v):
        return _blank_to_none(v)


class ProfessionalDetailsRequest(BaseModel):
    bio: Optional[str] = None
    years_experience: Optional[int] = None
    hourly_rate: Optional[float] = None

    @field_validator("bio", mode="before")
    @classmethod
    def empty_bio(cls, v):
        return _blank_to_none(v)

    @field_validator("years_experience", mode="before")
    @classmethod
    def parse_years(cls, v):
        return _parse_number(v, "Years of experience", whole=True)

    @field_validator("hourly_rate", mode="before")
    @classmethod
    def parse_rate(cls, v):
        return _parse_number(v, "Hourly rate", whole=False)


class ServiceRequest(BaseModel):
    category: str
    title: str
    description: Optional[str] = None
    price: Optional[float] = None

    @field_validator("category", "title")
    @classmethod
    def required_text(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v.strip()

    @field_validator("description", mode="before")
    @classmethod
    def empty_description(cls, v):
        return _blank_to_none(v)

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v):
        return _parse_number(v, "Price", whole=False)


class StepInfo(BaseModel):
    step: int
    title: str
    completed: bool


class OnboardingStateResponse(BaseModel):
    current_step: int
    total_steps: int
    steps: List[StepInfo]
    draft: Dict[str, Any] = {}
    complete: bool = False
    redirect_to: Optional[str] = None
