from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from artune.core.enums import AvailabilityStatus, PriceType

EMPTY_DIRECTORY_MESSAGE = "No artists found yet."
EMPTY_DIRECTORY_HINT = "Be the first to join as an artist!"


class ArtistProfileResponse(BaseModel):
    id: str
    user_id: str
    display_name: str
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    portfolio_images: Optional[List[str]] = None
    location: Optional[str] = None
    years_experience: Optional[int] = None
    hourly_rate: Optional[float] = None
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    verified: bool = False
    last_active: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ArtistCard(BaseModel):
    id: str
    display_name: str
    verified: bool
    location: Optional[str] = None
    availability_status: AvailabilityStatus
    bio: Optional[str] = None
    years_experience: Optional[int] = None
    hourly_rate: Optional[float] = None
    experience_label: Optional[str] = None
    rate_label: Optional[str] = None
    url: str


class ArtistDirectoryResponse(BaseModel):
    artists: List[ArtistCard]
    total: int
    message: Optional[str] = None
    hint: Optional[str] = None


class ArtistDetail(ArtistProfileResponse):
    status_label: str
    experience_label: Optional[str] = None
    rate_label: Optional[str] = None


class ArtistServiceResponse(BaseModel):
    id: str
    artist_id: str
    category: str
    title: str
    description: Optional[str] = None
    price: Optional[float] = None
    price_type: PriceType = PriceType.FIXED
    duration_minutes: Optional[int] = None
    price_label: Optional[str] = None
    duration_label: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ArtistDetailResponse(BaseModel):
    artist: ArtistDetail
    services: List[ArtistServiceResponse]
