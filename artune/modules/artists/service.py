import logging
import uuid
from supabase import Client
from artune.core.errors import PageError
from artune.modules.artists import formatting
from artune.modules.artists.schemas import (
    ArtistProfileResponse, ArtistCard, ArtistDirectoryResponse, ArtistDetail,
    ArtistServiceResponse, ArtistDetailResponse,
    EMPTY_DIRECTORY_MESSAGE, EMPTY_DIRECTORY_HINT
)
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

DIRECTORY_PATH = "/artists"


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
        return True
    except (ValueError, TypeError):
        return False


class ArtistDirectoryService:
    """Read-only queries behind the artist directory and artist detail views."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_artists(self) -> ArtistDirectoryResponse:
        """All artist profiles, newest first"""
        try:
            result = self.supabase.table("artist_profiles")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error listing artists: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        profiles = [ArtistProfileResponse(**row) for row in result.data or []]
        cards = [self._card(p) for p in profiles]
        if not cards:
            return ArtistDirectoryResponse(
                artists=[], total=0, message=EMPTY_DIRECTORY_MESSAGE, hint=EMPTY_DIRECTORY_HINT
            )
        return ArtistDirectoryResponse(artists=cards, total=len(cards))

    def get_artist(self, artist_id: str) -> Optional[ArtistProfileResponse]:
        """Artist profile by ID, or None when no row matches"""
        if not _is_uuid(artist_id):
            return None
        try:
            result = self.supabase.table("artist_profiles")\
                .select("*")\
                .eq("id", artist_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading artist {artist_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return ArtistProfileResponse(**result.data[0]) if result.data else None

    def list_services(self, artist_id: str) -> List[ArtistServiceResponse]:
        """Services offered by an artist, newest first"""
        try:
            result = self.supabase.table("artist_services")\
                .select("*")\
                .eq("artist_id", artist_id)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error listing services for artist {artist_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        services = []
        for row in result.data or []:
            service = ArtistServiceResponse(**row)
            service.price_label = formatting.format_money(service.price)
            service.duration_label = formatting.duration_label(service.duration_minutes)
            services.append(service)
        return services

    def get_artist_detail(self, artist_id: str) -> ArtistDetailResponse:
        """Artist profile plus its services; 404 with a link back to the directory"""
        artist = self.get_artist(artist_id)
        if artist is None:
            raise PageError(status_code=404, detail="Artist not found", back_link=DIRECTORY_PATH)

        detail = ArtistDetail(
            **artist.model_dump(),
            status_label=formatting.status_label(artist.availability_status),
            experience_label=formatting.experience_label(artist.years_experience),
            rate_label=formatting.rate_label(artist.hourly_rate),
        )
        return ArtistDetailResponse(artist=detail, services=self.list_services(artist.id))

    @staticmethod
    def _card(profile: ArtistProfileResponse) -> ArtistCard:
        return ArtistCard(
            id=profile.id,
            display_name=profile.display_name,
            verified=profile.verified,
            location=profile.location,
            availability_status=profile.availability_status,
            bio=profile.bio,
            years_experience=profile.years_experience,
            hourly_rate=profile.hourly_rate,
            # cards hide zero values
            experience_label=formatting.experience_label(profile.years_experience, short=True)
            if profile.years_experience else None,
            rate_label=formatting.rate_label(profile.hourly_rate) if profile.hourly_rate else None,
            url=f"{DIRECTORY_PATH}/{profile.id}",
        )
