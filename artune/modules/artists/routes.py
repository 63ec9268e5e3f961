from fastapi import APIRouter, Depends
from artune.database.supabase_client import get_supabase
from artune.modules.artists.schemas import ArtistDirectoryResponse, ArtistDetailResponse
from artune.modules.artists.service import ArtistDirectoryService
from supabase import Client

router = APIRouter(prefix="/artists", tags=["artists"])


def get_directory_service(supabase: Client = Depends(get_supabase)) -> ArtistDirectoryService:
    return ArtistDirectoryService(supabase)


@router.get("", response_model=ArtistDirectoryResponse)
async def list_artists(service: ArtistDirectoryService = Depends(get_directory_service)):
    """Browse all artists, newest first (public)"""
    return service.list_artists()


@router.get("/{artist_id}", response_model=ArtistDetailResponse)
async def get_artist(
    artist_id: str,
    service: ArtistDirectoryService = Depends(get_directory_service)
):
    """Artist profile with their services (public)"""
    return service.get_artist_detail(artist_id)
