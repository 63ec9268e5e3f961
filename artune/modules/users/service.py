import logging
from datetime import datetime, timezone
from supabase import Client
from artune.modules.users.schemas import UserUpdate, UserResponse
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update contact fields of a user profile. Role and email are never written."""
        try:
            update_data = {}
            if user_data.full_name is not None:
                update_data["full_name"] = user_data.full_name
            if user_data.phone is not None:
                update_data["phone"] = user_data.phone

            if not update_data:
                return self.get_user_by_id(user_id)

            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
